"""Fill consonant and vowel lengths from the duration model."""

import logging
from dataclasses import replace

import numpy as np

from moraflow.config import PHONEME_LENGTH_MINIMAL
from moraflow.inference import InferenceBackend, check_output_covers
from moraflow.phonemes import phoneme_ids
from moraflow.synthesis.alignment import split_mora, to_flatten_moras, to_flatten_phonemes
from moraflow.types import AccentPhraseModel

logger = logging.getLogger(__name__)


def replace_phoneme_length(
    accent_phrases: list[AccentPhraseModel],
    backend: InferenceBackend,
    speaker_id: int,
) -> list[AccentPhraseModel]:
    """Return new accent phrases with lengths predicted by ``backend``.

    Every predicted length is floored at ``PHONEME_LENGTH_MINIMAL``. Only the
    length fields change. The trailing pause is never read, so the model may
    omit its slot.
    """
    phonemes = to_flatten_phonemes(to_flatten_moras(accent_phrases))
    _, _, vowel_indexes = split_mora(phonemes)

    phoneme_list = np.array(phoneme_ids(phonemes), dtype=np.int64)
    output = backend.predict_duration(phoneme_list, speaker_id)
    # the last mora's vowel is the highest slot read
    lengths = check_output_covers(output, vowel_indexes[-2] + 1, "predict_duration")
    lengths = np.maximum(lengths.astype(np.float64), PHONEME_LENGTH_MINIMAL)
    logger.debug(f"Predicted {len(lengths)} phoneme lengths, total {lengths.sum():.3f}s")

    # vowel_indexes[0] is the leading pause
    index = 1

    def assign(mora):
        nonlocal index
        vowel_pos = vowel_indexes[index]
        index += 1
        return replace(
            mora,
            consonant_length=(
                float(lengths[vowel_pos - 1]) if mora.consonant is not None else None
            ),
            vowel_length=float(lengths[vowel_pos]),
        )

    new_accent_phrases = []
    for accent_phrase in accent_phrases:
        moras = [assign(m) for m in accent_phrase.moras]
        pause_mora = (
            assign(accent_phrase.pause_mora)
            if accent_phrase.pause_mora is not None else None
        )
        new_accent_phrases.append(replace(accent_phrase, moras=moras, pause_mora=pause_mora))
    return new_accent_phrases
