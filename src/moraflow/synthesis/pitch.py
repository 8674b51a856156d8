"""Fill mora pitch from the intonation model."""

import logging
from dataclasses import replace

import numpy as np

from moraflow.inference import InferenceBackend, check_output_length
from moraflow.phonemes import is_unvoiced, phoneme_ids
from moraflow.synthesis.alignment import split_mora, to_flatten_moras, to_flatten_phonemes
from moraflow.types import AccentPhraseModel

logger = logging.getLogger(__name__)


def create_one_accent_list(accent_phrase: AccentPhraseModel, point: int) -> list[int]:
    """Per-phoneme indicator for one accent phrase.

    Every phoneme of the mora at ``point`` is 1, all others 0. A negative
    ``point`` counts from the last mora. The pause mora, if any, is always 0.
    """
    n = len(accent_phrase.moras)
    values = []
    for i, mora in enumerate(accent_phrase.moras):
        value = int(i == point or (point < 0 and i == n + point))
        values.append(value)
        if mora.consonant is not None:
            values.append(value)
    if accent_phrase.pause_mora is not None:
        values.append(0)
    return values


def _accent_list(accent_phrases: list[AccentPhraseModel], point_of) -> list[int]:
    values = [0]
    for accent_phrase in accent_phrases:
        values.extend(create_one_accent_list(accent_phrase, point_of(accent_phrase)))
    values.append(0)
    return values


def replace_mora_pitch(
    accent_phrases: list[AccentPhraseModel],
    backend: InferenceBackend,
    speaker_id: int,
) -> list[AccentPhraseModel]:
    """Return new accent phrases with pitch predicted by ``backend``.

    Unvoiced moras (devoiced vowels, cl, pau) always get pitch 0.
    """
    phonemes = to_flatten_phonemes(to_flatten_moras(accent_phrases))
    consonant_phonemes, vowel_phonemes, vowel_indexes = split_mora(phonemes)

    base_lists = {
        "start_accent_list": _accent_list(accent_phrases, lambda ap: int(ap.accent != 1)),
        "end_accent_list": _accent_list(accent_phrases, lambda ap: ap.accent - 1),
        "start_accent_phrase_list": _accent_list(accent_phrases, lambda ap: 0),
        "end_accent_phrase_list": _accent_list(accent_phrases, lambda ap: -1),
    }
    # resample per-phoneme indicators onto vowel slots
    vowel_lists = {
        name: np.array([base[i] for i in vowel_indexes], dtype=np.int64)
        for name, base in base_lists.items()
    }

    length = len(vowel_phonemes)
    output = backend.predict_intonation(
        length,
        np.array(phoneme_ids(vowel_phonemes), dtype=np.int64),
        np.array(phoneme_ids(consonant_phonemes), dtype=np.int64),
        vowel_lists["start_accent_list"],
        vowel_lists["end_accent_list"],
        vowel_lists["start_accent_phrase_list"],
        vowel_lists["end_accent_phrase_list"],
        speaker_id,
    )
    f0_list = check_output_length(output, length, "predict_intonation").astype(np.float64)
    unvoiced = np.array(
        [is_unvoiced(p) for p in vowel_phonemes], dtype=bool
    )
    f0_list[unvoiced] = 0.0
    logger.debug(f"Predicted pitch for {length} vowel slots, {int(unvoiced.sum())} unvoiced")

    # f0_list[0] is the leading pause
    index = 1

    def assign(mora):
        nonlocal index
        pitch = float(f0_list[index])
        index += 1
        return replace(mora, pitch=pitch)

    new_accent_phrases = []
    for accent_phrase in accent_phrases:
        moras = [assign(m) for m in accent_phrase.moras]
        pause_mora = (
            assign(accent_phrase.pause_mora)
            if accent_phrase.pause_mora is not None else None
        )
        new_accent_phrases.append(replace(accent_phrase, moras=moras, pause_mora=pause_mora))
    return new_accent_phrases
