"""Build model-facing accent phrases from full-context labels."""

import logging

from moraflow.config import PAUSE_MORA_TEXT
from moraflow.label import Mora, Utterance
from moraflow.mora_list import MORA_PHONEMES_TO_TEXT
from moraflow.types import AccentPhraseModel, MoraModel

logger = logging.getLogger(__name__)

_DEVOICED_VOWELS = "AIUEO"


def mora_to_text(mora: str) -> str:
    """Convert mora phonemes (e.g. "kyo", "shI") to katakana.

    A trailing devoiced vowel is looked up as its voiced form. Returns the
    input unchanged if the mora is not in the table.
    """
    if mora and mora[-1] in _DEVOICED_VOWELS:
        mora = mora[:-1] + mora[-1].lower()
    return MORA_PHONEMES_TO_TEXT.get(mora, mora)


def _to_mora_model(mora: Mora) -> MoraModel:
    text = "".join(p.phoneme for p in mora.phonemes())
    consonant = mora.consonant.phoneme if mora.consonant is not None else None
    return MoraModel(
        text=mora_to_text(text),
        consonant=consonant,
        consonant_length=0.0 if consonant is not None else None,
        vowel=mora.vowel.phoneme,
        vowel_length=0.0,
        pitch=0.0,
    )


def make_pause_mora() -> MoraModel:
    return MoraModel(
        text=PAUSE_MORA_TEXT,
        consonant=None,
        consonant_length=None,
        vowel="pau",
        vowel_length=0.0,
        pitch=0.0,
    )


def create_accent_phrases(labels: list[str]) -> list[AccentPhraseModel]:
    """Turn one utterance's full-context labels into accent phrases.

    Lengths and pitches are left at 0.0 for the duration and pitch stages.

    Raises:
        FullContextLabelError: if the labels cannot be parsed or segmented.
    """
    utterance = Utterance.from_labels(labels)
    last_group = len(utterance.breath_groups) - 1

    accent_phrases = []
    for i, breath_group in enumerate(utterance.breath_groups):
        last_phrase = len(breath_group.accent_phrases) - 1
        for j, accent_phrase in enumerate(breath_group.accent_phrases):
            pause_mora = None
            if i != last_group and j == last_phrase:
                pause_mora = make_pause_mora()
            accent_phrases.append(AccentPhraseModel(
                moras=[_to_mora_model(m) for m in accent_phrase.moras],
                accent=accent_phrase.accent,
                pause_mora=pause_mora,
                is_interrogative=accent_phrase.is_interrogative,
            ))

    logger.debug(
        f"Built {len(accent_phrases)} accent phrases from "
        f"{len(utterance.breath_groups)} breath groups"
    )
    return accent_phrases
