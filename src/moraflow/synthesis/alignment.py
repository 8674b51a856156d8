"""Flat phoneme views of accent phrases, shared by every synthesis stage.

Each stage derives these from the accent phrases it is given instead of
receiving them from the previous stage. That costs a few list passes per
stage but keeps every stage usable on its own, e.g. after accent phrases have
been edited by hand.
"""

from moraflow.phonemes import EMPTY_PHONEME, is_mora_phoneme
from moraflow.types import AccentPhraseModel, MoraModel

PAUSE = "pau"


def to_flatten_moras(accent_phrases: list[AccentPhraseModel]) -> list[MoraModel]:
    """All moras in order, including trailing pause moras."""
    moras = []
    for accent_phrase in accent_phrases:
        moras.extend(accent_phrase.all_moras())
    return moras


def to_flatten_phonemes(moras: list[MoraModel]) -> list[str]:
    """Phoneme symbols of the moras, wrapped in a leading and trailing pause."""
    phonemes = [PAUSE]
    for mora in moras:
        if mora.consonant is not None:
            phonemes.append(mora.consonant)
        phonemes.append(mora.vowel)
    phonemes.append(PAUSE)
    return phonemes


def split_mora(phonemes: list[str]) -> tuple[list[str], list[str], list[int]]:
    """Split a flat phoneme list into per-vowel consonants, vowels and vowel indexes.

    The vowel index lists the positions of mora-final symbols (vowels, N, cl,
    pau). The consonant at each vowel slot is the phoneme right before it, or
    the empty symbol when the previous position is itself a vowel slot.

    Returns:
        (consonant_phonemes, vowel_phonemes, vowel_indexes), all of equal length.
    """
    vowel_indexes = [i for i, p in enumerate(phonemes) if is_mora_phoneme(p)]
    vowel_phonemes = [phonemes[i] for i in vowel_indexes]

    consonant_phonemes = [EMPTY_PHONEME]
    for prev, next_ in zip(vowel_indexes, vowel_indexes[1:]):
        if next_ - prev == 1:
            consonant_phonemes.append(EMPTY_PHONEME)
        else:
            consonant_phonemes.append(phonemes[next_ - 1])

    return consonant_phonemes, vowel_phonemes, vowel_indexes
