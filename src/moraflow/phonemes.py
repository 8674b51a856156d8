"""OpenJTalk phoneme inventory and its integer-id codec.

The ids are the class indices the acoustic models were trained with, so the
order of ``PHONEME_LIST`` is fixed.
"""

PHONEME_LIST: tuple[str, ...] = (
    "pau", "A", "E", "I", "N", "O", "U", "a", "b", "by",
    "ch", "cl", "d", "dy", "e", "f", "g", "gw", "gy", "h",
    "hy", "i", "j", "k", "kw", "ky", "m", "my", "n", "ny",
    "o", "p", "py", "r", "ry", "s", "sh", "t", "ts", "ty",
    "u", "v", "w", "y", "z",
)

NUM_PHONEME = len(PHONEME_LIST)

_PHONEME_IDS: dict[str, int] = {p: i for i, p in enumerate(PHONEME_LIST)}

# Symbols that close a mora (vowels, devoiced vowels, moraic nasal,
# geminate closure, pause). Their positions form the vowel index.
MORA_PHONEME_LIST: frozenset[str] = frozenset(
    ["a", "i", "u", "e", "o", "N", "A", "I", "U", "E", "O", "cl", "pau"]
)

# Mora-final symbols that carry no pitch.
UNVOICED_MORA_PHONEME_LIST: frozenset[str] = frozenset(
    ["A", "I", "U", "E", "O", "cl", "pau"]
)

# Stands in for "no consonant" in per-vowel consonant sequences.
EMPTY_PHONEME = ""


def normalize_phoneme(phoneme: str) -> str:
    """Map OpenJTalk's silence symbol onto the model's pause class."""
    if phoneme == "sil":
        return "pau"
    return phoneme


def phoneme_id(phoneme: str) -> int:
    """Return the model class id for a phoneme symbol.

    The empty symbol encodes as -1.

    Raises:
        ValueError: if the symbol is not part of the inventory.
    """
    if phoneme == EMPTY_PHONEME:
        return -1
    try:
        return _PHONEME_IDS[normalize_phoneme(phoneme)]
    except KeyError:
        raise ValueError(f"Unknown phoneme: {phoneme!r}") from None


def phoneme_ids(phonemes: list[str]) -> list[int]:
    return [phoneme_id(p) for p in phonemes]


def is_mora_phoneme(phoneme: str) -> bool:
    return phoneme in MORA_PHONEME_LIST


def is_unvoiced(phoneme: str) -> bool:
    return phoneme in UNVOICED_MORA_PHONEME_LIST
