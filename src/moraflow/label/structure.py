"""Group parsed phonemes into moras, accent phrases, breath groups and an utterance."""

import logging
from dataclasses import dataclass

from moraflow.errors import InvalidMoraError, TooLongMoraError
from moraflow.label.parser import Phoneme, parse_label

logger = logging.getLogger(__name__)

# a2 value OpenJTalk emits past the end of an over-long accent phrase;
# segmentation of the phrase stops there.
_MORA_POSITION_OVERFLOW = "49"


@dataclass
class Mora:
    """An optional consonant followed by a vowel (or N, cl, ...)."""
    consonant: Phoneme | None
    vowel: Phoneme

    def phonemes(self) -> list[Phoneme]:
        if self.consonant is not None:
            return [self.consonant, self.vowel]
        return [self.vowel]


def _make_mora(phonemes: list[Phoneme]) -> Mora:
    if len(phonemes) == 1:
        return Mora(consonant=None, vowel=phonemes[0])
    if len(phonemes) == 2:
        return Mora(consonant=phonemes[0], vowel=phonemes[1])
    raise TooLongMoraError(len(phonemes))


@dataclass
class AccentPhrase:
    """Moras sharing one pitch-accent pattern."""
    moras: list[Mora]
    accent: int             # 1-based index of the accented mora
    is_interrogative: bool

    @classmethod
    def from_phonemes(cls, phonemes: list[Phoneme]) -> "AccentPhrase":
        """Segment one accent phrase's phonemes into moras.

        Consecutive phonemes with the same a2 value form one mora.

        Raises:
            TooLongMoraError: if three or more phonemes share a mora.
            InvalidMoraError: if no mora is found or the accent is not an integer.
        """
        moras: list[Mora] = []
        mora_phonemes: list[Phoneme] = []
        for i, phoneme in enumerate(phonemes):
            if phoneme.a2 == _MORA_POSITION_OVERFLOW:
                break
            mora_phonemes.append(phoneme)

            is_last = i + 1 == len(phonemes)
            if is_last or phoneme.a2 != phonemes[i + 1].a2:
                moras.append(_make_mora(mora_phonemes))
                mora_phonemes = []

        if not moras:
            raise InvalidMoraError("Accent phrase has no moras")

        try:
            accent = int(moras[0].vowel.f2)
        except ValueError:
            raise InvalidMoraError(
                f"Accent position is not an integer: {moras[0].vowel.f2!r}"
            ) from None

        is_interrogative = moras[-1].vowel.f3 == "1"

        # OpenJTalk can report an accent past the last mora
        # (VOICEVOX/voicevox_engine#55); keep it within [1, len(moras)].
        if accent > len(moras):
            accent = len(moras)
        accent = max(accent, 1)

        return cls(moras=moras, accent=accent, is_interrogative=is_interrogative)


@dataclass
class BreathGroup:
    """Accent phrases spoken without an intervening pause."""
    accent_phrases: list[AccentPhrase]

    @classmethod
    def from_phonemes(cls, phonemes: list[Phoneme]) -> "BreathGroup":
        """Split phonemes into accent phrases wherever i3 or f5 changes."""
        accent_phrases = []
        accent_phonemes: list[Phoneme] = []
        for i, phoneme in enumerate(phonemes):
            accent_phonemes.append(phoneme)
            if (
                i + 1 == len(phonemes)
                or phoneme.i3 != phonemes[i + 1].i3
                or phoneme.f5 != phonemes[i + 1].f5
            ):
                accent_phrases.append(AccentPhrase.from_phonemes(accent_phonemes))
                accent_phonemes = []
        return cls(accent_phrases=accent_phrases)


@dataclass
class Utterance:
    """Breath groups separated by pause phonemes."""
    breath_groups: list[BreathGroup]
    pauses: list[Phoneme]

    @classmethod
    def from_phonemes(cls, phonemes: list[Phoneme]) -> "Utterance":
        """Build breath groups from the runs of phonemes between pauses.

        A run is only closed by a pause, so phonemes after the final pause
        (OpenJTalk always ends with ``sil``) are not part of any group.
        """
        breath_groups = []
        pauses = []
        group_phonemes: list[Phoneme] = []
        for phoneme in phonemes:
            if not phoneme.is_pause:
                group_phonemes.append(phoneme)
                continue
            pauses.append(phoneme)
            if group_phonemes:
                breath_groups.append(BreathGroup.from_phonemes(group_phonemes))
                group_phonemes = []

        logger.debug(
            f"Utterance: {len(phonemes)} phonemes, {len(breath_groups)} breath groups, "
            f"{len(pauses)} pauses"
        )
        return cls(breath_groups=breath_groups, pauses=pauses)

    @classmethod
    def from_labels(cls, labels: list[str]) -> "Utterance":
        """Parse every label, then build the utterance.

        Raises:
            LabelParseError: if any label is malformed; nothing is built.
        """
        return cls.from_phonemes([parse_label(label) for label in labels])
