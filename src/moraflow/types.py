"""Core data types for moraflow."""

from dataclasses import dataclass


@dataclass
class MoraModel:
    """One mora as seen by the acoustic models.

    Lengths are in seconds and pitch is log-F0; both stay 0.0 until the
    duration and pitch stages fill them in.
    """
    text: str                            # katakana, e.g. "キョ"
    consonant: str | None
    consonant_length: float | None       # None iff consonant is None
    vowel: str
    vowel_length: float = 0.0
    pitch: float = 0.0

    def to_dict(self) -> dict:
        """Serialize for JSON output."""
        return {
            "text": self.text,
            "consonant": self.consonant,
            "consonant_length": self.consonant_length,
            "vowel": self.vowel,
            "vowel_length": self.vowel_length,
            "pitch": self.pitch,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MoraModel":
        return cls(
            text=data["text"],
            consonant=data.get("consonant"),
            consonant_length=data.get("consonant_length"),
            vowel=data["vowel"],
            vowel_length=float(data.get("vowel_length", 0.0)),
            pitch=float(data.get("pitch", 0.0)),
        )


@dataclass
class AccentPhraseModel:
    """An accent phrase flattened for synthesis.

    ``pause_mora`` is set only on the last phrase of a breath group that is
    followed by another breath group.
    """
    moras: list[MoraModel]
    accent: int
    pause_mora: MoraModel | None = None
    is_interrogative: bool = False

    def all_moras(self) -> list[MoraModel]:
        """Moras in synthesis order, trailing pause included."""
        if self.pause_mora is None:
            return list(self.moras)
        return [*self.moras, self.pause_mora]

    def to_dict(self) -> dict:
        """Serialize for JSON output."""
        return {
            "moras": [m.to_dict() for m in self.moras],
            "accent": self.accent,
            "pause_mora": self.pause_mora.to_dict() if self.pause_mora else None,
            "is_interrogative": self.is_interrogative,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AccentPhraseModel":
        pause = data.get("pause_mora")
        return cls(
            moras=[MoraModel.from_dict(m) for m in data["moras"]],
            accent=int(data["accent"]),
            pause_mora=MoraModel.from_dict(pause) if pause else None,
            is_interrogative=bool(data.get("is_interrogative", False)),
        )
