"""Synthesis constants and per-request parameters."""

import os
from dataclasses import asdict, dataclass

SAMPLING_RATE = 24000
FRAME_HOP = 256                     # samples per decoder frame
FRAME_RATE = SAMPLING_RATE / FRAME_HOP

PADDING_SECONDS = 0.4
PADDING_FRAMES = int(PADDING_SECONDS * SAMPLING_RATE / FRAME_HOP + 0.5)

PHONEME_LENGTH_MINIMAL = 0.01       # seconds

INTERROGATIVE_VOWEL_LENGTH = 0.15   # seconds
INTERROGATIVE_PITCH_ADJUST = 0.3
INTERROGATIVE_MAX_PITCH = 6.5

PAUSE_MORA_TEXT = "、"

DEFAULT_SPEAKER_ID = int(os.environ.get("MORAFLOW_SPEAKER_ID", "0"))

# snake_case field -> audio query key
_QUERY_KEYS = {
    "speed_scale": "speedScale",
    "pitch_scale": "pitchScale",
    "intonation_scale": "intonationScale",
    "pre_phoneme_length": "prePhonemeLength",
    "post_phoneme_length": "postPhonemeLength",
    "enable_interrogative_upspeak": "enableInterrogativeUpspeak",
}


@dataclass
class SynthesisParams:
    """Global scaling applied when rendering accent phrases to a waveform."""
    speed_scale: float = 1.0            # >1 speaks faster
    pitch_scale: float = 0.0            # octaves: pitch *= 2 ** pitch_scale
    intonation_scale: float = 1.0       # spread of voiced pitch around its mean
    pre_phoneme_length: float = 0.1     # leading silence, seconds
    post_phoneme_length: float = 0.1    # trailing silence, seconds
    enable_interrogative_upspeak: bool = True

    def __post_init__(self):
        if self.speed_scale <= 0:
            raise ValueError(f"speed_scale must be positive, got {self.speed_scale}")
        if self.pre_phoneme_length < 0 or self.post_phoneme_length < 0:
            raise ValueError(
                "pre/post phoneme length must be non-negative, got "
                f"{self.pre_phoneme_length}/{self.post_phoneme_length}"
            )

    def to_dict(self) -> dict:
        """Serialize with audio query (camelCase) keys."""
        return {_QUERY_KEYS[k]: v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: dict) -> "SynthesisParams":
        """Build from a dict using either camelCase or snake_case keys.

        Unknown keys are ignored.
        """
        kwargs = {}
        for field_name, query_key in _QUERY_KEYS.items():
            if query_key in data:
                kwargs[field_name] = data[query_key]
            elif field_name in data:
                kwargs[field_name] = data[field_name]
        return cls(**kwargs)
