"""Full-context label parsing and linguistic structure."""

from moraflow.label.parser import Phoneme, parse_label
from moraflow.label.structure import AccentPhrase, BreathGroup, Mora, Utterance

__all__ = [
    "AccentPhrase",
    "BreathGroup",
    "Mora",
    "Phoneme",
    "Utterance",
    "parse_label",
]
