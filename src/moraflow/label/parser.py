"""Full-context label parsing: one OpenJTalk label line -> Phoneme.

A label looks like::

    xx^xx-sil+k=o/A:xx+xx+xx/B:xx-xx_xx/C:xx_xx+xx/D:xx+xx_xx/E:xx_xx!xx_xx-xx
    /F:xx_xx#xx_xx@xx_xx|xx_xx/G:2_1%0_xx_xx/H:xx_xx/I:xx-xx@xx+xx&xx-xx|xx+xx
    /J:1_2/K:1+1-2

(on a single line). Each field we need is bounded by a fixed prefix and
suffix, and every value except the phoneme identity is either a non-negative
integer or the literal ``xx``.
"""

from dataclasses import dataclass

from moraflow.errors import LabelParseError

NOT_APPLICABLE = "xx"


@dataclass(frozen=True)
class _FieldRule:
    """Delimiters around one context field."""
    prefix: str
    suffix: str
    free_text: bool = False     # any text up to the suffix, not just \d+|xx


# Field name -> delimiters, in the order they appear in a label.
FIELD_RULES: dict[str, _FieldRule] = {
    "p3": _FieldRule("-", "+", free_text=True),   # phoneme identity
    "a2": _FieldRule("+", "+"),                   # mora position in accent phrase
    "a3": _FieldRule("+", "/B:"),                 # mora position, counted from the end
    "f1": _FieldRule("/F:", "_"),                 # moras in accent phrase; xx for pauses
    "f2": _FieldRule("_", "#"),                   # accent position
    "f3": _FieldRule("#", "_"),                   # 1 if interrogative
    "f5": _FieldRule("@", "_"),                   # accent phrase position in breath group
    "h1": _FieldRule("/H:", "_"),                 # moras in previous breath group
    "i3": _FieldRule("@", "+"),                   # breath group position in utterance
    "j1": _FieldRule("/J:", "_"),                 # moras in next breath group
}


def _match_token(label: str, start: int, suffix: str) -> int | None:
    """Return the end of a ``\\d+|xx`` token at ``start`` followed by ``suffix``."""
    end = start
    while end < len(label) and label[end] in "0123456789":
        end += 1
    if end > start and label.startswith(suffix, end):
        return end
    if label.startswith(NOT_APPLICABLE, start) and label.startswith(
        suffix, start + len(NOT_APPLICABLE)
    ):
        return start + len(NOT_APPLICABLE)
    return None


def extract_field(label: str, name: str) -> str:
    """Extract one context field from a label.

    The leftmost occurrence of prefix + value + suffix wins.

    Raises:
        LabelParseError: if no such occurrence exists.
    """
    rule = FIELD_RULES[name]
    pos = label.find(rule.prefix)
    while pos != -1:
        start = pos + len(rule.prefix)
        if rule.free_text:
            end = label.find(rule.suffix, start)
            if end != -1:
                return label[start:end]
            break
        end = _match_token(label, start, rule.suffix)
        if end is not None:
            return label[start:end]
        pos = label.find(rule.prefix, pos + 1)
    raise LabelParseError(name, label)


@dataclass(frozen=True)
class Phoneme:
    """One phoneme and the context fields needed to rebuild prosodic structure."""
    p3: str
    a2: str
    a3: str
    f1: str
    f2: str
    f3: str
    f5: str
    h1: str
    i3: str
    j1: str

    @classmethod
    def from_label(cls, label: str) -> "Phoneme":
        return cls(**{name: extract_field(label, name) for name in FIELD_RULES})

    @property
    def phoneme(self) -> str:
        return self.p3

    @property
    def is_pause(self) -> bool:
        return self.f1 == NOT_APPLICABLE


def parse_label(label: str) -> Phoneme:
    """Parse a single full-context label line into a Phoneme.

    Raises:
        LabelParseError: if any of the ten context fields is missing.
    """
    return Phoneme.from_label(label.strip())
