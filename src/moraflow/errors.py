"""Errors raised while turning full-context labels into accent phrases."""


class FullContextLabelError(ValueError):
    """Base class for malformed full-context label input."""


class LabelParseError(FullContextLabelError):
    """A required context field is missing from a label string."""

    def __init__(self, field: str, label: str):
        self.field = field
        self.label = label
        super().__init__(f"Context field {field!r} not found in label: {label!r}")


class TooLongMoraError(FullContextLabelError):
    """Mora segmentation grouped three or more phonemes together."""

    def __init__(self, phoneme_count: int):
        self.phoneme_count = phoneme_count
        super().__init__(
            f"Mora has {phoneme_count} phonemes (expected 1 or 2)"
        )


class InvalidMoraError(FullContextLabelError):
    """The accent index of an accent phrase is missing or not an integer."""
