"""Accent-phrase construction and acoustic alignment for Japanese speech synthesis."""

__version__ = "0.1.0"
