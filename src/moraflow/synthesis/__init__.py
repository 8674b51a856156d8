"""Synthesis pipeline: labels -> accent phrases -> lengths -> pitch -> waveform."""

import logging

import numpy as np

from moraflow.config import DEFAULT_SPEAKER_ID, SynthesisParams
from moraflow.inference import InferenceBackend
from moraflow.query import create_accent_phrases
from moraflow.synthesis.duration import replace_phoneme_length
from moraflow.synthesis.pitch import replace_mora_pitch
from moraflow.synthesis.waveform import synthesis
from moraflow.types import AccentPhraseModel

logger = logging.getLogger(__name__)


class SynthesisEngine:
    """Runs every stage against one inference backend.

    Holds no per-request state; each call works only on its arguments.
    """

    def __init__(self, backend: InferenceBackend):
        self.backend = backend

    def create_accent_phrases(
        self, labels: list[str], speaker_id: int = DEFAULT_SPEAKER_ID,
    ) -> list[AccentPhraseModel]:
        """Build accent phrases from labels and predict their lengths and pitch."""
        logger.info(f"Building accent phrases from {len(labels)} labels")
        accent_phrases = create_accent_phrases(labels)
        accent_phrases = self.replace_phoneme_length(accent_phrases, speaker_id)
        return self.replace_mora_pitch(accent_phrases, speaker_id)

    def replace_phoneme_length(
        self, accent_phrases: list[AccentPhraseModel], speaker_id: int = DEFAULT_SPEAKER_ID,
    ) -> list[AccentPhraseModel]:
        logger.info(f"Predicting phoneme lengths (speaker {speaker_id})")
        return replace_phoneme_length(accent_phrases, self.backend, speaker_id)

    def replace_mora_pitch(
        self, accent_phrases: list[AccentPhraseModel], speaker_id: int = DEFAULT_SPEAKER_ID,
    ) -> list[AccentPhraseModel]:
        logger.info(f"Predicting mora pitch (speaker {speaker_id})")
        return replace_mora_pitch(accent_phrases, self.backend, speaker_id)

    def synthesis(
        self,
        accent_phrases: list[AccentPhraseModel],
        speaker_id: int = DEFAULT_SPEAKER_ID,
        params: SynthesisParams | None = None,
    ) -> np.ndarray:
        logger.info(f"Decoding waveform (speaker {speaker_id})")
        wave = synthesis(accent_phrases, self.backend, speaker_id, params)
        logger.info(f"Synthesized {len(wave)} samples")
        return wave

    def tts(
        self,
        labels: list[str],
        speaker_id: int = DEFAULT_SPEAKER_ID,
        params: SynthesisParams | None = None,
    ) -> np.ndarray:
        """Full pipeline from labels to samples."""
        accent_phrases = self.create_accent_phrases(labels, speaker_id)
        return self.synthesis(accent_phrases, speaker_id, params)


__all__ = [
    "SynthesisEngine",
    "replace_mora_pitch",
    "replace_phoneme_length",
    "synthesis",
]
