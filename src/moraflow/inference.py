"""Numeric model backends: duration, intonation and waveform decoding."""

import logging
from abc import ABC, abstractmethod

import numpy as np

logger = logging.getLogger(__name__)


class InferenceBackend(ABC):
    """Abstract base for the three acoustic models.

    Implementations are treated as stateless request/response functions.
    Any exception they raise is passed through to the caller unchanged.
    """

    name: str = "base"

    @abstractmethod
    def predict_duration(self, phoneme_list: np.ndarray, speaker_id: int) -> np.ndarray:
        """Predict one length (seconds) per phoneme id."""

    @abstractmethod
    def predict_intonation(
        self,
        length: int,
        vowel_phoneme_list: np.ndarray,
        consonant_phoneme_list: np.ndarray,
        start_accent_list: np.ndarray,
        end_accent_list: np.ndarray,
        start_accent_phrase_list: np.ndarray,
        end_accent_phrase_list: np.ndarray,
        speaker_id: int,
    ) -> np.ndarray:
        """Predict one log-F0 value per vowel slot."""

    @abstractmethod
    def decode(
        self,
        length: int,
        phoneme_size: int,
        f0: np.ndarray,
        phoneme: np.ndarray,
        speaker_id: int,
    ) -> np.ndarray:
        """Render frame-level features to waveform samples.

        Args:
            length: Number of frames.
            phoneme_size: Number of phoneme classes.
            f0: Pitch curve, shape (length,).
            phoneme: One-hot phoneme matrix, shape (length, phoneme_size).
            speaker_id: Voice to render.

        Returns:
            Samples at 24 kHz, ``length * 256`` of them.
        """


class OnnxBackend(InferenceBackend):
    """Backend over three ONNX Runtime sessions.

    Sessions are created by the caller, e.g.
    ``onnxruntime.InferenceSession("predict_duration-0.onnx")``; anything with
    the same ``run(output_names, input_feed)`` method works.
    """

    name = "onnx"

    def __init__(self, duration_session, intonation_session, decode_session):
        self.duration_session = duration_session
        self.intonation_session = intonation_session
        self.decode_session = decode_session

    @staticmethod
    def _speaker(speaker_id: int) -> np.ndarray:
        return np.array([speaker_id], dtype=np.int64)

    def predict_duration(self, phoneme_list: np.ndarray, speaker_id: int) -> np.ndarray:
        (output,) = self.duration_session.run(["phoneme_length"], {
            "phoneme_list": np.asarray(phoneme_list, dtype=np.int64),
            "speaker_id": self._speaker(speaker_id),
        })
        return np.asarray(output, dtype=np.float32).ravel()

    def predict_intonation(
        self,
        length: int,
        vowel_phoneme_list: np.ndarray,
        consonant_phoneme_list: np.ndarray,
        start_accent_list: np.ndarray,
        end_accent_list: np.ndarray,
        start_accent_phrase_list: np.ndarray,
        end_accent_phrase_list: np.ndarray,
        speaker_id: int,
    ) -> np.ndarray:
        feed = {
            "length": np.array(length, dtype=np.int64),
            "vowel_phoneme_list": vowel_phoneme_list,
            "consonant_phoneme_list": consonant_phoneme_list,
            "start_accent_list": start_accent_list,
            "end_accent_list": end_accent_list,
            "start_accent_phrase_list": start_accent_phrase_list,
            "end_accent_phrase_list": end_accent_phrase_list,
        }
        feed = {k: np.asarray(v, dtype=np.int64) for k, v in feed.items()}
        feed["speaker_id"] = self._speaker(speaker_id)
        (output,) = self.intonation_session.run(["f0_list"], feed)
        return np.asarray(output, dtype=np.float32).ravel()

    def decode(
        self,
        length: int,
        phoneme_size: int,
        f0: np.ndarray,
        phoneme: np.ndarray,
        speaker_id: int,
    ) -> np.ndarray:
        logger.debug(f"Decoding {length} frames x {phoneme_size} phoneme classes")
        (output,) = self.decode_session.run(["wave"], {
            "f0": np.asarray(f0, dtype=np.float32).reshape(length, 1),
            "phoneme": np.asarray(phoneme, dtype=np.float32).reshape(length, phoneme_size),
            "speaker_id": self._speaker(speaker_id),
        })
        return np.asarray(output, dtype=np.float32).ravel()


def check_output_length(output: np.ndarray, expected: int, what: str) -> np.ndarray:
    """Flatten a backend result and verify it has one value per request slot.

    Raises:
        ValueError: on a length mismatch.
    """
    output = np.asarray(output).ravel()
    if len(output) != expected:
        raise ValueError(
            f"{what} returned {len(output)} values, expected {expected}"
        )
    return output


def check_output_covers(output: np.ndarray, needed: int, what: str) -> np.ndarray:
    """Flatten a backend result and verify it has at least ``needed`` values.

    Raises:
        ValueError: if the result is too short.
    """
    output = np.asarray(output).ravel()
    if len(output) < needed:
        raise ValueError(
            f"{what} returned {len(output)} values, needs at least {needed}"
        )
    return output
