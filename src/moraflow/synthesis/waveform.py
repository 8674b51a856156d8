"""Render accent phrases with lengths and pitch to waveform samples."""

import logging
from dataclasses import replace

import numpy as np

from moraflow.config import (
    FRAME_HOP,
    FRAME_RATE,
    INTERROGATIVE_MAX_PITCH,
    INTERROGATIVE_PITCH_ADJUST,
    INTERROGATIVE_VOWEL_LENGTH,
    PADDING_FRAMES,
    SynthesisParams,
)
from moraflow.inference import InferenceBackend
from moraflow.phonemes import NUM_PHONEME, phoneme_ids
from moraflow.query import mora_to_text
from moraflow.synthesis.alignment import split_mora, to_flatten_moras, to_flatten_phonemes
from moraflow.types import AccentPhraseModel, MoraModel

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Interrogative upspeak
# ---------------------------------------------------------------------------

def make_interrogative_mora(last_mora: MoraModel) -> MoraModel:
    """A short vowel-only mora a little higher than ``last_mora``."""
    pitch = min(last_mora.pitch + INTERROGATIVE_PITCH_ADJUST, INTERROGATIVE_MAX_PITCH)
    return MoraModel(
        text=mora_to_text(last_mora.vowel),
        consonant=None,
        consonant_length=None,
        vowel=last_mora.vowel,
        vowel_length=INTERROGATIVE_VOWEL_LENGTH,
        pitch=pitch,
    )


def adjust_interrogative_moras(accent_phrase: AccentPhraseModel) -> list[MoraModel]:
    moras = list(accent_phrase.moras)
    if accent_phrase.is_interrogative and moras and moras[-1].pitch != 0.0:
        moras.append(make_interrogative_mora(moras[-1]))
    return moras


def adjust_interrogative_accent_phrases(
    accent_phrases: list[AccentPhraseModel],
) -> list[AccentPhraseModel]:
    """Append a rising mora to every voiced interrogative accent phrase."""
    return [
        replace(accent_phrase, moras=adjust_interrogative_moras(accent_phrase))
        for accent_phrase in accent_phrases
    ]


# ---------------------------------------------------------------------------
# Decoder padding
# ---------------------------------------------------------------------------

def make_f0_with_padding(f0: np.ndarray, padding_size: int) -> np.ndarray:
    """Surround the pitch curve with ``padding_size`` unvoiced frames on each side."""
    pad = np.zeros(padding_size, dtype=np.float32)
    return np.concatenate([pad, np.asarray(f0, dtype=np.float32), pad])


def make_phoneme_with_padding(
    phoneme: np.ndarray, phoneme_size: int, padding_size: int,
) -> np.ndarray:
    """Surround the one-hot phoneme matrix with pause frames (class 0)."""
    pad = np.zeros((padding_size, phoneme_size), dtype=np.float32)
    pad[:, 0] = 1.0
    body = np.asarray(phoneme, dtype=np.float32).reshape(-1, phoneme_size)
    return np.concatenate([pad, body, pad])


def trim_padding_from_output(output: np.ndarray, padding_size: int) -> np.ndarray:
    """Drop the samples rendered for ``padding_size`` frames at each end.

    Raises:
        ValueError: if the output is shorter than the padding itself.
    """
    output = np.asarray(output).ravel()
    padding_samples = padding_size * FRAME_HOP
    if len(output) < 2 * padding_samples:
        raise ValueError(
            f"Decoder output has {len(output)} samples, "
            f"fewer than the {2 * padding_samples} padding samples"
        )
    return output[padding_samples:len(output) - padding_samples]


# ---------------------------------------------------------------------------
# Frame expansion
# ---------------------------------------------------------------------------

def _phoneme_lengths_and_f0(
    moras: list[MoraModel], params: SynthesisParams,
) -> tuple[np.ndarray, np.ndarray]:
    """Per-phoneme lengths and per-vowel-slot pitch, silence at both ends."""
    lengths = [params.pre_phoneme_length]
    f0 = [0.0]
    for mora in moras:
        if mora.consonant is not None:
            lengths.append(mora.consonant_length or 0.0)
        lengths.append(mora.vowel_length)
        f0.append(mora.pitch)
    lengths.append(params.post_phoneme_length)
    f0.append(0.0)

    f0_list = np.array(f0, dtype=np.float64) * 2.0 ** params.pitch_scale

    voiced = f0_list > 0
    # an all-unvoiced utterance has no mean to scale around
    if voiced.any():
        mean_f0 = f0_list[voiced].mean()
        f0_list[voiced] = (f0_list[voiced] - mean_f0) * params.intonation_scale + mean_f0

    return np.array(lengths, dtype=np.float64), f0_list


def to_frame_counts(lengths: np.ndarray, speed_scale: float) -> np.ndarray:
    """Convert lengths in seconds to decoder frames, rounding up."""
    return np.ceil(lengths * FRAME_RATE / speed_scale).astype(np.int64)


def expand_f0(
    f0_list: np.ndarray, frame_counts: np.ndarray, vowel_indexes: list[int],
) -> np.ndarray:
    """Repeat each vowel slot's pitch over its frames and those of the consonant before it."""
    segment_frames = []
    pending = 0
    vowel_positions = set(vowel_indexes)
    for i, count in enumerate(frame_counts):
        pending += int(count)
        if i in vowel_positions:
            segment_frames.append(pending)
            pending = 0
    return np.repeat(np.asarray(f0_list, dtype=np.float32), segment_frames)


def expand_phonemes(ids: list[int], frame_counts: np.ndarray) -> np.ndarray:
    """One-hot phoneme matrix with each id repeated over its frames."""
    frame_ids = np.repeat(np.asarray(ids, dtype=np.int64), frame_counts)
    phoneme = np.zeros((len(frame_ids), NUM_PHONEME), dtype=np.float32)
    phoneme[np.arange(len(frame_ids)), frame_ids] = 1.0
    return phoneme


def synthesis(
    accent_phrases: list[AccentPhraseModel],
    backend: InferenceBackend,
    speaker_id: int,
    params: SynthesisParams | None = None,
) -> np.ndarray:
    """Render accent phrases to 24 kHz float32 samples.

    Args:
        accent_phrases: Phrases with lengths and pitch already filled in.
        backend: Provides the waveform decoder.
        speaker_id: Voice to render.
        params: Speed/pitch/intonation scaling and silence padding.
    """
    if params is None:
        params = SynthesisParams()

    if params.enable_interrogative_upspeak:
        accent_phrases = adjust_interrogative_accent_phrases(accent_phrases)

    moras = to_flatten_moras(accent_phrases)
    phonemes = to_flatten_phonemes(moras)
    _, _, vowel_indexes = split_mora(phonemes)

    lengths, f0_list = _phoneme_lengths_and_f0(moras, params)
    frame_counts = to_frame_counts(lengths, params.speed_scale)

    f0 = expand_f0(f0_list, frame_counts, vowel_indexes)
    phoneme = expand_phonemes(phoneme_ids(phonemes), frame_counts)
    length = len(f0)
    logger.debug(f"Expanded {len(phonemes)} phonemes to {length} frames")

    length_with_padding = length + 2 * PADDING_FRAMES
    wave = backend.decode(
        length_with_padding,
        NUM_PHONEME,
        make_f0_with_padding(f0, PADDING_FRAMES),
        make_phoneme_with_padding(phoneme, NUM_PHONEME, PADDING_FRAMES),
        speaker_id,
    )
    return trim_padding_from_output(wave, PADDING_FRAMES).astype(np.float32)
