"""Fixtures for synthesis stage tests."""

import numpy as np
import pytest

from moraflow.inference import InferenceBackend
from moraflow.types import AccentPhraseModel, MoraModel


class FakeBackend(InferenceBackend):
    """Returns fixed model outputs and records every request."""

    name = "fake"

    def __init__(self, durations=None, f0=None):
        self.durations = durations
        self.f0 = f0
        self.calls: dict[str, dict] = {}

    def predict_duration(self, phoneme_list, speaker_id):
        self.calls["predict_duration"] = {
            "phoneme_list": phoneme_list, "speaker_id": speaker_id,
        }
        if self.durations is None:
            return np.full(len(phoneme_list), 0.1, dtype=np.float32)
        return np.asarray(self.durations, dtype=np.float32)

    def predict_intonation(
        self, length, vowel_phoneme_list, consonant_phoneme_list,
        start_accent_list, end_accent_list,
        start_accent_phrase_list, end_accent_phrase_list, speaker_id,
    ):
        self.calls["predict_intonation"] = {
            "length": length,
            "vowel_phoneme_list": vowel_phoneme_list,
            "consonant_phoneme_list": consonant_phoneme_list,
            "start_accent_list": start_accent_list,
            "end_accent_list": end_accent_list,
            "start_accent_phrase_list": start_accent_phrase_list,
            "end_accent_phrase_list": end_accent_phrase_list,
            "speaker_id": speaker_id,
        }
        if self.f0 is None:
            return np.full(length, 5.0, dtype=np.float32)
        return np.asarray(self.f0, dtype=np.float32)

    def decode(self, length, phoneme_size, f0, phoneme, speaker_id):
        self.calls["decode"] = {
            "length": length, "phoneme_size": phoneme_size,
            "f0": f0, "phoneme": phoneme, "speaker_id": speaker_id,
        }
        return np.zeros(length * 256, dtype=np.float32)


@pytest.fixture
def fake_backend():
    return FakeBackend


@pytest.fixture
def ka_n_phrase() -> list[AccentPhraseModel]:
    """One accent phrase "カン", accent on the first mora."""
    ka = MoraModel(text="ka", consonant="k", consonant_length=0.0,
                   vowel="a", vowel_length=0.0, pitch=0.0)
    n = MoraModel(text="N", consonant=None, consonant_length=None,
                  vowel="N", vowel_length=0.0, pitch=0.0)
    return [AccentPhraseModel(moras=[ka, n], accent=1)]
