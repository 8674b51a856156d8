"""Tests for synthesis constants and parameters."""

import pytest

from moraflow.config import (
    FRAME_HOP,
    FRAME_RATE,
    PADDING_FRAMES,
    SAMPLING_RATE,
    SynthesisParams,
)


def test_frame_constants():
    assert SAMPLING_RATE == 24000
    assert FRAME_HOP == 256
    assert FRAME_RATE == 93.75
    # 0.4s * 93.75 = 37.5, rounded half up
    assert PADDING_FRAMES == 38


class TestSynthesisParams:
    def test_defaults(self):
        params = SynthesisParams()
        assert params.speed_scale == 1.0
        assert params.pitch_scale == 0.0
        assert params.intonation_scale == 1.0
        assert params.pre_phoneme_length == 0.1
        assert params.post_phoneme_length == 0.1
        assert params.enable_interrogative_upspeak is True

    def test_zero_speed_rejected(self):
        with pytest.raises(ValueError, match="speed_scale"):
            SynthesisParams(speed_scale=0)

    def test_negative_padding_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            SynthesisParams(pre_phoneme_length=-0.1)

    def test_to_dict_uses_query_keys(self):
        d = SynthesisParams(speed_scale=1.5).to_dict()
        assert d["speedScale"] == 1.5
        assert d["enableInterrogativeUpspeak"] is True
        assert "speed_scale" not in d

    def test_from_dict_camel_case(self):
        params = SynthesisParams.from_dict({"pitchScale": 0.1, "intonationScale": 1.2})
        assert params.pitch_scale == 0.1
        assert params.intonation_scale == 1.2

    def test_from_dict_snake_case_and_unknown_keys(self):
        params = SynthesisParams.from_dict({"speed_scale": 2.0, "volumeScale": 1.0})
        assert params.speed_scale == 2.0

    def test_round_trip(self):
        params = SynthesisParams(speed_scale=1.2, enable_interrogative_upspeak=False)
        assert SynthesisParams.from_dict(params.to_dict()) == params
