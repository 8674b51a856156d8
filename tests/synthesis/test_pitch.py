"""Tests for the mora pitch stage."""

import numpy as np
import pytest

from moraflow.synthesis.pitch import create_one_accent_list, replace_mora_pitch
from moraflow.types import AccentPhraseModel, MoraModel


def _make_mora(consonant, vowel, length=0.0, pitch=0.0) -> MoraModel:
    return MoraModel(
        text=f"{consonant or ''}{vowel}",
        consonant=consonant,
        consonant_length=length if consonant else None,
        vowel=vowel,
        vowel_length=length,
        pitch=pitch,
    )


def _make_pause(length=0.0) -> MoraModel:
    return MoraModel(text="、", consonant=None, consonant_length=None,
                     vowel="pau", vowel_length=length, pitch=0.0)


def _vowels(*vowels) -> list:
    return [_make_mora(None, v) for v in vowels]


class TestCreateOneAccentList:
    def test_consonant_repeats_value(self):
        phrase = AccentPhraseModel(moras=[_make_mora("k", "a"), _make_mora(None, "N")], accent=1)
        assert create_one_accent_list(phrase, 0) == [1, 1, 0]

    def test_negative_point_counts_from_end(self):
        phrase = AccentPhraseModel(moras=[_make_mora("k", "a"), _make_mora(None, "N")], accent=1)
        assert create_one_accent_list(phrase, -1) == [0, 0, 1]

    def test_pause_mora_always_zero(self):
        phrase = AccentPhraseModel(moras=_vowels("a"), accent=1, pause_mora=_make_pause())
        assert create_one_accent_list(phrase, -1) == [1, 0]

    def test_point_out_of_range(self):
        phrase = AccentPhraseModel(moras=_vowels("a", "i"), accent=1)
        assert create_one_accent_list(phrase, 5) == [0, 0]


class TestReplaceMoraPitch:
    def test_scatters_pitch(self, fake_backend, ka_n_phrase):
        backend = fake_backend(f0=[0.0, 5.0, 0.0, 0.0])
        (phrase,) = replace_mora_pitch(ka_n_phrase, backend, speaker_id=0)
        assert phrase.moras[0].pitch == pytest.approx(5.0)
        assert phrase.moras[1].pitch == 0.0

    def test_vowel_and_consonant_ids(self, fake_backend, ka_n_phrase):
        backend = fake_backend()
        replace_mora_pitch(ka_n_phrase, backend, speaker_id=2)
        call = backend.calls["predict_intonation"]
        assert call["length"] == 4
        # pau a N pau / - k - -
        np.testing.assert_array_equal(call["vowel_phoneme_list"], [0, 7, 4, 0])
        np.testing.assert_array_equal(call["consonant_phoneme_list"], [-1, 23, -1, -1])
        assert call["speaker_id"] == 2

    def test_accent_indicators_initial_accent(self, fake_backend, ka_n_phrase):
        backend = fake_backend()
        replace_mora_pitch(ka_n_phrase, backend, speaker_id=0)
        call = backend.calls["predict_intonation"]
        np.testing.assert_array_equal(call["start_accent_list"], [0, 1, 0, 0])
        np.testing.assert_array_equal(call["end_accent_list"], [0, 1, 0, 0])
        np.testing.assert_array_equal(call["start_accent_phrase_list"], [0, 1, 0, 0])
        np.testing.assert_array_equal(call["end_accent_phrase_list"], [0, 0, 1, 0])

    def test_accent_indicators_later_accent(self, fake_backend):
        phrases = [AccentPhraseModel(moras=_vowels("a", "i", "u", "e"), accent=3)]
        backend = fake_backend()
        replace_mora_pitch(phrases, backend, speaker_id=0)
        call = backend.calls["predict_intonation"]
        np.testing.assert_array_equal(call["start_accent_list"], [0, 0, 1, 0, 0, 0])
        np.testing.assert_array_equal(call["end_accent_list"], [0, 0, 0, 1, 0, 0])
        np.testing.assert_array_equal(call["start_accent_phrase_list"], [0, 1, 0, 0, 0, 0])
        np.testing.assert_array_equal(call["end_accent_phrase_list"], [0, 0, 0, 0, 1, 0])

    def test_indicators_are_int64(self, fake_backend, ka_n_phrase):
        backend = fake_backend()
        replace_mora_pitch(ka_n_phrase, backend, speaker_id=0)
        call = backend.calls["predict_intonation"]
        for key in ("start_accent_list", "end_accent_list",
                    "start_accent_phrase_list", "end_accent_phrase_list"):
            assert call[key].dtype == np.int64

    def test_unvoiced_forced_to_zero(self, fake_backend):
        phrases = [AccentPhraseModel(
            moras=[_make_mora("sh", "I"), _make_mora(None, "cl"), _make_mora("t", "a")],
            accent=1,
            pause_mora=_make_pause(),
        ), AccentPhraseModel(moras=_vowels("o"), accent=1)]
        # pau I cl a pau o pau
        backend = fake_backend(f0=[9.0] * 7)
        first, second = replace_mora_pitch(phrases, backend, speaker_id=0)
        assert [m.pitch for m in first.moras] == [0.0, 0.0, 9.0]
        assert first.pause_mora.pitch == 0.0
        assert second.moras[0].pitch == 9.0

    def test_lengths_unchanged(self, fake_backend, ka_n_phrase):
        ka_n_phrase[0].moras[0].vowel_length = 0.12
        (phrase,) = replace_mora_pitch(ka_n_phrase, fake_backend(), speaker_id=0)
        assert phrase.moras[0].vowel_length == 0.12
        assert ka_n_phrase[0].moras[0].pitch == 0.0

    def test_wrong_output_length_raises(self, fake_backend, ka_n_phrase):
        with pytest.raises(ValueError, match="predict_intonation"):
            replace_mora_pitch(ka_n_phrase, fake_backend(f0=[1.0]), speaker_id=0)
