"""Tests for frequency resolution."""

import pandas as pd
import pytest

from undid.helpers.errors import FrequencyError
from undid.helpers.frequency import FreqStep, resolve_frequency


class TestResolveFrequency:
    def test_bare_unit(self):
        step = resolve_frequency("yearly")
        assert step == FreqStep("year", 1)
        assert str(step) == "1 year"

    @pytest.mark.parametrize("multiplier", [None, False, 1])
    def test_unset_or_one_is_singular(self, multiplier):
        assert str(resolve_frequency("weekly", multiplier)) == "1 week"

    def test_multiplier_pluralises(self):
        assert str(resolve_frequency("Monthly", 3)) == "3 months"
        assert str(resolve_frequency("daily", 2.0)) == "2 days"

    @pytest.mark.parametrize("freq", ["quarterly", "", "year"])
    def test_unknown_name(self, freq):
        with pytest.raises(FrequencyError):
            resolve_frequency(freq)

    @pytest.mark.parametrize("multiplier", [0, -2, True, 2.5, "2"])
    def test_bad_multiplier(self, multiplier):
        with pytest.raises(FrequencyError):
            resolve_frequency("yearly", multiplier)


class TestFreqStep:
    def test_offset(self):
        assert pd.Timestamp(2020, 1, 15) + FreqStep("month", 2).offset == pd.Timestamp(2020, 3, 15)

    def test_times(self):
        assert pd.Timestamp(2020, 1, 1) + FreqStep("week").times(3) == pd.Timestamp(2020, 1, 22)

    @pytest.mark.parametrize("text, expected", [
        ("1 year", FreqStep("year", 1)),
        ("2 years", FreqStep("year", 2)),
        ("4 Weeks", FreqStep("week", 4)),
    ])
    def test_parse(self, text, expected):
        assert FreqStep.parse(text) == expected

    def test_parse_roundtrips_resolved_step(self):
        step = resolve_frequency("monthly", 6)
        assert FreqStep.parse(str(step)) == step

    @pytest.mark.parametrize("text", ["year", "0 years", "two years", "1 fortnight"])
    def test_parse_rejects(self, text):
        with pytest.raises(FrequencyError):
            FreqStep.parse(text)
