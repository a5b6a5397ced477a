"""Tests for the persisted specification table."""

import pandas as pd
import pytest

from undid import DiffConfig, DiffDfBuilder, FrequencyError, create_diff_df
from undid.design import read_diff_df, write_diff_df
from undid.design.assembly import ESTIMATE_COLUMNS, attach_metadata

from conftest import make_roster


class TestAttachMetadata:
    def test_columns_added(self):
        df = attach_metadata(pd.DataFrame({"silo_name": ["A"]}), covariates="none",
                             date_format="yyyy", freq="1 year")
        assert list(df.columns) == ["silo_name"] + ESTIMATE_COLUMNS + ["covariates", "date_format", "freq"]
        assert df[ESTIMATE_COLUMNS].isna().all().all()


class TestCsvRoundTrip:
    @pytest.mark.parametrize("treatments", [
        {"B": "1991", "C": "control", "D": "1993"},
        {"A": "control", "B": "1991"},
    ])
    def test_lossless(self, tmp_path, treatments):
        df = create_diff_df(make_roster(treatments, covariates="asian;male"), "yyyy", "yearly")
        path = write_diff_df(df, "empty_diff_df.csv", tmp_path)
        back = read_diff_df(path)
        pd.testing.assert_frame_equal(back, df, check_dtype=False)

    def test_subfields_survive(self, tmp_path):
        roster = make_roster({"B": "01/03/2020", "C": "control", "D": "01/05/2020"},
                             start="01/01/2019", end="01/06/2020")
        df = create_diff_df(roster, "dd/mm/yyyy", "monthly", covariates=["a", "b"])
        back = read_diff_df(write_diff_df(df, "out.csv", tmp_path))
        assert back["diff_times"].iloc[0] == "01/03/2020;01/02/2020"
        assert back["gt"].iloc[0] == "01/03/2020;01/03/2020"
        assert back["covariates"].iloc[0] == "a;b"
        assert back["diff_estimate"].isna().all()

    def test_create_diff_df_writes(self, tmp_path, capsys):
        create_diff_df(make_roster({"A": "control", "B": "1991"}), "yyyy", "yearly", filepath=tmp_path)
        assert (tmp_path / "empty_diff_df.csv").exists()
        assert "empty_diff_df.csv saved to:" in capsys.readouterr().out

    def test_reads_from_path(self, tmp_path):
        path = tmp_path / "init.csv"
        make_roster({"A": "control", "B": "1991"}).to_csv(path, index=False)
        df = create_diff_df(path, "yyyy", "yearly")
        assert df["treat"].tolist() == ["0", "1"]


class TestEagerFailure:
    def test_bad_filename_before_build(self, tmp_path):
        with pytest.raises(ValueError, match="filename"):
            create_diff_df(make_roster({"A": "control", "B": "1991"}), "yyyy", "yearly",
                           filename="diff.txt", filepath=tmp_path)
        assert list(tmp_path.iterdir()) == []

    def test_bad_frequency_writes_nothing(self, tmp_path):
        with pytest.raises(FrequencyError):
            create_diff_df(make_roster({"A": "control", "B": "1991"}), "yyyy", "fortnightly",
                           filepath=tmp_path)
        assert list(tmp_path.iterdir()) == []


class TestBuilder:
    def test_design_available_after_build(self, staggered_roster):
        builder = DiffDfBuilder(DiffConfig(date_format="yyyy", freq="yearly"))
        with pytest.raises(RuntimeError):
            builder.design
        builder.build(staggered_roster)
        assert builder.design.kind == "staggered"

    def test_verbose_logs(self, staggered_roster, capsys):
        DiffDfBuilder(DiffConfig(verbose=True)).build(staggered_roster)
        out = capsys.readouterr().out
        assert "[undid][design] staggered adoption, 2 cohorts; RI reference silo=C" in out

    def test_config_copy_is_independent(self):
        cfg = DiffConfig(covariates=["x"])
        clone = cfg.copy()
        clone.covariates.append("y")
        assert cfg.covariates == ["x"]
