"""Tests for roster reading, validation and init.csv creation."""

import pandas as pd
import pytest

from undid.helpers.errors import FormatError, OrderingError, RosterError, WindowMismatchError
from undid.helpers.preparation import (
    create_init_csv,
    init_checks,
    prepare_roster,
    read_init,
)

from conftest import make_roster


class TestReadInit:
    def test_cells_are_strings_and_control_lowercased(self, tmp_path):
        path = tmp_path / "init.csv"
        path.write_text(
            "silo_name,start_time,end_time,treatment_time\n"
            "71, 1989,2000,Control\n"
            "73,1989,2000,1991\n",
            encoding="utf-8",
        )
        df = read_init(path)
        assert df["silo_name"].tolist() == ["71", "73"]
        assert df["start_time"].tolist() == ["1989", "1989"]
        assert df["treatment_time"].tolist() == ["control", "1991"]


class TestInitChecks:
    def test_missing_column(self):
        df = make_roster({"A": "control", "B": "1991"}).drop(columns="end_time")
        with pytest.raises(RosterError, match="end_time"):
            init_checks(df)

    def test_duplicate_silo(self):
        df = pd.concat([make_roster({"A": "control"}), make_roster({"A": "1991"})])
        with pytest.raises(RosterError, match="unique"):
            init_checks(df.reset_index(drop=True))

    def test_empty_cell(self):
        df = make_roster({"A": "control", "B": "1991"})
        df.loc[1, "start_time"] = ""
        with pytest.raises(RosterError):
            init_checks(df)

    def test_empty_roster(self):
        with pytest.raises(RosterError):
            init_checks(make_roster({}))


class TestPrepareRoster:
    def test_records(self, staggered_roster):
        roster = prepare_roster(staggered_roster, "yyyy")
        assert [r.silo_name for r in roster.records] == ["B", "C", "D"]
        assert [r.silo_name for r in roster.controls] == ["C"]
        assert roster.cohorts == [pd.Timestamp(1991, 1, 1), pd.Timestamp(1993, 1, 1)]
        assert roster.n_treatment_values == 3

    def test_equal_dates_form_one_cohort(self):
        df = make_roster({"A": "1991", "B": "1991", "C": "control"})
        roster = prepare_roster(df, "yyyy")
        assert roster.cohorts == [pd.Timestamp(1991, 1, 1)]
        assert roster.n_treatment_values == 2

    def test_bad_date(self):
        df = make_roster({"A": "control", "B": "1991-01-01"})
        with pytest.raises(FormatError):
            prepare_roster(df, "yyyy")

    def test_treatment_after_end(self):
        df = make_roster({"A": "control", "B": "2001"})
        with pytest.raises(OrderingError):
            prepare_roster(df, "yyyy")

    def test_treatment_at_start(self):
        df = make_roster({"A": "control", "B": "1989"})
        with pytest.raises(OrderingError):
            prepare_roster(df, "yyyy")

    def test_start_after_end_for_control(self):
        df = make_roster({"A": "control", "B": "1991"})
        df.loc[0, "start_time"] = "2005"
        with pytest.raises(OrderingError):
            prepare_roster(df, "yyyy")

    def test_shared_window(self, staggered_roster):
        roster = prepare_roster(staggered_roster, "yyyy")
        assert roster.shared_window() == (pd.Timestamp(1989, 1, 1), pd.Timestamp(2000, 1, 1))

    def test_divergent_windows(self, staggered_roster):
        staggered_roster.loc[2, "end_time"] = "1999"
        roster = prepare_roster(staggered_roster, "yyyy")
        with pytest.raises(WindowMismatchError):
            roster.shared_window()


class TestCreateInitCsv:
    def test_broadcast_and_write(self, tmp_path, capsys):
        df = create_init_csv(
            ["71", "73", "46"],
            start_times="1989",
            end_times="2000",
            treatment_times=["1991", "1993", "control"],
            covariates=["asian", "black"],
            filepath=tmp_path,
        )
        assert df["start_time"].tolist() == ["1989"] * 3
        assert df["covariates"].tolist() == ["asian;black"] * 3
        written = read_init(tmp_path / "init.csv")
        assert written["treatment_time"].tolist() == ["1991", "1993", "control"]
        assert "init.csv saved to:" in capsys.readouterr().out

    def test_no_covariates_column_by_default(self):
        df = create_init_csv(["A", "B"], "1989", "2000", ["control", "1991"])
        assert "covariates" not in df.columns

    def test_length_mismatch(self):
        with pytest.raises(RosterError):
            create_init_csv(["A", "B"], ["1989", "1990", "1991"], "2000", ["control", "1991"])

    def test_bad_filename(self, tmp_path):
        with pytest.raises(ValueError, match=".csv"):
            create_init_csv(["A", "B"], "1989", "2000", ["control", "1991"],
                            filename="init.txt", filepath=tmp_path)
