"""Tests for the textual summary and the design plot."""

import matplotlib

matplotlib.use("Agg")

import pandas as pd

from undid import create_diff_df
from undid.reporting import cohort_windows, diff_df_overview, plot_diff_design, print_diff_summary

from conftest import make_roster


class TestSummary:
    def setup_method(self):
        roster = make_roster({"B": "1991", "C": "control", "D": "1993"}, covariates="asian;male")
        self.df = create_diff_df(roster, "yyyy", "yearly")

    def test_overview_counts(self):
        info = diff_df_overview(self.df)
        assert info["design"] == "staggered"
        assert info["n_silos"] == 3
        assert info["n_treated"] == 2
        assert info["n_control"] == 1
        assert info["cohorts"] == ["1991", "1993"]
        assert info["n_ri_rows"] == 18
        assert info["covariates"] == ["asian", "male"]

    def test_common_overview(self):
        df = create_diff_df(make_roster({"A": "control", "B": "1991"}), "yyyy", "yearly")
        info = diff_df_overview(df)
        assert info["design"] == "common"
        assert info["cohorts"] == ["1991"]
        assert info["n_ri_rows"] == 0

    def test_print(self, capsys):
        print_diff_summary(self.df)
        out = capsys.readouterr().out
        assert "DIFFERENCE SPECIFICATION" in out
        assert "staggered adoption" in out


class TestPlot:
    def setup_method(self):
        roster = make_roster({"B": "1991", "C": "control", "D": "1993"})
        self.df = create_diff_df(roster, "yyyy", "yearly")

    def test_cohort_windows(self):
        w = cohort_windows(self.df)
        assert w["gvar"].tolist() == [pd.Timestamp(1991, 1, 1), pd.Timestamp(1993, 1, 1)]
        assert w["pre"].tolist() == [pd.Timestamp(1990, 1, 1), pd.Timestamp(1992, 1, 1)]
        assert w["last_post"].tolist() == [pd.Timestamp(2000, 1, 1)] * 2
        assert w["n_post"].tolist() == [10, 8]

    def test_plot_returns_figure(self, tmp_path):
        fig = plot_diff_design(self.df, save=str(tmp_path / "design.png"))
        assert len(fig.axes) == 1
        assert (tmp_path / "design.png").exists()
        matplotlib.pyplot.close(fig)
