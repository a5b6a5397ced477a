"""Tests for the command-line runner."""

import pandas as pd

import create_diff_df_runner as runner

from conftest import make_roster


class TestRunner:
    def test_writes_table(self, tmp_path):
        init = tmp_path / "init.csv"
        make_roster({"B": "1991", "C": "control", "D": "1993"}).to_csv(init, index=False)
        code = runner.main([str(init), "--date-format", "yyyy", "--freq", "yearly",
                            "--filepath", str(tmp_path), "--covariates", "x", "--covariates", "y"])
        assert code == 0
        out = pd.read_csv(tmp_path / "empty_diff_df.csv", dtype=str, keep_default_na=False)
        assert (out["covariates"] == "x;y").all()
        assert "-1" in set(out["treat"])

    def test_no_ri(self, tmp_path):
        init = tmp_path / "init.csv"
        make_roster({"B": "1991", "C": "control", "D": "1993"}).to_csv(init, index=False)
        assert runner.main([str(init), "--date-format", "yyyy", "--freq", "yearly",
                            "--filepath", str(tmp_path), "--no-ri"]) == 0
        out = pd.read_csv(tmp_path / "empty_diff_df.csv", dtype=str)
        assert set(out["RI"]) == {"0"}

    def test_error_exit_code(self, tmp_path, capsys):
        init = tmp_path / "init.csv"
        make_roster({"A": "1991", "B": "1991"}).to_csv(init, index=False)
        code = runner.main([str(init), "--date-format", "yyyy", "--freq", "yearly",
                            "--filepath", str(tmp_path)])
        assert code == 2
        assert "CohortCountError" in capsys.readouterr().err
