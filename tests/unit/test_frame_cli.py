from __future__ import annotations

import math

import pandas as pd
import pytest

from lqe import LQE
from lqe.cli import main
from lqe.frame import discover_files, filter_frame, load_observations, summarize


def _write_csv(path, rows):
    pd.DataFrame(rows, columns=["value", "variance"]).to_csv(path, index=False)


def test_load_observations_from_directory(tmp_path):
    _write_csv(tmp_path / "a.csv", [(5.0, 3.0)])
    _write_csv(tmp_path / "b.csv", [(7.0, 1.0)])
    df = load_observations([tmp_path])
    assert df["value"].tolist() == [5.0, 7.0]
    assert df["variance"].dtype == "float64"
    assert len(discover_files([tmp_path, tmp_path / "a.csv"])) == 2


def test_load_observations_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_observations([tmp_path / "missing"])
    pd.DataFrame({"value": [1.0]}).to_csv(tmp_path / "bad.csv", index=False)
    with pytest.raises(ValueError, match="missing columns"):
        load_observations([tmp_path / "bad.csv"])


def test_filter_frame_columns():
    df = pd.DataFrame({"value": [5.0, 7.0], "variance": [3.0, 1.0]})
    out = filter_frame(df, LQE(3.0, 2.0))
    assert "estimate" not in df.columns
    assert out["prior"].tolist() == [3.0, pytest.approx(3.8)]
    assert out["gain"].iloc[0] == pytest.approx(0.4)
    assert out["innovation"].iloc[0] == pytest.approx(2.0)
    assert out["estimate"].iloc[-1] == pytest.approx(61.0 / 11.0)
    assert out["estimate_var"].iloc[-1] == pytest.approx(6.0 / 11.0)


def test_summarize_with_truth():
    df = pd.DataFrame({"value": [5.0, 7.0], "variance": [3.0, 1.0]})
    initial = LQE(3.0, 2.0)
    s = summarize(filter_frame(df, initial), initial, truth=6.0).iloc[0]
    assert s["n_obs"] == 2
    assert s["final_variance"] == pytest.approx(6.0 / 11.0)
    assert s["variance_reduction_pct"] == pytest.approx((2.0 - 6.0 / 11.0) / 2.0 * 100.0)
    assert s["mae"] == pytest.approx((abs(3.8 - 6.0) + abs(61.0 / 11.0 - 6.0)) / 2)


def test_summarize_empty_frame():
    df = pd.DataFrame({"value": pd.Series([], dtype="float64"),
                       "variance": pd.Series([], dtype="float64")})
    initial = LQE(3.0, 2.0)
    s = summarize(filter_frame(df, initial), initial).iloc[0]
    assert s["n_obs"] == 0
    assert s["final_estimate"] == 3.0
    assert math.isnan(s["innovation_mean"])


def test_cli_file_input(tmp_path, capsys):
    src = tmp_path / "obs.csv"
    _write_csv(src, [(5.0, 3.0), (7.0, 1.0)])
    out = tmp_path / "out"
    rc = main(["-i", str(src), "--initial-measurement", "3", "--initial-variance", "2",
               "-o", str(out)])
    assert rc == 0
    est = pd.read_csv(out / "estimates.csv")
    assert est["estimate"].iloc[-1] == pytest.approx(61.0 / 11.0)
    assert (out / "summary.csv").exists()
    assert "[lqe] observations=2" in capsys.readouterr().out


def test_cli_simulate(tmp_path):
    out = tmp_path / "sim"
    rc = main(["--simulate", "50", "--true-value", "24", "--noise-var", "2",
               "--seed", "3", "--initial-variance", "100", "-o", str(out)])
    assert rc == 0
    summary = pd.read_csv(out / "summary.csv")
    assert summary["n_obs"].iloc[0] == 50
    assert "rmse" in summary.columns


def test_cli_config_error(tmp_path, capsys):
    rc = main(["--simulate", "5", "--initial-variance", "-1", "-o", str(tmp_path)])
    assert rc == 2
    assert "[lqe] ERROR" in capsys.readouterr().err


def test_cli_strict_degenerate(tmp_path, capsys):
    src = tmp_path / "obs.csv"
    _write_csv(src, [(5.0, 0.0)])
    rc = main(["-i", str(src), "--initial-variance", "0", "--strict", "-o", str(tmp_path / "o")])
    assert rc == 2
    assert "degenerate" in capsys.readouterr().err
