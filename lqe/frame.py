# lqe/frame.py
# Python 3.10+
# 목적: 표 형식(CSV/Parquet) 관측 로그를 읽어 필터를 적용하고 요약한다.
#
# 입력 기대:
#  - Parquet: *.parquet (pyarrow 필요), CSV: *.csv (utf-8, 헤더 포함)
#  - 파일/디렉터리 모두 허용. 디렉터리는 재귀 검색하며 *.parquet 우선, 없으면 *.csv
#  - 필수 컬럼: value, variance (이름은 인자로 재정의 가능). 행 순서 = 관측 순서
#
# 출력 컬럼(filter_frame):
#  - prior, prior_var : 관측 직전 상태
#  - gain             : 적용된 칼만 게인
#  - innovation       : value - prior
#  - estimate, estimate_var : 사후 상태
#
# 의존: pandas, numpy, pyarrow(옵션)

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from .chain import trace
from .estimator import LQE
from .metrics import InnovationStats, mae, rmse, variance_reduction_pct

_LOG = logging.getLogger(__name__)
__all__ = ["discover_files", "load_observations", "filter_frame", "summarize"]


# ----------------------------- I/O -----------------------------

def discover_files(inputs: Iterable[str | os.PathLike]) -> List[Path]:
    files: List[Path] = []
    for inp in inputs:
        p = Path(inp)
        if p.is_dir():
            cands = list(p.rglob("*.parquet"))
            if not cands:
                cands = list(p.rglob("*.csv"))
            files.extend(sorted(set(cands)))
        elif p.is_file():
            files.append(p)
        else:
            _LOG.warning("input not found: %s", p)
    # 중복 제거(입력 순서 유지)
    uniq = []
    seen = set()
    for f in files:
        if f.resolve() not in seen:
            uniq.append(f)
            seen.add(f.resolve())
    return uniq


def load_observations(paths: Sequence[str | os.PathLike],
                      value_col: str = "value",
                      variance_col: str = "variance") -> pd.DataFrame:
    """여러 파일의 관측 레코드를 파일 순서대로 이어 붙인 단일 DataFrame."""
    files = discover_files(paths)
    if not files:
        raise FileNotFoundError("no input files found (parquet/csv)")

    dfs = []
    for f in files:
        suffix = f.suffix.lower()
        if suffix == ".parquet":
            df = pd.read_parquet(f)
        elif suffix == ".csv":
            df = pd.read_csv(f)
        else:
            _LOG.debug("skipping unsupported file: %s", f)
            continue
        missing = {value_col, variance_col} - set(df.columns)
        if missing:
            raise ValueError(f"{f} missing columns: {sorted(missing)}")
        df["__source_file"] = str(f)
        dfs.append(df)

    if not dfs:
        raise FileNotFoundError("no readable observation files")
    out = pd.concat(dfs, ignore_index=True)
    out[value_col] = out[value_col].astype("float64")
    out[variance_col] = out[variance_col].astype("float64")
    _LOG.debug("loaded %d observations from %d file(s)", len(out), len(dfs))
    return out


# ----------------------------- 필터 적용 -----------------------------

def filter_frame(df: pd.DataFrame, initial: LQE,
                 value_col: str = "value",
                 variance_col: str = "variance",
                 strict: bool = False) -> pd.DataFrame:
    """행 순서대로 관측을 반영한 결과 컬럼을 붙인 사본을 반환."""
    zs = df[value_col].to_numpy(dtype=np.float64)
    rs = df[variance_col].to_numpy(dtype=np.float64)
    n = len(df)

    prior = np.empty(n, dtype=np.float64)
    prior_var = np.empty(n, dtype=np.float64)
    gain = np.empty(n, dtype=np.float64)
    est = np.empty(n, dtype=np.float64)
    est_var = np.empty(n, dtype=np.float64)

    state = initial
    for i, post in enumerate(trace(initial, zip(zs.tolist(), rs.tolist()), strict=strict)):
        prior[i], prior_var[i] = state.result()
        gain[i] = state.gain(float(rs[i]))
        est[i], est_var[i] = post.result()
        state = post

    out = df.copy()
    out["prior"] = prior
    out["prior_var"] = prior_var
    out["gain"] = gain
    out["innovation"] = zs - prior
    out["estimate"] = est
    out["estimate_var"] = est_var
    return out


def summarize(filtered: pd.DataFrame, initial: LQE,
              variance_col: str = "variance",
              truth: float | None = None) -> pd.DataFrame:
    """
    filter_frame() 결과의 1행 요약.
    - variance_reduction_pct: 초기 분산 대비 최종 분산 감소율
    - innovation_*, nis_mean: 혁신 통계(InnovationStats)
    - truth가 주어지면 mae/rmse 추가
    """
    stats = InnovationStats()
    for inn, pv, r in zip(filtered["innovation"].to_numpy(),
                          filtered["prior_var"].to_numpy(),
                          filtered[variance_col].to_numpy()):
        stats.push(float(inn), float(pv) + float(r))

    if len(filtered):
        final_est = float(filtered["estimate"].iloc[-1])
        final_var = float(filtered["estimate_var"].iloc[-1])
    else:
        final_est, final_var = initial.result()

    row = {
        "n_obs": int(len(filtered)),
        "initial_estimate": float(initial.measurement),
        "initial_variance": float(initial.variance),
        "final_estimate": final_est,
        "final_variance": final_var,
        "variance_reduction_pct": variance_reduction_pct(initial.variance, final_var),
        "innovation_mean": stats.mean,
        "innovation_std": stats.std,
        "nis_mean": stats.nis_mean,
    }
    if truth is not None:
        row["mae"] = mae(filtered["estimate"].to_numpy(), truth)
        row["rmse"] = rmse(filtered["estimate"].to_numpy(), truth)
    return pd.DataFrame([row])
