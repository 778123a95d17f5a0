# lqe/cli.py
# Python 3.10+
# 목적: 관측 로그(CSV/Parquet) 또는 합성 관측에 스칼라 LQE를 적용하고 결과를 저장한다.
#
# 사용 예:
#   lqe -i data/obs.csv --initial-measurement 20 --initial-variance 4 -o artifacts/lqe
#   lqe --simulate 200 --true-value 24 --noise-var 2 --seed 7
#
# 산출물:
#  - <out>/estimates.csv (+ --save-parquet 시 estimates.parquet)
#  - <out>/summary.csv

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .config import FilterConfig
from .errors import LQEError
from .frame import filter_frame, load_observations, summarize
from .simulate import SimulatedSource

_LOG = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Scalar Linear Quadratic Estimator (1-D Kalman filter)")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--input", "-i", action="append",
                     help="관측 파일 또는 디렉터리 (여러 번 지정 가능)")
    src.add_argument("--simulate", type=int, default=None, metavar="N",
                     help="파일 대신 합성 관측 N개 사용")
    ap.add_argument("--true-value", type=float, default=0.0, help="합성 관측의 참값")
    ap.add_argument("--noise-var", type=float, default=1.0, help="합성 관측의 잡음 분산")
    ap.add_argument("--variance-jitter", type=float, default=0.0,
                    help="합성 관측 분산의 상대 변동폭 [0,1)")
    ap.add_argument("--seed", type=int, default=None)

    ap.add_argument("--initial-measurement", type=float, default=0.0, help="사전 추정값")
    ap.add_argument("--initial-variance", type=float, default=1.0, help="사전 분산(≥0)")
    ap.add_argument("--value-col", default="value")
    ap.add_argument("--variance-col", default="variance")
    ap.add_argument("--strict", action="store_true",
                    help="두 분산이 모두 0인 관측에서 NaN 대신 오류로 중단")

    ap.add_argument("--out", "-o", default="artifacts/lqe", help="결과 출력 디렉터리")
    ap.add_argument("--save-parquet", action="store_true",
                    help="estimates.parquet도 함께 저장(pyarrow 필요)")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap.parse_args(argv)


def _simulated_frame(args: argparse.Namespace, cfg: FilterConfig) -> pd.DataFrame:
    if args.simulate < 0:
        raise ValueError("--simulate must be >= 0")
    source = SimulatedSource(args.true_value, args.noise_var,
                             seed=args.seed, variance_jitter=args.variance_jitter)
    _LOG.info("simulating %d observations from %r", args.simulate, source)
    values, variances = source.arrays(args.simulate)
    return pd.DataFrame({cfg.value_col: values, cfg.variance_col: variances})


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        cfg = FilterConfig(
            initial_measurement=args.initial_measurement,
            initial_variance=args.initial_variance,
            strict=bool(args.strict),
            value_col=args.value_col,
            variance_col=args.variance_col,
        )
        if args.simulate is not None:
            df = _simulated_frame(args, cfg)
            truth = args.true_value
        else:
            df = load_observations(args.input, cfg.value_col, cfg.variance_col)
            truth = None
        initial = cfg.initial_state()
        filtered = filter_frame(df, initial, cfg.value_col, cfg.variance_col, strict=cfg.strict)
    except (LQEError, ValueError, FileNotFoundError) as e:
        print(f"[lqe] ERROR: {e}", file=sys.stderr)
        return 2

    summary = summarize(filtered, initial, cfg.variance_col, truth=truth)

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    est_path = out_dir / "estimates.csv"
    filtered.to_csv(est_path, index=False)
    sum_path = out_dir / "summary.csv"
    summary.to_csv(sum_path, index=False)

    row = summary.iloc[0]
    print(f"[lqe] observations={int(row['n_obs'])} "
          f"estimate={row['final_estimate']:.6g} variance={row['final_variance']:.6g}")
    print(f"[lqe] saved: {est_path}")
    print(f"[lqe] saved: {sum_path}")
    if args.save_parquet:
        pq_path = out_dir / "estimates.parquet"
        try:
            filtered.to_parquet(pq_path, index=False)
            print(f"[lqe] saved: {pq_path}")
        except ImportError as e:
            print(f"[lqe] WARN: parquet not saved: {e}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
