# lqe/metrics.py
# Python 3.10+
# 목적: 필터 진단 지표
# - 혁신(innovation, z - x_prior)의 온라인 평균/분산(Welford)
# - NIS(정규화 혁신 제곱) 평균: innovation² / (P_prior + R). 일관된 필터면 ≈ 1
# - 참값 대비 MAE/RMSE, 분산 감소율(%)
# - 빈 입력/정의되지 않는 경우는 예외 대신 NaN

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Iterable, Sequence

__all__ = [
    "InnovationStats",
    "mae", "rmse", "variance_reduction_pct",
]


@dataclass(slots=True)
class InnovationStats:
    """
    혁신 통계 누적기(Welford).
    - push(innovation, innovation_var)를 관측 순서대로 호출
    - variance는 표본분산(unbiased, n-1), n<2면 NaN
    """
    _n: int = 0
    _mean: float = 0.0
    _m2: float = 0.0
    _nis_sum: float = 0.0
    _nis_n: int = 0

    def push(self, innovation: float, innovation_var: float | None = None) -> None:
        x = float(innovation)
        self._n += 1
        delta = x - self._mean
        self._mean += delta / self._n
        self._m2 += delta * (x - self._mean)
        if innovation_var is not None and innovation_var > 0:
            self._nis_sum += x * x / float(innovation_var)
            self._nis_n += 1

    def reset(self) -> None:
        self._n = 0
        self._mean = 0.0
        self._m2 = 0.0
        self._nis_sum = 0.0
        self._nis_n = 0

    @property
    def count(self) -> int:
        return self._n

    @property
    def mean(self) -> float:
        return self._mean if self._n > 0 else float("nan")

    @property
    def variance(self) -> float:
        return self._m2 / (self._n - 1) if self._n > 1 else float("nan")

    @property
    def std(self) -> float:
        v = self.variance
        return math.sqrt(v) if math.isfinite(v) else float("nan")

    @property
    def nis_mean(self) -> float:
        # 혁신 분산이 0인 관측은 NIS에서 제외
        return self._nis_sum / self._nis_n if self._nis_n > 0 else float("nan")


def _errors(estimates: Iterable[float], truth: float | Sequence[float]) -> list[float]:
    est = [float(e) for e in estimates]
    if isinstance(truth, numbers.Real):
        ref = [float(truth)] * len(est)
    else:
        ref = [float(t) for t in truth]
        if len(ref) != len(est):
            raise ValueError(f"length mismatch: estimates={len(est)} truth={len(ref)}")
    return [e - t for e, t in zip(est, ref)]


def mae(estimates: Iterable[float], truth: float | Sequence[float]) -> float:
    """평균 절대 오차. truth는 상수 또는 같은 길이의 시퀀스."""
    errs = _errors(estimates, truth)
    if not errs:
        return float("nan")
    return sum(abs(e) for e in errs) / len(errs)


def rmse(estimates: Iterable[float], truth: float | Sequence[float]) -> float:
    errs = _errors(estimates, truth)
    if not errs:
        return float("nan")
    return math.sqrt(sum(e * e for e in errs) / len(errs))


def variance_reduction_pct(prior_var: float, posterior_var: float) -> float:
    """
    분산 감소율(%) = (P0 - Pn) / P0 * 100
    P0<=0 또는 비유한이면 NaN.
    """
    p0 = float(prior_var); pn = float(posterior_var)
    if not math.isfinite(p0) or p0 <= 0:
        return float("nan")
    return (p0 - pn) / p0 * 100.0
