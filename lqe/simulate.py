# lqe/simulate.py
# Python 3.10+
# 목적: 하드웨어/데이터 없이 필터를 돌려보기 위한 합성 관측 소스(mock).
# - 참값 true_value에 N(0, variance) 잡음을 더한 관측 생성
# - variance_jitter>0이면 관측마다 선언 분산을 [variance*(1-j), variance*(1+j)]에서 균등 추출
#   (잡음도 그 분산으로 생성 → 선언 분산과 실제 잡음이 일치)
# - seed 고정 시 재현 가능(numpy Generator)

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .estimator import Observation

__all__ = ["SimulatedSource"]


class SimulatedSource:
    """Constant true signal observed through Gaussian noise."""

    def __init__(self, true_value: float, variance: float,
                 seed: Optional[int] = None, variance_jitter: float = 0.0):
        if not np.isfinite(true_value):
            raise ValueError("true_value must be finite")
        if not (np.isfinite(variance) and variance >= 0):
            raise ValueError("variance must be finite and >= 0")
        if not (0.0 <= variance_jitter < 1.0):
            raise ValueError("variance_jitter must be in [0, 1)")
        self.true_value = float(true_value)
        self.variance = float(variance)
        self.variance_jitter = float(variance_jitter)
        self._rng = np.random.default_rng(seed)

    def arrays(self, n: int) -> Tuple[np.ndarray, np.ndarray]:
        """n개 관측을 (values, variances) float64 배열로 반환."""
        if n < 0:
            raise ValueError("n must be >= 0")
        if self.variance_jitter > 0:
            j = self.variance_jitter
            variances = self._rng.uniform(self.variance * (1 - j), self.variance * (1 + j), size=n)
        else:
            variances = np.full(n, self.variance, dtype=np.float64)
        noise = self._rng.standard_normal(n) * np.sqrt(variances)
        values = self.true_value + noise
        return values.astype(np.float64), variances.astype(np.float64)

    def take(self, n: int) -> List[Observation]:
        values, variances = self.arrays(n)
        return [Observation(float(z), float(r)) for z, r in zip(values, variances)]

    def __repr__(self) -> str:
        return (f"SimulatedSource(true_value={self.true_value}, variance={self.variance}, "
                f"variance_jitter={self.variance_jitter})")
