# lqe/estimator.py
# Python 3.10+
# 목적: 스칼라 LQE(1차원 칼만 필터)의 상태 값 타입과 단일 갱신 규칙.
# - 관측 모델 = 항등, 프로세스 잡음 없음(예측 단계 없음).
# - 상태는 불변(frozen) 값: update()는 항상 새 LQE를 반환하고 사전 상태는 그대로 둔다.
# - 게인 K = P / (P + R),  x' = (1 - K) x + K z,  P' = (1 - K) P
#   (x + K (z - x)와 같은 식. 볼록결합 형태라 K==1이면 z, K==0이면 x가 정확히 나온다)
# - 퇴화(P + R == 0): 기본은 NaN 전파(IEEE-754 0/0과 동일), strict=True면 예외.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .errors import DegenerateVarianceError

__all__ = ["LQE", "Observation"]


@dataclass(frozen=True, slots=True)
class Observation:
    """관측 1건: 원시값과 그 분산(불확실성, 측정 단위의 제곱)."""
    value: float
    variance: float

    def as_tuple(self) -> Tuple[float, float]:
        return self.value, self.variance


@dataclass(frozen=True, slots=True)
class LQE:
    """
    Linear Quadratic Estimator state: a single belief about a scalar quantity.

    ``measurement`` is the current best estimate (mean of the belief) and
    ``variance`` its uncertainty. Instances are values; chaining updates
    folds a sequence of observations into a posterior::

        LQE(3.0, 2.0).update(5.0, 3.0).update(7.0, 1.0).result()

    No validation is done on construction. ``variance`` is expected to be
    non-negative; a zero prior variance is a valid (fully certain) belief.
    """
    measurement: float
    variance: float

    def gain(self, measured_variance: float, *, strict: bool = False) -> float:
        """
        다음 관측에 적용될 칼만 게인 K = P / (P + R).
        P + R == 0이면 NaN(strict=True면 DegenerateVarianceError).
        """
        total = self.variance + measured_variance
        if total == 0:
            if strict:
                raise DegenerateVarianceError(self.variance, measured_variance)
            # float 0/0은 파이썬에서 ZeroDivisionError이므로 IEEE 결과를 직접 반환
            return math.nan
        return self.variance / total

    def update(self, measured_value: float, measured_variance: float, *,
               strict: bool = False) -> LQE:
        """관측 (z, R)을 반영한 사후 상태를 새 인스턴스로 반환."""
        k = self.gain(measured_variance, strict=strict)
        return LQE(
            measurement=(1.0 - k) * self.measurement + k * measured_value,
            variance=(1.0 - k) * self.variance,
        )

    def result(self) -> Tuple[float, float]:
        return self.measurement, self.variance
