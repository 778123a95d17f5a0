# lqe/config.py
# Python 3.10+
# 목적: CLI/파이프라인용 필터 설정.
# - 사전 믿음(초기 추정/분산), strict 모드, 입력 컬럼명
# - 검증은 설정 계층에서만 수행(LQE 생성자 자체는 검증하지 않음)

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import ConfigError
from .estimator import LQE

__all__ = ["FilterConfig"]


@dataclass(slots=True, frozen=True)
class FilterConfig:
    """
    필터 구성.
    - initial_measurement: 사전 추정값(유한)
    - initial_variance: 사전 분산(유한, ≥0). 0은 '완전 확신' 사전으로 유효
    - strict: 두 분산이 모두 0인 관측에서 NaN 대신 예외
    - value_col/variance_col: 표 입력의 관측값/분산 컬럼명
    """
    initial_measurement: float = 0.0
    initial_variance: float = 1.0
    strict: bool = False
    value_col: str = "value"
    variance_col: str = "variance"

    def __post_init__(self):
        if not math.isfinite(self.initial_measurement):
            raise ConfigError("initial_measurement must be finite")
        if not math.isfinite(self.initial_variance) or self.initial_variance < 0:
            raise ConfigError("initial_variance must be finite and >= 0")
        if not self.value_col or not self.variance_col:
            raise ConfigError("column names must be non-empty")
        if self.value_col == self.variance_col:
            raise ConfigError("value_col and variance_col must differ")

    def initial_state(self) -> LQE:
        return LQE(float(self.initial_measurement), float(self.initial_variance))
