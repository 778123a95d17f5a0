# lqe/errors.py
# Python 3.10+
# 목적: 패키지 공통 예외 계층.
# - 기본 연산은 예외를 던지지 않는다(IEEE-754 NaN 전파가 기준 동작).
# - strict 모드/설정 계층에서만 아래 예외를 사용.

from __future__ import annotations

__all__ = ["LQEError", "DegenerateVarianceError", "ConfigError"]


class LQEError(Exception):
    """Base class for errors raised by the ``lqe`` package."""


class DegenerateVarianceError(LQEError, ValueError):
    """사전 분산과 관측 분산이 모두 0 (게인 0/0). strict=True에서만 발생."""

    def __init__(self, prior_variance: float, measured_variance: float):
        self.prior_variance = prior_variance
        self.measured_variance = measured_variance
        super().__init__(
            f"degenerate update: prior variance {prior_variance!r} + "
            f"measured variance {measured_variance!r} == 0"
        )


class ConfigError(LQEError, ValueError):
    """잘못된 설정값(CLI/FilterConfig)."""
