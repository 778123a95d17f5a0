# lqe/chain.py
# Python 3.10+
# 목적: 관측 시퀀스를 왼쪽부터 접어(fold) 사후 상태를 구한다.
# - run(): 최종 사후 상태만 반환 (빈 시퀀스 → 초기 상태 그대로)
# - trace(): 관측마다 사후 상태를 지연(yield) 생성
# - run_arrays(): numpy 배열 입출력(추정값/분산/게인). 각 원소는 trace()와 동일값.
# - 각 단계는 직전 상태에만 의존하므로 배치 분할과 무관하게 결과가 같다.
# - 상태가 처음 NaN이 되는 시점에 WARNING 1회 기록(퇴화 관측 추적용).

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Iterator, Tuple

import numpy as np

from .estimator import LQE, Observation

_LOG = logging.getLogger(__name__)
__all__ = ["run", "trace", "run_arrays"]


def _as_pair(obs: Any) -> Tuple[float, float]:
    """Observation 또는 (value, variance) 2-튜플 지원."""
    if isinstance(obs, Observation):
        return obs.as_tuple()
    value, variance = obs
    return float(value), float(variance)


def _is_nan_state(state: LQE) -> bool:
    return math.isnan(state.measurement) or math.isnan(state.variance)


def trace(initial: LQE, observations: Iterable[Any], *, strict: bool = False) -> Iterator[LQE]:
    """Yield the posterior after each observation, in order."""
    state = initial
    warned = _is_nan_state(initial)
    for i, obs in enumerate(observations):
        value, variance = _as_pair(obs)
        state = state.update(value, variance, strict=strict)
        if not warned and _is_nan_state(state):
            _LOG.warning("estimate became NaN at observation %d (value=%r, variance=%r)",
                         i, value, variance)
            warned = True
        yield state


def run(initial: LQE, observations: Iterable[Any], *, strict: bool = False) -> LQE:
    state = initial
    for state in trace(initial, observations, strict=strict):
        pass
    return state


def run_arrays(initial: LQE, values: Any, variances: Any, *,
               strict: bool = False) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    배열 입력 버전. 반환: (estimates, estimate_variances, gains) 모두 float64, 길이 = 입력 길이.
    gains[i]는 i번째 관측에 적용된 게인(직전 상태 기준).
    """
    zs = np.asarray(values, dtype=np.float64)
    rs = np.asarray(variances, dtype=np.float64)
    if zs.ndim != 1 or rs.ndim != 1:
        raise ValueError("values and variances must be 1-D")
    if zs.shape != rs.shape:
        raise ValueError(f"length mismatch: values={zs.shape[0]} variances={rs.shape[0]}")

    n = zs.shape[0]
    est = np.empty(n, dtype=np.float64)
    est_var = np.empty(n, dtype=np.float64)
    gains = np.empty(n, dtype=np.float64)

    state = initial
    for i, post in enumerate(trace(initial, zip(zs.tolist(), rs.tolist()), strict=strict)):
        gains[i] = state.gain(float(rs[i]))
        est[i] = post.measurement
        est_var[i] = post.variance
        state = post
    return est, est_var, gains
