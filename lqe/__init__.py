"""Scalar Linear Quadratic Estimator (one-dimensional Kalman filter)."""

from .chain import run, run_arrays, trace
from .config import FilterConfig
from .errors import ConfigError, DegenerateVarianceError, LQEError
from .estimator import LQE, Observation

__all__ = [
    "LQE",
    "Observation",
    "run",
    "trace",
    "run_arrays",
    "FilterConfig",
    "LQEError",
    "DegenerateVarianceError",
    "ConfigError",
]
