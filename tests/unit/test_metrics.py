from __future__ import annotations

import math

import numpy as np
import pytest

from lqe.metrics import InnovationStats, mae, rmse, variance_reduction_pct


def test_innovation_stats_welford():
    st = InnovationStats()
    for x in [1.0, 2.0, 3.0, 4.0]:
        st.push(x)
    assert st.count == 4
    assert st.mean == pytest.approx(2.5)
    assert st.variance == pytest.approx(5.0 / 3.0)
    assert math.isnan(st.nis_mean)


def test_innovation_stats_nis_skips_zero_variance():
    st = InnovationStats()
    st.push(2.0, 4.0)
    st.push(1.0, 0.0)
    assert st.nis_mean == pytest.approx(1.0)
    st.reset()
    assert st.count == 0 and math.isnan(st.mean)


def test_mae_rmse():
    assert mae([1.0, 3.0], 2.0) == pytest.approx(1.0)
    assert rmse([0.0, 4.0], [0.0, 1.0]) == pytest.approx(math.sqrt(4.5))
    assert math.isnan(mae([], 1.0))
    with pytest.raises(ValueError):
        rmse([1.0, 2.0], [1.0])


def test_variance_reduction_pct():
    assert variance_reduction_pct(2.0, 0.5) == pytest.approx(75.0)
    assert math.isnan(variance_reduction_pct(0.0, 0.0))


def test_errors_accept_numpy_scalar_truth():
    assert mae([23.0, 25.0], np.int64(24)) == pytest.approx(1.0)
    assert rmse([23.0, 25.0], np.float64(24.0)) == pytest.approx(1.0)
