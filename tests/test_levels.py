import math

import numpy as np
import pytest

from audo_dyn.levels import (
    FLOOR_DB,
    db_to_linear,
    lerp,
    linear_to_db,
    ms_to_samples,
    samples_to_ms,
    soft_knee,
)


def test_db_linear_conversions():
    assert db_to_linear(0.0) == pytest.approx(1.0)
    assert db_to_linear(-20.0) == pytest.approx(0.1)
    assert linear_to_db(0.5) == pytest.approx(-6.0206, abs=1e-4)
    assert linear_to_db(db_to_linear(-13.5)) == pytest.approx(-13.5)


@pytest.mark.parametrize("value", [0.0, -0.5, -1e-9])
def test_linear_to_db_floors_non_positive_values(value):
    result = linear_to_db(value)

    assert result == FLOOR_DB
    assert math.isfinite(result)


def test_db_to_linear_accepts_arrays():
    gains = db_to_linear(np.array([0.0, -20.0]))

    assert np.allclose(gains, [1.0, 0.1])


def test_ms_to_samples_never_returns_less_than_one():
    assert ms_to_samples(10.0, 44100) == 441
    assert ms_to_samples(0.0, 44100) == 1
    assert samples_to_ms(441, 44100) == pytest.approx(10.0)


def test_hard_knee_returns_overshoot():
    assert soft_knee(-30.0, -20.0, 0.0) == 0.0
    assert soft_knee(-20.0, -20.0, 0.0) == 0.0
    assert soft_knee(-8.0, -20.0, 0.0) == pytest.approx(12.0)


def test_soft_knee_regions():
    threshold, knee = -20.0, 10.0

    assert soft_knee(-25.1, threshold, knee) == 0.0
    # Knee midpoint: (5 ** 2) / 20
    assert soft_knee(-20.0, threshold, knee) == pytest.approx(1.25)
    assert soft_knee(-10.0, threshold, knee) == pytest.approx(10.0)


def test_soft_knee_is_continuous_at_both_edges():
    threshold, knee = -18.0, 6.0
    eps = 1e-7

    lower = threshold - knee / 2
    upper = threshold + knee / 2
    assert soft_knee(lower + eps, threshold, knee) == pytest.approx(0.0, abs=1e-6)
    assert soft_knee(upper - eps, threshold, knee) == pytest.approx(
        soft_knee(upper + eps, threshold, knee), abs=1e-6
    )
    # Slope of the ramp matches the linear segment at the upper edge.
    ramp_slope = (soft_knee(upper - eps, threshold, knee) - soft_knee(upper - 2 * eps, threshold, knee)) / eps
    assert ramp_slope == pytest.approx(1.0, abs=1e-3)


def test_lerp():
    assert lerp(2.0, 4.0, 0.0) == 2.0
    assert lerp(2.0, 4.0, 1.0) == 4.0
    assert lerp(2.0, 4.0, 0.25) == pytest.approx(2.5)
