"""
Tests for roi_advisor/fuzzy/membership.py.

What we test
------------
triangular():
  - Peak of exactly 1 at b; 0 at and outside the feet.
  - Linear ramps on both sides.
  - a == b puts the peak on the excluded bound: 0 at a.
  - Malformed shapes raise ValueError at construction.

trapezoidal():
  - Plateau of 1 on [b, c].
  - Left shoulder is 0 at its lower bound (half-open support).
  - Right shoulder is 1 at its upper bound.

gaussian() / sigmoid():
  - Bounded in [0, 1], no overflow for extreme inputs.
  - sigma <= 0 raises.

All shapes:
  - Non-finite inputs evaluate to 0.
"""

from __future__ import annotations

import math

import pytest

from roi_advisor.fuzzy.membership import gaussian, sigmoid, trapezoidal, triangular


class TestTriangular:
    def test_peak_is_one(self):
        assert triangular(3, 5, 7)(5) == pytest.approx(1.0)

    def test_feet_are_zero(self):
        f = triangular(3, 5, 7)
        assert f(3) == 0.0
        assert f(7) == 0.0
        assert f(2) == 0.0
        assert f(8) == 0.0

    def test_rising_and_falling_ramps(self):
        f = triangular(3, 5, 7)
        assert f(4) == pytest.approx(0.5)
        assert f(6) == pytest.approx(0.5)

    def test_degenerate_left_edge_is_zero_at_peak(self):
        f = triangular(0, 0, 5)
        assert f(0) == 0.0
        assert f(0.001) == pytest.approx(1.0, abs=1e-3)
        assert f(2.5) == pytest.approx(0.5)

    def test_out_of_order_points_raise(self):
        with pytest.raises(ValueError, match="a <= b <= c <= d"):
            triangular(5, 3, 7)

    def test_empty_support_raises(self):
        with pytest.raises(ValueError, match="empty"):
            triangular(4, 4, 4)

    def test_non_finite_parameter_raises(self):
        with pytest.raises(ValueError, match="finite"):
            triangular(0, 1, math.inf)


class TestTrapezoidal:
    def test_plateau_is_one(self):
        f = trapezoidal(0, 2, 4, 6)
        for x in (2, 3, 4):
            assert f(x) == pytest.approx(1.0)

    def test_ramps(self):
        f = trapezoidal(0, 2, 4, 6)
        assert f(1) == pytest.approx(0.5)
        assert f(5) == pytest.approx(0.5)

    def test_left_shoulder_zero_at_lower_bound(self):
        f = trapezoidal(0, 0, 1, 2)
        assert f(0) == 0.0
        assert f(0.001) == pytest.approx(1.0)
        assert f(1.5) == pytest.approx(0.5)

    def test_right_shoulder_one_at_upper_bound(self):
        f = trapezoidal(7, 10, 20, 20)
        assert f(20) == pytest.approx(1.0)
        assert f(20.5) == 0.0
        assert f(8.5) == pytest.approx(0.5)

    def test_degenerate_right_ramp_is_a_step(self):
        f = trapezoidal(0, 1, 2, 2)
        assert f(2) == pytest.approx(1.0)

    @pytest.mark.parametrize("x", [math.nan, math.inf, -math.inf])
    def test_non_finite_input_is_zero(self, x):
        assert trapezoidal(0, 1, 2, 3)(x) == 0.0


class TestGaussian:
    def test_center_is_one(self):
        assert gaussian(5, 2)(5) == pytest.approx(1.0)

    def test_one_sigma(self):
        assert gaussian(0, 1)(1) == pytest.approx(math.exp(-0.5))

    def test_extreme_input_does_not_overflow(self):
        assert gaussian(0, 1e-3)(1e300) == 0.0

    def test_non_positive_sigma_raises(self):
        with pytest.raises(ValueError, match="sigma"):
            gaussian(0, 0)

    def test_nan_is_zero(self):
        assert gaussian(0, 1)(math.nan) == 0.0


class TestSigmoid:
    def test_half_at_center(self):
        assert sigmoid(2, 10)(10) == pytest.approx(0.5)

    def test_monotonic_increasing(self):
        f = sigmoid(1, 0)
        assert f(-1) < f(0) < f(1)

    def test_negative_steepness_mirrors(self):
        f = sigmoid(-1, 0)
        assert f(-1) > f(1)

    def test_saturates_without_overflow(self):
        f = sigmoid(1, 0)
        assert f(1e6) == 1.0
        assert f(-1e6) == 0.0

    def test_bounds(self):
        f = sigmoid(0.5, 3)
        for x in (-100, -1, 0, 3, 7, 100):
            assert 0.0 <= f(x) <= 1.0
