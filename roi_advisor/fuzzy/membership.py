"""
Membership functions: crisp scalar → degree of truth in [0, 1].

Each factory validates its shape parameters and returns a frozen, callable
dataclass.  Malformed shapes raise ``ValueError`` when the function is
built (i.e. when the variable registry is constructed at import time);
calling a built function never raises.

Support convention
------------------
Piecewise-linear shapes use the half-open support ``(a, d]``:

    x <= a          → 0
    a < x < b       → (x - a) / (b - a)
    b <= x <= c     → 1
    c < x <= d      → (d - x) / (d - c)
    x > d           → 0

A triangle is a trapezoid whose plateau is the single point ``b``.  When a
ramp is degenerate (``a == b`` or ``c == d``) it becomes a step; no branch
divides by a zero width.  Consequences worth knowing:

* a left shoulder such as ``trapezoidal(0, 0, 1, 2)`` is 0 at exactly 0 and
  1 immediately above it, so an all-zero input activates nothing;
* a right shoulder such as ``trapezoidal(7, 10, 20, 20)`` is 1 at its upper
  bound 20.

Non-finite inputs evaluate to 0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol


class MembershipFunction(Protocol):
    def __call__(self, x: float) -> float: ...


def _require_finite(**params: float) -> None:
    for name, value in params.items():
        if not math.isfinite(value):
            raise ValueError(f"Membership parameter '{name}' must be finite, got {value}.")


@dataclass(frozen=True)
class Trapezoidal:
    """Trapezoid with feet ``a``, ``d`` and plateau ``[b, c]``."""

    a: float
    b: float
    c: float
    d: float

    def __post_init__(self) -> None:
        _require_finite(a=self.a, b=self.b, c=self.c, d=self.d)
        if not self.a <= self.b <= self.c <= self.d:
            raise ValueError(
                f"Trapezoid requires a <= b <= c <= d, got "
                f"({self.a}, {self.b}, {self.c}, {self.d})."
            )
        if self.a == self.d:
            raise ValueError(f"Trapezoid support is empty: a == d == {self.a}.")

    @property
    def support(self) -> tuple[float, float]:
        return (self.a, self.d)

    def __call__(self, x: float) -> float:
        if not math.isfinite(x) or x <= self.a or x > self.d:
            return 0.0
        if self.b <= x <= self.c:
            return 1.0
        if x < self.b:
            return (x - self.a) / (self.b - self.a)
        return (self.d - x) / (self.d - self.c)


@dataclass(frozen=True)
class Gaussian:
    center: float
    sigma: float

    def __post_init__(self) -> None:
        _require_finite(center=self.center, sigma=self.sigma)
        if self.sigma <= 0:
            raise ValueError(f"Gaussian sigma must be > 0, got {self.sigma}.")

    @property
    def support(self) -> tuple[float, float]:
        return (-math.inf, math.inf)

    def __call__(self, x: float) -> float:
        if not math.isfinite(x):
            return 0.0
        z = (x - self.center) / self.sigma
        # z * z saturates to inf where z ** 2 would raise OverflowError
        return math.exp(-0.5 * (z * z))


@dataclass(frozen=True)
class Sigmoid:
    """Logistic curve ``1 / (1 + exp(-steepness * (x - center)))``."""

    steepness: float
    center: float

    def __post_init__(self) -> None:
        _require_finite(steepness=self.steepness, center=self.center)

    @property
    def support(self) -> tuple[float, float]:
        return (-math.inf, math.inf)

    def __call__(self, x: float) -> float:
        if math.isnan(x):
            return 0.0
        z = -self.steepness * (x - self.center)
        # exp() overflows a double just past 709
        if z > 700:
            return 0.0
        if z < -700:
            return 1.0
        return 1.0 / (1.0 + math.exp(z))


def triangular(a: float, b: float, c: float) -> Trapezoidal:
    """Triangle rising from ``a`` to a peak of 1 at ``b`` and falling to ``c``.

    Support is half-open ``(a, c]``, so with ``a == b`` the peak sits on the
    excluded bound: ``triangular(0, 0, 5)(0) == 0.0`` while
    ``triangular(0, 0, 5)(0.001)`` is close to 1.

    Raises:
        ValueError: Unless ``a <= b <= c`` and ``a < c``.
    """
    return Trapezoidal(a, b, b, c)


def trapezoidal(a: float, b: float, c: float, d: float) -> Trapezoidal:
    """Trapezoid with plateau 1 on ``[b, c]``.

    Support is half-open ``(a, d]``.  When ``a == b`` the plateau starts
    just above ``a``: ``trapezoidal(0, 0, 1, 2)(0) == 0.0``.  A degenerate
    right edge ``c == d`` keeps 1 at ``d``.

    Raises:
        ValueError: Unless ``a <= b <= c <= d`` and ``a < d``.
    """
    return Trapezoidal(a, b, c, d)


def gaussian(center: float, sigma: float) -> Gaussian:
    """Bell curve ``exp(-0.5 * ((x - center) / sigma) ** 2)``.

    Raises:
        ValueError: If ``sigma <= 0``.
    """
    return Gaussian(center, sigma)


def sigmoid(steepness: float, center: float) -> Sigmoid:
    """S-curve crossing 0.5 at ``center``; negative steepness mirrors it."""
    return Sigmoid(steepness, center)
