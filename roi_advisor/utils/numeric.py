"""
Guarded arithmetic and named clamps for bounded quantities.

Every ratio in the engine goes through ``safe_div`` so a zero or missing
denominator yields ``0.0`` instead of ``ZeroDivisionError``, ``nan`` or
``inf``.  Every bounded output goes through the clamp named after it:

  clamp_score       recommendation score      [0, 100]
  clamp_confidence  confidence percentage     [0, 100]
  clamp_priority    opportunity priority      [1, 10]
  clamp_unit        membership / probability  [0, 1]
"""

from __future__ import annotations

import math

SCORE_RANGE: tuple[float, float] = (0.0, 100.0)
CONFIDENCE_RANGE: tuple[float, float] = (0.0, 100.0)
PRIORITY_RANGE: tuple[float, float] = (1.0, 10.0)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` to ``[lo, hi]``.  Non-finite input maps to ``lo``."""
    if not math.isfinite(value):
        return lo
    return max(lo, min(hi, value))


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` when the result would not be finite."""
    if not denominator:
        return default
    result = numerator / denominator
    if not math.isfinite(result):
        return default
    return result


def clamp_score(value: float) -> float:
    return clamp(value, *SCORE_RANGE)


def clamp_confidence(value: float) -> float:
    return clamp(value, *CONFIDENCE_RANGE)


def clamp_priority(value: float) -> float:
    return clamp(value, *PRIORITY_RANGE)


def clamp_unit(value: float) -> float:
    return clamp(value, 0.0, 1.0)
