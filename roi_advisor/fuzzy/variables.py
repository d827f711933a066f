"""
Linguistic variable registry.

Six variables, each a numeric range covered by four or five overlapping
fuzzy sets.  Five are inputs derived from a tenant's KPIs and costs by
``roi_advisor.fuzzy.engine.calculate_fuzzy_inputs``; ``recommendation_score``
is the single output variable that rules conclude into.

    variable                    range      sets
    conversion_rate             [0, 20]    very_low low medium high very_high
    customer_acquisition_cost   [0, 2000]  very_low low medium high very_high
    ltv_cac_ratio               [0, 20]    critical poor acceptable good excellent
    company_maturity            [0, 10]    startup growth mature enterprise
    marketing_efficiency        [0, 100]   very_poor poor average good excellent
    recommendation_score        [0, 100]   not_recommended low_priority
                                           medium_priority high_priority
                                           critical_priority

``VARIABLE_REGISTRY`` is built once at import time and exposed through a
read-only mapping.  Construction validates every shape, so a calibration
typo fails on import rather than silently during inference.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping

from roi_advisor.fuzzy.membership import MembershipFunction, trapezoidal, triangular


class VariableName(StrEnum):
    CONVERSION_RATE = "conversion_rate"
    CUSTOMER_ACQUISITION_COST = "customer_acquisition_cost"
    LTV_CAC_RATIO = "ltv_cac_ratio"
    COMPANY_MATURITY = "company_maturity"
    MARKETING_EFFICIENCY = "marketing_efficiency"
    RECOMMENDATION_SCORE = "recommendation_score"


OUTPUT_VARIABLE = VariableName.RECOMMENDATION_SCORE

INPUT_VARIABLES: tuple[VariableName, ...] = tuple(
    v for v in VariableName if v is not OUTPUT_VARIABLE
)


@dataclass(frozen=True)
class FuzzySet:
    """A named band of a variable's range.

    Attributes:
        name:       Set label, unique within its variable (e.g. ``"high"``).
        membership: Callable mapping a crisp value to [0, 1].
        range:      ``(lo, hi)`` band the set covers; its midpoint is the
                    set's centroid during defuzzification.
    """

    name: str
    membership: MembershipFunction
    range: tuple[float, float]

    @property
    def centroid(self) -> float:
        lo, hi = self.range
        return (lo + hi) / 2.0

    def degree(self, x: float) -> float:
        return self.membership(x)


@dataclass(frozen=True)
class FuzzyVariable:
    """A linguistic variable: label, numeric range and ordered sets."""

    name: str
    label: str
    range: tuple[float, float]
    sets: tuple[FuzzySet, ...]

    def __post_init__(self) -> None:
        lo, hi = self.range
        if not lo < hi:
            raise ValueError(f"Variable '{self.name}' has an empty range {self.range}.")
        if not self.sets:
            raise ValueError(f"Variable '{self.name}' declares no fuzzy sets.")
        seen: set[str] = set()
        for fs in self.sets:
            if fs.name in seen:
                raise ValueError(f"Variable '{self.name}' repeats set '{fs.name}'.")
            seen.add(fs.name)
            set_lo, set_hi = fs.range
            if set_lo < lo or set_hi > hi or set_lo >= set_hi:
                raise ValueError(
                    f"Set '{self.name}.{fs.name}' range {fs.range} must be a "
                    f"non-empty band inside {self.range}."
                )

    @property
    def set_names(self) -> tuple[str, ...]:
        return tuple(fs.name for fs in self.sets)

    def get_set(self, name: str) -> FuzzySet | None:
        for fs in self.sets:
            if fs.name == name:
                return fs
        return None

    def clamp(self, x: float) -> float:
        lo, hi = self.range
        return max(lo, min(hi, x))

    def fuzzify(self, x: float) -> dict[str, float]:
        """Degree of membership of ``x`` in every set, in declaration order."""
        return {fs.name: fs.degree(x) for fs in self.sets}


def _tri(name: str, a: float, b: float, c: float) -> FuzzySet:
    return FuzzySet(name, triangular(a, b, c), (a, c))


def _trap(name: str, a: float, b: float, c: float, d: float) -> FuzzySet:
    return FuzzySet(name, trapezoidal(a, b, c, d), (a, d))


def build_variable_registry() -> Mapping[str, FuzzyVariable]:
    """Construct the standard six-variable registry.

    Returns:
        Read-only mapping of variable name → ``FuzzyVariable``.

    Raises:
        ValueError: If any set shape or range is malformed.
    """
    variables = (
        FuzzyVariable(
            VariableName.CONVERSION_RATE, "Conversion Rate", (0.0, 20.0),
            (
                _trap("very_low", 0, 0, 1, 2),
                _tri("low", 1, 2.5, 4),
                _tri("medium", 3, 5, 7),
                _tri("high", 6, 8, 10),
                _trap("very_high", 9, 12, 20, 20),
            ),
        ),
        FuzzyVariable(
            VariableName.CUSTOMER_ACQUISITION_COST, "Customer Acquisition Cost", (0.0, 2000.0),
            (
                _trap("very_low", 0, 0, 50, 100),
                _tri("low", 75, 150, 250),
                _tri("medium", 200, 400, 600),
                _tri("high", 500, 800, 1200),
                _trap("very_high", 1000, 1500, 2000, 2000),
            ),
        ),
        FuzzyVariable(
            VariableName.LTV_CAC_RATIO, "LTV:CAC Ratio", (0.0, 20.0),
            (
                _trap("critical", 0, 0, 1, 2),
                _tri("poor", 1.5, 2.5, 3.5),
                _tri("acceptable", 3, 4, 5),
                _tri("good", 4.5, 6, 8),
                _trap("excellent", 7, 10, 20, 20),
            ),
        ),
        FuzzyVariable(
            VariableName.COMPANY_MATURITY, "Company Maturity", (0.0, 10.0),
            (
                _trap("startup", 0, 0, 2, 4),
                _tri("growth", 3, 5, 7),
                _tri("mature", 6, 8, 10),
                _trap("enterprise", 8, 9, 10, 10),
            ),
        ),
        FuzzyVariable(
            VariableName.MARKETING_EFFICIENCY, "Marketing Efficiency", (0.0, 100.0),
            (
                _trap("very_poor", 0, 0, 10, 20),
                _tri("poor", 15, 25, 35),
                _tri("average", 30, 45, 60),
                _tri("good", 55, 70, 85),
                _trap("excellent", 80, 90, 100, 100),
            ),
        ),
        FuzzyVariable(
            VariableName.RECOMMENDATION_SCORE, "Recommendation Score", (0.0, 100.0),
            (
                _trap("not_recommended", 0, 0, 15, 25),
                _tri("low_priority", 20, 35, 50),
                _tri("medium_priority", 45, 60, 75),
                _tri("high_priority", 70, 85, 95),
                _trap("critical_priority", 90, 95, 100, 100),
            ),
        ),
    )
    return MappingProxyType({str(v.name): v for v in variables})


VARIABLE_REGISTRY: Mapping[str, FuzzyVariable] = build_variable_registry()
