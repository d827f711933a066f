"""
Industry benchmark tables and lookups.

``BENCHMARKS`` holds one ``IndustryBenchmark`` per (industry, size tier):
five industries × four tiers.  Each row carries six metrics with
``min`` / ``avg`` / ``max`` / ``top10`` values plus market-maturity factors
used for confidence scoring.

Company size arrives either as a head-count band from the onboarding form
(``"1-10"`` … ``"1000+"``) or as a tier name (``"startup"`` … ``"large"``);
``size_tier()`` normalises both.  Industry matching is case-insensitive.
Unknown combinations fall back to ``FALLBACK_METRICS`` and never raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Literal, Mapping, Optional

from roi_advisor.taxonomy.business_taxonomy import SizeTier
from roi_advisor.utils.numeric import clamp, safe_div

BenchmarkStat = Literal["min", "avg", "max", "top10"]


class Metric(StrEnum):
    CONVERSION_RATE = "conversion_rate"
    CUSTOMER_ACQUISITION_COST = "customer_acquisition_cost"
    CUSTOMER_LIFETIME_VALUE = "customer_lifetime_value"
    MONTHLY_CHURN_RATE = "monthly_churn_rate"
    SALES_CYCLE_LENGTH = "sales_cycle_length"
    AVERAGE_ORDER_VALUE = "average_order_value"


@dataclass(frozen=True)
class MetricRange:
    min: float
    avg: float
    max: float
    top10: float

    def get(self, stat: BenchmarkStat) -> float:
        return getattr(self, stat)


@dataclass(frozen=True)
class MarketMaturity:
    """0-1 market factors for an industry tier."""

    digital_adoption: float
    competition_level: float
    growth_potential: float


@dataclass(frozen=True)
class IndustryBenchmark:
    industry: str
    tier: SizeTier
    metrics: Mapping[Metric, MetricRange]
    market: MarketMaturity


@dataclass(frozen=True)
class SizeMultipliers:
    """Head-count band adjustments applied to projected improvements."""

    efficiency: float
    scalability: float
    resource_constraint: float


DEFAULT_INDUSTRY = "services"
DEFAULT_COMPANY_SIZE = "11-50"

# ── Company size ──────────────────────────────────────────────────────────────

COMPANY_SIZE_BANDS: Mapping[str, SizeTier] = MappingProxyType({
    "1-10":     SizeTier.STARTUP,
    "11-50":    SizeTier.SMALL,
    "51-200":   SizeTier.MEDIUM,
    "201-500":  SizeTier.MEDIUM,
    "501-1000": SizeTier.LARGE,
    "1000+":    SizeTier.LARGE,
})

COMPANY_SIZE_MULTIPLIERS: Mapping[str, SizeMultipliers] = MappingProxyType({
    "1-10":     SizeMultipliers(0.8, 1.2, 1.3),
    "11-50":    SizeMultipliers(0.9, 1.1, 1.1),
    "51-200":   SizeMultipliers(1.0, 1.0, 1.0),
    "201-500":  SizeMultipliers(1.1, 0.9, 0.9),
    "501-1000": SizeMultipliers(1.2, 0.8, 0.8),
    "1000+":    SizeMultipliers(1.3, 0.7, 0.7),
})

# Tier names stand in for their smallest band.
_TIER_BAND: Mapping[SizeTier, str] = MappingProxyType({
    SizeTier.STARTUP: "1-10",
    SizeTier.SMALL:   "11-50",
    SizeTier.MEDIUM:  "51-200",
    SizeTier.LARGE:   "501-1000",
})


def size_tier(company_size: str) -> Optional[SizeTier]:
    """Normalise a head-count band or tier name to a ``SizeTier``."""
    key = (company_size or "").strip().lower()
    if key in COMPANY_SIZE_BANDS:
        return COMPANY_SIZE_BANDS[key]
    try:
        return SizeTier(key)
    except ValueError:
        return None


def size_band(company_size: str) -> str:
    """Head-count band for ``company_size``; defaults to ``"11-50"``."""
    key = (company_size or "").strip().lower()
    if key in COMPANY_SIZE_BANDS:
        return key
    tier = size_tier(key)
    return _TIER_BAND[tier] if tier is not None else DEFAULT_COMPANY_SIZE


def get_size_multipliers(company_size: str) -> SizeMultipliers:
    return COMPANY_SIZE_MULTIPLIERS[size_band(company_size)]


# ── Benchmark data ────────────────────────────────────────────────────────────

FALLBACK_METRICS: Mapping[Metric, MetricRange] = MappingProxyType({
    Metric.CONVERSION_RATE:           MetricRange(1, 3, 8, 12),
    Metric.CUSTOMER_ACQUISITION_COST: MetricRange(50, 300, 1000, 2000),
    Metric.CUSTOMER_LIFETIME_VALUE:   MetricRange(500, 2500, 10000, 20000),
    Metric.MONTHLY_CHURN_RATE:        MetricRange(1, 5, 15, 25),
    Metric.SALES_CYCLE_LENGTH:        MetricRange(7, 30, 90, 180),
    Metric.AVERAGE_ORDER_VALUE:       MetricRange(50, 300, 1500, 3000),
})


def _row(
    industry: str,
    tier: SizeTier,
    conv: tuple[float, float, float, float],
    cac: tuple[float, float, float, float],
    ltv: tuple[float, float, float, float],
    churn: tuple[float, float, float, float],
    cycle: tuple[float, float, float, float],
    aov: tuple[float, float, float, float],
    market: tuple[float, float, float],
) -> IndustryBenchmark:
    return IndustryBenchmark(
        industry=industry,
        tier=tier,
        metrics=MappingProxyType({
            Metric.CONVERSION_RATE:           MetricRange(*conv),
            Metric.CUSTOMER_ACQUISITION_COST: MetricRange(*cac),
            Metric.CUSTOMER_LIFETIME_VALUE:   MetricRange(*ltv),
            Metric.MONTHLY_CHURN_RATE:        MetricRange(*churn),
            Metric.SALES_CYCLE_LENGTH:        MetricRange(*cycle),
            Metric.AVERAGE_ORDER_VALUE:       MetricRange(*aov),
        }),
        market=MarketMaturity(*market),
    )


S, SM, M, L = SizeTier.STARTUP, SizeTier.SMALL, SizeTier.MEDIUM, SizeTier.LARGE

BENCHMARKS: tuple[IndustryBenchmark, ...] = (
    # ── Technology ──
    _row("Technology", S,  (1.5, 3.2, 8.5, 12), (50, 200, 800, 1500), (500, 2500, 15000, 25000),
         (2.0, 8.5, 25, 35), (7, 30, 90, 180), (50, 300, 2000, 5000), (0.9, 0.8, 0.85)),
    _row("Technology", SM, (2.0, 4.5, 12, 18), (80, 350, 1200, 2000), (1000, 5000, 25000, 50000),
         (1.5, 6.0, 18, 25), (14, 45, 120, 240), (100, 800, 5000, 12000), (0.85, 0.75, 0.8)),
    _row("Technology", M,  (2.5, 6.0, 15, 22), (120, 500, 1800, 3500), (2000, 8000, 40000, 80000),
         (1.0, 4.5, 12, 18), (21, 60, 180, 360), (200, 1500, 10000, 25000), (0.8, 0.7, 0.75)),
    _row("Technology", L,  (3.0, 8.0, 18, 25), (200, 800, 3000, 6000), (5000, 15000, 80000, 150000),
         (0.5, 3.0, 8, 12), (30, 90, 270, 540), (500, 3000, 20000, 50000), (0.75, 0.65, 0.7)),
    # ── Finance ──
    _row("Finance", S,  (0.8, 2.1, 5.5, 8.5), (100, 400, 1200, 2500), (800, 3500, 18000, 35000),
         (1.5, 6.5, 20, 30), (14, 45, 120, 240), (100, 500, 3000, 8000), (0.7, 0.85, 0.75)),
    _row("Finance", SM, (1.2, 3.0, 8.0, 12), (150, 600, 1800, 3500), (1500, 6000, 30000, 60000),
         (1.0, 4.5, 15, 22), (21, 60, 150, 300), (200, 1000, 6000, 15000), (0.65, 0.8, 0.7)),
    _row("Finance", M,  (1.5, 4.0, 10, 15), (250, 900, 2500, 5000), (3000, 10000, 50000, 100000),
         (0.8, 3.5, 10, 15), (30, 90, 210, 420), (400, 2000, 12000, 30000), (0.6, 0.75, 0.65)),
    _row("Finance", L,  (2.0, 5.5, 12, 18), (400, 1500, 4000, 8000), (6000, 20000, 100000, 200000),
         (0.5, 2.5, 7, 10), (45, 120, 300, 600), (800, 4000, 25000, 60000), (0.55, 0.7, 0.6)),
    # ── Healthcare ──
    _row("Healthcare", S,  (1.0, 2.5, 6.0, 9), (150, 500, 1500, 3000), (1000, 4000, 20000, 40000),
         (2.0, 7.0, 22, 32), (21, 60, 180, 360), (150, 600, 3500, 8500), (0.5, 0.6, 0.85)),
    _row("Healthcare", SM, (1.5, 3.5, 8.5, 13), (200, 750, 2200, 4000), (2000, 7000, 35000, 70000),
         (1.5, 5.0, 16, 24), (30, 90, 240, 480), (250, 1200, 7000, 17000), (0.45, 0.55, 0.8)),
    _row("Healthcare", M,  (2.0, 4.5, 11, 16), (300, 1100, 3000, 6000), (4000, 12000, 60000, 120000),
         (1.0, 3.5, 12, 18), (45, 120, 300, 600), (500, 2500, 15000, 35000), (0.4, 0.5, 0.75)),
    _row("Healthcare", L,  (2.5, 6.0, 14, 20), (500, 1800, 5000, 10000), (8000, 25000, 120000, 250000),
         (0.5, 2.5, 8, 12), (60, 180, 450, 900), (1000, 5000, 30000, 70000), (0.35, 0.45, 0.7)),
    # ── Retail ──
    _row("Retail", S,  (2.0, 4.5, 10, 15), (20, 80, 300, 600), (200, 800, 4000, 8000),
         (5.0, 15, 40, 60), (1, 7, 30, 60), (25, 85, 300, 600), (0.8, 0.9, 0.7)),
    _row("Retail", SM, (2.5, 6.0, 13, 20), (30, 120, 450, 900), (400, 1500, 7500, 15000),
         (4.0, 12, 30, 45), (1, 10, 45, 90), (40, 150, 600, 1200), (0.75, 0.85, 0.65)),
    _row("Retail", M,  (3.0, 7.5, 16, 24), (50, 180, 600, 1200), (800, 2500, 12000, 25000),
         (3.0, 9.0, 22, 35), (2, 14, 60, 120), (60, 250, 1000, 2000), (0.7, 0.8, 0.6)),
    _row("Retail", L,  (3.5, 9.0, 20, 28), (80, 250, 800, 1600), (1500, 4000, 20000, 40000),
         (2.0, 6.5, 16, 25), (3, 21, 90, 180), (100, 400, 1500, 3000), (0.65, 0.75, 0.55)),
    # ── Manufacturing ──
    _row("Manufacturing", S,  (0.5, 1.5, 4.0, 6.5), (200, 800, 2500, 5000), (2000, 8000, 40000, 80000),
         (1.0, 4.0, 12, 18), (30, 90, 270, 540), (500, 2000, 10000, 25000), (0.4, 0.6, 0.75)),
    _row("Manufacturing", SM, (0.8, 2.2, 5.5, 8.5), (300, 1200, 3500, 7000), (4000, 15000, 75000, 150000),
         (0.8, 3.0, 9.0, 14), (45, 120, 360, 720), (800, 3500, 18000, 40000), (0.35, 0.55, 0.7)),
    _row("Manufacturing", M,  (1.0, 3.0, 7.0, 11), (500, 1800, 5000, 10000), (8000, 25000, 125000, 250000),
         (0.5, 2.2, 6.5, 10), (60, 180, 540, 1080), (1500, 6000, 30000, 70000), (0.3, 0.5, 0.65)),
    _row("Manufacturing", L,  (1.2, 4.0, 9.0, 14), (800, 2500, 7500, 15000), (15000, 50000, 250000, 500000),
         (0.3, 1.5, 4.5, 7.0), (90, 270, 810, 1620), (3000, 12000, 60000, 140000), (0.25, 0.45, 0.6)),
    # ── Services ──
    _row("Services", S,  (1.2, 3.0, 7.5, 11.5), (80, 300, 1000, 2000), (600, 2500, 12000, 25000),
         (2.5, 8.0, 25, 35), (7, 30, 90, 180), (100, 400, 2000, 5000), (0.6, 0.7, 0.8)),
    _row("Services", SM, (1.8, 4.2, 10, 15), (120, 450, 1400, 2800), (1200, 4500, 22000, 45000),
         (2.0, 6.0, 18, 28), (10, 45, 120, 240), (150, 700, 3500, 8000), (0.55, 0.65, 0.75)),
    _row("Services", M,  (2.2, 5.5, 13, 19), (180, 650, 2000, 4000), (2500, 8000, 40000, 80000),
         (1.5, 4.5, 14, 21), (14, 60, 180, 360), (250, 1200, 6000, 14000), (0.5, 0.6, 0.7)),
    _row("Services", L,  (2.8, 7.0, 16, 23), (300, 1000, 3000, 6000), (5000, 15000, 75000, 150000),
         (1.0, 3.2, 10, 15), (21, 90, 270, 540), (500, 2000, 10000, 25000), (0.45, 0.55, 0.65)),
)

_BENCHMARK_INDEX: Mapping[tuple[str, SizeTier], IndustryBenchmark] = MappingProxyType(
    {(b.industry.lower(), b.tier): b for b in BENCHMARKS}
)


# ── Lookups ───────────────────────────────────────────────────────────────────


def get_benchmark(industry: str, company_size: str) -> Optional[IndustryBenchmark]:
    """Benchmark row for an industry and size, or ``None`` when unknown."""
    tier = size_tier(company_size)
    if tier is None:
        return None
    return _BENCHMARK_INDEX.get(((industry or "").strip().lower(), tier))


def get_benchmark_value(
    industry: str,
    metric: Metric,
    company_size: str,
    stat: BenchmarkStat = "avg",
) -> float:
    """One benchmark statistic, falling back to ``FALLBACK_METRICS``."""
    benchmark = get_benchmark(industry, company_size)
    metrics = benchmark.metrics if benchmark is not None else FALLBACK_METRICS
    return metrics[metric].get(stat)


def available_industries() -> list[str]:
    return list(dict.fromkeys(b.industry for b in BENCHMARKS))


def available_company_sizes() -> list[str]:
    return [str(t) for t in dict.fromkeys(b.tier for b in BENCHMARKS)]


def get_industry_average(industry: str, metric: Metric) -> float:
    """Mean of ``avg`` for ``metric`` across all tiers; 0 for unknown industries."""
    key = (industry or "").strip().lower()
    values = [b.metrics[metric].avg for b in BENCHMARKS if b.industry.lower() == key]
    return safe_div(sum(values), len(values))


def get_performance_percentile(
    industry: str,
    company_size: str,
    metric: Metric,
    value: float,
) -> float:
    """Approximate percentile of ``value`` within the benchmark distribution.

    ``<= min`` → 10, ``>= top10`` → 95, ``>= max`` → 85; between ``avg`` and
    ``max`` interpolates 50-85, between ``min`` and ``avg`` 10-50.  Unknown
    benchmarks return the median, 50.
    """
    benchmark = get_benchmark(industry, company_size)
    if benchmark is None:
        return 50.0
    r = benchmark.metrics[metric]
    if value <= r.min:
        return 10.0
    if value >= r.top10:
        return 95.0
    if value >= r.max:
        return 85.0
    if value >= r.avg:
        return 50.0 + safe_div(value - r.avg, r.max - r.avg) * 35.0
    return 10.0 + safe_div(value - r.min, r.avg - r.min) * 40.0


def calculate_benchmark_confidence(
    industry: str,
    company_size: str,
    data_completeness: float = 1.0,
) -> float:
    """Confidence (0.1-0.95) that a benchmark describes this company.

    Weighted from market maturity (40 % digital adoption, 30 % inverse
    competition, 30 % growth potential) and scaled by ``data_completeness``.
    Unknown benchmarks return 0.5.
    """
    benchmark = get_benchmark(industry, company_size)
    if benchmark is None:
        return 0.5
    m = benchmark.market
    base = (
        m.digital_adoption * 0.4
        + (1 - m.competition_level) * 0.3
        + m.growth_potential * 0.3
    )
    return clamp(base * data_completeness, 0.1, 0.95)


# ── Static strategy advice ────────────────────────────────────────────────────

_INDUSTRY_RECOMMENDATIONS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "technology": (
        "Implement product-led growth strategies",
        "Focus on user onboarding optimization",
        "Leverage freemium models for lead generation",
        "Invest in developer community building",
    ),
    "finance": (
        "Enhance compliance and security messaging",
        "Develop trust-building content strategies",
        "Focus on ROI and cost-saving benefits",
        "Implement white-glove onboarding processes",
    ),
    "healthcare": (
        "Emphasize HIPAA compliance and security",
        "Create educational content for decision makers",
        "Focus on patient outcome improvements",
        "Develop case studies and testimonials",
    ),
    "retail": (
        "Optimize for mobile and omnichannel experience",
        "Implement seasonal marketing strategies",
        "Focus on customer lifetime value optimization",
        "Leverage social proof and reviews",
    ),
    "manufacturing": (
        "Emphasize efficiency and cost reduction",
        "Create technical documentation and specs",
        "Focus on B2B relationship building",
        "Implement account-based marketing",
    ),
    "services": (
        "Showcase expertise through thought leadership",
        "Develop case studies and success stories",
        "Focus on relationship-based selling",
        "Implement referral programs",
    ),
})

_GENERIC_RECOMMENDATIONS: tuple[str, ...] = (
    "Develop targeted buyer personas",
    "Create industry-specific content",
    "Focus on pain point solutions",
    "Build trust through social proof",
)

_SIZE_STRATEGIES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "1-10": (
        "Focus on cost-effective marketing channels",
        "Leverage automation to scale efficiently",
        "Build strong customer relationships",
        "Prioritize high-impact, low-cost tactics",
    ),
    "11-50": (
        "Implement scalable processes and systems",
        "Develop specialized sales roles",
        "Invest in marketing automation",
        "Create repeatable success frameworks",
    ),
    "51-200": (
        "Establish dedicated marketing and sales teams",
        "Implement advanced CRM and analytics",
        "Develop multi-channel strategies",
        "Focus on process optimization",
    ),
    "201-500": (
        "Create specialized go-to-market teams",
        "Implement enterprise-grade solutions",
        "Develop account-based strategies",
        "Focus on operational excellence",
    ),
    "501-1000": (
        "Establish centers of excellence",
        "Implement advanced analytics and AI",
        "Develop global market strategies",
        "Focus on innovation and differentiation",
    ),
    "1000+": (
        "Create enterprise transformation programs",
        "Implement AI-driven personalization",
        "Develop ecosystem partnerships",
        "Focus on market leadership",
    ),
})


def get_industry_recommendations(industry: str) -> list[str]:
    key = (industry or "").strip().lower()
    return list(_INDUSTRY_RECOMMENDATIONS.get(key, _GENERIC_RECOMMENDATIONS))


def get_company_size_strategies(company_size: str) -> list[str]:
    return list(_SIZE_STRATEGIES[size_band(company_size)])
