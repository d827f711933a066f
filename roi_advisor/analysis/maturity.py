"""
Company maturity, market-fit score and readiness level.

These three derived values steer the next-steps planner: which foundation
tasks a tenant still needs, and whether scaling tasks are appropriate.
"""

from __future__ import annotations

import math

from roi_advisor.models.inputs import CurrentCosts, CurrentKPIs, SalesActivities
from roi_advisor.models.outputs import CompanyMaturity
from roi_advisor.taxonomy.business_taxonomy import (
    CompanyStage,
    ReadinessLevel,
    TargetMarket,
    TechStack,
)
from roi_advisor.utils.numeric import clamp, safe_div

# Monthly revenue thresholds, checked top-down; anything lower is a startup.
STAGE_THRESHOLDS: tuple[tuple[float, CompanyStage], ...] = (
    (500_000, CompanyStage.ENTERPRISE),
    (100_000, CompanyStage.MATURE),
    (50_000, CompanyStage.GROWTH),
)

DEFAULT_DIGITAL_MATURITY = 3.0

# Market fit starts at a neutral 5 and only gains points, so a weak fit is
# anything short of one full component above neutral.
BEGINNER_FIT_CEILING = 6.0
ADVANCED_FIT_FLOOR = 7.0
SALES_COST_PER_HEAD = 5_000


def company_stage(monthly_revenue: float) -> CompanyStage:
    for threshold, stage in STAGE_THRESHOLDS:
        if monthly_revenue > threshold:
            return stage
    return CompanyStage.STARTUP


def digital_maturity(costs: CurrentCosts) -> float:
    """Technology spend relative to marketing budget, × 10, in [1, 10].

    No budget or no technology spend gives the default of 3.
    """
    ratio = safe_div(costs.technology_costs, costs.marketing_budget)
    if ratio == 0:
        return DEFAULT_DIGITAL_MATURITY
    return clamp(ratio * 10, 1.0, 10.0)


def assess_company_maturity(
    kpis: CurrentKPIs,
    costs: CurrentCosts,
    company_size: str,
    industry: str,
) -> CompanyMaturity:
    maturity = digital_maturity(costs)
    if maturity > 7:
        tech_stack = TechStack.ADVANCED
    elif maturity > 4:
        tech_stack = TechStack.INTERMEDIATE
    else:
        tech_stack = TechStack.BASIC

    return CompanyMaturity(
        stage=company_stage(kpis.monthly_revenue),
        digital_maturity=maturity,
        sales_team_size=max(1, math.floor(costs.sales_team_cost / SALES_COST_PER_HEAD)),
        marketing_budget=costs.marketing_budget,
        tech_stack=tech_stack,
        industry_type=industry,
        target_market=TargetMarket.B2B if "b2b" in (industry or "").lower() else TargetMarket.B2C,
    )


def calculate_market_fit_score(kpis: CurrentKPIs) -> float:
    """Market fit on a 1-10 scale from a neutral 5.

    Four components of up to 2.5 points each:

    - revenue health: ``(min(10, revenue / 50 000 × 5 + 5) - 5) × 0.25``
    - unit economics: +1.25 when LTV > 3 × CAC
    - conversion:     ``min(conv, 10) / 10 × 2.5`` when conversion > 2 %
    - lead volume:    ``min(leads, 500) / 500 × 2.5`` when leads > 50
    """
    score = 5.0
    if kpis.monthly_revenue > 0:
        revenue_score = min(10.0, kpis.monthly_revenue / 50_000 * 5 + 5)
        score += (revenue_score - 5) * 0.25
    if kpis.customer_lifetime_value > kpis.customer_acquisition_cost * 3:
        score += 1.25
    if kpis.conversion_rate > 2:
        score += min(kpis.conversion_rate, 10) / 10 * 2.5
    if kpis.monthly_leads > 50:
        score += min(kpis.monthly_leads, 500) / 500 * 2.5
    return clamp(score, 1.0, 10.0)


def get_readiness_level(
    maturity: CompanyMaturity,
    market_fit_score: float,
    activities: SalesActivities,
) -> ReadinessLevel:
    active = activities.active_count
    if (
        maturity.stage == CompanyStage.STARTUP
        and market_fit_score < BEGINNER_FIT_CEILING
        and active < 3
    ):
        return ReadinessLevel.BEGINNER
    if (
        maturity.stage == CompanyStage.ENTERPRISE
        or market_fit_score > ADVANCED_FIT_FLOOR
        or active > 8
    ):
        return ReadinessLevel.ADVANCED
    return ReadinessLevel.INTERMEDIATE
