"""
Opportunity-cost model: deterministic economics for each activity the
tenant has not adopted yet.

For every inactive activity::

    adjusted_roi  = base_roi  × industry_multiplier × size_multiplier
    adjusted_cost = base_cost × size_multiplier
    opportunity   = converted × (LTV / lifetime_span) × adjusted_roi / 100 × months

Priority blends four factors, each normalised to 0-10 before weighting:

    40 %  ROI          adjusted_roi / 60, capped at 10
    30 %  efficiency   (adjusted_roi per 1 000 of cost) / 10, capped at 10
    20 %  speed        (13 - months) / 12 × 10, floored at 0
    10 %  risk         low 10, medium 6.67, high 3.33

and is clamped to [1, 10].
"""

from __future__ import annotations

import logging
from typing import Optional

from roi_advisor.benchmarks.industry import size_tier
from roi_advisor.catalog.activities import (
    ACTIVITY_BASELINES,
    ActivityBaseline,
    get_company_size_multiplier,
    get_industry_multiplier,
)
from roi_advisor.catalog.tools import validate_tool_requirements
from roi_advisor.models.inputs import AvailableTools, CurrentKPIs, SalesActivities
from roi_advisor.models.outputs import OpportunityCost
from roi_advisor.taxonomy.activity_taxonomy import Activity
from roi_advisor.taxonomy.business_taxonomy import RiskLevel, SizeTier
from roi_advisor.utils.numeric import clamp, clamp_priority, safe_div

logger = logging.getLogger(__name__)

ROI_WEIGHT = 0.4
EFFICIENCY_WEIGHT = 0.3
SPEED_WEIGHT = 0.2
RISK_WEIGHT = 0.1

_RISK_FACTOR: dict[RiskLevel, float] = {
    RiskLevel.LOW: 10.0,
    RiskLevel.MEDIUM: 20.0 / 3,
    RiskLevel.HIGH: 10.0 / 3,
}

_TECH_FRIENDLY = frozenset({Activity.CONTENT_MARKETING, Activity.SEO_CONTENT, Activity.PERSONAL_BRAND})
_STARTUP_ESSENTIAL = frozenset({Activity.PERSONAL_BRAND, Activity.SOCIAL_SELLING})


def calculate_activity_priority(
    baseline: ActivityBaseline,
    adjusted_roi: float,
    adjusted_cost: float,
) -> float:
    """Weighted 1-10 priority for one activity, rounded to 2 decimals."""
    roi_factor = clamp(adjusted_roi / 60, 0.0, 10.0)
    efficiency = safe_div(adjusted_roi, adjusted_cost / 1000)
    efficiency_factor = clamp(efficiency / 10, 0.0, 10.0)
    speed_factor = max(0, 13 - baseline.months_to_implement) / 12 * 10
    risk_factor = _RISK_FACTOR[baseline.risk]

    priority = (
        ROI_WEIGHT * roi_factor
        + EFFICIENCY_WEIGHT * efficiency_factor
        + SPEED_WEIGHT * speed_factor
        + RISK_WEIGHT * risk_factor
    )
    return round(clamp_priority(priority), 2)


def generate_opportunity_reasoning(
    baseline: ActivityBaseline,
    industry: str,
    company_size: str,
) -> str:
    reasons = []
    if baseline.base_roi > 300:
        reasons.append("High ROI potential")
    if baseline.months_to_implement <= 2:
        reasons.append("Quick implementation")
    if baseline.risk == RiskLevel.LOW:
        reasons.append("Low risk investment")
    if (industry or "").strip().lower() == "technology" and baseline.activity in _TECH_FRIENDLY:
        reasons.append("Highly effective for tech companies")
    if size_tier(company_size) == SizeTier.STARTUP and baseline.activity in _STARTUP_ESSENTIAL:
        reasons.append("Essential for startup growth")
    return ", ".join(reasons) or "Good strategic fit for your business"


def calculate_opportunity_costs(
    activities: SalesActivities,
    kpis: CurrentKPIs,
    industry: str,
    company_size: str,
    available_tools: Optional[AvailableTools] = None,
) -> list[OpportunityCost]:
    """Score every inactive activity's economics.

    Args:
        activities:      Activities already adopted; these are skipped.
        kpis:            KPIs; converted customers, LTV and lifetime span
                         drive the opportunity cost.
        industry:        Industry name for the ROI multiplier.
        company_size:    Head-count band or tier for the size multiplier.
        available_tools: When given, missing tooling is validated and its
                         setup plus first-month cost added to
                         ``implementation_cost``.

    Returns:
        ``OpportunityCost`` list sorted by priority descending, ties in
        catalogue order.  Empty when every activity is already adopted.
    """
    monthly_value_per_customer = safe_div(
        kpis.customer_lifetime_value, kpis.customer_lifetime_span
    )

    results: list[OpportunityCost] = []
    for activity in activities.inactive():
        baseline = ACTIVITY_BASELINES[activity]
        size_multiplier = get_company_size_multiplier(company_size, activity)
        adjusted_roi = (
            baseline.base_roi * get_industry_multiplier(industry, activity) * size_multiplier
        )
        adjusted_cost = baseline.base_cost * size_multiplier

        monthly_loss = (
            kpis.converted_customers * monthly_value_per_customer * adjusted_roi / 100
        )
        opportunity_cost = monthly_loss * baseline.months_to_implement

        tool_validation = None
        implementation_cost = adjusted_cost
        if available_tools is not None:
            tool_validation = validate_tool_requirements(activity, available_tools)
            implementation_cost += (
                tool_validation.total_setup_cost + tool_validation.total_monthly_cost
            )

        results.append(OpportunityCost(
            activity=baseline.name,
            activity_key=activity,
            estimated_roi=adjusted_roi,
            implementation_cost=implementation_cost,
            time_to_implement=baseline.months_to_implement,
            risk_level=baseline.risk,
            opportunity_cost=opportunity_cost,
            priority=calculate_activity_priority(baseline, adjusted_roi, adjusted_cost),
            reasoning=generate_opportunity_reasoning(baseline, industry, company_size),
            tool_validation=tool_validation,
        ))

    results.sort(key=lambda o: (-o.priority, o.activity_key.catalogue_index))
    logger.debug("Computed opportunity costs for %d inactive activities", len(results))
    return results
