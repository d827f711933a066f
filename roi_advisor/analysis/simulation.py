"""
Scenario simulation: what-if multipliers, 12-month projections and
sensitivity analysis over a business state.

A business state is a ``(CurrentKPIs, CurrentCosts)`` pair.  Revenue has
one basis: the reported monthly revenue, or the funnel revenue
``round(leads × conversion / 100) × AOV`` when none is reported.  Applying
multipliers re-derives the funnel and moves that basis with it::

    converted = round(leads × conversion / 100)
    revenue   = basis × revenue_multiplier          (when set)
              = basis × funnel / base_funnel        (otherwise)
    CAC       = marketing_budget / converted        (when converted > 0)

so the no-multiplier baseline keeps the reported revenue and every
scenario is measured against it.  All ratios go through ``safe_div``.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional, Sequence

from roi_advisor.models.inputs import CurrentCosts, CurrentKPIs
from roi_advisor.models.simulation import (
    MonthlyProjection,
    ScenarioComparison,
    ScenarioMultipliers,
    SensitivityRange,
    SimulationResult,
    SimulationScenario,
    StateSummary,
)
from roi_advisor.taxonomy.business_taxonomy import RiskLevel
from roi_advisor.utils.numeric import clamp, safe_div
from roi_advisor.utils.time_utils import month_labels

logger = logging.getLogger(__name__)

PROJECTION_MONTHS = 12
TECHNOLOGY_COST_GROWTH = 1.02

# Projection mode → (monthly revenue growth, monthly efficiency gain).
GROWTH_FACTORS: dict[str, tuple[float, float]] = {
    "current": (1.02, 1.0),
    "optimized": (1.05, 1.03),
    "simulated": (1.02, 1.0),
}

SENSITIVITY_FACTORS: tuple[str, ...] = (
    "revenue_multiplier",
    "cost_multiplier",
    "conversion_rate_multiplier",
    "marketing_budget_multiplier",
)
SENSITIVITY_DELTA = 0.2

PREDEFINED_SCENARIOS: tuple[SimulationScenario, ...] = (
    SimulationScenario(
        name="Conservative Growth",
        description="Modest improvements with low risk",
        multipliers=ScenarioMultipliers(
            revenue_multiplier=1.1, cost_multiplier=0.95, conversion_rate_multiplier=1.05,
        ),
    ),
    SimulationScenario(
        name="Aggressive Growth",
        description="High growth with increased investment",
        multipliers=ScenarioMultipliers(
            revenue_multiplier=1.5,
            cost_multiplier=1.3,
            conversion_rate_multiplier=1.2,
            marketing_budget_multiplier=1.8,
        ),
    ),
    SimulationScenario(
        name="Efficiency Focus",
        description="Cost reduction and process optimization",
        multipliers=ScenarioMultipliers(
            cost_multiplier=0.8, conversion_rate_multiplier=1.15, churn_rate_multiplier=0.7,
        ),
    ),
    SimulationScenario(
        name="Market Expansion",
        description="Increased lead generation and market reach",
        multipliers=ScenarioMultipliers(
            lead_generation_multiplier=2.0,
            marketing_budget_multiplier=1.6,
            conversion_rate_multiplier=0.9,
        ),
    ),
    SimulationScenario(
        name="Premium Strategy",
        description="Higher prices, better margins",
        multipliers=ScenarioMultipliers(
            revenue_multiplier=1.3,
            lead_generation_multiplier=0.8,
            ltv_multiplier=1.4,
            cogs_multiplier=0.9,
        ),
    ),
)


# ── State transforms ──────────────────────────────────────────────────────────


def _funnel_revenue(leads: float, conversion_rate: float, order_value: float) -> float:
    return round(leads * conversion_rate / 100) * order_value


def base_state_revenue(kpis: CurrentKPIs) -> float:
    """Monthly revenue of the unmodified state: reported, else funnel-derived."""
    return kpis.monthly_revenue or _funnel_revenue(
        kpis.monthly_leads, kpis.conversion_rate, kpis.average_order_value
    )


def apply_multipliers(
    kpis: CurrentKPIs,
    costs: CurrentCosts,
    multipliers: Optional[ScenarioMultipliers] = None,
) -> tuple[CurrentKPIs, CurrentCosts]:
    """Return a new state with ``multipliers`` applied and the funnel re-derived."""
    m = multipliers or ScenarioMultipliers()
    k = kpis.model_dump()
    c = costs.model_dump()

    if m.lead_generation_multiplier:
        k["monthly_leads"] *= m.lead_generation_multiplier
    if m.conversion_rate_multiplier:
        k["conversion_rate"] *= m.conversion_rate_multiplier
    k["converted_customers"] = float(round(k["monthly_leads"] * k["conversion_rate"] / 100))

    if m.ltv_multiplier:
        k["customer_lifetime_value"] *= m.ltv_multiplier
    if m.churn_rate_multiplier:
        k["churn_rate"] *= m.churn_rate_multiplier
        if k["churn_rate"] > 0:
            k["customer_lifetime_span"] = float(round(100 / k["churn_rate"]))

    base_revenue = base_state_revenue(kpis)
    if m.revenue_multiplier:
        k["monthly_revenue"] = base_revenue * m.revenue_multiplier
        k["average_order_value"] *= m.revenue_multiplier
    else:
        base_funnel = _funnel_revenue(kpis.monthly_leads, kpis.conversion_rate, kpis.average_order_value)
        funnel = k["converted_customers"] * k["average_order_value"]
        k["monthly_revenue"] = (
            base_revenue * funnel / base_funnel if base_funnel > 0 else base_revenue
        )

    if m.cost_multiplier:
        for name in ("sales_team_cost", "technology_costs", "operational_costs",
                     "sales_commission", "other_costs"):
            c[name] *= m.cost_multiplier
    if m.marketing_budget_multiplier:
        c["marketing_budget"] *= m.marketing_budget_multiplier
    if m.cogs_multiplier:
        c["cogs"] *= m.cogs_multiplier

    if k["converted_customers"] > 0:
        k["customer_acquisition_cost"] = c["marketing_budget"] / k["converted_customers"]

    return CurrentKPIs(**k), CurrentCosts(**c)


def summarize_state(kpis: CurrentKPIs, costs: CurrentCosts) -> StateSummary:
    total_costs = costs.total
    profit = kpis.monthly_revenue - total_costs
    return StateSummary(
        monthly_revenue=kpis.monthly_revenue,
        total_costs=total_costs,
        monthly_profit=profit,
        roi=safe_div(profit, total_costs) * 100,
    )


def compare_states(baseline: StateSummary, scenario: StateSummary) -> ScenarioComparison:
    return ScenarioComparison(
        revenue_change=safe_div(
            scenario.monthly_revenue - baseline.monthly_revenue, baseline.monthly_revenue
        ) * 100,
        cost_change=safe_div(scenario.total_costs - baseline.total_costs, baseline.total_costs) * 100,
        roi_change=scenario.roi - baseline.roi,
        profit_change=safe_div(
            scenario.monthly_profit - baseline.monthly_profit,
            abs(baseline.monthly_profit) or 1.0,
        ) * 100,
    )


def data_completeness(kpis: CurrentKPIs, costs: CurrentCosts) -> float:
    """Share of KPI and cost fields with a positive value, 0-1."""
    flags = [*kpis.provided_fields().values(), *costs.provided_fields().values()]
    return safe_div(sum(flags), len(flags))


def scenario_confidence(
    scenario: SimulationScenario,
    kpis: CurrentKPIs,
    costs: CurrentCosts,
) -> float:
    """70 base, -15 per multiplier outside [0.5, 2], + completeness × 20; in [30, 95]."""
    confidence = 70.0
    for value in scenario.multipliers.applied().values():
        if value < 0.5 or value > 2.0:
            confidence -= 15
    confidence += data_completeness(kpis, costs) * 20
    return clamp(confidence, 30.0, 95.0)


def assess_risk_level(comparison: ScenarioComparison) -> RiskLevel:
    total_change = abs(comparison.revenue_change) + abs(comparison.cost_change)
    if total_change > 50:
        return RiskLevel.HIGH
    if total_change > 25:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


# ── Scenario runs ─────────────────────────────────────────────────────────────


def run_scenarios(
    kpis: CurrentKPIs,
    costs: CurrentCosts,
    scenarios: Sequence[SimulationScenario] = PREDEFINED_SCENARIOS,
) -> list[SimulationResult]:
    """Simulate each scenario against the baseline, best ROI change first."""
    baseline = summarize_state(*apply_multipliers(kpis, costs))
    results: list[SimulationResult] = []
    for scenario in scenarios:
        summary = summarize_state(*apply_multipliers(kpis, costs, scenario.multipliers))
        comparison = compare_states(baseline, summary)
        results.append(SimulationResult(
            scenario=scenario,
            results=summary,
            comparison=comparison,
            confidence=scenario_confidence(scenario, kpis, costs),
            risk_level=assess_risk_level(comparison),
        ))
    results.sort(key=lambda r: -r.comparison.roi_change)
    logger.debug("Simulated %d scenario(s)", len(results))
    return results


def sensitivity_analysis(kpis: CurrentKPIs, costs: CurrentCosts) -> dict[str, SensitivityRange]:
    """ROI at -20 % / base / +20 % for each factor in ``SENSITIVITY_FACTORS``."""
    base_roi = summarize_state(*apply_multipliers(kpis, costs)).roi
    analysis: dict[str, SensitivityRange] = {}
    for factor in SENSITIVITY_FACTORS:
        low = ScenarioMultipliers(**{factor: 1 - SENSITIVITY_DELTA})
        high = ScenarioMultipliers(**{factor: 1 + SENSITIVITY_DELTA})
        analysis[factor] = SensitivityRange(
            low=summarize_state(*apply_multipliers(kpis, costs, low)).roi,
            base=base_roi,
            high=summarize_state(*apply_multipliers(kpis, costs, high)).roi,
        )
    return analysis


def generate_projections(
    kpis: CurrentKPIs,
    costs: CurrentCosts,
    multipliers: Optional[ScenarioMultipliers] = None,
    mode: str = "current",
    start: Optional[date] = None,
    months: int = PROJECTION_MONTHS,
) -> list[MonthlyProjection]:
    """Month-by-month projection of revenue, costs and unit economics.

    Month ``n`` compounds revenue growth ``g`` and efficiency gain ``e`` as
    ``g^(n-1)`` and ``e^(n-1)``.  Marketing spend scales with ``g / e``,
    operations with ``g / sqrt(e)``, technology grows 2 % a month, and COGS,
    commission and other costs stay flat.

    Args:
        kpis, costs:  Base state.
        multipliers:  Applied once before projecting.
        mode:         ``"current"``, ``"optimized"`` or ``"simulated"``.
        start:        Month of the first row; defaults to today.
        months:       Number of rows.

    Raises:
        ValueError: If ``mode`` is unknown.
    """
    if mode not in GROWTH_FACTORS:
        raise ValueError(f"Unknown projection mode '{mode}'. Expected one of {sorted(GROWTH_FACTORS)}.")
    revenue_growth, efficiency_gain = GROWTH_FACTORS[mode]
    base_kpis, base_costs = apply_multipliers(kpis, costs, multipliers)
    labels = month_labels(start or date.today(), months)
    # Revenue per converted customer, so month 1 matches the base state.
    base_converted = round(base_kpis.monthly_leads * base_kpis.conversion_rate / 100)
    base_order_value = (
        base_kpis.monthly_revenue / base_converted
        if base_converted > 0 and base_kpis.monthly_revenue > 0
        else base_kpis.average_order_value
    )

    rows: list[MonthlyProjection] = []
    cumulative_revenue = cumulative_costs = cumulative_profit = 0.0
    for month in range(1, months + 1):
        growth = revenue_growth ** (month - 1)
        efficiency = efficiency_gain ** (month - 1)

        leads = round(base_kpis.monthly_leads * growth)
        conversion_rate = base_kpis.conversion_rate * efficiency
        converted = round(leads * conversion_rate / 100)
        order_value = base_order_value * growth
        revenue = converted * order_value

        marketing = base_costs.marketing_budget * growth / efficiency
        sales_team = base_costs.sales_team_cost * growth
        technology = base_costs.technology_costs * TECHNOLOGY_COST_GROWTH ** (month - 1)
        operations = base_costs.operational_costs * growth / math.sqrt(efficiency)
        total_costs = (
            marketing + sales_team + technology + operations
            + base_costs.cogs + base_costs.sales_commission + base_costs.other_costs
        )

        profit = revenue - total_costs
        cumulative_revenue += revenue
        cumulative_costs += total_costs
        cumulative_profit += profit

        cac = safe_div(marketing, converted)
        ltv = base_kpis.customer_lifetime_value * efficiency
        rows.append(MonthlyProjection(
            month=month,
            month_name=labels[month - 1],
            leads=leads,
            conversion_rate=round(conversion_rate, 2),
            converted_customers=converted,
            average_order_value=round(order_value),
            monthly_revenue=round(revenue),
            cumulative_revenue=round(cumulative_revenue),
            marketing_budget=round(marketing),
            sales_team_cost=round(sales_team),
            technology_costs=round(technology),
            operational_costs=round(operations),
            total_costs=round(total_costs),
            cumulative_costs=round(cumulative_costs),
            monthly_profit=round(profit),
            cumulative_profit=round(cumulative_profit),
            roi=round(safe_div(profit, total_costs) * 100, 2),
            cac=round(cac),
            ltv=round(ltv),
            ltv_cac_ratio=round(safe_div(ltv, cac), 2),
        ))
    return rows
