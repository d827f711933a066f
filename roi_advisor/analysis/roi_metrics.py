"""
ROI metrics with benchmark-derived defaults for missing inputs.

Zero means "not provided" throughout.  ``get_intelligent_defaults`` derives
a value for every missing KPI it can from the industry benchmark row for
the company's size tier; ``calculate_roi_metrics`` then fills whatever is
still missing from fixed fallbacks and revenue shares, so the returned
``ROIMetrics`` never contains a zero denominator, ``NaN`` or infinity.
"""

from __future__ import annotations

import logging
from typing import Optional

from roi_advisor.benchmarks.industry import (
    DEFAULT_COMPANY_SIZE,
    DEFAULT_INDUSTRY,
    Metric,
    get_benchmark_value,
    get_size_multipliers,
)
from roi_advisor.models.inputs import CurrentCosts, CurrentKPIs, Goals
from roi_advisor.models.outputs import ProjectedImprovement, ROIMetrics
from roi_advisor.utils.numeric import safe_div

logger = logging.getLogger(__name__)

# Last-resort KPI values when neither the caller nor the benchmarks supply one.
KPI_FALLBACKS: dict[str, float] = {
    "monthly_revenue": 10_000,
    "customer_acquisition_cost": 150,
    "customer_lifetime_value": 1_800,
    "conversion_rate": 2.5,
    "average_order_value": 200,
    "monthly_leads": 100,
    "sales_cycle_length": 60,
    "customer_lifetime_span": 24,
    "churn_rate": 5,
}

# Missing cost buckets default to a share of monthly revenue.
COST_REVENUE_SHARES: dict[str, float] = {
    "marketing_budget": 0.15,
    "sales_team_cost": 0.20,
    "sales_commission": 0.08,
    "technology_costs": 0.05,
    "operational_costs": 0.10,
    "cogs": 0.35,
    "other_costs": 0.05,
}


def get_intelligent_defaults(
    industry: str,
    company_size: str,
    kpis: CurrentKPIs,
    costs: Optional[CurrentCosts] = None,
) -> dict[str, float]:
    """Benchmark-based values for the KPIs the caller left at zero.

    Revenue is only derived when CAC and lead volume are known (leads ×
    conversion × AOV); CAC is derived from marketing budget per converted
    lead when a budget is known, otherwise taken from the benchmark.
    Lifetime span follows from churn as ``round(100 / churn)``.

    Args:
        industry:     Industry name; blank uses ``"services"``.
        company_size: Head-count band or tier; blank uses ``"11-50"``.
        kpis:         Caller-supplied KPIs.
        costs:        Caller-supplied costs; only the marketing budget is read.

    Returns:
        Dict keyed by ``CurrentKPIs`` field name, holding only synthesised
        values.  Every value is finite.
    """
    industry = industry or DEFAULT_INDUSTRY
    company_size = company_size or DEFAULT_COMPANY_SIZE
    budget = costs.marketing_budget if costs is not None else 0.0

    def bench(metric: Metric) -> float:
        return get_benchmark_value(industry, metric, company_size, "avg")

    conversion_rate = bench(Metric.CONVERSION_RATE) or 3.0
    lifetime_value = bench(Metric.CUSTOMER_LIFETIME_VALUE) or 2_500.0
    acquisition_cost = bench(Metric.CUSTOMER_ACQUISITION_COST) or 300.0
    order_value = bench(Metric.AVERAGE_ORDER_VALUE) or 300.0
    cycle_length = bench(Metric.SALES_CYCLE_LENGTH) or 30.0
    churn = bench(Metric.MONTHLY_CHURN_RATE) or 5.0

    defaults: dict[str, float] = {}

    if not kpis.monthly_revenue and kpis.customer_acquisition_cost and kpis.monthly_leads:
        defaults["monthly_revenue"] = kpis.monthly_leads * conversion_rate / 100 * order_value

    if not kpis.customer_acquisition_cost:
        derived = 0.0
        if budget and kpis.monthly_leads:
            derived = safe_div(budget, kpis.monthly_leads * conversion_rate / 100)
        defaults["customer_acquisition_cost"] = derived or acquisition_cost

    if not kpis.customer_lifetime_value:
        defaults["customer_lifetime_value"] = lifetime_value
    if not kpis.conversion_rate:
        defaults["conversion_rate"] = conversion_rate
    if not kpis.average_order_value:
        defaults["average_order_value"] = order_value
    if not kpis.sales_cycle_length:
        defaults["sales_cycle_length"] = cycle_length

    if not kpis.monthly_leads and budget:
        cac = defaults.get("customer_acquisition_cost", acquisition_cost)
        defaults["monthly_leads"] = float(round(safe_div(budget, cac)))

    if not kpis.converted_customers:
        leads = kpis.monthly_leads or defaults.get("monthly_leads") or KPI_FALLBACKS["monthly_leads"]
        rate = kpis.conversion_rate or defaults.get("conversion_rate") or conversion_rate
        defaults["converted_customers"] = float(round(leads * rate / 100))

    if not kpis.churn_rate:
        defaults["churn_rate"] = churn

    if not kpis.customer_lifetime_span:
        churn_rate = kpis.churn_rate or defaults.get("churn_rate") or KPI_FALLBACKS["churn_rate"]
        defaults["customer_lifetime_span"] = float(round(safe_div(100, churn_rate)))

    logger.debug("Synthesised %d KPI default(s) for %s / %s", len(defaults), industry, company_size)
    return defaults


def fill_kpis(kpis: CurrentKPIs, defaults: dict[str, float]) -> CurrentKPIs:
    """Caller value, else benchmark default, else fixed fallback, per field."""
    filled: dict[str, float] = {}
    for name in CurrentKPIs.model_fields:
        filled[name] = (
            getattr(kpis, name) or defaults.get(name) or KPI_FALLBACKS.get(name, 0.0)
        )
    if not filled["converted_customers"]:
        filled["converted_customers"] = float(
            round(filled["monthly_leads"] * filled["conversion_rate"] / 100)
        )
    return CurrentKPIs(**filled)


def fill_costs(costs: CurrentCosts, monthly_revenue: float) -> CurrentCosts:
    return CurrentCosts(**{
        name: getattr(costs, name) or float(round(monthly_revenue * share))
        for name, share in COST_REVENUE_SHARES.items()
    })


def calculate_roi_metrics(
    kpis: CurrentKPIs,
    costs: CurrentCosts,
    goals: Optional[Goals] = None,
    industry: str = DEFAULT_INDUSTRY,
    company_size: str = DEFAULT_COMPANY_SIZE,
) -> ROIMetrics:
    """Current and projected ROI from filled-in KPIs and costs.

    Projected improvements scale with the gap between the company and the
    benchmark (top-10 % conversion rate, minimum CAC, minimum sales cycle)
    and with the head-count band's size multipliers::

        conversion +  min(50, 15 + conv_gap × 40)  × efficiency
        lead quality  min(45, 20 + cac_gap  × 30)  × scalability
        cycle −       min(35, 10 + cycle_gap × 30) × efficiency
        cost −        min(25,  8 + cac_gap  × 20)  × resource_constraint

    ROI compares annual revenue with the summed monthly cost buckets.
    Opportunity cost is 70 % of the gap between the revenue target (or
    120 % of projected revenue when no target is set) and annual revenue.
    """
    goals = goals or Goals()
    industry = industry or DEFAULT_INDUSTRY
    company_size = company_size or DEFAULT_COMPANY_SIZE

    defaults = get_intelligent_defaults(industry, company_size, kpis, costs)
    filled_kpis = fill_kpis(kpis, defaults)
    filled_costs = fill_costs(costs, filled_kpis.monthly_revenue)

    total_current_costs = filled_costs.total
    annual_revenue = filled_kpis.monthly_revenue * 12
    current_roi = safe_div(annual_revenue - total_current_costs, total_current_costs) * 100

    top_conversion = get_benchmark_value(industry, Metric.CONVERSION_RATE, company_size, "top10")
    min_cac = get_benchmark_value(industry, Metric.CUSTOMER_ACQUISITION_COST, company_size, "min")
    min_cycle = get_benchmark_value(industry, Metric.SALES_CYCLE_LENGTH, company_size, "min")

    conversion_gap = safe_div(max(0.0, top_conversion - filled_kpis.conversion_rate), top_conversion)
    cac_gap = min(
        0.4,
        safe_div(filled_kpis.customer_acquisition_cost - min_cac, filled_kpis.customer_acquisition_cost),
    )
    cycle_gap = min(
        0.3,
        safe_div(filled_kpis.sales_cycle_length - min_cycle, filled_kpis.sales_cycle_length),
    )

    size = get_size_multipliers(company_size)
    improvement = ProjectedImprovement(
        conversion_rate_increase=round(min(50, 15 + conversion_gap * 40) * size.efficiency),
        lead_quality_increase=round(min(45, 20 + cac_gap * 30) * size.scalability),
        sales_cycle_reduction=round(min(35, 10 + cycle_gap * 30) * size.efficiency),
        cost_reduction=round(min(25, 8 + cac_gap * 20) * size.resource_constraint),
    )

    projected_revenue = annual_revenue * (1 + improvement.conversion_rate_increase / 100)
    projected_costs = total_current_costs * (1 - improvement.cost_reduction / 100)
    projected_roi = safe_div(projected_revenue - projected_costs, projected_costs) * 100

    target = goals.revenue_target or projected_revenue * 1.2
    opportunity_costs = max(0.0, target - annual_revenue) * 0.7

    is_using_defaults = {
        name: not provided
        for name, provided in {**kpis.provided_fields(), **costs.provided_fields()}.items()
    }
    logger.info(
        "ROI metrics: current=%.1f%% projected=%.1f%% (%d field(s) defaulted)",
        current_roi, projected_roi, sum(is_using_defaults.values()),
    )
    return ROIMetrics(
        current_roi=current_roi,
        projected_roi=projected_roi,
        potential_increase=projected_roi - current_roi,
        projected_revenue=projected_revenue,
        projected_costs=projected_costs,
        total_current_costs=total_current_costs,
        projected_improvement=improvement,
        opportunity_costs=opportunity_costs,
        filled_kpis=filled_kpis,
        filled_costs=filled_costs,
        is_using_defaults=is_using_defaults,
    )
