"""
Tests for roi_advisor/analysis/opportunity.py.

What we test
------------
calculate_opportunity_costs():
  - Active activities are excluded; all-active gives an empty list.
  - Industry and size multipliers applied to ROI; size multiplier to cost.
  - Opportunity = converted × LTV / span × ROI / 100 × months.
  - Missing tooling cost added to implementation cost when tools are supplied.
  - Sorted by priority descending, ties in catalogue order.
  - Inputs are activities, KPIs, industry, size and tools; costs play no part.

calculate_activity_priority():
  - Worked example; clamped to [1, 10].

generate_opportunity_reasoning():
  - Reason fragments and the fallback sentence.
"""

from __future__ import annotations

import inspect

import pytest

from roi_advisor.analysis.opportunity import (
    calculate_activity_priority,
    calculate_opportunity_costs,
    generate_opportunity_reasoning,
)
from roi_advisor.catalog.activities import ACTIVITY_BASELINES, ActivityBaseline
from roi_advisor.models.inputs import CurrentKPIs, SalesActivities
from roi_advisor.taxonomy.activity_taxonomy import Activity
from roi_advisor.taxonomy.business_taxonomy import RiskLevel


def _by_key(opportunities):
    return {o.activity_key: o for o in opportunities}


class TestCalculateOpportunityCosts:
    @pytest.fixture
    def opportunities(self, tech_kpis, cold_calls_only):
        return calculate_opportunity_costs(
            cold_calls_only, tech_kpis, "Technology", "51-200"
        )

    def test_active_activity_excluded(self, opportunities):
        keys = [o.activity_key for o in opportunities]
        assert Activity.COLD_CALLS not in keys
        assert len(keys) == len(Activity) - 1

    def test_all_active_gives_empty(self, tech_kpis):
        everything = SalesActivities.from_active(list(Activity))
        assert calculate_opportunity_costs(everything, tech_kpis, "Technology", "51-200") == []

    def test_content_marketing_economics(self, opportunities):
        content = _by_key(opportunities)[Activity.CONTENT_MARKETING]
        assert content.estimated_roi == pytest.approx(600.0)
        assert content.implementation_cost == pytest.approx(8_000)
        # 18 customers × 8000 / 24 × 600 % × 6 months
        assert content.opportunity_cost == pytest.approx(216_000)
        assert content.priority == pytest.approx(8.08)
        assert content.time_to_implement == 6
        assert content.risk_level == RiskLevel.MEDIUM
        assert content.tool_validation is None

    def test_size_multiplier_scales_cost(self, opportunities):
        paid = _by_key(opportunities)[Activity.PAID_ADS]
        assert paid.estimated_roi == pytest.approx(150 * 1.2 * 1.3)
        assert paid.implementation_cost == pytest.approx(13_000)

    def test_missing_tools_add_cost(self, tech_kpis, cold_calls_only, basic_tools):
        opportunities = calculate_opportunity_costs(
            cold_calls_only, tech_kpis, "Technology", "51-200", basic_tools
        )
        content = _by_key(opportunities)[Activity.CONTENT_MARKETING]
        assert content.tool_validation is not None
        assert not content.tool_validation.has_all_required_tools
        # CMS 1500/100, SEO 300/100, design 600/50
        assert content.implementation_cost == pytest.approx(8_000 + 2_400 + 250)

    def test_sorted_by_priority_then_catalogue(self, opportunities):
        keys = [(-o.priority, o.activity_key.catalogue_index) for o in opportunities]
        assert keys == sorted(keys)

    def test_priorities_in_range(self, opportunities):
        assert all(1.0 <= o.priority <= 10.0 for o in opportunities)

    def test_zero_lifetime_span_is_safe(self, cold_calls_only):
        kpis = CurrentKPIs(converted_customers=10, customer_lifetime_value=5_000)
        opportunities = calculate_opportunity_costs(
            cold_calls_only, kpis, "Technology", "51-200"
        )
        assert all(o.opportunity_cost == 0.0 for o in opportunities)

    def test_inputs(self):
        params = list(inspect.signature(calculate_opportunity_costs).parameters)
        assert params == ["activities", "kpis", "industry", "company_size", "available_tools"]


class TestActivityPriority:
    def test_worked_example(self):
        baseline = ACTIVITY_BASELINES[Activity.CONTENT_MARKETING]
        # 0.4 × 10 + 0.3 × 7.5 + 0.2 × 70/12 + 0.1 × 20/3
        assert calculate_activity_priority(baseline, 600, 8_000) == pytest.approx(8.08)

    def test_floor_is_one(self):
        baseline = ActivityBaseline(Activity.TRADE_SHOWS, 0, 20_000, 12, RiskLevel.HIGH)
        assert calculate_activity_priority(baseline, 0, 20_000) == 1.0

    def test_ceiling_is_ten(self):
        baseline = ActivityBaseline(Activity.VIDEO_CALLS, 900, 100, 1, RiskLevel.LOW)
        assert calculate_activity_priority(baseline, 900, 100) == 10.0

    def test_zero_cost_is_safe(self):
        baseline = ACTIVITY_BASELINES[Activity.VIDEO_CALLS]
        assert 1.0 <= calculate_activity_priority(baseline, 200, 0) <= 10.0


class TestOpportunityReasoning:
    def test_technology_content(self):
        reasoning = generate_opportunity_reasoning(
            ACTIVITY_BASELINES[Activity.CONTENT_MARKETING], "Technology", "51-200"
        )
        assert reasoning == "High ROI potential, Highly effective for tech companies"

    def test_startup_personal_brand(self):
        reasoning = generate_opportunity_reasoning(
            ACTIVITY_BASELINES[Activity.PERSONAL_BRAND], "services", "1-10"
        )
        assert reasoning == "High ROI potential, Low risk investment, Essential for startup growth"

    def test_fallback_sentence(self):
        reasoning = generate_opportunity_reasoning(
            ACTIVITY_BASELINES[Activity.TRADE_SHOWS], "services", "11-50"
        )
        assert reasoning == "Good strategic fit for your business"
