"""
Tests for roi_advisor/recommendations/recommender.py.

What we test
------------
generate_fuzzy_logic_recommendations():
  - Reference tenant: non-empty, at most top_n, active activities excluded.
  - Sorted by (priority bucket desc, score desc, catalogue order).
  - Personal brand leads; content marketing and SEO rank above trade shows.
  - Scores at or below min_score are dropped.
  - All-zero tenant: nothing clears the threshold.
  - Deterministic.

contextual_reasoning() / implementation_timeframe():
  - Exceptional-ROI and industry lines; timeframe phases.
"""

from __future__ import annotations

import pytest

from roi_advisor.analysis.maturity import assess_company_maturity
from roi_advisor.analysis.opportunity import calculate_opportunity_costs
from roi_advisor.models.inputs import CurrentCosts, CurrentKPIs, SalesActivities
from roi_advisor.recommendations.recommender import (
    FALLBACK_REASONING,
    contextual_reasoning,
    generate_fuzzy_logic_recommendations,
    implementation_timeframe,
)
from roi_advisor.taxonomy.activity_taxonomy import Activity
from roi_advisor.taxonomy.business_taxonomy import PriorityBucket


@pytest.fixture
def recommendations(tech_kpis, tech_costs, cold_calls_only):
    return generate_fuzzy_logic_recommendations(
        cold_calls_only, tech_kpis, tech_costs, "Technology", "51-200"
    )


@pytest.fixture
def all_recommendations(tech_kpis, tech_costs, cold_calls_only):
    return generate_fuzzy_logic_recommendations(
        cold_calls_only, tech_kpis, tech_costs, "Technology", "51-200", top_n=20
    )


class TestGenerateRecommendations:
    def test_non_empty_and_capped(self, recommendations):
        assert 0 < len(recommendations) <= 8

    def test_active_excluded(self, all_recommendations):
        assert Activity.COLD_CALLS not in {r.activity_key for r in all_recommendations}

    def test_sort_order(self, all_recommendations):
        keys = [
            (-r.priority.rank, -r.score, r.activity_key.catalogue_index)
            for r in all_recommendations
        ]
        assert keys == sorted(keys)

    def test_personal_brand_leads(self, recommendations):
        top = recommendations[0]
        assert top.activity_key == Activity.PERSONAL_BRAND
        assert top.priority == PriorityBucket.CRITICAL
        assert recommendations[1].activity_key == Activity.CONTENT_MARKETING

    def test_content_and_seo_above_trade_shows(self, all_recommendations):
        order = [r.activity_key for r in all_recommendations]
        assert Activity.TRADE_SHOWS in order
        assert order.index(Activity.CONTENT_MARKETING) < order.index(Activity.TRADE_SHOWS)
        assert order.index(Activity.SEO_CONTENT) < order.index(Activity.TRADE_SHOWS)

    def test_trade_shows_outside_default_top(self, recommendations):
        assert Activity.TRADE_SHOWS not in {r.activity_key for r in recommendations}

    def test_scores_and_confidence_in_range(self, all_recommendations):
        for rec in all_recommendations:
            assert 10 < rec.score <= 100
            assert 0 <= rec.confidence <= 100
            assert rec.priority == PriorityBucket.from_score(rec.score)

    def test_min_score_filters(self, tech_kpis, tech_costs, cold_calls_only):
        strict = generate_fuzzy_logic_recommendations(
            cold_calls_only, tech_kpis, tech_costs, "Technology", "51-200",
            top_n=20, min_score=70,
        )
        assert strict
        assert all(r.score > 70 for r in strict)

    def test_zero_tenant_gives_nothing(self):
        recs = generate_fuzzy_logic_recommendations(
            SalesActivities(), CurrentKPIs(), CurrentCosts(), "services", "1-10"
        )
        assert recs == []

    def test_reasoning_never_empty(self, all_recommendations):
        assert all(r.reasoning for r in all_recommendations)

    def test_content_plan_from_opportunity(self, all_recommendations):
        content = next(r for r in all_recommendations if r.activity_key == Activity.CONTENT_MARKETING)
        assert content.implementation_plan.phase == 3
        assert content.implementation_plan.timeframe == "Medium-term (4-8 months)"
        assert content.implementation_plan.expected_roi == pytest.approx(600.0)
        assert "Highly effective for technology companies" in content.reasoning

    def test_deterministic(self, tech_kpis, tech_costs, cold_calls_only):
        a = generate_fuzzy_logic_recommendations(cold_calls_only, tech_kpis, tech_costs, "Technology", "51-200")
        b = generate_fuzzy_logic_recommendations(cold_calls_only, tech_kpis, tech_costs, "Technology", "51-200")
        assert a == b

    def test_precomputed_opportunities_reused(self, tech_kpis, tech_costs, cold_calls_only):
        opportunities = calculate_opportunity_costs(
            cold_calls_only, tech_kpis, "Technology", "51-200"
        )
        recs = generate_fuzzy_logic_recommendations(
            cold_calls_only, tech_kpis, tech_costs, "Technology", "51-200",
            opportunity_costs=opportunities,
        )
        assert recs == generate_fuzzy_logic_recommendations(
            cold_calls_only, tech_kpis, tech_costs, "Technology", "51-200"
        )


class TestContextualReasoning:
    def test_exceptional_roi_line(self, tech_kpis, tech_costs, cold_calls_only):
        maturity = assess_company_maturity(tech_kpis, tech_costs, "51-200", "Technology")
        opportunities = {
            o.activity_key: o
            for o in calculate_opportunity_costs(cold_calls_only, tech_kpis, "Technology", "51-200")
        }
        lines = contextual_reasoning(
            Activity.CONTENT_MARKETING, maturity, tech_kpis, tech_costs,
            opportunities[Activity.CONTENT_MARKETING],
        )
        assert "Exceptional ROI potential of 600%" in lines

    def test_startup_visibility(self):
        kpis = CurrentKPIs(customer_acquisition_cost=400)
        maturity = assess_company_maturity(kpis, CurrentCosts(), "1-10", "services")
        lines = contextual_reasoning(Activity.CONTENT_MARKETING, maturity, kpis, CurrentCosts())
        assert "Critical for startup visibility and credibility" in lines
        assert "Essential for reducing high customer acquisition costs" in lines

    def test_fallback_constant(self):
        assert FALLBACK_REASONING == "Strategic alignment with business goals"


class TestImplementationTimeframe:
    @pytest.mark.parametrize("months, phase", [
        (1, 1), (2, 1), (3, 2), (4, 2), (6, 3), (8, 3), (12, 4),
    ])
    def test_phases(self, months, phase):
        assert implementation_timeframe(months)[0] == phase

    def test_labels(self):
        assert implementation_timeframe(1)[1] == "Immediate (1-2 months)"
        assert implementation_timeframe(12)[1] == "Long-term (8-12 months)"
