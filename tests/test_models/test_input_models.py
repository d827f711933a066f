"""Tests for caller-supplied input models (KPIs, costs, goals, activities, tools)."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from roi_advisor.models.inputs import (
    AnalysisRequest,
    AvailableTools,
    CurrentCosts,
    CurrentKPIs,
    Goals,
    SalesActivities,
)
from roi_advisor.taxonomy.activity_taxonomy import Activity


class TestCurrentKPIs:
    def test_camel_case_aliases(self):
        kpis = CurrentKPIs.model_validate({"monthlyRevenue": 80_000, "conversionRate": 6})
        assert kpis.monthly_revenue == 80_000
        assert kpis.conversion_rate == 6
        assert kpis.churn_rate == 0.0

    def test_snake_case_accepted(self):
        kpis = CurrentKPIs.model_validate({"monthly_revenue": 5_000})
        assert kpis.monthly_revenue == 5_000

    def test_negative_raises(self):
        with pytest.raises(ValidationError, match="non-negative"):
            CurrentKPIs(monthly_leads=-1)

    @pytest.mark.parametrize("value", [math.nan, math.inf])
    def test_non_finite_raises(self, value):
        with pytest.raises(ValidationError):
            CurrentKPIs(conversion_rate=value)

    def test_frozen(self, tech_kpis):
        with pytest.raises(ValidationError):
            tech_kpis.monthly_revenue = 1

    def test_provided_fields(self):
        provided = CurrentKPIs(monthly_revenue=100).provided_fields()
        assert len(provided) == 10
        assert provided["monthly_revenue"] is True
        assert provided["churn_rate"] is False

    def test_ltv_cac_ratio(self, tech_kpis):
        assert tech_kpis.ltv_cac_ratio == pytest.approx(16.0)
        assert CurrentKPIs(customer_lifetime_value=1_000).ltv_cac_ratio == 0.0


class TestCurrentCosts:
    def test_total(self, tech_costs):
        assert tech_costs.total == pytest.approx(49_000)

    def test_empty_total_is_zero(self):
        assert CurrentCosts().total == 0.0

    def test_negative_raises(self):
        with pytest.raises(ValidationError):
            CurrentCosts(cogs=-5)

    def test_aliases(self):
        costs = CurrentCosts.model_validate({"marketingBudget": 100, "salesTeamCost": 200})
        assert costs.marketing_budget == 100
        assert costs.sales_team_cost == 200


class TestGoals:
    def test_defaults(self):
        goals = Goals()
        assert goals.revenue_target == 0.0
        assert goals.primary_objectives == []

    def test_negative_target_raises(self):
        with pytest.raises(ValidationError):
            Goals(revenue_target=-1)

    def test_alias(self):
        assert Goals.model_validate({"revenueTarget": 10}).revenue_target == 10


class TestSalesActivities:
    def test_camel_case_flags(self):
        activities = SalesActivities.model_validate({"coldCalls": True, "seoContent": True})
        assert activities.active() == [Activity.COLD_CALLS, Activity.SEO_CONTENT]
        assert activities.active_count == 2

    def test_from_active_accepts_keys(self):
        activities = SalesActivities.from_active([Activity.PAID_ADS, "seoContent", "retargeting"])
        assert activities.active() == [Activity.PAID_ADS, Activity.SEO_CONTENT, Activity.RETARGETING]

    def test_from_active_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown activity"):
            SalesActivities.from_active(["telepathy"])

    def test_inactive_in_catalogue_order(self, cold_calls_only):
        inactive = cold_calls_only.inactive()
        assert len(inactive) == 17
        assert inactive == sorted(inactive, key=lambda a: a.catalogue_index)
        assert Activity.COLD_CALLS not in inactive

    def test_one_flag_per_activity(self):
        assert set(SalesActivities.model_fields) == {a.value for a in Activity}


class TestAvailableTools:
    def test_unknown_keys_ignored(self):
        tools = AvailableTools.model_validate({"crmSystem": True, "teleporter": True})
        assert tools.has("crm_system")
        assert not tools.has("teleporter")

    def test_has_unknown_tool_is_false(self):
        assert AvailableTools().has("no_such_tool") is False


class TestAnalysisRequest:
    def test_full_document(self):
        request = AnalysisRequest.model_validate({
            "industry": "Technology",
            "companySize": "51-200",
            "kpis": {"monthlyRevenue": 1_000},
            "costs": {"marketingBudget": 200},
            "goals": {"revenueTarget": 50_000},
            "activities": {"coldCalls": True},
            "availableTools": {"crmSystem": True},
        })
        assert request.company_size == "51-200"
        assert request.kpis.monthly_revenue == 1_000
        assert request.activities.is_active(Activity.COLD_CALLS)
        assert request.available_tools is not None
        assert request.available_tools.crm_system

    def test_empty_document(self):
        request = AnalysisRequest.model_validate({})
        assert request.industry == ""
        assert request.available_tools is None
        assert request.activities.active_count == 0

    def test_nested_validation_error(self):
        with pytest.raises(ValidationError, match="monthly_leads"):
            AnalysisRequest.model_validate({"kpis": {"monthlyLeads": -10}})
