"""
Shared pytest fixtures for the ROI advisor test suite.

Provides:
  - The reference Technology / 51-200 tenant: KPIs, costs, activities
    (only cold calls active) and the full ``AnalysisRequest``.
  - An empty tenant (every KPI and cost left at zero).
  - ``sample_input_file``: the reference tenant written as a camelCase
    input JSON document, for CLI tests.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from roi_advisor.models.inputs import (
    AnalysisRequest,
    AvailableTools,
    CurrentCosts,
    CurrentKPIs,
    Goals,
    SalesActivities,
)
from roi_advisor.taxonomy.activity_taxonomy import Activity

TECH_INDUSTRY = "Technology"
TECH_SIZE = "51-200"


# ── Reference tenant ──────────────────────────────────────────────────────────

@pytest.fixture
def tech_kpis() -> CurrentKPIs:
    """KPIs of a growing technology company; LTV:CAC is 16 (excellent band)."""
    return CurrentKPIs(
        monthly_revenue=80_000,
        customer_acquisition_cost=500,
        customer_lifetime_value=8_000,
        conversion_rate=6,
        monthly_leads=300,
        converted_customers=18,
        customer_lifetime_span=24,
        churn_rate=4,
        sales_cycle_length=60,
        average_order_value=1_500,
    )


@pytest.fixture
def tech_costs() -> CurrentCosts:
    """Monthly costs; marketing efficiency = 80 000 / 12 000 × 10 ≈ 66.7."""
    return CurrentCosts(
        marketing_budget=12_000,
        sales_team_cost=25_000,
        technology_costs=4_000,
        operational_costs=8_000,
    )


@pytest.fixture
def cold_calls_only() -> SalesActivities:
    return SalesActivities.from_active([Activity.COLD_CALLS])


@pytest.fixture
def basic_tools() -> AvailableTools:
    return AvailableTools(
        crm_system=True,
        email_marketing=True,
        web_analytics=True,
        video_conferencing=True,
    )


@pytest.fixture
def tech_request(tech_kpis, tech_costs, cold_calls_only, basic_tools) -> AnalysisRequest:
    return AnalysisRequest(
        industry=TECH_INDUSTRY,
        company_size=TECH_SIZE,
        kpis=tech_kpis,
        costs=tech_costs,
        goals=Goals(revenue_target=1_500_000, timeframe="12 months"),
        activities=cold_calls_only,
        available_tools=basic_tools,
    )


# ── Empty tenant ──────────────────────────────────────────────────────────────

@pytest.fixture
def empty_request() -> AnalysisRequest:
    """Startup-sized services tenant that supplied no numbers at all."""
    return AnalysisRequest(industry="services", company_size="1-10")


# ── Input documents ───────────────────────────────────────────────────────────

@pytest.fixture
def sample_input_file(tmp_path: Path) -> Path:
    """The reference tenant as a camelCase JSON input document."""
    payload = {
        "industry": TECH_INDUSTRY,
        "companySize": TECH_SIZE,
        "kpis": {
            "monthlyRevenue": 80000,
            "customerAcquisitionCost": 500,
            "customerLifetimeValue": 8000,
            "conversionRate": 6,
            "monthlyLeads": 300,
            "convertedCustomers": 18,
            "customerLifetimeSpan": 24,
            "churnRate": 4,
            "salesCycleLength": 60,
            "averageOrderValue": 1500,
        },
        "costs": {"marketingBudget": 12000, "salesTeamCost": 25000},
        "activities": {"coldCalls": True},
    }
    path = tmp_path / "tenant.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
