"""
Tests for roi_advisor/catalog/activities.py and roi_advisor/catalog/playbook.py.

What we test
------------
- Baselines cover all eighteen activities with positive economics.
- Industry and size multipliers default to 1.0 for unlisted pairs.
- Prerequisites and risks gain stage- and industry-specific entries.
- Maturity alignment defaults to a neutral 0.5.
"""

from __future__ import annotations

import pytest

from roi_advisor.catalog.activities import (
    ACTIVITY_BASELINES,
    get_company_size_multiplier,
    get_industry_multiplier,
)
from roi_advisor.catalog.playbook import (
    PREREQUISITES,
    RESOURCES,
    RISKS,
    get_maturity_alignment,
    get_prerequisites,
    get_required_resources,
    get_risks,
)
from roi_advisor.taxonomy.activity_taxonomy import Activity
from roi_advisor.taxonomy.business_taxonomy import CompanyStage


class TestActivityBaselines:
    def test_all_activities(self):
        assert set(ACTIVITY_BASELINES) == set(Activity)

    def test_positive_economics(self):
        for baseline in ACTIVITY_BASELINES.values():
            assert baseline.base_roi > 0
            assert baseline.base_cost > 0
            assert 1 <= baseline.months_to_implement <= 12

    def test_name_is_display_name(self):
        assert ACTIVITY_BASELINES[Activity.PAID_ADS].name == "Paid Advertising"


class TestMultipliers:
    def test_industry_case_insensitive(self):
        assert get_industry_multiplier(" Technology ", Activity.CONTENT_MARKETING) == pytest.approx(1.5)

    def test_unlisted_industry_pair(self):
        assert get_industry_multiplier("technology", Activity.DIRECT_MAIL) == 1.0
        assert get_industry_multiplier("aerospace", Activity.PAID_ADS) == 1.0

    @pytest.mark.parametrize("size, activity, expected", [
        ("1-10", Activity.PERSONAL_BRAND, 1.4),
        ("startup", Activity.PERSONAL_BRAND, 1.4),
        ("51-200", Activity.PAID_ADS, 1.3),
        ("1000+", Activity.ACTIVATIONS, 1.4),
        ("51-200", Activity.CONTENT_MARKETING, 1.0),
        ("unknown", Activity.PAID_ADS, 1.0),
    ])
    def test_size_multiplier(self, size, activity, expected):
        assert get_company_size_multiplier(size, activity) == pytest.approx(expected)


class TestPlaybook:
    def test_tables_cover_all_activities(self):
        for table in (PREREQUISITES, RISKS, RESOURCES):
            assert set(table) == set(Activity)

    def test_startup_prerequisite(self):
        prereqs = get_prerequisites(Activity.COLD_CALLS, CompanyStage.STARTUP)
        assert prereqs == ["Sales team training", "CRM system", "Founder time allocation"]

    def test_growth_prerequisites_unchanged(self):
        assert get_prerequisites(Activity.COLD_CALLS, CompanyStage.GROWTH) == [
            "Sales team training", "CRM system",
        ]

    def test_startup_budget_risk(self):
        risks = get_risks(Activity.TRADE_SHOWS, CompanyStage.STARTUP, "services")
        assert "Budget strain for an early-stage company" in risks
        assert "Budget strain for an early-stage company" not in get_risks(
            Activity.SEO_CONTENT, CompanyStage.STARTUP, "services"
        )

    @pytest.mark.parametrize("industry", ["finance", "Healthcare"])
    def test_regulated_industry_risk(self, industry):
        risks = get_risks(Activity.COLD_CALLS, CompanyStage.GROWTH, industry)
        assert risks[-1] == "Industry compliance review required"

    def test_resources(self):
        assert get_required_resources(Activity.PAID_ADS) == ["Ad budget", "PPC specialist", "Landing pages"]

    def test_maturity_alignment(self):
        assert get_maturity_alignment(Activity.PERSONAL_BRAND, CompanyStage.STARTUP) == pytest.approx(0.9)
        assert get_maturity_alignment(Activity.DIRECT_MAIL, CompanyStage.STARTUP) == 0.5
