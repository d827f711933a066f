"""
Tests for roi_advisor/pipeline/analyze.py.

What we test
------------
- run_analysis() composes every stage into one AnalysisReport.
- Blank industry / company size fall back to config.defaults.
- Engine config caps the recommendation list.
- A tenant with no numbers still yields finite, non-empty output.
- The report serialises to JSON; runs are deterministic apart from
  run_slug and generated_at.
- Pipeline log records carry the run slug.
"""

from __future__ import annotations

import json
import logging
import math

import pytest

from roi_advisor.analysis.simulation import SENSITIVITY_FACTORS
from roi_advisor.config import AppConfig, DefaultsConfig, EngineConfig
from roi_advisor.models.inputs import AnalysisRequest
from roi_advisor.pipeline.analyze import run_analysis
from roi_advisor.taxonomy.activity_taxonomy import Activity


class TestTechTenant:
    def test_report_shape(self, tech_request):
        report = run_analysis(tech_request)
        assert report.industry == "Technology"
        assert report.company_size == "51-200"
        assert len(report.opportunity_costs) == len(Activity) - 1
        assert 0 < len(report.recommendations) <= 8
        assert len(report.scenarios) == 5
        assert set(report.sensitivity) == set(SENSITIVITY_FACTORS)
        assert len(report.projections) == 12
        assert report.industry_recommendations
        assert report.size_strategies

    def test_active_activity_never_recommended(self, tech_request):
        report = run_analysis(tech_request)
        keys = {r.activity_key for r in report.recommendations}
        assert Activity.COLD_CALLS not in keys
        assert Activity.COLD_CALLS not in {o.activity_key for o in report.opportunity_costs}

    def test_top_recommendation(self, tech_request):
        report = run_analysis(tech_request)
        assert report.recommendations[0].activity_key == Activity.PERSONAL_BRAND

    def test_uses_own_data(self, tech_request):
        report = run_analysis(tech_request)
        assert report.roi_metrics.filled_kpis.monthly_revenue == 80_000

    def test_benchmark_confidence_bounds(self, tech_request):
        report = run_analysis(tech_request)
        assert 0.1 <= report.benchmark_confidence <= 0.95

    def test_generated_at_is_aware(self, tech_request):
        assert run_analysis(tech_request).generated_at.tzinfo is not None

    def test_json_dump(self, tech_request):
        payload = run_analysis(tech_request).model_dump(mode="json")
        text = json.dumps(payload)
        assert json.loads(text)["industry"] == "Technology"

    def test_deterministic_apart_from_run_metadata(self, tech_request):
        first = run_analysis(tech_request).model_dump(mode="json")
        second = run_analysis(tech_request).model_dump(mode="json")
        assert first["run_slug"] != second["run_slug"]
        for key in ("run_slug", "generated_at", "projections"):
            first.pop(key)
            second.pop(key)
        assert first == second

    def test_logs_completion(self, tech_request, caplog):
        with caplog.at_level(logging.INFO, logger="roi_advisor.pipeline.analyze"):
            report = run_analysis(tech_request)
        assert "Analysis completed" in caplog.text
        assert report.run_slug in caplog.text

    def test_log_records_carry_run_slug(self, tech_request, caplog):
        with caplog.at_level(logging.INFO, logger="roi_advisor.pipeline.analyze"):
            report = run_analysis(tech_request)
        slugs = {
            getattr(r, "run_slug", None)
            for r in caplog.records
            if r.name == "roi_advisor.pipeline.analyze"
        }
        assert slugs == {report.run_slug}


class TestDefaults:
    def test_blank_industry_and_size_use_config(self):
        config = AppConfig(defaults=DefaultsConfig(industry="retail", company_size="201-1000"))
        report = run_analysis(AnalysisRequest(), config)
        assert report.industry == "retail"
        assert report.company_size == "201-1000"

    def test_builtin_defaults(self):
        report = run_analysis(AnalysisRequest())
        assert report.industry == "services"
        assert report.company_size == "11-50"

    def test_max_recommendations_from_config(self, tech_request):
        config = AppConfig(engine=EngineConfig(max_recommendations=3))
        assert len(run_analysis(tech_request, config).recommendations) <= 3


class TestEmptyTenant:
    def test_every_kpi_filled(self, empty_request):
        report = run_analysis(empty_request)
        assert all(report.roi_metrics.is_using_defaults.values())
        assert report.roi_metrics.filled_kpis.monthly_revenue > 0

    def test_all_activities_are_opportunities(self, empty_request):
        report = run_analysis(empty_request)
        assert len(report.opportunity_costs) == len(Activity)

    def test_plan_consistent(self, empty_request):
        plan = run_analysis(empty_request).next_steps
        ids = {t.id for t in plan.all_tasks()}
        assert set(plan.critical_path) <= ids
        assert len(plan.immediate_actions) <= 3
        assert plan.expected_roi_increase >= 0

    @pytest.mark.parametrize("field", ["current_roi", "projected_roi", "opportunity_costs"])
    def test_metrics_finite(self, empty_request, field):
        metrics = run_analysis(empty_request).roi_metrics
        assert math.isfinite(getattr(metrics, field))

    def test_projection_and_scenarios_finite(self, empty_request):
        report = run_analysis(empty_request)
        for row in report.projections:
            assert math.isfinite(row.roi)
            assert math.isfinite(row.ltv_cac_ratio)
        for sim in report.scenarios:
            assert math.isfinite(sim.comparison.roi_change)
