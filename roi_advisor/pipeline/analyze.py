"""
Full analysis run: composes every stage into one ``AnalysisReport``.

Flow
----
  1. Resolve industry and company size (blank → ``config.defaults``).
  2. ``calculate_roi_metrics`` fills missing KPIs and costs from benchmarks.
  3. Every later stage reads the *filled* KPIs and costs, so a sparse
     request still produces meaningful opportunity costs and scores:
       opportunity costs → fuzzy recommendations → next-steps plan.
  4. What-if scenarios, sensitivity and a 12-month projection run on the
     same filled state.
  5. Static industry and size advice plus benchmark confidence are attached.

Every stage is a pure function; the run only adds a slug, a timestamp and
log lines.  Stage logging happens inside ``analysis_run(run_slug)``, so
handlers from ``configure_logging`` tag each line with the run.  Exceptions
propagate to the caller.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import uuid4

from roi_advisor.analysis.opportunity import calculate_opportunity_costs
from roi_advisor.analysis.roi_metrics import calculate_roi_metrics
from roi_advisor.analysis.simulation import (
    data_completeness,
    generate_projections,
    run_scenarios,
    sensitivity_analysis,
)
from roi_advisor.benchmarks.industry import (
    calculate_benchmark_confidence,
    get_company_size_strategies,
    get_industry_recommendations,
)
from roi_advisor.config import AppConfig
from roi_advisor.models.inputs import AnalysisRequest
from roi_advisor.models.report import AnalysisReport
from roi_advisor.recommendations.planner import generate_next_steps_plan
from roi_advisor.recommendations.recommender import generate_fuzzy_logic_recommendations
from roi_advisor.utils.logging import analysis_run
from roi_advisor.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


def run_analysis(request: AnalysisRequest, config: Optional[AppConfig] = None) -> AnalysisReport:
    """Run the complete ROI analysis for one tenant.

    Args:
        request: Validated input record.
        config:  Application config; built-in defaults when ``None``.

    Returns:
        Frozen ``AnalysisReport``.
    """
    config = config or AppConfig()
    run_slug = str(uuid4())
    with analysis_run(run_slug):
        return _run_stages(request, config, run_slug)


def _run_stages(request: AnalysisRequest, config: AppConfig, run_slug: str) -> AnalysisReport:
    generated_at = utcnow()
    industry = request.industry or config.defaults.industry
    company_size = request.company_size or config.defaults.company_size
    logger.info(
        "Analysis starting | industry=%s size=%s run_slug=%s", industry, company_size, run_slug,
        extra={"run_slug": run_slug},
    )

    metrics = calculate_roi_metrics(
        request.kpis, request.costs, request.goals, industry, company_size
    )
    kpis, costs = metrics.filled_kpis, metrics.filled_costs

    opportunities = calculate_opportunity_costs(
        request.activities, kpis, industry, company_size, request.available_tools
    )
    recommendations = generate_fuzzy_logic_recommendations(
        request.activities, kpis, costs, industry, company_size,
        top_n=config.engine.max_recommendations,
        min_score=config.engine.min_recommendation_score,
        opportunity_costs=opportunities,
        activation_threshold=config.engine.activation_threshold,
    )
    plan = generate_next_steps_plan(
        request.activities, kpis, costs, industry, company_size,
        recommendations, request.available_tools,
        activation_task_count=config.engine.activation_task_count,
        immediate_cap=config.plan.immediate_cap,
        short_term_cap=config.plan.short_term_cap,
        short_term_min=config.plan.short_term_min,
        long_term_cap=config.plan.long_term_cap,
        critical_path_cap=config.plan.critical_path_cap,
    )

    report = AnalysisReport(
        run_slug=run_slug,
        generated_at=generated_at,
        industry=industry,
        company_size=company_size,
        roi_metrics=metrics,
        opportunity_costs=opportunities,
        recommendations=recommendations,
        next_steps=plan,
        scenarios=run_scenarios(kpis, costs),
        sensitivity=sensitivity_analysis(kpis, costs),
        projections=generate_projections(kpis, costs, start=generated_at.date()),
        benchmark_confidence=calculate_benchmark_confidence(
            industry, company_size, data_completeness(request.kpis, request.costs)
        ),
        industry_recommendations=get_industry_recommendations(industry),
        size_strategies=get_company_size_strategies(company_size),
    )
    logger.info(
        "Analysis completed | %d opportunities, %d recommendations, critical path=%s | run_slug=%s",
        len(opportunities), len(recommendations), plan.critical_path, run_slug,
        extra={"run_slug": run_slug},
    )
    return report
