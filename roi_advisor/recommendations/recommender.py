"""
Recommendation aggregator: fuzzy scores + opportunity costs → ranked
``FuzzyLogicRecommendation`` list.

For each activity the tenant does not run yet:

1. Infer a fuzzy score, confidence and rule rationale (``fuzzy.engine``).
2. Look up the matching ``OpportunityCost`` for ROI, cost and timing.
3. Append contextual reasoning lines (stage fit, digital maturity,
   conversion gap, unit economics, budget headroom, industry fit).
4. Build an implementation plan (phase and timeframe from months to
   implement) and stage-aware prerequisites and risks.

Recommendations scoring ``<= min_score`` are dropped.  The rest are sorted
by priority bucket, then score, then catalogue order, and truncated to
``top_n``.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from roi_advisor.analysis.maturity import assess_company_maturity
from roi_advisor.analysis.opportunity import calculate_opportunity_costs
from roi_advisor.catalog.playbook import (
    get_maturity_alignment,
    get_prerequisites,
    get_required_resources,
    get_risks,
)
from roi_advisor.fuzzy.engine import (
    DEFAULT_ACTIVATION_THRESHOLD,
    FuzzyScore,
    calculate_fuzzy_inputs,
    score_activity,
)
from roi_advisor.fuzzy.rules import RULE_BASE, FuzzyRule
from roi_advisor.fuzzy.variables import VARIABLE_REGISTRY, FuzzyVariable
from roi_advisor.models.inputs import CurrentCosts, CurrentKPIs, SalesActivities
from roi_advisor.models.outputs import (
    CompanyMaturity,
    FuzzyLogicRecommendation,
    ImplementationPlan,
    OpportunityCost,
)
from roi_advisor.taxonomy.activity_taxonomy import Activity
from roi_advisor.taxonomy.business_taxonomy import CompanyStage

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 8
DEFAULT_MIN_SCORE = 10
FALLBACK_REASONING = "Strategic alignment with business goals"

# (months upper bound, phase, label); anything longer is phase 4.
_TIMEFRAMES: tuple[tuple[int, int, str], ...] = (
    (2, 1, "Immediate (1-2 months)"),
    (4, 2, "Short-term (2-4 months)"),
    (8, 3, "Medium-term (4-8 months)"),
)
_LONG_TERM = (4, "Long-term (8-12 months)")

A = Activity
_STARTUP_VISIBILITY = frozenset({A.PERSONAL_BRAND, A.SOCIAL_SELLING, A.CONTENT_MARKETING})
_CAC_REDUCERS = frozenset({A.SEO_CONTENT, A.CONTENT_MARKETING, A.REFERRAL_PROGRAM})
_GROWTH_SCALERS = frozenset({A.PAID_ADS, A.PARTNERSHIPS, A.WEBINARS_EVENTS})
_DIGITAL_BUILDERS = frozenset({A.SEO_CONTENT, A.TRANSACTIONAL_EMAILS, A.RETARGETING})
_NURTURERS = frozenset({A.PERSONALIZED_FOLLOW_UP, A.VIDEO_CALLS, A.TRANSACTIONAL_EMAILS})
_UNIT_ECONOMICS = frozenset({A.REFERRAL_PROGRAM, A.CONTENT_MARKETING, A.PERSONAL_BRAND})
_TECH_FRIENDLY = frozenset({A.CONTENT_MARKETING, A.SEO_CONTENT, A.PERSONAL_BRAND})


def implementation_timeframe(months: int) -> tuple[int, str]:
    """Phase number and human timeframe for a months-to-implement figure."""
    for upper, phase, label in _TIMEFRAMES:
        if months <= upper:
            return phase, label
    return _LONG_TERM


def build_implementation_plan(activity: Activity, months: int, expected_roi: float) -> ImplementationPlan:
    phase, timeframe = implementation_timeframe(months)
    return ImplementationPlan(
        phase=phase,
        timeframe=timeframe,
        resources=get_required_resources(activity),
        expected_roi=expected_roi,
    )


def contextual_reasoning(
    activity: Activity,
    maturity: CompanyMaturity,
    kpis: CurrentKPIs,
    costs: CurrentCosts,
    opportunity: Optional[OpportunityCost] = None,
) -> list[str]:
    """Business-context lines explaining why ``activity`` suits this company."""
    lines: list[str] = []
    if opportunity is not None and opportunity.estimated_roi > 300:
        lines.append(f"Exceptional ROI potential of {opportunity.estimated_roi:.0f}%")

    if maturity.stage == CompanyStage.STARTUP:
        if activity in _STARTUP_VISIBILITY:
            lines.append("Critical for startup visibility and credibility")
        if kpis.customer_acquisition_cost > 200 and activity in _CAC_REDUCERS:
            lines.append("Essential for reducing high customer acquisition costs")
    if maturity.stage == CompanyStage.GROWTH and activity in _GROWTH_SCALERS:
        lines.append("Ideal for scaling growth-stage companies")
    if get_maturity_alignment(activity, maturity.stage) > 0.8:
        lines.append(f"Strong fit for {maturity.stage.value}-stage companies")

    if maturity.digital_maturity < 5 and activity in _DIGITAL_BUILDERS:
        lines.append("Will significantly improve digital presence and automation")
    if opportunity is not None and costs.marketing_budget > opportunity.implementation_cost * 2:
        lines.append("Well within current budget capacity")
    if kpis.conversion_rate < 3 and activity in _NURTURERS:
        lines.append("Addresses low conversion rate through better lead nurturing")
    if kpis.ltv_cac_ratio < 3 and activity in _UNIT_ECONOMICS:
        lines.append("Improves unit economics by reducing acquisition costs")
    if opportunity is not None and opportunity.time_to_implement <= 2:
        lines.append("Quick wins with fast implementation")

    industry = (maturity.industry_type or "").lower()
    if any(key in industry for key in ("technology", "software")) and activity in _TECH_FRIENDLY:
        lines.append("Highly effective for technology companies")
    return lines


def _build_recommendation(
    fuzzy: FuzzyScore,
    opportunity: Optional[OpportunityCost],
    maturity: CompanyMaturity,
    kpis: CurrentKPIs,
    costs: CurrentCosts,
    industry: str,
) -> FuzzyLogicRecommendation:
    activity = fuzzy.activity
    reasoning = [
        *fuzzy.reasoning,
        *contextual_reasoning(activity, maturity, kpis, costs, opportunity),
    ] or [FALLBACK_REASONING]

    if opportunity is not None:
        plan = build_implementation_plan(
            activity, opportunity.time_to_implement, opportunity.estimated_roi
        )
    else:
        plan = build_implementation_plan(activity, 2, fuzzy.score * 2.0)

    return FuzzyLogicRecommendation(
        activity=activity.display_name,
        activity_key=activity,
        score=fuzzy.score,
        confidence=fuzzy.confidence,
        priority=fuzzy.priority,
        reasoning=reasoning,
        implementation_plan=plan,
        prerequisites=get_prerequisites(activity, maturity.stage),
        risks=get_risks(activity, maturity.stage, industry),
    )


def generate_fuzzy_logic_recommendations(
    activities: SalesActivities,
    kpis: CurrentKPIs,
    costs: CurrentCosts,
    industry: str,
    company_size: str,
    *,
    top_n: int = DEFAULT_TOP_N,
    min_score: float = DEFAULT_MIN_SCORE,
    opportunity_costs: Optional[Sequence[OpportunityCost]] = None,
    variables: Mapping[str, FuzzyVariable] = VARIABLE_REGISTRY,
    rules: Sequence[FuzzyRule] = RULE_BASE,
    activation_threshold: float = DEFAULT_ACTIVATION_THRESHOLD,
) -> list[FuzzyLogicRecommendation]:
    """Score, explain and rank every activity the tenant does not run yet.

    Args:
        activities:           Current activity flags; active ones are skipped.
        kpis:                 Tenant KPIs.
        costs:                Tenant costs.
        industry:             Industry name.
        company_size:         Head-count band or size tier.
        top_n:                Maximum recommendations returned.
        min_score:            Scores at or below this are dropped.
        opportunity_costs:    Precomputed opportunity costs; computed here
                              when omitted.
        variables, rules:     Fuzzy registry and rule base.
        activation_threshold: Rule noise floor.

    Returns:
        At most ``top_n`` recommendations sorted by (priority bucket desc,
        score desc, catalogue order).
    """
    maturity = assess_company_maturity(kpis, costs, company_size, industry)
    if opportunity_costs is None:
        opportunity_costs = calculate_opportunity_costs(activities, kpis, industry, company_size)
    by_activity = {o.activity_key: o for o in opportunity_costs}
    inputs = calculate_fuzzy_inputs(kpis, costs, company_size, variables)

    recommendations: list[FuzzyLogicRecommendation] = []
    for activity in activities.inactive():
        fuzzy = score_activity(
            activity, kpis, costs, company_size,
            variables=variables,
            rules=rules,
            activation_threshold=activation_threshold,
            inputs=inputs,
        )
        if fuzzy.score <= min_score:
            continue
        recommendations.append(_build_recommendation(
            fuzzy, by_activity.get(activity), maturity, kpis, costs, industry
        ))

    recommendations.sort(
        key=lambda r: (-r.priority.rank, -r.score, r.activity_key.catalogue_index)
    )
    logger.info(
        "Scored %d inactive activities; %d above threshold, returning top %d",
        len(activities.inactive()), len(recommendations), min(top_n, len(recommendations)),
    )
    return recommendations[:top_n]
