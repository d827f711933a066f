"""
Declarative rule base.

Each ``FuzzyRule`` is scoped to exactly one ``Activity`` through its
``applies_to`` field; the inference engine compares that field for equality
and never inspects the rule id.  Conditions form a weighted AND over input
variables, and every conclusion targets ``recommendation_score``.

Rules are plain data: adding a rule is a one-entry edit to ``RULE_BASE``.
``validate_rule_base()`` runs at import time against the standard registry
and raises ``ValueError`` on unknown variables or sets, duplicate ids,
non-positive weights and out-of-range confidences.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from roi_advisor.fuzzy.variables import (
    OUTPUT_VARIABLE,
    VARIABLE_REGISTRY,
    FuzzyVariable,
    VariableName as V,
)
from roi_advisor.taxonomy.activity_taxonomy import Activity


@dataclass(frozen=True)
class RuleCondition:
    variable: str
    set_name: str
    weight: float = 1.0


@dataclass(frozen=True)
class RuleConclusion:
    variable: str
    set_name: str


@dataclass(frozen=True)
class FuzzyRule:
    """One weighted condition → conclusion rule.

    Attributes:
        id:         Stable identifier, unique within a rule base.
        applies_to: Activity the rule scores.
        conditions: Weighted AND of (variable, set) memberships.
        conclusion: Output set the rule votes for.
        confidence: Certainty factor in [0, 1] scaling the rule's vote.
        reasoning:  Rationale shown to the user when the rule fires.
    """

    id: str
    applies_to: Activity
    conditions: tuple[RuleCondition, ...]
    conclusion: RuleConclusion
    confidence: float
    reasoning: str


def _rule(
    rule_id: str,
    applies_to: Activity,
    conditions: Iterable[tuple[str, str, float]],
    conclusion: str,
    confidence: float,
    reasoning: str,
) -> FuzzyRule:
    return FuzzyRule(
        id=rule_id,
        applies_to=applies_to,
        conditions=tuple(RuleCondition(var, name, w) for var, name, w in conditions),
        conclusion=RuleConclusion(OUTPUT_VARIABLE, conclusion),
        confidence=confidence,
        reasoning=reasoning,
    )


def validate_rule_base(
    rules: Iterable[FuzzyRule],
    variables: Mapping[str, FuzzyVariable] = VARIABLE_REGISTRY,
) -> None:
    """Check every rule against ``variables``.

    Raises:
        ValueError: On the first inconsistency found.
    """
    seen: set[str] = set()
    for rule in rules:
        if rule.id in seen:
            raise ValueError(f"Duplicate rule id '{rule.id}'.")
        seen.add(rule.id)
        if not rule.conditions:
            raise ValueError(f"Rule '{rule.id}' has no conditions.")
        if not 0.0 <= rule.confidence <= 1.0:
            raise ValueError(
                f"Rule '{rule.id}' confidence must be in [0, 1], got {rule.confidence}."
            )
        for cond in rule.conditions:
            if cond.weight <= 0:
                raise ValueError(
                    f"Rule '{rule.id}' condition on '{cond.variable}' has "
                    f"non-positive weight {cond.weight}."
                )
            if cond.variable == OUTPUT_VARIABLE:
                raise ValueError(f"Rule '{rule.id}' conditions on the output variable.")
            _require_set(rule.id, variables, cond.variable, cond.set_name)
        if rule.conclusion.variable != OUTPUT_VARIABLE:
            raise ValueError(
                f"Rule '{rule.id}' concludes into '{rule.conclusion.variable}', "
                f"expected '{OUTPUT_VARIABLE}'."
            )
        _require_set(rule.id, variables, rule.conclusion.variable, rule.conclusion.set_name)


def _require_set(
    rule_id: str,
    variables: Mapping[str, FuzzyVariable],
    variable: str,
    set_name: str,
) -> None:
    var = variables.get(variable)
    if var is None:
        raise ValueError(f"Rule '{rule_id}' references unknown variable '{variable}'.")
    if var.get_set(set_name) is None:
        raise ValueError(
            f"Rule '{rule_id}' references unknown set '{variable}.{set_name}' "
            f"(known: {', '.join(var.set_names)})."
        )


def rules_for(activity: Activity, rules: Iterable[FuzzyRule]) -> tuple[FuzzyRule, ...]:
    """Rules scoped to ``activity``, in rule-base order."""
    return tuple(r for r in rules if r.applies_to == activity)


def uncovered_activities(rules: Iterable[FuzzyRule]) -> list[Activity]:
    """Activities that no rule in ``rules`` applies to."""
    covered = {r.applies_to for r in rules}
    return [a for a in Activity if a not in covered]


# ── Standard rule base ────────────────────────────────────────────────────────

A = Activity
CONV = V.CONVERSION_RATE
CAC = V.CUSTOMER_ACQUISITION_COST
LTV = V.LTV_CAC_RATIO
MAT = V.COMPANY_MATURITY
EFF = V.MARKETING_EFFICIENCY

RULE_BASE: tuple[FuzzyRule, ...] = (
    # ── Content and organic ──
    _rule(
        "content_marketing_high_ltv", A.CONTENT_MARKETING,
        [(LTV, "good", 0.8), (MAT, "growth", 0.6), (CONV, "medium", 0.4)],
        "high_priority", 0.85,
        "Content marketing works well for companies with good LTV:CAC ratios and growing maturity",
    ),
    _rule(
        "content_marketing_excellent_ltv", A.CONTENT_MARKETING,
        [(LTV, "excellent", 0.8), (CONV, "medium", 0.4)],
        "high_priority", 0.85,
        "Strong unit economics can fund content that compounds over time",
    ),
    _rule(
        "content_marketing_startup", A.CONTENT_MARKETING,
        [(MAT, "startup", 0.9), (CAC, "high", 0.7)],
        "critical_priority", 0.9,
        "Startups with high CAC need content marketing for organic lead generation",
    ),
    _rule(
        "seo_long_term", A.SEO_CONTENT,
        [(LTV, "good", 0.8), (MAT, "growth", 0.6)],
        "high_priority", 0.8,
        "SEO provides long-term value for companies with good unit economics",
    ),
    _rule(
        "seo_compounding_returns", A.SEO_CONTENT,
        [(LTV, "excellent", 0.9), (MAT, "growth", 0.5)],
        "high_priority", 0.8,
        "Excellent customer economics justify the long payback of organic search",
    ),
    _rule(
        "personal_brand_startup", A.PERSONAL_BRAND,
        [(MAT, "startup", 0.9), (CAC, "high", 0.6)],
        "critical_priority", 0.9,
        "Personal branding is crucial for startups to build trust and reduce CAC",
    ),
    _rule(
        "personal_brand_mature", A.PERSONAL_BRAND,
        [(MAT, "mature", 0.7), (EFF, "average", 0.5)],
        "medium_priority", 0.6,
        "Mature companies can benefit from personal branding but it's not critical",
    ),
    # ── Paid acquisition ──
    _rule(
        "paid_ads_high_conversion", A.PAID_ADS,
        [(CONV, "high", 0.8), (LTV, "good", 0.7), (EFF, "good", 0.5)],
        "high_priority", 0.8,
        "High conversion rates and good LTV:CAC ratios make paid ads profitable",
    ),
    _rule(
        "paid_ads_poor_conversion", A.PAID_ADS,
        [(CONV, "low", 0.8), (CAC, "high", 0.6)],
        "not_recommended", 0.85,
        "Low conversion rates and high CAC make paid ads ineffective",
    ),
    _rule(
        "retargeting_warm_traffic", A.RETARGETING,
        [(CONV, "medium", 0.6), (EFF, "average", 0.5)],
        "medium_priority", 0.7,
        "Retargeting recovers visitors when the funnel already converts moderately",
    ),
    _rule(
        "influencer_efficient_funnel", A.INFLUENCER_MARKETING,
        [(EFF, "good", 0.6), (CONV, "high", 0.5)],
        "medium_priority", 0.65,
        "An efficient, high-converting funnel can absorb influencer-driven traffic",
    ),
    # ── Relationship and outbound ──
    _rule(
        "referral_high_satisfaction", A.REFERRAL_PROGRAM,
        [(LTV, "excellent", 0.9), (CONV, "high", 0.6)],
        "high_priority", 0.85,
        "High LTV and conversion rates indicate satisfied customers who will refer others",
    ),
    _rule(
        "social_selling_b2b", A.SOCIAL_SELLING,
        [(CAC, "medium", 0.7), (MAT, "growth", 0.6)],
        "medium_priority", 0.7,
        "Social selling works well for B2B companies with moderate CAC",
    ),
    _rule(
        "email_marketing_nurturing", A.TRANSACTIONAL_EMAILS,
        [(CONV, "low", 0.8), (LTV, "acceptable", 0.6)],
        "high_priority", 0.8,
        "Email marketing helps nurture leads and improve conversion rates",
    ),
    _rule(
        "personalized_follow_up_conversion_gap", A.PERSONALIZED_FOLLOW_UP,
        [(CONV, "low", 0.8), (LTV, "good", 0.5)],
        "high_priority", 0.8,
        "Tailored follow-up recovers leads lost to a weak conversion rate",
    ),
    _rule(
        "video_calls_remote_demos", A.VIDEO_CALLS,
        [(CONV, "low", 0.7), (EFF, "poor", 0.4)],
        "medium_priority", 0.7,
        "Video demos lift close rates cheaply when conversion and spend efficiency lag",
    ),
    _rule(
        "cold_calls_low_cac", A.COLD_CALLS,
        [(CAC, "low", 0.7), (MAT, "startup", 0.6)],
        "medium_priority", 0.7,
        "Outbound calling is affordable while acquisition costs are still low",
    ),
    _rule(
        "cold_calls_saturated", A.COLD_CALLS,
        [(CAC, "very_high", 0.8), (CONV, "very_low", 0.5)],
        "not_recommended", 0.75,
        "Very high CAC and very low conversion make cold outreach unprofitable",
    ),
    _rule(
        "physical_visits_high_value", A.PHYSICAL_VISITS,
        [(LTV, "excellent", 0.7), (CAC, "high", 0.6)],
        "high_priority", 0.75,
        "High-value accounts justify the cost of in-person visits",
    ),
    # ── Events and partnerships ──
    _rule(
        "webinars_growth_stage", A.WEBINARS_EVENTS,
        [(MAT, "growth", 0.7), (CONV, "medium", 0.5)],
        "medium_priority", 0.7,
        "Webinars scale education for growth-stage companies with a working funnel",
    ),
    _rule(
        "partnerships_mature", A.PARTNERSHIPS,
        [(MAT, "mature", 0.7), (LTV, "good", 0.6)],
        "high_priority", 0.75,
        "Established companies with healthy margins make attractive partners",
    ),
    _rule(
        "trade_shows_established", A.TRADE_SHOWS,
        [(MAT, "mature", 0.7), (CAC, "high", 0.6)],
        "high_priority", 0.75,
        "Trade shows pay off for established companies already selling high-ticket deals",
    ),
    _rule(
        "trade_shows_early_stage", A.TRADE_SHOWS,
        [(MAT, "startup", 0.8), (LTV, "poor", 0.5)],
        "not_recommended", 0.8,
        "Trade show costs outweigh returns for early-stage companies with thin margins",
    ),
    _rule(
        "direct_mail_enterprise", A.DIRECT_MAIL,
        [(MAT, "enterprise", 0.6), (CAC, "high", 0.5)],
        "low_priority", 0.6,
        "Direct mail can reach enterprise buyers but rarely leads the mix",
    ),
    _rule(
        "activations_enterprise", A.ACTIVATIONS,
        [(MAT, "enterprise", 0.8), (EFF, "excellent", 0.5)],
        "high_priority", 0.7,
        "Large, efficient marketing organisations can turn activations into brand lift",
    ),
    _rule(
        "activations_early_stage", A.ACTIVATIONS,
        [(MAT, "startup", 0.8), (EFF, "poor", 0.5)],
        "not_recommended", 0.75,
        "Brand activations are too costly for startups with inefficient marketing spend",
    ),
)

validate_rule_base(RULE_BASE)
