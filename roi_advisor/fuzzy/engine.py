"""
Mamdani-style inference over the variable registry and rule base.

Algorithm for ``infer(inputs, activity)``
-----------------------------------------
1. Activation: for each rule whose ``applies_to`` equals ``activity``::

       strength = Σ(membership · weight) / Σ(weight)

   over the rule's conditions whose input is present.  A rule with no
   present inputs has strength 0.

2. Noise floor: rules with ``strength <= activation_threshold`` (0.1) are
   discarded.

3. Centroid defuzzification over the activated output sets.  For each set
   of the output variable::

       w(set) = max(strength · rule.confidence) over rules concluding into it
       output = Σ(centroid(set) · w(set)) / Σ w(set)

   where ``centroid(set)`` is the midpoint of the set's range.  No
   activated rule → output 0.

4. Confidence = mean(strength · rule.confidence) · 100.

5. Reasoning = each activated rule's rationale with its activation
   percentage, in rule-base order.

Everything here is a pure function of its arguments; the registry and
rule base are passed explicitly and default to the process-wide values.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from roi_advisor.fuzzy.rules import RULE_BASE, FuzzyRule
from roi_advisor.fuzzy.variables import (
    OUTPUT_VARIABLE,
    VARIABLE_REGISTRY,
    FuzzyVariable,
    VariableName,
)
from roi_advisor.taxonomy.activity_taxonomy import Activity
from roi_advisor.taxonomy.business_taxonomy import PriorityBucket
from roi_advisor.utils.numeric import clamp, clamp_confidence, safe_div

logger = logging.getLogger(__name__)

DEFAULT_ACTIVATION_THRESHOLD = 0.1


@dataclass(frozen=True)
class ActivatedRule:
    rule: FuzzyRule
    strength: float

    @property
    def weighted_strength(self) -> float:
        """Activation scaled by the rule's certainty factor."""
        return self.strength * self.rule.confidence


@dataclass(frozen=True)
class FuzzyInferenceResult:
    """Outcome of one ``infer`` call.

    Attributes:
        output_value:    Defuzzified score within the output variable's range.
        confidence:      Mean weighted activation, 0-100.
        activated_rules: Rules above the noise floor, in rule-base order.
        reasoning:       One annotated rationale per activated rule.
    """

    output_value: float
    confidence: float
    activated_rules: tuple[ActivatedRule, ...]
    reasoning: tuple[str, ...]

    @property
    def has_evidence(self) -> bool:
        return bool(self.activated_rules)


@dataclass(frozen=True)
class FuzzyScore:
    """Rounded, bucketed view of an inference result for one activity."""

    activity: Activity
    score: int
    confidence: int
    reasoning: tuple[str, ...]
    priority: PriorityBucket
    inputs: Mapping[str, float]
    result: FuzzyInferenceResult


# ── Core inference ────────────────────────────────────────────────────────────


def membership_degree(
    variables: Mapping[str, FuzzyVariable],
    variable: str,
    set_name: str,
    value: float,
) -> float:
    """Membership of ``value`` in ``variable.set_name``; 0 for unknown names."""
    var = variables.get(variable)
    if var is None:
        return 0.0
    fs = var.get_set(set_name)
    if fs is None:
        return 0.0
    return fs.degree(value)


def rule_activation(
    rule: FuzzyRule,
    inputs: Mapping[str, float],
    variables: Mapping[str, FuzzyVariable] = VARIABLE_REGISTRY,
) -> float:
    """Weighted-average membership across the rule's present conditions."""
    total_strength = 0.0
    total_weight = 0.0
    for cond in rule.conditions:
        value = inputs.get(cond.variable)
        if value is None or not math.isfinite(value):
            continue
        total_strength += membership_degree(variables, cond.variable, cond.set_name, value) * cond.weight
        total_weight += cond.weight
    return safe_div(total_strength, total_weight)


def defuzzify(
    activated: Sequence[ActivatedRule],
    variables: Mapping[str, FuzzyVariable] = VARIABLE_REGISTRY,
    output_variable: str = OUTPUT_VARIABLE,
) -> float:
    """Centroid of the activated output sets, clamped into the variable range."""
    variable = variables.get(output_variable)
    if variable is None or not activated:
        return 0.0

    numerator = 0.0
    denominator = 0.0
    for fs in variable.sets:
        level = max(
            (a.weighted_strength for a in activated if a.rule.conclusion.set_name == fs.name),
            default=0.0,
        )
        if level > 0:
            numerator += fs.centroid * level
            denominator += level

    lo, hi = variable.range
    return clamp(safe_div(numerator, denominator), lo, hi)


def infer(
    inputs: Mapping[str, float],
    activity: Activity,
    *,
    variables: Mapping[str, FuzzyVariable] = VARIABLE_REGISTRY,
    rules: Sequence[FuzzyRule] = RULE_BASE,
    activation_threshold: float = DEFAULT_ACTIVATION_THRESHOLD,
) -> FuzzyInferenceResult:
    """Evaluate the rules scoped to ``activity`` and defuzzify the result.

    Args:
        inputs:               Crisp value per input variable name.  Missing
                              variables are skipped, not treated as zero.
        activity:             Activity whose rules are evaluated.
        variables:            Variable registry.
        rules:                Rule base.
        activation_threshold: Noise floor; strengths at or below it are ignored.

    Returns:
        ``FuzzyInferenceResult``.  With no activated rule the result is
        score 0, confidence 0 and empty reasoning.
    """
    activated: list[ActivatedRule] = []
    for rule in rules:
        if rule.applies_to != activity:
            continue
        strength = rule_activation(rule, inputs, variables)
        if strength > activation_threshold:
            activated.append(ActivatedRule(rule, strength))

    if not activated:
        logger.debug("No rule activated for %s", activity)
        return FuzzyInferenceResult(0.0, 0.0, (), ())

    output_value = defuzzify(activated, variables)
    confidence = clamp_confidence(
        sum(a.weighted_strength for a in activated) / len(activated) * 100.0
    )
    reasoning = tuple(
        f"{a.rule.reasoning} (activation: {a.strength * 100:.1f}%)" for a in activated
    )
    logger.debug(
        "Inferred %s: %d rule(s) activated, output=%.2f confidence=%.1f",
        activity, len(activated), output_value, confidence,
    )
    return FuzzyInferenceResult(output_value, confidence, tuple(activated), reasoning)


# ── KPI → fuzzy input mapping ─────────────────────────────────────────────────

# Head-count band → maturity points; unknown bands and "1-10" score 0.
_SIZE_MATURITY_POINTS: dict[str, float] = {
    "1000+": 3.0,
    "501-1000": 2.5,
    "201-500": 2.0,
    "51-200": 1.5,
    "11-50": 1.0,
}

# Tier names resolve to the points of their smallest band.
_TIER_MATURITY_POINTS: dict[str, float] = {
    "large": 2.5,
    "medium": 1.5,
    "small": 1.0,
    "startup": 0.0,
}


def maturity_score(monthly_revenue: float, company_size: str) -> float:
    """Company maturity on a 0-10 scale from revenue and head-count band."""
    score = 0.0
    if monthly_revenue > 100_000:
        score += 3
    elif monthly_revenue > 50_000:
        score += 2
    elif monthly_revenue > 10_000:
        score += 1

    size_key = (company_size or "").strip().lower()
    score += _SIZE_MATURITY_POINTS.get(size_key, _TIER_MATURITY_POINTS.get(size_key, 0.0))
    return min(10.0, score)


def calculate_fuzzy_inputs(
    kpis,
    costs,
    company_size: str = "",
    variables: Mapping[str, FuzzyVariable] = VARIABLE_REGISTRY,
) -> dict[str, float]:
    """Map KPIs and costs to crisp inputs for every input variable.

    LTV:CAC is 0 when either side is 0; marketing efficiency
    (revenue / budget × 10, capped at 100) is a neutral 50 when the budget
    is 0.  Every value is finite and clamped into its variable's range.

    Args:
        kpis:         ``CurrentKPIs``.
        costs:        ``CurrentCosts``.
        company_size: Head-count band (``"51-200"``) or tier (``"medium"``).
        variables:    Registry used for range clamping.

    Returns:
        Dict keyed by input variable name.
    """
    ltv_cac = 0.0
    if kpis.customer_lifetime_value > 0 and kpis.customer_acquisition_cost > 0:
        ltv_cac = safe_div(kpis.customer_lifetime_value, kpis.customer_acquisition_cost)

    if costs.marketing_budget > 0:
        efficiency = min(100.0, safe_div(kpis.monthly_revenue, costs.marketing_budget) * 10)
    else:
        efficiency = 50.0

    raw = {
        VariableName.CONVERSION_RATE: kpis.conversion_rate or 0.0,
        VariableName.CUSTOMER_ACQUISITION_COST: kpis.customer_acquisition_cost or 0.0,
        VariableName.LTV_CAC_RATIO: ltv_cac,
        VariableName.COMPANY_MATURITY: maturity_score(kpis.monthly_revenue, company_size),
        VariableName.MARKETING_EFFICIENCY: efficiency,
    }
    inputs: dict[str, float] = {}
    for name, value in raw.items():
        var = variables.get(name)
        value = float(value) if math.isfinite(value) else 0.0
        inputs[str(name)] = var.clamp(value) if var is not None else value
    return inputs


def score_activity(
    activity: Activity,
    kpis,
    costs,
    company_size: str,
    *,
    variables: Mapping[str, FuzzyVariable] = VARIABLE_REGISTRY,
    rules: Sequence[FuzzyRule] = RULE_BASE,
    activation_threshold: float = DEFAULT_ACTIVATION_THRESHOLD,
    inputs: Optional[Mapping[str, float]] = None,
) -> FuzzyScore:
    """Infer one activity and round the result to an integer score.

    ``inputs`` may be supplied to reuse a mapping computed once for several
    activities; otherwise it is derived from ``kpis`` and ``costs``.
    """
    if inputs is None:
        inputs = calculate_fuzzy_inputs(kpis, costs, company_size, variables)
    result = infer(
        inputs, activity,
        variables=variables, rules=rules, activation_threshold=activation_threshold,
    )
    score = int(round(result.output_value))
    return FuzzyScore(
        activity=activity,
        score=score,
        confidence=int(round(result.confidence)),
        reasoning=result.reasoning,
        priority=PriorityBucket.from_score(score),
        inputs=dict(inputs),
        result=result,
    )
