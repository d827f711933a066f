"""
ASCII terminal formatters for CLI commands.

All formatters accept plain dicts / record lists (the JSON form of the
pipeline models) and return multi-line strings suitable for
``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Defaults banner
---------------
The analysis report starts by listing which inputs were synthesised from
industry benchmarks, so readers can tell at a glance how much of the
result rests on their own numbers::

  [OWN DATA] All KPIs and costs supplied
  [BENCHMARK DEFAULTS] 6 of 17 fields filled: conversion_rate, churn_rate, ...
"""

from __future__ import annotations

from typing import Mapping


def _money(value) -> str:
    return f"${value:,.0f}" if isinstance(value, (int, float)) else str(value)


def _pct(value, signed: bool = False) -> str:
    if not isinstance(value, (int, float)):
        return str(value)
    return f"{value:+.1f}%" if signed else f"{value:.1f}%"


# ── Defaults banner ───────────────────────────────────────────────────────────


def format_defaults_banner(is_using_defaults: Mapping[str, bool]) -> str:
    """Return a one-line indicator of which inputs came from benchmarks."""
    synthesised = [name for name, used in is_using_defaults.items() if used]
    if not synthesised:
        return "  [OWN DATA] All KPIs and costs supplied"
    return (
        f"  [BENCHMARK DEFAULTS] {len(synthesised)} of {len(is_using_defaults)} "
        f"fields filled: {', '.join(synthesised)}"
    )


# ── Analysis report ───────────────────────────────────────────────────────────


def format_roi_summary(metrics: dict) -> str:
    """Current vs projected ROI block."""
    improvement = metrics.get("projected_improvement", {})
    lines = [
        "",
        "=== ROI Metrics ===",
        format_defaults_banner(metrics.get("is_using_defaults", {})),
        "",
        f"  Current ROI:          {_pct(metrics.get('current_roi'))}",
        f"  Projected ROI:        {_pct(metrics.get('projected_roi'))}",
        f"  Potential increase:   {_pct(metrics.get('potential_increase'), signed=True)}",
        f"  Annual cost base:     {_money(metrics.get('total_current_costs'))}",
        f"  Projected revenue:    {_money(metrics.get('projected_revenue'))}",
        f"  Opportunity cost:     {_money(metrics.get('opportunity_costs'))}",
        "",
        "  Projected improvements:",
        f"    conversion rate  {_pct(improvement.get('conversion_rate_increase'), signed=True)}",
        f"    lead quality     {_pct(improvement.get('lead_quality_increase'), signed=True)}",
        f"    sales cycle      {_pct(-improvement.get('sales_cycle_reduction', 0.0), signed=True)}",
        f"    costs            {_pct(-improvement.get('cost_reduction', 0.0), signed=True)}",
    ]
    return "\n".join(lines)


def format_recommendations_table(recommendations: list[dict]) -> str:
    """Ranked recommendations, one row each, top reasoning line beneath.

    ::

        Rank  Activity                      Score  Conf  Priority  Timeframe
        --------------------------------------------------------------------
           1  SEO Content                      72    41  high      Long-term (8-12 months)
              - Low conversion rate makes SEO content a strong lever (63% match)
    """
    lines = ["", "=== Recommended Activities ==="]
    if not recommendations:
        lines.append("")
        lines.append("  (no activity scored above the recommendation threshold)")
        return "\n".join(lines)

    lines.append("")
    header = (
        f"  {'Rank':>4}  {'Activity':<28}  {'Score':>5}  {'Conf':>4}  "
        f"{'Priority':<8}  {'Timeframe':<26}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for rank, rec in enumerate(recommendations, start=1):
        plan = rec.get("implementation_plan", {})
        lines.append(
            f"  {rank:>4}  {str(rec.get('activity', ''))[:28]:<28}  "
            f"{rec.get('score', ''):>5}  {rec.get('confidence', ''):>4}  "
            f"{rec.get('priority', ''):<8}  {plan.get('timeframe', ''):<26}"
        )
        reasoning = rec.get("reasoning") or []
        if reasoning:
            lines.append(f"        - {reasoning[0]}")
    return "\n".join(lines)


def format_opportunity_table(opportunities: list[dict], top_n: int = 10) -> str:
    """Opportunity costs of inactive activities, highest priority first."""
    lines = ["", "=== Opportunity Costs ==="]
    shown = opportunities[:top_n]
    if not shown:
        lines.append("")
        lines.append("  (every activity is already active)")
        return "\n".join(lines)

    lines.append("")
    header = (
        f"  {'Activity':<28}  {'ROI':>8}  {'Cost':>10}  {'Months':>6}  "
        f"{'Risk':<6}  {'Forgone/yr':>12}  {'Priority':>8}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for opp in shown:
        lines.append(
            f"  {str(opp.get('activity', ''))[:28]:<28}  "
            f"{_pct(opp.get('estimated_roi')):>8}  "
            f"{_money(opp.get('implementation_cost')):>10}  "
            f"{opp.get('time_to_implement', ''):>6}  "
            f"{opp.get('risk_level', ''):<6}  "
            f"{_money(opp.get('opportunity_cost')):>12}  "
            f"{opp.get('priority', ''):>8}"
        )
        tools = opp.get("tool_validation") or {}
        missing = [t.get("name", "") for t in tools.get("missing_tools", [])]
        if missing:
            lines.append(f"        missing tools: {', '.join(missing)}")

    if len(opportunities) > top_n:
        lines.append(f"  ... showing {top_n} of {len(opportunities)} (use --csv for the full list)")
    return "\n".join(lines)


def format_next_steps(plan: dict) -> str:
    """Company profile, the three task horizons and the critical path."""
    profile = plan.get("company_profile", {})
    critical = plan.get("critical_path", [])
    lines = [
        "",
        "=== Next Steps ===",
        f"  Stage:            {profile.get('stage', '')}",
        f"  Digital maturity: {profile.get('digital_maturity', '')}/10",
        f"  Market fit:       {profile.get('market_fit_score', '')}/10",
        f"  Readiness:        {profile.get('readiness_level', '')}",
    ]
    sections = (
        ("Immediate actions", plan.get("immediate_actions", [])),
        ("Short-term goals", plan.get("short_term_goals", [])),
        ("Long-term strategy", plan.get("long_term_strategy", [])),
    )
    for title, tasks in sections:
        lines.append("")
        lines.append(f"  [{title.upper()}]")
        if not tasks:
            lines.append("    (none)")
            continue
        for task in tasks:
            marker = "*" if task.get("id") in critical else " "
            lines.append(
                f"   {marker} {str(task.get('title', ''))[:44]:<44}  "
                f"{task.get('priority', ''):<8}  {task.get('estimated_time', '')}"
            )

    lines.append("")
    lines.append(f"  Critical path:         {' -> '.join(critical) or '(none)'}")
    lines.append(f"  Total estimated time:  {plan.get('total_estimated_time', '')}")
    lines.append(f"  Expected ROI increase: {_pct(plan.get('expected_roi_increase'), signed=True)}")
    return "\n".join(lines)


def format_scenarios_table(scenarios: list[dict]) -> str:
    """What-if scenarios, best ROI change first."""
    lines = ["", "=== What-if Scenarios ==="]
    if not scenarios:
        lines.append("  (no scenarios)")
        return "\n".join(lines)

    lines.append("")
    header = (
        f"  {'Scenario':<28}  {'Revenue':>9}  {'Costs':>9}  {'ROI pts':>9}  "
        f"{'Conf':>5}  {'Risk':<6}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for sim in scenarios:
        comp = sim.get("comparison", {})
        conf = sim.get("confidence", 0.0)
        lines.append(
            f"  {str(sim.get('scenario', {}).get('name', ''))[:28]:<28}  "
            f"{_pct(comp.get('revenue_change'), signed=True):>9}  "
            f"{_pct(comp.get('cost_change'), signed=True):>9}  "
            f"{_pct(comp.get('roi_change'), signed=True):>9}  "
            f"{conf:>5.2f}  {sim.get('risk_level', ''):<6}"
        )
    return "\n".join(lines)


def format_analysis_report(report: dict) -> str:
    """Full terminal report for ``roi-advisor analyze``.

    Args:
        report: ``AnalysisReport`` as a JSON-mode dict.

    Returns:
        Multi-line string.
    """
    lines = [
        "",
        "=== ROI Advisor Analysis ===",
        f"  Industry:      {report.get('industry', '')}",
        f"  Company size:  {report.get('company_size', '')}",
        f"  Generated at:  {report.get('generated_at', '')}",
        f"  Run:           {report.get('run_slug', '')}",
        f"  Benchmark confidence: {report.get('benchmark_confidence', 0.0):.0%}",
    ]
    blocks = [
        "\n".join(lines),
        format_roi_summary(report.get("roi_metrics", {})),
        format_recommendations_table(report.get("recommendations", [])),
        format_opportunity_table(report.get("opportunity_costs", [])),
        format_next_steps(report.get("next_steps", {})),
        format_scenarios_table(report.get("scenarios", [])),
    ]

    advice = [*report.get("industry_recommendations", []), *report.get("size_strategies", [])]
    if advice:
        blocks.append("\n".join(["", "=== Industry & Size Advice ===", *(f"  - {a}" for a in advice)]))
    return "\n".join(blocks)


# ── Catalogue, benchmarks, explain ────────────────────────────────────────────


def format_activity_catalogue(rows: list[dict]) -> str:
    """Activity catalogue with untuned baselines.

    Each row needs ``key``, ``name``, ``base_roi``, ``base_cost``,
    ``months_to_implement`` and ``risk``.
    """
    lines = ["", "=== Activity Catalogue ===", ""]
    header = (
        f"  {'Key':<24}  {'Activity':<28}  {'Base ROI':>8}  {'Cost':>9}  "
        f"{'Months':>6}  {'Risk':<6}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for row in rows:
        lines.append(
            f"  {row.get('key', ''):<24}  {str(row.get('name', ''))[:28]:<28}  "
            f"{_pct(row.get('base_roi')):>8}  {_money(row.get('base_cost')):>9}  "
            f"{row.get('months_to_implement', ''):>6}  {row.get('risk', ''):<6}"
        )
    lines.append("")
    lines.append(f"  {len(rows)} activities")
    return "\n".join(lines)


def format_benchmark_table(
    industry: str,
    company_size: str,
    tier: str,
    metrics: Mapping[str, Mapping[str, float]],
    is_fallback: bool = False,
) -> str:
    """Benchmark row (min/avg/max/top10 per metric) for one industry and size."""
    lines = [
        "",
        "=== Industry Benchmarks ===",
        f"  Industry:      {industry}",
        f"  Company size:  {company_size} ({tier or 'unknown tier'})",
    ]
    if is_fallback:
        lines.append("  [FALLBACK] No benchmark row for this combination; using generic values.")
    lines.append("")
    header = f"  {'Metric':<28}  {'Min':>9}  {'Avg':>9}  {'Max':>9}  {'Top 10%':>9}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for metric, stats in metrics.items():
        lines.append(
            f"  {metric:<28}  {stats.get('min', 0):>9,.1f}  {stats.get('avg', 0):>9,.1f}  "
            f"{stats.get('max', 0):>9,.1f}  {stats.get('top10', 0):>9,.1f}"
        )
    return "\n".join(lines)


def format_explain(
    activity: str,
    inputs: Mapping[str, float],
    activated_rules: list[dict],
    score: int,
    confidence: int,
    priority: str,
) -> str:
    """Crisp inputs, activated rules and the defuzzified score for one activity.

    Each activated rule dict needs ``id``, ``strength``, ``conclusion`` and
    ``reasoning``.
    """
    lines = ["", f"=== Fuzzy Explanation: {activity} ===", "", "  Inputs:"]
    for name, value in inputs.items():
        lines.append(f"    {name:<28}  {value:>10.2f}")

    lines.append("")
    lines.append("  Activated rules:")
    if not activated_rules:
        lines.append("    (no rule fired above the activation threshold)")
    for rule in activated_rules:
        lines.append(
            f"    {rule.get('id', ''):<32}  {rule.get('strength', 0.0):>5.0%}  "
            f"-> {rule.get('conclusion', '')}"
        )
        lines.append(f"      {rule.get('reasoning', '')}")

    lines.append("")
    lines.append(f"  Score:      {score}")
    lines.append(f"  Confidence: {confidence}")
    lines.append(f"  Priority:   {priority}")
    return "\n".join(lines)
