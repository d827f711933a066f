"""
ROI Advisor CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (analysis run, single-activity explanation, lookup).
  5. Report result to stdout.

Install and run::

    pip install -e .
    roi-advisor --help
    roi-advisor validate-config
    roi-advisor analyze samples/technology_51_200.json --csv
    roi-advisor explain seo_content samples/technology_51_200.json
    roi-advisor list-activities
    roi-advisor benchmarks technology --company-size 51-200
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="roi-advisor",
    help="ROI Advisor: fuzzy marketing-activity recommendations from business KPIs.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from roi_advisor.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from roi_advisor.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_request_or_exit(input_file: str):
    """Parse and validate an input JSON document into an ``AnalysisRequest``."""
    from pydantic import ValidationError

    from roi_advisor.models.inputs import AnalysisRequest

    input_path = Path(input_file)
    if not input_path.exists():
        typer.echo(f"[ERROR] Input file not found: {input_path}", err=True)
        raise typer.Exit(code=1)

    try:
        with open(input_path, encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        typer.echo(f"[ERROR] JSON parse error: {exc}", err=True)
        raise typer.Exit(code=1)

    if not isinstance(raw, dict):
        typer.echo("[ERROR] Input file must contain a JSON object.", err=True)
        raise typer.Exit(code=1)

    try:
        return AnalysisRequest.model_validate(raw)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Input validation failed:\n{exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Activation threshold: {config.engine.activation_threshold}")
    typer.echo(f"  Min rec. score:       {config.engine.min_recommendation_score}")
    typer.echo(f"  Max recommendations:  {config.engine.max_recommendations}")
    typer.echo(f"  Default industry:     {config.defaults.industry}")
    typer.echo(f"  Default size:         {config.defaults.company_size}")
    typer.echo(f"  Output dir:           {config.output.output_dir}")
    typer.echo(f"  Log level:            {config.logging.level}")
    typer.echo(f"  Debug mode:           {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("analyze")
def analyze(
    input_file: str = typer.Argument(
        ...,
        help="JSON document with industry, company_size, kpis, costs, goals, activities.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Override output directory from config.",
    ),
    write_csv: bool = typer.Option(
        False,
        "--csv",
        help="Also write recommendations, opportunity costs and plan tasks as CSV.",
    ),
    json_only: bool = typer.Option(
        False,
        "--json-only",
        help="Print the report JSON to stdout instead of the ASCII report.",
    ),
) -> None:
    """Run the full ROI analysis for one input document.

    Writes ``analysis_<run_slug>.json`` to the output directory and prints
    an ASCII summary (ROI metrics, recommendations, opportunity costs,
    next-steps plan, what-if scenarios).
    """
    from roi_advisor.pipeline.analyze import run_analysis
    from roi_advisor.reporting.export import (
        OPPORTUNITY_COLUMNS,
        RECOMMENDATION_COLUMNS,
        TASK_COLUMNS,
        export_to_csv,
        export_to_json,
        flatten_opportunities_for_export,
        flatten_plan_for_export,
        flatten_recommendations_for_export,
    )
    from roi_advisor.reporting.formatters import format_analysis_report

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    request = _load_request_or_exit(input_file)

    try:
        report = run_analysis(request, config)
    except ValueError as exc:
        typer.echo(f"[ERROR] Analysis failed: {exc}", err=True)
        raise typer.Exit(code=1)

    report_json = report.model_dump(mode="json")
    out_dir = Path(output_dir or config.output.output_dir)
    written = [export_to_json(report_json, out_dir / f"analysis_{report.run_slug}.json")]

    if write_csv:
        written.append(export_to_csv(
            flatten_recommendations_for_export(report_json),
            out_dir / f"recommendations_{report.run_slug}.csv",
            RECOMMENDATION_COLUMNS,
        ))
        written.append(export_to_csv(
            flatten_opportunities_for_export(report_json),
            out_dir / f"opportunities_{report.run_slug}.csv",
            OPPORTUNITY_COLUMNS,
        ))
        written.append(export_to_csv(
            flatten_plan_for_export(report_json),
            out_dir / f"plan_{report.run_slug}.csv",
            TASK_COLUMNS,
        ))

    if json_only:
        typer.echo(json.dumps(report_json, indent=2, default=str))
        return

    typer.echo(format_analysis_report(report_json))
    typer.echo("")
    for path in written:
        typer.echo(f"  Written: {path}")
    typer.echo("[OK] Analysis complete.")


@app.command("explain")
def explain(
    activity_key: str = typer.Argument(
        ...,
        help="Activity key, snake_case or camelCase (e.g. seo_content, seoContent).",
    ),
    input_file: str = typer.Argument(..., help="Input JSON document."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Show the fuzzy inputs, activated rules and score for one activity.

    Scores against the benchmark-filled KPIs and costs, exactly as
    ``analyze`` does.
    """
    from roi_advisor.analysis.roi_metrics import calculate_roi_metrics
    from roi_advisor.fuzzy.engine import score_activity
    from roi_advisor.reporting.formatters import format_explain
    from roi_advisor.taxonomy.activity_taxonomy import Activity

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        activity = Activity.from_key(activity_key)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        typer.echo("  Run 'roi-advisor list-activities' for valid keys.", err=True)
        raise typer.Exit(code=1)

    request = _load_request_or_exit(input_file)
    industry = request.industry or config.defaults.industry
    company_size = request.company_size or config.defaults.company_size

    metrics = calculate_roi_metrics(
        request.kpis, request.costs, request.goals, industry, company_size
    )
    fuzzy = score_activity(
        activity, metrics.filled_kpis, metrics.filled_costs, company_size,
        activation_threshold=config.engine.activation_threshold,
    )
    activated = [
        {
            "id":         a.rule.id,
            "strength":   a.strength,
            "conclusion": a.rule.conclusion.set_name,
            "reasoning":  a.rule.reasoning,
        }
        for a in fuzzy.result.activated_rules
    ]
    typer.echo(format_explain(
        activity.display_name,
        fuzzy.inputs,
        activated,
        fuzzy.score,
        fuzzy.confidence,
        fuzzy.priority.value,
    ))
    if request.activities.is_active(activity):
        typer.echo("")
        typer.echo("  Note: this activity is already active and is excluded from recommendations.")


@app.command("list-activities")
def list_activities() -> None:
    """Print the activity catalogue with untuned ROI, cost, timing and risk."""
    from roi_advisor.catalog.activities import ACTIVITY_BASELINES
    from roi_advisor.reporting.formatters import format_activity_catalogue

    rows = [
        {
            "key":                 b.activity.value,
            "name":                b.name,
            "base_roi":            b.base_roi,
            "base_cost":           b.base_cost,
            "months_to_implement": b.months_to_implement,
            "risk":                b.risk.value,
        }
        for b in ACTIVITY_BASELINES.values()
    ]
    typer.echo(format_activity_catalogue(rows))


@app.command("benchmarks")
def benchmarks(
    industry: str = typer.Argument(..., help="Industry name (e.g. technology)."),
    company_size: str = typer.Option(
        "11-50",
        "--company-size",
        help="Head-count band (1-10, 11-50, 51-200, ...) or tier (startup, small, medium, large).",
    ),
) -> None:
    """Print the benchmark row used for an industry and company size."""
    from roi_advisor.benchmarks.industry import (
        FALLBACK_METRICS,
        available_industries,
        get_benchmark,
        size_tier,
    )
    from roi_advisor.reporting.formatters import format_benchmark_table

    benchmark = get_benchmark(industry, company_size)
    metrics = benchmark.metrics if benchmark is not None else FALLBACK_METRICS
    tier = size_tier(company_size)
    rows = {
        str(metric): {"min": r.min, "avg": r.avg, "max": r.max, "top10": r.top10}
        for metric, r in metrics.items()
    }
    typer.echo(format_benchmark_table(
        industry,
        company_size,
        str(tier) if tier is not None else "",
        rows,
        is_fallback=benchmark is None,
    ))
    if benchmark is None:
        typer.echo(f"  Known industries: {', '.join(available_industries())}")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
