"""
Flat-file export helpers for spreadsheets and manual analysis.

All functions write to disk and return the written ``Path``.
They accept generic ``list[dict]`` data to stay decoupled from
specific report shapes.

CSV exports are flat (no nested dicts or lists) so they load directly in
Excel or a BI tool without any pre-processing step.

The ``flatten_*_for_export()`` adapters take the JSON form of an
``AnalysisReport`` (``report.model_dump(mode="json")``) and return one row
per recommendation, opportunity, task or projected month.  List-valued
fields (reasoning, risks, dependencies) are joined with ``" | "``.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

LIST_SEPARATOR = " | "

RECOMMENDATION_COLUMNS = [
    "run_slug", "generated_at", "rank", "activity_key", "activity", "score",
    "confidence", "priority", "phase", "timeframe", "expected_roi",
    "reasoning", "prerequisites", "risks",
]

OPPORTUNITY_COLUMNS = [
    "run_slug", "generated_at", "rank", "activity_key", "activity",
    "estimated_roi", "implementation_cost", "time_to_implement", "risk_level",
    "opportunity_cost", "priority", "missing_tools", "has_all_required_tools",
    "reasoning",
]

TASK_COLUMNS = [
    "run_slug", "horizon", "id", "title", "priority", "category",
    "estimated_time", "dependencies", "market_fit_alignment", "roi_impact",
    "on_critical_path",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file.

    Args:
        data: Dict or list to serialise.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def _join(values: list | None) -> str:
    return LIST_SEPARATOR.join(str(v) for v in values or [])


def flatten_recommendations_for_export(report_json: dict) -> list[dict]:
    """Flatten the ``recommendations`` list of a report into CSV rows.

    Each row carries the report metadata (``run_slug``, ``generated_at``),
    the 1-based ``rank``, the score fields and the implementation plan
    columns (``phase``, ``timeframe``, ``expected_roi``).

    Args:
        report_json: ``AnalysisReport`` as a JSON-mode dict.

    Returns:
        List of flat row dicts in ``RECOMMENDATION_COLUMNS`` order.
    """
    run_slug     = report_json.get("run_slug", "")
    generated_at = report_json.get("generated_at", "")

    rows: list[dict] = []
    for rank, rec in enumerate(report_json.get("recommendations", []), start=1):
        plan = rec.get("implementation_plan", {})
        rows.append(
            {
                "run_slug":      run_slug,
                "generated_at":  generated_at,
                "rank":          rank,
                "activity_key":  rec.get("activity_key", ""),
                "activity":      rec.get("activity", ""),
                "score":         rec.get("score", ""),
                "confidence":    rec.get("confidence", ""),
                "priority":      rec.get("priority", ""),
                "phase":         plan.get("phase", ""),
                "timeframe":     plan.get("timeframe", ""),
                "expected_roi":  plan.get("expected_roi", ""),
                "reasoning":     _join(rec.get("reasoning")),
                "prerequisites": _join(rec.get("prerequisites")),
                "risks":         _join(rec.get("risks")),
            }
        )
    return rows


def flatten_opportunities_for_export(report_json: dict) -> list[dict]:
    """Flatten the ``opportunity_costs`` list of a report into CSV rows.

    Missing tools are reported by name; ``has_all_required_tools`` is blank
    when the request carried no tool inventory.
    """
    run_slug     = report_json.get("run_slug", "")
    generated_at = report_json.get("generated_at", "")

    rows: list[dict] = []
    for rank, opp in enumerate(report_json.get("opportunity_costs", []), start=1):
        tools = opp.get("tool_validation") or {}
        rows.append(
            {
                "run_slug":               run_slug,
                "generated_at":           generated_at,
                "rank":                   rank,
                "activity_key":           opp.get("activity_key", ""),
                "activity":               opp.get("activity", ""),
                "estimated_roi":          opp.get("estimated_roi", ""),
                "implementation_cost":    opp.get("implementation_cost", ""),
                "time_to_implement":      opp.get("time_to_implement", ""),
                "risk_level":             opp.get("risk_level", ""),
                "opportunity_cost":       opp.get("opportunity_cost", ""),
                "priority":               opp.get("priority", ""),
                "missing_tools":          _join([t.get("name", "") for t in tools.get("missing_tools", [])]),
                "has_all_required_tools": tools.get("has_all_required_tools", ""),
                "reasoning":              opp.get("reasoning", ""),
            }
        )
    return rows


def flatten_plan_for_export(report_json: dict) -> list[dict]:
    """One row per next-steps task, tagged with its horizon bucket."""
    run_slug = report_json.get("run_slug", "")
    plan = report_json.get("next_steps", {})
    critical = set(plan.get("critical_path", []))

    rows: list[dict] = []
    for horizon in ("immediate_actions", "short_term_goals", "long_term_strategy"):
        for task in plan.get(horizon, []):
            rows.append(
                {
                    "run_slug":             run_slug,
                    "horizon":              horizon,
                    "id":                   task.get("id", ""),
                    "title":                task.get("title", ""),
                    "priority":             task.get("priority", ""),
                    "category":             task.get("category", ""),
                    "estimated_time":       task.get("estimated_time", ""),
                    "dependencies":         _join(task.get("dependencies")),
                    "market_fit_alignment": task.get("market_fit_alignment", ""),
                    "roi_impact":           task.get("roi_impact", ""),
                    "on_critical_path":     task.get("id") in critical,
                }
            )
    return rows
