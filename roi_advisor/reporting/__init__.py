"""
roi_advisor.reporting: Terminal formatting and flat-file export.

This package turns the JSON form of an ``AnalysisReport`` into ASCII
tables for the CLI and flat CSV/JSON files for spreadsheets.

It does NOT compute anything; all numbers come from the pipeline.

Modules:
  formatters : ASCII terminal table formatters for Typer CLI commands.
  export     : CSV/JSON flat-file export helpers.
"""
