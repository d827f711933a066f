"""
Tests for roi_advisor/utils/logging.py.

What we test
------------
analysis_run(): sets the current run slug and restores it afterwards.
RunContextFilter: stamps run_slug / run_tag from the context; an explicit
  extra= slug wins; records are never dropped.
_JsonFormatter: run_slug key only inside a run; extra= keys kept.
configure_logging(): file handler writes JSON lines tagged with the run.
"""

from __future__ import annotations

import json
import logging

import pytest

from roi_advisor.config import LoggingConfig
from roi_advisor.utils.logging import (
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    RunContextFilter,
    _JsonFormatter,
    analysis_run,
    build_handlers,
    configure_logging,
    current_run_slug,
)

SLUG = "4f0c2a9e-1b7d-4c55-9d0e-0123456789ab"


def _record(msg: str = "hello %s", args: tuple = ("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord("roi_advisor.test", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestAnalysisRun:
    def test_sets_and_restores(self):
        assert current_run_slug() == ""
        with analysis_run(SLUG) as slug:
            assert slug == SLUG
            assert current_run_slug() == SLUG
        assert current_run_slug() == ""

    def test_nested_runs(self):
        with analysis_run("outer"):
            with analysis_run("inner"):
                assert current_run_slug() == "inner"
            assert current_run_slug() == "outer"

    def test_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with analysis_run(SLUG):
                raise RuntimeError("stage failed")
        assert current_run_slug() == ""


class TestRunContextFilter:
    def test_stamps_context_slug(self):
        record = _record()
        with analysis_run(SLUG):
            assert RunContextFilter().filter(record) is True
        assert record.run_slug == SLUG
        assert record.run_tag == " [run:4f0c2a9e]"

    def test_outside_run_is_blank(self):
        record = _record()
        assert RunContextFilter().filter(record) is True
        assert record.run_slug == ""
        assert record.run_tag == ""

    def test_explicit_extra_wins(self):
        record = _record(run_slug="explicit")
        with analysis_run(SLUG):
            RunContextFilter().filter(record)
        assert record.run_slug == "explicit"

    def test_text_format_carries_tag(self):
        record = _record()
        with analysis_run(SLUG):
            RunContextFilter().filter(record)
        line = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT).format(record)
        assert "roi_advisor.test [run:4f0c2a9e]: hello world" in line


class TestJsonFormatter:
    def test_run_slug_field(self):
        record = _record()
        with analysis_run(SLUG):
            RunContextFilter().filter(record)
        payload = json.loads(_JsonFormatter().format(record))
        assert payload["run_slug"] == SLUG
        assert payload["msg"] == "hello world"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "roi_advisor.test"
        assert "run_tag" not in payload

    def test_no_run_slug_outside_run(self):
        record = _record()
        RunContextFilter().filter(record)
        payload = json.loads(_JsonFormatter().format(record))
        assert "run_slug" not in payload

    def test_extra_keys_kept(self):
        payload = json.loads(_JsonFormatter().format(_record(activity="seo_content")))
        assert payload["activity"] == "seo_content"


class TestConfigureLogging:
    def test_build_handlers_console_only(self):
        handlers = build_handlers(LoggingConfig(level="WARNING"))
        assert len(handlers) == 1
        assert handlers[0].level == logging.WARNING
        assert any(isinstance(f, RunContextFilter) for f in handlers[0].filters)

    def test_json_file_lines_tagged_with_run(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        configure_logging(LoggingConfig(level="INFO", log_file=str(log_file), json_format=True))

        logger = logging.getLogger("roi_advisor.test")
        with analysis_run(SLUG):
            logger.info("inside")
        logger.info("outside")
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert [line["msg"] for line in lines] == ["inside", "outside"]
        assert lines[0]["run_slug"] == SLUG
        assert "run_slug" not in lines[1]
