"""Tests for the logging infrastructure."""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import pytest

from query_service.core.settings import LoggingSettings
from query_service.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    get_lazy_logger,
    get_log_context,
    log_context,
    query_context,
    remove_from_log_context,
    set_log_context,
)
from query_service.infra.logging import config as logging_config


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("query_service.test", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogContext:
    def test_set_get_remove(self):
        set_log_context(request_id="abc", entity="customer")
        remove_from_log_context("entity")

        assert get_log_context() == {"request_id": "abc"}

        clear_log_context()
        assert get_log_context() == {}

    def test_filter_injects_context(self):
        set_log_context(request_id="abc")
        record = _record()

        assert ContextInjectingFilter().filter(record) is True
        assert record.request_id == "abc"

    def test_filter_keeps_existing_attributes(self):
        set_log_context(entity="customer")
        record = _record(entity="team")

        ContextInjectingFilter().filter(record)

        assert record.entity == "team"

    def test_scoped_context_restores_previous(self):
        set_log_context(request_id="abc")

        with pytest.raises(ValueError), log_context(entity="customer"):
            assert get_log_context() == {"request_id": "abc", "entity": "customer"}
            raise ValueError("inside")

        assert get_log_context() == {"request_id": "abc"}

    async def test_context_is_task_local(self):
        async def worker(name: str) -> dict:
            set_log_context(worker=name)
            await asyncio.sleep(0)
            return get_log_context()

        first, second = await asyncio.gather(worker("a"), worker("b"))

        assert first == {"worker": "a"}
        assert second == {"worker": "b"}


class TestJSONFormatter:
    def test_single_json_line(self):
        formatter = JSONFormatter(static={"service": "query-service"})

        line = formatter.format(_record("search %s", duration_ms=1.5))
        data = json.loads(line)

        assert "\n" not in line
        assert data["level"] == "INFO"
        assert data["logger"] == "query_service.test"
        assert data["message"] == "search %s"
        assert data["service"] == "query-service"
        assert data["duration_ms"] == 1.5
        assert data["timestamp"].endswith("Z")
        assert "trace_id" not in data

    def test_exception_stays_on_one_line(self):
        try:
            raise ValueError("bad\nvalue")
        except ValueError:
            record = logging.LogRecord(
                "x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        line = JSONFormatter().format(record)

        assert "\n" not in line
        assert "ValueError" in json.loads(line)["exception"]

    def test_unserializable_extra_uses_str(self):
        data = json.loads(JSONFormatter().format(_record(payload=object())))

        assert data["payload"].startswith("<object object")


class TestLazyLogger:
    def test_callables_skipped_when_disabled(self, caplog):
        calls = []
        logger = get_lazy_logger("query_service.lazy")
        caplog.set_level(logging.INFO, logger="query_service.lazy")

        logger.debug("pipeline: %s", lambda: calls.append(1) or "expensive")

        assert calls == []

    def test_callables_evaluated_when_enabled(self, caplog):
        logger = get_lazy_logger("query_service.lazy")
        caplog.set_level(logging.DEBUG, logger="query_service.lazy")

        logger.debug("pipeline: %s", lambda: "[{$match: {}}]")
        logger.debug(lambda: "whole message")

        messages = [record.getMessage() for record in caplog.records]
        assert "pipeline: [{$match: {}}]" in messages
        assert "whole message" in messages


class TestQueryContext:
    async def test_success_logs_info(self, caplog):
        caplog.set_level(logging.INFO, logger="query_service.queries")
        logger = logging.getLogger("query_service.queries")

        async with query_context("customerSearch", threshold=60, logger=logger, entity="customer") as ctx:
            ctx.set_result(total_count=3)

        (record,) = caplog.records
        assert record.levelno == logging.INFO
        assert "customerSearch executed in" in record.getMessage()
        assert record.entity == "customer"
        assert record.total_count == 3
        assert record.success is True
        assert not hasattr(record, "slow_query")

    async def test_slow_query_logs_warning(self, caplog):
        caplog.set_level(logging.INFO, logger="query_service.queries")
        logger = logging.getLogger("query_service.queries")

        async with query_context("customer", threshold=0.001, logger=logger):
            await asyncio.sleep(0.01)

        (record,) = caplog.records
        assert record.levelno == logging.WARNING
        assert "Slow query detected" in record.getMessage()
        assert record.slow_query is True
        assert record.threshold_ms == 1.0

    async def test_failure_logs_error_and_reraises(self, caplog):
        caplog.set_level(logging.INFO, logger="query_service.queries")
        logger = logging.getLogger("query_service.queries")

        with pytest.raises(RuntimeError, match="boom"):
            async with query_context("team", threshold=60, logger=logger):
                raise RuntimeError("boom")

        (record,) = caplog.records
        assert record.levelno == logging.ERROR
        assert record.success is False
        assert record.error_type == "RuntimeError"


class TestConfig:
    def test_json_config(self):
        config = logging_config.build_logging_config(
            log_level="debug",
            json_logs=True,
            console_enabled=True,
            include_context=True,
            service_name="svc",
        )

        assert config["root"] == {"level": "DEBUG", "handlers": ["console"]}
        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["handlers"]["console"]["filters"] == ["context"]
        assert config["formatters"]["json"]["static"] == {"service": "svc"}

    def test_text_config_without_console(self):
        config = logging_config.build_logging_config(
            log_level="INFO",
            json_logs=False,
            console_enabled=False,
            include_context=False,
            service_name="svc",
        )

        assert "text" in config["formatters"]
        assert config["handlers"] == {}
        assert config["filters"] == {}

    def test_setup_logging_runs_once(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging_config, "_LOGGING_INITIALIZED", False)
        monkeypatch.setattr(logging_config, "configure_logging", lambda **kw: calls.append(kw))

        settings = LoggingSettings(json_logs=False)
        logging_config.setup_logging(settings)
        logging_config.setup_logging(settings)
        logging_config.setup_logging(settings, force=True, log_level="DEBUG")

        assert len(calls) == 2
        assert calls[0]["json_logs"] is False
        assert calls[1]["log_level"] == "DEBUG"
