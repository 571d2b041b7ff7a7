"""Tests for centralized logging."""

import json
import logging
import sys
from contextlib import asynccontextmanager

import pytest

from railway_mcp.infrastructure.logging import (
    JSONFormatter,
    configure_logging,
    resolve_level,
)
from railway_mcp.infrastructure.mcp_servers.railway_server import MCPServer


class TestConfigureLogging:
    def test_default_level(self):
        configure_logging(level=logging.INFO)
        logger = logging.getLogger("railway_mcp")
        assert logger.level == logging.INFO

    def test_level_by_name(self):
        configure_logging(level="debug")
        logger = logging.getLogger("railway_mcp")
        assert logger.level == logging.DEBUG

    def test_json_format(self):
        configure_logging(level=logging.INFO, json_format=True)
        logger = logging.getLogger("railway_mcp")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_human_format(self):
        configure_logging(level=logging.INFO, json_format=False)
        logger = logging.getLogger("railway_mcp")
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_replaces_handlers(self):
        configure_logging(level=logging.INFO)
        configure_logging(level=logging.DEBUG)
        logger = logging.getLogger("railway_mcp")
        assert len(logger.handlers) == 1

    def test_logs_to_stderr(self):
        configure_logging(level=logging.INFO)
        handler = logging.getLogger("railway_mcp").handlers[0]
        assert handler.stream is sys.stderr

    def test_returns_installed_handler(self):
        handler = configure_logging(level=logging.INFO)
        assert logging.getLogger("railway_mcp").handlers == [handler]


class TestResolveLevel:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (logging.ERROR, logging.ERROR),
            ("INFO", logging.INFO),
            ("warning", logging.WARNING),
            ("not-a-level", logging.WARNING),
        ],
    )
    def test_resolve(self, value, expected):
        assert resolve_level(value) == expected


class TestJSONFormatter:
    def test_format(self):
        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="railway_mcp.test",
            level=logging.INFO,
            pathname="test.py",
            lineno=1,
            msg="Tool call: %s",
            args=("RAILWAY_TEMPLATE_LIST",),
            exc_info=None,
        )
        output = formatter.format(record)
        data = json.loads(output)
        assert data["level"] == "INFO"
        assert data["logger"] == "railway_mcp.test"
        assert data["message"] == "Tool call: RAILWAY_TEMPLATE_LIST"
        assert "timestamp" in data

    def test_format_with_exception(self):
        formatter = JSONFormatter()
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = logging.LogRecord(
            name="railway_mcp",
            level=logging.ERROR,
            pathname="test.py",
            lineno=1,
            msg="Failed",
            args=(),
            exc_info=exc_info,
        )
        data = json.loads(formatter.format(record))
        assert "exception" in data
        assert "ValueError" in data["exception"]

    def test_context_fields_are_lifted(self):
        record = logging.LogRecord(
            name="railway_mcp",
            level=logging.INFO,
            pathname="test.py",
            lineno=1,
            msg="Tool call: %s",
            args=("RAILWAY_SERVICE_DELETE",),
            exc_info=None,
        )
        record.tool = "RAILWAY_SERVICE_DELETE"

        data = json.loads(JSONFormatter().format(record))

        assert data["tool"] == "RAILWAY_SERVICE_DELETE"
        assert "operation" not in data


class TestContextFields:
    @pytest.mark.asyncio
    async def test_tool_calls_carry_tool_name(self, caplog):
        @asynccontextmanager
        async def factory(credential):
            yield None

        server = MCPServer("log-test", factory)

        @server.tool(name="ping")
        async def ping(container):
            return {}

        with caplog.at_level(logging.INFO, logger="railway_mcp"):
            await server.call_tool("ping", {})

        assert [r.tool for r in caplog.records if hasattr(r, "tool")] == ["ping"]
