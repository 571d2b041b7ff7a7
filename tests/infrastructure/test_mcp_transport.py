"""Tests for MCP stdio JSON-RPC transport."""

import asyncio
import json
from contextlib import asynccontextmanager

import pytest

from railway_mcp.domain.errors import NotFoundError
from railway_mcp.infrastructure.mcp_servers.railway_server import MCPServer
from railway_mcp.infrastructure.mcp_servers.stdio_transport import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    MCP_PROTOCOL_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    _dispatch,
    _encode_message,
    _parse_header,
    _read_message,
    run_stdio,
)


def _make_request(method: str, params: dict = None, id: int = 1) -> bytes:
    """Helper: build a Content-Length-framed JSON-RPC request."""
    msg = {"jsonrpc": JSONRPC_VERSION, "method": method, "id": id}
    if params is not None:
        msg["params"] = params
    return _encode_message(msg)


def _make_notification(method: str, params: dict = None) -> bytes:
    """Helper: build a Content-Length-framed JSON-RPC notification (no id)."""
    msg = {"jsonrpc": JSONRPC_VERSION, "method": method}
    if params is not None:
        msg["params"] = params
    return _encode_message(msg)


@pytest.fixture
def server():
    """An MCPServer whose container is the credential itself."""

    @asynccontextmanager
    async def factory(credential):
        yield credential

    server = MCPServer("test-server", factory)

    @server.tool(
        name="echo",
        description="Echo back the input",
        input_schema={
            "type": "object",
            "properties": {"message": {"type": "string"}},
            "required": ["message"],
        },
    )
    async def echo(container, message: str) -> dict:
        return {"echoed": message, "credential": container}

    @server.tool(name="missing", description="Always not found")
    async def missing(container) -> dict:
        raise NotFoundError("Template not found: t1", {"template_id": "t1"})

    @server.tool(name="crash", description="Unexpected failure")
    async def crash(container) -> dict:
        raise RuntimeError("intentional failure")

    return server


def _text(response: dict) -> dict:
    return json.loads(response["result"]["content"][0]["text"])


class TestMessageParsing:
    """Test Content-Length framed message parsing."""

    def test_encode_message(self):
        msg = {"jsonrpc": "2.0", "id": 1, "result": {}}
        encoded = _encode_message(msg)
        body = json.dumps(msg).encode("utf-8")
        expected_header = f"Content-Length: {len(body)}\r\n\r\n".encode("ascii")
        assert encoded == expected_header + body

    def test_parse_header(self):
        assert _parse_header(b"Content-Length: 42\r\n\r\n") == 42

    def test_parse_header_missing(self):
        with pytest.raises(ValueError):
            _parse_header(b"X-Other: 1\r\n\r\n")

    @pytest.mark.asyncio
    async def test_read_message(self):
        msg = {"jsonrpc": "2.0", "id": 1, "method": "initialize"}
        reader = asyncio.StreamReader()
        reader.feed_data(_encode_message(msg))
        reader.feed_eof()
        assert await _read_message(reader) == msg

    @pytest.mark.asyncio
    async def test_read_message_eof(self):
        reader = asyncio.StreamReader()
        reader.feed_eof()
        assert await _read_message(reader) is None


class TestDispatch:
    @pytest.mark.asyncio
    async def test_initialize(self, server):
        response = await _dispatch(server, {"id": 1, "method": "initialize", "params": {}})
        result = response["result"]
        assert result["protocolVersion"] == MCP_PROTOCOL_VERSION
        assert result["serverInfo"]["name"] == "test-server"
        assert "resources" not in result["capabilities"]

    @pytest.mark.asyncio
    async def test_tools_list(self, server):
        response = await _dispatch(server, {"id": 2, "method": "tools/list"})
        tools = {t["name"]: t for t in response["result"]["tools"]}
        assert tools["echo"]["inputSchema"]["required"] == ["message"]

    @pytest.mark.asyncio
    async def test_tools_call_success(self, server):
        response = await _dispatch(
            server,
            {
                "id": 3,
                "method": "tools/call",
                "params": {"name": "echo", "arguments": {"message": "hi"}},
            },
        )
        assert "isError" not in response["result"]
        assert _text(response)["echoed"] == "hi"

    @pytest.mark.asyncio
    async def test_credential_from_meta(self, server):
        response = await _dispatch(
            server,
            {
                "id": 4,
                "method": "tools/call",
                "params": {
                    "name": "echo",
                    "arguments": {"message": "hi"},
                    "_meta": {"railwayToken": "tok-123"},
                },
            },
        )
        assert _text(response)["credential"] == "tok-123"

    @pytest.mark.asyncio
    async def test_no_meta_means_no_credential(self, server):
        response = await _dispatch(
            server,
            {"id": 5, "method": "tools/call", "params": {"name": "echo", "arguments": {"message": "x"}}},
        )
        assert _text(response)["credential"] is None

    @pytest.mark.asyncio
    async def test_domain_error_is_tool_result(self, server):
        response = await _dispatch(
            server, {"id": 6, "method": "tools/call", "params": {"name": "missing"}}
        )
        assert "error" not in response
        assert response["result"]["isError"] is True
        body = _text(response)
        assert body["error"]["code"] == "not_found"
        assert body["error"]["details"] == {"template_id": "t1"}

    @pytest.mark.asyncio
    async def test_missing_argument_is_tool_result(self, server):
        response = await _dispatch(
            server, {"id": 7, "method": "tools/call", "params": {"name": "echo", "arguments": {}}}
        )
        assert response["result"]["isError"] is True
        assert _text(response)["error"]["code"] == "invalid"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_tool_result(self, server):
        response = await _dispatch(
            server, {"id": 8, "method": "tools/call", "params": {"name": "crash"}}
        )
        assert response["result"]["isError"] is True
        assert _text(response)["error"]["code"] == "internal_error"

    @pytest.mark.asyncio
    async def test_unknown_tool_is_protocol_error(self, server):
        response = await _dispatch(
            server, {"id": 9, "method": "tools/call", "params": {"name": "nope"}}
        )
        assert response["error"]["code"] == METHOD_NOT_FOUND
        assert response["error"]["data"]["error"]["code"] == "tool_not_found"

    @pytest.mark.asyncio
    async def test_unknown_method(self, server):
        response = await _dispatch(server, {"id": 10, "method": "resources/list"})
        assert response["error"]["code"] == METHOD_NOT_FOUND

    @pytest.mark.asyncio
    async def test_non_object_message_is_invalid_request(self, server):
        response = await _dispatch(server, [1, 2, 3])
        assert response["id"] is None
        assert response["error"]["code"] == INVALID_REQUEST

    @pytest.mark.asyncio
    async def test_notification_has_no_response(self, server):
        assert await _dispatch(server, {"method": "notifications/initialized"}) is None

    @pytest.mark.asyncio
    async def test_handler_crash_is_internal_error(self, server, monkeypatch):
        async def broken(*args, **kwargs):
            raise RuntimeError("registry broken")

        monkeypatch.setattr(server, "list_tools", broken)
        response = await _dispatch(server, {"id": 11, "method": "tools/list"})
        assert response["error"]["code"] == INTERNAL_ERROR


class TestRunStdio:
    """Integration test for the full stdio transport loop."""

    @pytest.mark.asyncio
    async def test_full_session(self, server):
        input_data = (
            _make_request("initialize", {}, id=1)
            + _make_notification("notifications/initialized")
            + _make_request("tools/list", {}, id=2)
            + _make_request(
                "tools/call",
                {"name": "echo", "arguments": {"message": "hi"}, "_meta": {"railwayToken": "t"}},
                id=3,
            )
            + _make_request("shutdown", {}, id=4)
            + _make_request("tools/list", {}, id=5)
        )

        reader = asyncio.StreamReader()
        reader.feed_data(input_data)
        reader.feed_eof()

        collected = bytearray()

        class FakeWriter:
            def write(self, data: bytes):
                collected.extend(data)

            async def drain(self):
                pass

        await run_stdio(server, reader=reader, writer=FakeWriter())

        out_reader = asyncio.StreamReader()
        out_reader.feed_data(bytes(collected))
        out_reader.feed_eof()

        responses = []
        while True:
            msg = await _read_message(out_reader)
            if msg is None:
                break
            responses.append(msg)

        # nothing is answered after shutdown
        assert [r["id"] for r in responses] == [1, 2, 3, 4]
        assert _text(responses[2]) == {"echoed": "hi", "credential": "t"}
        assert responses[3]["result"] == {}

    @pytest.mark.asyncio
    async def test_eof_without_messages(self, server):
        reader = asyncio.StreamReader()
        reader.feed_eof()

        collected = bytearray()

        class FakeWriter:
            def write(self, data: bytes):
                collected.extend(data)

            async def drain(self):
                pass

        await run_stdio(server, reader=reader, writer=FakeWriter())
        assert len(collected) == 0

    @pytest.mark.asyncio
    async def test_unparseable_body_gets_parse_error_and_session_continues(self, server):
        garbage = b"{not json"
        input_data = (
            b"Content-Length: %d\r\n\r\n" % len(garbage)
            + garbage
            + _make_request("tools/list", {}, id=2)
        )
        reader = asyncio.StreamReader()
        reader.feed_data(input_data)
        reader.feed_eof()

        collected = bytearray()

        class FakeWriter:
            def write(self, data: bytes):
                collected.extend(data)

            async def drain(self):
                pass

        await run_stdio(server, reader=reader, writer=FakeWriter())

        out_reader = asyncio.StreamReader()
        out_reader.feed_data(bytes(collected))
        out_reader.feed_eof()
        first = await _read_message(out_reader)
        second = await _read_message(out_reader)

        assert first["id"] is None
        assert first["error"]["code"] == PARSE_ERROR
        assert second["id"] == 2
        assert "tools" in second["result"]
