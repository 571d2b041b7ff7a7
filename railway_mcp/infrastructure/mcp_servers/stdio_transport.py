"""
MCP Stdio Transport

Architectural Intent:
- Content-Length framed JSON-RPC between an agent host and MCPServer
- stdout carries nothing but framed replies; logging goes to stderr

MCP Integration:
- initialize advertises the tools capability only
- tools/list and tools/call are routed to the server; the access token is
  read per call from params._meta.railwayToken and, when absent, the server's
  context factory falls back to its configured default
- A failing tool answers with an isError result; an unknown method or tool
  answers with a JSON-RPC error
- A body that is framed correctly but is not JSON gets a parse error reply
  and the session continues; broken framing ends the session
- shutdown is answered and then the loop stops reading
"""

import asyncio
import json
import logging
import sys
from typing import Any, Awaitable, Callable, Optional

from railway_mcp.infrastructure.mcp_servers.output import (
    to_error_content,
    to_tool_content,
)
from railway_mcp.infrastructure.mcp_servers.railway_server import MCPError, MCPServer

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"
MCP_PROTOCOL_VERSION = "2024-11-05"
SERVER_VERSION = "0.1.0"
CREDENTIAL_META_KEY = "railwayToken"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

Handler = Callable[[MCPServer, dict[str, Any]], Awaitable[dict[str, Any]]]


def _encode_message(obj: dict[str, Any]) -> bytes:
    body = json.dumps(obj).encode("utf-8")
    return b"Content-Length: %d\r\n\r\n" % len(body) + body


def _parse_header(header_data: bytes) -> int:
    """Return the Content-Length announced by a header block."""
    headers = {}
    for line in header_data.decode("ascii").splitlines():
        key, sep, value = line.partition(":")
        if sep:
            headers[key.strip().lower()] = value.strip()
    if "content-length" not in headers:
        raise ValueError("Missing Content-Length header")
    return int(headers["content-length"])


async def _read_message(reader: asyncio.StreamReader) -> Optional[Any]:
    """Read one framed message. Returns None on EOF before a header."""
    header = bytearray()
    while not header.endswith(b"\r\n\r\n"):
        line = await reader.readline()
        if not line:
            return None
        header.extend(line)
    body = await reader.readexactly(_parse_header(bytes(header)))
    return json.loads(body.decode("utf-8"))


def _reply(
    msg_id: Any,
    result: Any = None,
    error_code: Optional[int] = None,
    message: str = "",
    data: Any = None,
) -> dict[str, Any]:
    reply: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "id": msg_id}
    if error_code is None:
        reply["result"] = result
        return reply
    reply["error"] = {"code": error_code, "message": message}
    if data is not None:
        reply["error"]["data"] = data
    return reply


def _credential(params: dict[str, Any]) -> Optional[str]:
    meta = params.get("_meta")
    token = meta.get(CREDENTIAL_META_KEY) if isinstance(meta, dict) else None
    return token if isinstance(token, str) and token else None


async def _initialize(server: MCPServer, params: dict[str, Any]) -> dict[str, Any]:
    return {
        "protocolVersion": MCP_PROTOCOL_VERSION,
        "capabilities": {"tools": {"listChanged": False}},
        "serverInfo": {"name": server.name, "version": SERVER_VERSION},
    }


async def _list_tools(server: MCPServer, params: dict[str, Any]) -> dict[str, Any]:
    return {
        "tools": [
            {
                "name": tool.name,
                "description": tool.description,
                "inputSchema": tool.input_schema,
            }
            for tool in await server.list_tools()
        ]
    }


async def _call_tool(server: MCPServer, params: dict[str, Any]) -> dict[str, Any]:
    name = params.get("name", "")
    arguments = params.get("arguments") or {}
    if not isinstance(arguments, dict):
        raise MCPError("invalid", "arguments must be an object")
    try:
        result = await server.call_tool(name, arguments, _credential(params))
    except MCPError as e:
        if not e.tool_error:
            raise
        logger.warning("Tool %s returned error %s: %s", name, e.code, e)
        return to_error_content(e)
    return to_tool_content(result)


async def _shutdown(server: MCPServer, params: dict[str, Any]) -> dict[str, Any]:
    return {}


ROUTES: dict[str, Handler] = {
    "initialize": _initialize,
    "tools/list": _list_tools,
    "tools/call": _call_tool,
    "shutdown": _shutdown,
}


async def _dispatch(server: MCPServer, message: Any) -> Optional[dict[str, Any]]:
    """Answer one message; notifications (no id) get no reply."""
    if not isinstance(message, dict) or not isinstance(message.get("method"), str):
        return _reply(None, error_code=INVALID_REQUEST, message="Invalid request")

    method = message["method"]
    msg_id = message.get("id")
    if msg_id is None:
        logger.debug("Notification %s", method)
        return None

    handler = ROUTES.get(method)
    if handler is None:
        return _reply(msg_id, error_code=METHOD_NOT_FOUND, message=f"Method not found: {method}")

    params = message.get("params") or {}
    try:
        return _reply(msg_id, await handler(server, params))
    except MCPError as e:
        code = METHOD_NOT_FOUND if e.code == "tool_not_found" else INVALID_PARAMS
        return _reply(msg_id, error_code=code, message=str(e), data=e.to_dict())
    except Exception as e:
        logger.exception("Unhandled error in %s", method)
        return _reply(msg_id, error_code=INTERNAL_ERROR, message=f"Internal error: {e}")


class _StdoutWriter:
    """Writer facade over the process stdout buffer."""

    def write(self, data: bytes) -> None:
        sys.stdout.buffer.write(data)

    async def drain(self) -> None:
        sys.stdout.buffer.flush()


async def _stdin_reader() -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    await asyncio.get_running_loop().connect_read_pipe(
        lambda: asyncio.StreamReaderProtocol(reader), sys.stdin.buffer
    )
    return reader


async def run_stdio(
    server: MCPServer,
    reader: Optional[asyncio.StreamReader] = None,
    writer: Optional[Any] = None,
) -> None:
    """Serve ``server`` until EOF, shutdown or broken framing.

    ``reader`` and ``writer`` default to the process stdin and stdout.
    """
    reader = reader or await _stdin_reader()
    writer = writer or _StdoutWriter()

    logger.info("Serving %s over stdio", server.name)
    while True:
        message = None
        try:
            message = await _read_message(reader)
        except json.JSONDecodeError as e:
            logger.warning("Unparseable message body: %s", e)
            response = _reply(None, error_code=PARSE_ERROR, message=f"Parse error: {e}")
        except (asyncio.IncompleteReadError, ValueError) as e:
            logger.error("Malformed message, closing transport: %s", e)
            return
        else:
            if message is None:
                return
            response = await _dispatch(server, message)

        if response is not None:
            writer.write(_encode_message(response))
            await writer.drain()

        if isinstance(message, dict) and message.get("method") == "shutdown":
            return
