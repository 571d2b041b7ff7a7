"""
Tool Output Formatting

Architectural Intent:
- Tool handlers return plain JSON-safe values built by build_output()
- The transport wraps those values as MCP text content blocks
- Errors are returned as content with isError set, so the calling agent can
  read the message and the structured details
"""

import dataclasses
import json
from enum import Enum
from typing import Any, Union

from railway_mcp.domain.errors import RailwayError


def build_output(data: Any) -> Any:
    """Convert dataclasses, enums and containers into JSON-safe values."""
    to_dict = getattr(data, "to_dict", None)
    if callable(to_dict) and not isinstance(data, type):
        return build_output(to_dict())
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return {
            f.name: build_output(getattr(data, f.name))
            for f in dataclasses.fields(data)
        }
    if isinstance(data, Enum):
        return data.value
    if isinstance(data, dict):
        return {str(k): build_output(v) for k, v in data.items()}
    if isinstance(data, (list, tuple, set, frozenset)):
        return [build_output(item) for item in data]
    return data


def to_tool_content(result: Any) -> dict[str, Any]:
    return {
        "content": [
            {
                "type": "text",
                "text": json.dumps(build_output(result), indent=2, default=str),
            }
        ]
    }


def to_error_content(error: Union[RailwayError, Any]) -> dict[str, Any]:
    """Wrap any error exposing to_dict() (domain or MCP) as an isError result."""
    return {
        "content": [
            {
                "type": "text",
                "text": json.dumps(error.to_dict(), indent=2, default=str),
            }
        ],
        "isError": True,
    }
