"""Helpers for reading paginated GraphQL connections."""

from typing import Any, Optional


def edges(connection: Optional[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten a connection (``{"edges": [{"node": ...}]}``) into its nodes."""
    return [
        edge["node"]
        for edge in (connection or {}).get("edges") or []
        if edge.get("node")
    ]
