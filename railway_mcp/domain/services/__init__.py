"""
Domain Services Package

Architectural Intent:
- Contains domain services implementing business logic
- Template ranking is pure: it never touches the gateway
"""

from railway_mcp.domain.services.template_search import (
    TemplateMatch,
    TemplateSearch,
)

__all__ = [
    "TemplateMatch",
    "TemplateSearch",
]
