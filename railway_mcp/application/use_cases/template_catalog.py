"""
Template Catalog Use Case

Architectural Intent:
- Resolves a human search phrase or an exact identifier to Template entities
- Fetches the catalog through the gateway and validates each entry's shape once
- Malformed catalog entries are logged and left out of listings; their ids are
  remembered so resolving one reports the parse error instead of "not found"
- The fetched list lives only as long as this catalog instance (one invocation)
"""

import logging
from typing import Iterable, Optional

from railway_mcp.application.boundary import operation_boundary
from railway_mcp.domain.entities.template import Template, parse_template
from railway_mcp.domain.errors import InvalidRequestError, NotFoundError
from railway_mcp.domain.ports.gateway_port import Operation, ResourceGatewayPort
from railway_mcp.domain.services.template_search import TemplateSearch

logger = logging.getLogger(__name__)


class TemplateCatalog:
    def __init__(
        self,
        gateway: ResourceGatewayPort,
        search: Optional[TemplateSearch] = None,
    ) -> None:
        self.gateway = gateway
        self.matcher = search or TemplateSearch()
        self._templates: Optional[list[Template]] = None
        self._rejected: dict[str, str] = {}

    async def _fetch(self) -> list[Template]:
        if self._templates is not None:
            return self._templates

        data = await self.gateway.execute(Operation.TEMPLATES)
        edges = (data.get("templates") or {}).get("edges") or []
        templates = []
        for edge in edges:
            node = edge.get("node") or {}
            try:
                templates.append(parse_template(node))
            except InvalidRequestError as e:
                logger.warning("Skipping malformed template %s: %s", node.get("id"), e)
                if node.get("id"):
                    self._rejected[str(node["id"])] = e.message
        logger.debug("Fetched %d templates", len(templates))
        self._templates = templates
        return templates

    @staticmethod
    def categorize(templates: Iterable[Template]) -> dict[str, list[Template]]:
        grouped: dict[str, list[Template]] = {}
        for template in templates:
            grouped.setdefault(template.category_key, []).append(template)
        return grouped

    @operation_boundary("Error listing templates")
    async def search(self, query: Optional[str] = None) -> list[Template]:
        templates = await self._fetch()
        if not query or not query.strip():
            return list(templates)
        return self.matcher.search(query, templates)

    @operation_boundary("Error resolving template")
    async def resolve(self, template_id: str) -> Template:
        for template in await self._fetch():
            if template.id == template_id:
                return template
        if template_id in self._rejected:
            reason = self._rejected[template_id]
            raise InvalidRequestError(
                f"Template {template_id} has an invalid configuration: {reason}",
                {"template_id": template_id, "reason": reason},
            )
        raise NotFoundError(
            f"Template not found: {template_id}", {"template_id": template_id}
        )

    @operation_boundary("Error listing database types")
    async def list_database_templates(self) -> dict[str, list[Template]]:
        databases = []
        for template in await self._fetch():
            if not template.is_database:
                continue
            slot = template.first_slot
            if slot is None or not slot.has_image:
                continue
            databases.append(template)
        return self.categorize(databases)
