"""
Template Entity

Architectural Intent:
- Immutable view of a deployable platform template
- The free-form serialized configuration is parsed once, at catalog fetch time,
  into explicit ServiceSlot value objects
- The raw configuration is kept verbatim for the platform-managed deploy path

Serialized configuration shape (per slot):
    {
        "name": "Postgres",
        "source": {"image": "ghcr.io/railwayapp-templates/postgres-ssl:16"},
        "networking": {"tcpProxies": {"5432": {"port": 5432}}},
        "variables": {"PGDATA": {"defaultValue": "/var/lib/postgresql/data/pgdata"}},
        "volumeMounts": {"data": {"mountPath": "/var/lib/postgresql/data"}}
    }
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional

from railway_mcp.domain.errors import InvalidRequestError

UNCATEGORIZED = "Uncategorized"
DATABASE_CATEGORY_MARKERS = ("storage", "database")


@dataclass(frozen=True)
class ServiceSlot:
    """One service definition inside a template."""

    key: str
    name: Optional[str] = None
    image: Optional[str] = None
    proxy_ports: tuple[tuple[str, int], ...] = ()
    variables: tuple[tuple[str, str], ...] = ()
    mount_paths: tuple[tuple[str, str], ...] = ()

    @property
    def has_image(self) -> bool:
        return bool(self.image)

    @property
    def first_proxy_port(self) -> Optional[int]:
        return self.proxy_ports[0][1] if self.proxy_ports else None

    @property
    def first_mount_path(self) -> Optional[str]:
        return self.mount_paths[0][1] if self.mount_paths else None

    def variable_defaults(self) -> dict[str, str]:
        return dict(self.variables)


@dataclass(frozen=True)
class Template:
    id: str
    name: str
    description: str = ""
    category: Optional[str] = None
    slots: tuple[ServiceSlot, ...] = ()
    serialized_config: dict[str, Any] = field(
        default_factory=dict, compare=False, repr=False
    )

    @property
    def category_key(self) -> str:
        return self.category or UNCATEGORIZED

    @property
    def first_slot(self) -> Optional[ServiceSlot]:
        return self.slots[0] if self.slots else None

    @property
    def is_database(self) -> bool:
        category = (self.category or "").lower()
        return any(marker in category for marker in DATABASE_CATEGORY_MARKERS)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "services": [
                {
                    "key": slot.key,
                    "name": slot.name,
                    "image": slot.image,
                }
                for slot in self.slots
            ],
        }


def _require_mapping(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidRequestError(f"{where} must be an object")
    return value


def _parse_port(key: str, descriptor: dict[str, Any]) -> Optional[int]:
    port = descriptor.get("port")
    if port is None and key.isdigit():
        port = key
    if port is None:
        return None
    try:
        port = int(port)
    except (TypeError, ValueError):
        raise InvalidRequestError(f"tcp proxy '{key}' has a non-numeric port")
    if not (1 <= port <= 65535):
        raise InvalidRequestError(f"tcp proxy '{key}' port {port} out of range")
    return port


def _default_value(name: str, descriptor: Any) -> str:
    # Older catalog entries give the default directly instead of a descriptor.
    if descriptor is None:
        return ""
    if isinstance(descriptor, (str, int, float, bool)):
        return str(descriptor)
    value = _require_mapping(descriptor, f"variable '{name}'").get("defaultValue", "")
    return "" if value is None else str(value)


def parse_slot(key: str, raw: Any) -> ServiceSlot:
    """Parse one serialized service definition. Raises InvalidRequestError."""
    raw = _require_mapping(raw, f"service '{key}'")
    source = _require_mapping(raw.get("source"), f"service '{key}' source")
    networking = _require_mapping(raw.get("networking"), f"service '{key}' networking")
    proxies = _require_mapping(networking.get("tcpProxies"), f"service '{key}' tcpProxies")
    variables = _require_mapping(raw.get("variables"), f"service '{key}' variables")
    mounts = _require_mapping(raw.get("volumeMounts"), f"service '{key}' volumeMounts")

    proxy_ports = []
    for proxy_key, descriptor in proxies.items():
        port = _parse_port(str(proxy_key), _require_mapping(descriptor, "tcp proxy"))
        if port is not None:
            proxy_ports.append((str(proxy_key), port))

    defaults = [
        (str(name), _default_value(str(name), descriptor))
        for name, descriptor in variables.items()
    ]

    mount_paths = []
    for mount_key, descriptor in mounts.items():
        path = _require_mapping(descriptor, f"volume '{mount_key}'").get("mountPath")
        if path:
            mount_paths.append((str(mount_key), str(path)))

    image = source.get("image")
    return ServiceSlot(
        key=key,
        name=raw.get("name") or None,
        image=str(image) if image else None,
        proxy_ports=tuple(proxy_ports),
        variables=tuple(defaults),
        mount_paths=tuple(mount_paths),
    )


def parse_template(raw: dict[str, Any]) -> Template:
    """Build a Template from the platform payload. Raises InvalidRequestError."""
    if not raw.get("id"):
        raise InvalidRequestError("template is missing an id")
    config = _require_mapping(raw.get("serializedConfig"), "serializedConfig")
    services = _require_mapping(config.get("services"), "serializedConfig.services")
    slots = tuple(parse_slot(str(key), value) for key, value in services.items())
    return Template(
        id=str(raw["id"]),
        name=raw.get("name") or str(raw["id"]),
        description=raw.get("description") or "",
        category=raw.get("category") or None,
        slots=slots,
        serialized_config=config,
    )
