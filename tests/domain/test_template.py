"""Tests for the Template entity and serialized-config parsing."""

import pytest

from railway_mcp.domain.entities.template import (
    UNCATEGORIZED,
    ServiceSlot,
    Template,
    parse_slot,
    parse_template,
)
from railway_mcp.domain.errors import InvalidRequestError


class TestParseTemplate:
    def test_parses_single_slot(self, template_node):
        template = parse_template(template_node())

        assert template.id == "tpl-pg"
        assert template.name == "PostgreSQL"
        assert template.category == "Storage"
        assert len(template.slots) == 1
        slot = template.first_slot
        assert slot.key == "pg"
        assert slot.name == "Postgres"
        assert slot.image == "ghcr.io/railwayapp-templates/postgres-ssl:16"
        assert slot.variable_defaults() == {
            "PGDATA": "/var/lib/postgresql/data/pgdata",
            "POSTGRES_DB": "railway",
        }
        assert slot.first_mount_path == "/var/lib/postgresql/data"

    def test_keeps_serialized_config_verbatim(self, template_node):
        node = template_node()
        template = parse_template(node)
        assert template.serialized_config == node["serializedConfig"]

    def test_proxy_port_falls_back_to_numeric_key(self, template_node):
        template = parse_template(template_node())
        assert template.first_slot.first_proxy_port == 5432

    def test_explicit_proxy_port_wins(self):
        slot = parse_slot("redis", {"networking": {"tcpProxies": {"main": {"port": 6379}}}})
        assert slot.proxy_ports == (("main", 6379),)

    def test_proxy_without_port_is_ignored(self):
        slot = parse_slot("svc", {"networking": {"tcpProxies": {"main": {}}}})
        assert slot.first_proxy_port is None

    def test_out_of_range_port_rejected(self):
        with pytest.raises(InvalidRequestError, match="out of range"):
            parse_slot("svc", {"networking": {"tcpProxies": {"main": {"port": 70000}}}})

    def test_missing_default_value_becomes_empty_string(self):
        slot = parse_slot("svc", {"variables": {"SECRET": {}}})
        assert slot.variable_defaults() == {"SECRET": ""}

    def test_bare_variable_value_is_its_default(self):
        slot = parse_slot("svc", {"variables": {"A": "x", "PORT": 5432, "EMPTY": None}})
        assert slot.variable_defaults() == {"A": "x", "PORT": "5432", "EMPTY": ""}

    def test_list_variable_descriptor_rejected(self):
        with pytest.raises(InvalidRequestError, match="variable 'A'"):
            parse_slot("svc", {"variables": {"A": ["x"]}})

    def test_slot_without_image(self):
        slot = parse_slot("svc", {"source": {"repo": "acme/api"}})
        assert slot.has_image is False

    def test_no_services(self, template_node):
        template = parse_template(template_node(services={}))
        assert template.slots == ()
        assert template.first_slot is None

    def test_missing_id_rejected(self, template_node):
        node = template_node()
        node["id"] = ""
        with pytest.raises(InvalidRequestError):
            parse_template(node)

    def test_non_object_services_rejected(self, template_node):
        node = template_node()
        node["serializedConfig"] = {"services": ["pg"]}
        with pytest.raises(InvalidRequestError):
            parse_template(node)


class TestTemplate:
    def test_category_key_defaults_to_uncategorized(self):
        assert Template(id="t", name="T").category_key == UNCATEGORIZED

    @pytest.mark.parametrize(
        "category,expected",
        [
            ("Storage", True),
            ("Databases", True),
            ("Vector DATABASE", True),
            ("Starters", False),
            (None, False),
        ],
    )
    def test_is_database(self, category, expected):
        assert Template(id="t", name="T", category=category).is_database is expected

    def test_equality_ignores_serialized_config(self):
        a = Template(id="t", name="T", serialized_config={"a": 1})
        b = Template(id="t", name="T", serialized_config={"b": 2})
        assert a == b

    def test_to_dict(self):
        template = Template(
            id="t",
            name="T",
            category="Storage",
            slots=(ServiceSlot(key="s", name="S", image="img"),),
        )
        assert template.to_dict() == {
            "id": "t",
            "name": "T",
            "description": "",
            "category": "Storage",
            "services": [{"key": "s", "name": "S", "image": "img"}],
        }
