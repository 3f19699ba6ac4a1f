"""Integration tests for MCP tool handlers and the HTTP JSON-RPC bridge."""

import asyncio
import json

import pytest

pytestmark = pytest.mark.integration

from mcp import McpError

from lineomatic import http_api
from lineomatic.mcp.tool_handlers import TOOL_HANDLERS, call_tool_handler
from lineomatic.mcp.tool_schemas import get_tool_schemas


def call(db, name, /, **arguments):
    """Run a tool and decode its JSON payload."""
    result = asyncio.run(call_tool_handler(name, arguments, db))
    assert result[0].type == "text"
    return json.loads(result[0].text)


@pytest.fixture
def seeded_db(temp_db):
    """Database with stations a to d and line 'red' running a -> c (10)."""
    for station_id in "abcd":
        call(temp_db, "create_station", name=station_id.upper(), station_id=station_id)
    call(
        temp_db,
        "create_line",
        name="Red",
        color="bg-red-600",
        up_station_id="a",
        down_station_id="c",
        distance=10,
        line_id="red",
    )
    return temp_db


class TestToolSchemas:
    """Tests for tool registration."""

    def test_every_schema_has_a_handler(self):
        """Test that schemas and handlers describe the same tools."""
        schemas = get_tool_schemas()
        assert set(schemas) == set(TOOL_HANDLERS)
        assert len(schemas) == 12
        for name, schema in schemas.items():
            assert schema["name"] == name
            assert schema["inputSchema"]["type"] == "object"


class TestToolHandlers:
    """Tests for tool execution."""

    def test_create_and_get_line(self, seeded_db):
        """Test that a line is returned with its stations in travel order."""
        line = call(seeded_db, "get_line", line_id="red", include_sections=True)
        assert line["name"] == "Red"
        assert [s["id"] for s in line["stations"]] == ["a", "c"]
        assert line["sections"] == [
            {
                "id": line["sections"][0]["id"],
                "up_station_id": "a",
                "down_station_id": "c",
                "distance": 10,
            }
        ]

    def test_add_section_and_remove_station(self, seeded_db):
        """Test splitting a section and removing the new station again."""
        line = call(
            seeded_db, "add_section", line_id="red", up_station_id="a", down_station_id="b", distance=4
        )
        assert [s["id"] for s in line["stations"]] == ["a", "b", "c"]
        assert sorted(s["distance"] for s in line["sections"]) == [4, 6]

        line = call(seeded_db, "remove_station", line_id="red", station_id="b")
        assert [s["id"] for s in line["stations"]] == ["a", "c"]
        assert [s["distance"] for s in line["sections"]] == [10]

        stations = call(seeded_db, "get_line_stations", line_id="red")
        assert [s["name"] for s in stations["stations"]] == ["A", "C"]

    def test_list_tools(self, seeded_db):
        """Test list tools with totals."""
        stations = call(seeded_db, "list_stations", limit=2)
        assert stations["total"] == 4
        assert [s["id"] for s in stations["stations"]] == ["a", "b"]

        lines = call(seeded_db, "list_lines")
        assert lines["total"] == 1
        assert lines["lines"][0]["stations"][0]["id"] == "a"

    def test_update_and_delete(self, seeded_db):
        """Test updating and deleting a line, then its stations."""
        line = call(seeded_db, "update_line", line_id="red", color="bg-red-900")
        assert line["color"] == "bg-red-900"

        assert call(seeded_db, "delete_line", line_id="red") == {"deleted": True}
        assert call(seeded_db, "delete_station", station_id="a") == {"deleted": True}
        assert call(seeded_db, "delete_station", station_id="a") == {"deleted": False}

    @pytest.mark.parametrize(
        "arguments,code",
        [
            ({"line_id": "red", "up_station_id": "a", "down_station_id": "b", "distance": 10}, -32602),
            ({"line_id": "red", "up_station_id": "a", "down_station_id": "c", "distance": 3}, -32602),
            ({"line_id": "red", "up_station_id": "b", "down_station_id": "d", "distance": 3}, -32602),
            ({"line_id": "missing", "up_station_id": "a", "down_station_id": "b", "distance": 3}, -32001),
            ({"line_id": "red", "up_station_id": "a"}, -32602),
        ],
    )
    def test_add_section_errors(self, seeded_db, arguments, code):
        """Test that chain rule violations map to JSON-RPC error codes."""
        with pytest.raises(McpError) as exc_info:
            asyncio.run(call_tool_handler("add_section", arguments, seeded_db))
        assert exc_info.value.error.code == code

    def test_remove_last_section_error(self, seeded_db):
        """Test that removing from a single-section line is an invalid request."""
        with pytest.raises(McpError) as exc_info:
            asyncio.run(
                call_tool_handler("remove_station", {"line_id": "red", "station_id": "c"}, seeded_db)
            )
        assert exc_info.value.error.code == -32602

    def test_duplicate_station(self, seeded_db):
        """Test that duplicates map to the duplicate error code."""
        with pytest.raises(McpError) as exc_info:
            asyncio.run(call_tool_handler("create_station", {"name": "A"}, seeded_db))
        assert exc_info.value.error.code == -32002

    def test_unknown_tool(self, seeded_db):
        """Test calling a tool that does not exist."""
        with pytest.raises(McpError) as exc_info:
            asyncio.run(call_tool_handler("no_such_tool", {}, seeded_db))
        assert exc_info.value.error.code == -32601


class TestJsonRpc:
    """Tests for the HTTP JSON-RPC request handler."""

    @pytest.fixture(autouse=True)
    def use_seeded_db(self, seeded_db, monkeypatch):
        monkeypatch.setattr(http_api, "get_db", lambda: seeded_db)

    def request(self, method, params=None):
        return asyncio.run(
            http_api.handle_jsonrpc_request(
                {"jsonrpc": "2.0", "id": 7, "method": method, "params": params or {}}
            )
        )

    def test_initialize(self):
        """Test server initialization."""
        response = self.request("initialize")
        assert response["id"] == 7
        assert response["result"]["protocolVersion"] == "2024-11-05"
        assert response["result"]["serverInfo"]["name"] == "line-o-matic"

    def test_tools_list(self):
        """Test listing available tools."""
        response = self.request("tools/list")
        assert len(response["result"]["tools"]) == 12

    def test_tools_call(self):
        """Test calling a tool over JSON-RPC."""
        response = self.request(
            "tools/call", {"name": "get_line_stations", "arguments": {"line_id": "red"}}
        )
        payload = json.loads(response["result"]["content"][0]["text"])
        assert [s["id"] for s in payload["stations"]] == ["a", "c"]

    def test_tools_call_error(self):
        """Test that tool errors become JSON-RPC errors."""
        response = self.request(
            "tools/call", {"name": "get_line", "arguments": {"line_id": "missing"}}
        )
        assert response["error"]["code"] == -32001

    def test_unknown_method(self):
        """Test an unknown JSON-RPC method."""
        response = self.request("does/not/exist")
        assert response["error"]["code"] == -32601

    def test_health(self, seeded_db):
        """Test the health endpoint reports a reachable database."""
        response = asyncio.run(http_api.health_check())
        assert response == {"status": "healthy", "service": "line-o-matic", "database": "ok"}
        assert seeded_db.ping() is True
