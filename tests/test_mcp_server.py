"""Tests for the MCP adapter. Skipped when the mcp extra is not installed."""

import pytest

pytest.importorskip("mcp")

from mcp.server import Server  # noqa: E402

from notesbridge import NotesClient, NotesConfig  # noqa: E402
from notesbridge.mcp_server import SERVER_NAME, create_server, list_tool_definitions  # noqa: E402
from notesbridge.tools import TOOLS  # noqa: E402


class _NullRunner:
    def run(self, script: str) -> str:
        return ""


class TestToolDefinitions:
    """MCP tool definitions mirror the tool table."""

    def test_one_definition_per_tool(self) -> None:
        """Every tool is listed, in table order."""
        assert [tool.name for tool in list_tool_definitions()] == list(TOOLS)

    def test_schema_and_annotations(self) -> None:
        """Schemas are passed through and destructive tools flagged."""
        tools = {tool.name: tool for tool in list_tool_definitions()}
        assert tools["note_create"].inputSchema == TOOLS["note_create"].input_schema
        assert tools["note_delete"].annotations.destructiveHint is True
        assert tools["notes_list"].annotations.destructiveHint is False


class TestServer:
    def test_create_server(self) -> None:
        """create_server() returns a named MCP server."""
        client = NotesClient(NotesConfig(), runner=_NullRunner())  # type: ignore[arg-type]
        server = create_server(client)
        assert isinstance(server, Server)
        assert server.name == SERVER_NAME
