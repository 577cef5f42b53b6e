"""MCP server exposing the notes tools over stdio.

Requires the ``mcp`` extra (``pip install notesbridge[mcp]``). The tool
table itself lives in notesbridge.tools; this module only adapts it to the
MCP protocol. Client calls block on the interpreter, so each one runs in a
worker thread to keep the event loop responsive.

Usage:
    notesbridge-mcp            # console script
    python -m notesbridge.mcp_server
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from notesbridge.client import NotesClient
from notesbridge.config import NotesConfig, set_config
from notesbridge.tools import TOOLS, call_tool
from notesbridge.utils.logger import get_logger

logger = get_logger(__name__)

SERVER_NAME = "apple-notes"


class ToolCallError(RuntimeError):
    """Raised inside the MCP handler so the SDK reports ``isError``."""


def list_tool_definitions() -> list[types.Tool]:
    """MCP tool definitions for every entry in the tool table."""
    return [
        types.Tool(
            name=spec.name,
            description=spec.description,
            inputSchema=spec.input_schema,
            annotations=types.ToolAnnotations(destructiveHint=spec.destructive),
        )
        for spec in TOOLS.values()
    ]


def create_server(client: NotesClient | None = None) -> Server:
    """Build an MCP server bound to a client."""
    notes = client if client is not None else NotesClient()
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return list_tool_definitions()

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        if name not in TOOLS:
            raise ToolCallError(f"Unknown tool: {name}")
        result = await asyncio.to_thread(call_tool, notes, name, arguments or {})
        if result.is_error:
            raise ToolCallError(result.text)
        return [types.TextContent(type="text", text=result.text)]

    return server


async def serve(client: NotesClient | None = None) -> None:
    """Serve the tools on stdin/stdout until the peer disconnects."""
    server = create_server(client)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Apple Notes MCP server started")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> int:
    config = NotesConfig.from_env()
    set_config(config)
    # stdout carries the protocol; logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(serve(NotesClient(config)))
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
