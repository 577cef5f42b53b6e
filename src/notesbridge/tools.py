"""Tool table for remote-tool protocols.

Describes every client operation as a named tool with a JSON input schema
and a handler returning text. The table knows nothing about a transport;
notesbridge.mcp_server serves it over MCP.

Errors never escape call_tool(): a NotesBridgeError (bad input, script
failure) becomes a ToolResult with ``is_error=True`` and the text
``Error: <message>``.

Example:
    >>> result = call_tool(NotesClient(), "folders_list", {})
    >>> print(result.text)
    • Notes (12 notes)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from notesbridge.client import NotesClient
from notesbridge.errors import NotesBridgeError
from notesbridge.utils.logger import get_logger

logger = get_logger(__name__)

ToolHandler = Callable[[NotesClient, Mapping[str, Any]], str]


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """One remotely callable operation."""

    name: str
    description: str
    handler: ToolHandler
    properties: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    destructive: bool = False

    @property
    def input_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {k: dict(v) for k, v in self.properties.items()},
        }
        if self.required:
            schema["required"] = list(self.required)
        return schema


@dataclass(frozen=True, slots=True)
class ToolResult:
    text: str
    is_error: bool = False


def _string(description: str) -> dict[str, str]:
    return {"type": "string", "description": description}


def _notes_list(client: NotesClient, args: Mapping[str, Any]) -> str:
    notes = client.list_notes(limit=args.get("limit") or client.config.list_limit)
    formatted = "\n\n".join(
        f"• {n.name}\n  Folder: {n.folder}\n  ID: {n.id}\n  Modified: {n.modification_date}"
        for n in notes
    )
    return formatted or "No notes found."


def _folders_list(client: NotesClient, args: Mapping[str, Any]) -> str:
    formatted = "\n".join(f"• {f.name} ({f.note_count} notes)" for f in client.list_folders())
    return formatted or "No folders found."


def _folder_create(client: NotesClient, args: Mapping[str, Any]) -> str:
    return client.create_folder(args.get("name"))


def _folder_delete(client: NotesClient, args: Mapping[str, Any]) -> str:
    return client.delete_folder(args.get("name"))


def _note_show(client: NotesClient, args: Mapping[str, Any]) -> str:
    note = client.show(args.get("noteId"))
    return f"# {note.name}\n\n{note.markdown()}"


def _note_create(client: NotesClient, args: Mapping[str, Any]) -> str:
    return client.create(args.get("title"), args.get("body") or "", folder=args.get("folder") or None)


def _note_edit(client: NotesClient, args: Mapping[str, Any]) -> str:
    return client.update(args.get("noteId"), title=args.get("title"), body=args.get("body"))


def _note_delete(client: NotesClient, args: Mapping[str, Any]) -> str:
    return client.delete_note(args.get("noteId"))


TOOLS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            "notes_list",
            "List all Apple Notes with folder info",
            _notes_list,
            {
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of notes to return",
                    "default": 20,
                }
            },
        ),
        ToolSpec("folders_list", "List all Apple Notes folders with note counts", _folders_list),
        ToolSpec(
            "folder_create",
            "Create a new folder in Apple Notes",
            _folder_create,
            {"name": _string("Name of the folder to create")},
            required=("name",),
        ),
        ToolSpec(
            "folder_delete",
            "Delete a folder from Apple Notes (DESTRUCTIVE)",
            _folder_delete,
            {"name": _string("Name of the folder to delete")},
            required=("name",),
            destructive=True,
        ),
        ToolSpec(
            "note_show",
            "Show the content of an Apple Note in markdown format",
            _note_show,
            {"noteId": _string("The ID of the note to show")},
            required=("noteId",),
        ),
        ToolSpec(
            "note_create",
            "Create a new Apple Note",
            _note_create,
            {
                "title": _string("Title of the note"),
                "body": _string("Content of the note (supports markdown)"),
                "folder": _string("Folder to create the note in (optional)"),
            },
            required=("title",),
        ),
        ToolSpec(
            "note_edit",
            "Edit an existing Apple Note (MODIFIES CONTENT)",
            _note_edit,
            {
                "noteId": _string("The ID of the note to edit"),
                "title": _string("New title for the note"),
                "body": _string("New content for the note (supports markdown)"),
            },
            required=("noteId",),
            destructive=True,
        ),
        ToolSpec(
            "note_delete",
            "Delete an Apple Note (DESTRUCTIVE)",
            _note_delete,
            {"noteId": _string("The ID of the note to delete")},
            required=("noteId",),
            destructive=True,
        ),
    )
}


def call_tool(
    client: NotesClient,
    name: str,
    arguments: Mapping[str, Any] | None = None,
) -> ToolResult:
    """Run a tool by name.

    Raises:
        KeyError: If no tool has that name
    """
    try:
        spec = TOOLS[name]
    except KeyError:
        available = ", ".join(sorted(TOOLS))
        raise KeyError(f"Unknown tool: {name!r}. Available: {available}") from None

    try:
        return ToolResult(spec.handler(client, arguments or {}))
    except NotesBridgeError as e:
        logger.debug("Tool %s failed", name, exc_info=True)
        return ToolResult(f"Error: {e}", is_error=True)


__all__ = ["TOOLS", "ToolResult", "ToolSpec", "call_tool"]
