"""Apple Notes client.

Ties the text core to the interpreter: validates caller input, renders
markdown bodies to HTML, escapes every template slot, runs the script, and
parses the delimited output back into records.

Usage:
    >>> client = NotesClient()
    >>> client.create("Groceries", "- Milk\\n- Eggs", folder="Home")
    "Note created in folder 'Home': Groceries"
    >>> [n.name for n in client.list_notes(limit=5)]
    ['Groceries', ...]
    >>> print(client.show(note_id).markdown())
    - Milk
    - Eggs

Thread Safety:
    The client holds no mutable state. Calls block on the interpreter
    process; run them in a worker thread from async code.
"""

from __future__ import annotations

from dataclasses import dataclass

from notesbridge import templates
from notesbridge.config import NotesConfig, get_config
from notesbridge.errors import InvalidTypeError, UsageError
from notesbridge.escape import escape
from notesbridge.renderers.html import render
from notesbridge.renderers.markdown import extract
from notesbridge.script import ScriptRunner
from notesbridge.stages import MarkdownText
from notesbridge.utils.logger import get_logger
from notesbridge.validate import TextKind, validate, validate_identifier

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class NoteSummary:
    """One row of a note listing."""

    id: str
    name: str
    folder: str = ""
    creation_date: str = ""
    modification_date: str = ""


@dataclass(frozen=True, slots=True)
class Folder:
    """A Notes folder and the number of notes in it."""

    id: str
    name: str
    note_count: int = 0


@dataclass(frozen=True, slots=True)
class Note:
    """A single note with its stored HTML body."""

    id: str
    name: str
    body: str = ""

    def markdown(self) -> MarkdownText:
        """The body converted back to markdown."""
        return extract(self.body)


def _split_records(output: str) -> list[list[str]]:
    if not output.strip():
        return []
    return [
        [field.strip() for field in record.split(templates.FIELD_SEPARATOR)]
        for record in output.split(templates.RECORD_SEPARATOR)
    ]


def _field(fields: list[str], index: int) -> str:
    return fields[index] if index < len(fields) else ""


def _as_limit(value: object) -> int:
    # Remote callers may send "5" for an integer field
    if isinstance(value, bool):
        raise InvalidTypeError(f"limit must be an integer, got {value!r}")
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        raise InvalidTypeError(f"limit must be an integer, got {value!r}") from None


def _to_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


class NotesClient:
    """High-level operations on notes and folders.

    Args:
        config: Settings; the context's active config when None
        runner: Script runner; built from the config when None
    """

    __slots__ = ("_config", "_runner")

    def __init__(
        self,
        config: NotesConfig | None = None,
        runner: ScriptRunner | None = None,
    ) -> None:
        self._config = config if config is not None else get_config()
        self._runner = runner if runner is not None else ScriptRunner.from_config(self._config)

    @property
    def config(self) -> NotesConfig:
        return self._config

    def list_notes(self, limit: int | None = None) -> list[NoteSummary]:
        """List notes across all folders, newest first as Notes orders them.

        Records without an id or a name are dropped.
        """
        limit = self._config.list_limit if limit is None else _as_limit(limit)
        output = self._runner.run(templates.list_notes_script(limit))
        notes = [
            NoteSummary(
                id=_field(fields, 0),
                name=_field(fields, 1),
                folder=_field(fields, 2),
                creation_date=_field(fields, 3),
                modification_date=_field(fields, 4),
            )
            for fields in _split_records(output)
        ]
        return [note for note in notes if note.id and note.name]

    def list_folders(self) -> list[Folder]:
        """List folders with their note counts."""
        output = self._runner.run(templates.list_folders_script())
        folders = [
            Folder(
                id=_field(fields, 0),
                name=_field(fields, 1),
                note_count=_to_int(_field(fields, 2) or "0"),
            )
            for fields in _split_records(output)
        ]
        return [folder for folder in folders if folder.id and folder.name]

    def show(self, note_id: str) -> Note:
        """Fetch a note's title and stored HTML body."""
        escaped_id = escape(validate_identifier(note_id, "note ID"))
        output = self._runner.run(templates.show_note_script(escaped_id))
        # The body may itself contain the separator; keep everything after the name
        fields = output.split(templates.FIELD_SEPARATOR, 2)
        return Note(
            id=_field(fields, 0).strip(),
            name=_field(fields, 1).strip(),
            body=_field(fields, 2).strip(),
        )

    def create(self, title: str, body: str = "", folder: str | None = None) -> str:
        """Create a note; the body is markdown.

        Returns:
            The interpreter's confirmation message
        """
        valid_title = validate(title, TextKind.TITLE)
        valid_body = validate(body if body is not None else "", TextKind.BODY)
        html_body = render(valid_body) if valid_body else ""
        escaped_folder = escape(folder) if folder else None
        logger.debug("Creating note %r (folder=%r)", str(valid_title), folder)
        return self._runner.run(
            templates.create_note_script(escape(valid_title), escape(html_body), escaped_folder)
        )

    def update(
        self,
        note_id: str,
        title: str | None = None,
        body: str | None = None,
    ) -> str:
        """Replace a note's title and/or body.

        Raises:
            UsageError: If neither title nor body is given
        """
        escaped_id = escape(validate_identifier(note_id, "note ID"))
        if not title and not body:
            raise UsageError("No updates provided. Specify title or body to update.")
        escaped_title = escape(validate(title, TextKind.TITLE)) if title else None
        escaped_body = escape(render(validate(body, TextKind.BODY))) if body else None
        return self._runner.run(
            templates.update_note_script(escaped_id, escaped_title, escaped_body)
        )

    def delete_note(self, note_id: str) -> str:
        escaped_id = escape(validate_identifier(note_id, "note ID"))
        return self._runner.run(templates.delete_note_script(escaped_id))

    def create_folder(self, name: str) -> str:
        escaped_name = escape(validate(name, TextKind.TITLE))
        return self._runner.run(templates.create_folder_script(escaped_name))

    def delete_folder(self, name: str) -> str:
        escaped_name = escape(validate_identifier(name, "folder name"))
        return self._runner.run(templates.delete_folder_script(escaped_name))


__all__ = ["Folder", "Note", "NoteSummary", "NotesClient"]
