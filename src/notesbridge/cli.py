"""Command-line interface for Apple Notes.

Usage:
    notesbridge notes list [--limit N]
    notesbridge folders list
    notesbridge folder create <name>
    notesbridge folder delete <name>
    notesbridge note <note-id>
    notesbridge note create <title> [body ...] [@Folder]
    notesbridge note edit <note-id> [--title T] [--body B]
    notesbridge note delete <note-id>

Legacy forms kept for scripts written against older releases:
    notesbridge list [--limit N]
    notesbridge folders
    notesbridge show <note-id>
    notesbridge create|add <title> [body ...]

Environment:
    DEBUG=true               log scripts and tracebacks to stderr
    NOTESBRIDGE_TIMEOUT      seconds before a script is killed
    NO_COLOR                 disable ANSI colors
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from notesbridge import __version__
from notesbridge.client import NotesClient
from notesbridge.config import NotesConfig, set_config
from notesbridge.errors import NotesBridgeError, UsageError
from notesbridge.utils.logger import get_logger

logger = get_logger(__name__)

PROG = "notesbridge"
NOTE_ACTIONS = ("create", "edit", "delete")


class Palette:
    """ANSI colors, empty strings when color is off."""

    __slots__ = ("reset", "green", "red", "yellow", "cyan", "gray")

    def __init__(self, enabled: bool) -> None:
        codes = {
            "reset": "\x1b[0m",
            "green": "\x1b[32m",
            "red": "\x1b[31m",
            "yellow": "\x1b[33m",
            "cyan": "\x1b[36m",
            "gray": "\x1b[90m",
        }
        for name, code in codes.items():
            setattr(self, name, code if enabled else "")

    @classmethod
    def for_stream(cls, stream: TextIO) -> Palette:
        isatty = getattr(stream, "isatty", None)
        enabled = bool(isatty and isatty()) and "NO_COLOR" not in os.environ
        return cls(enabled)


class _ArgumentParser(argparse.ArgumentParser):
    """Parser that raises instead of exiting, so main() owns the exit code."""

    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        description="Create, read and organize Apple Notes from the terminal. "
        "Note bodies are markdown.",
        epilog='Example: notesbridge note create "Work Task" "Details here" @Work',
    )
    parser.add_argument("--version", "-v", action="version", version=f"{PROG} {__version__}")
    commands = parser.add_subparsers(dest="command", parser_class=_ArgumentParser)

    notes = commands.add_parser("notes", help="list notes")
    notes.add_argument("action", choices=["list"])
    notes.add_argument("--limit", type=int, default=None, help="maximum notes to show")

    folders = commands.add_parser("folders", help="list folders")
    folders.add_argument("action", nargs="?", choices=["list"], default="list")

    folder = commands.add_parser("folder", help="create or delete a folder")
    folder.add_argument("action", choices=["create", "delete"])
    folder.add_argument("name", nargs="?")

    note = commands.add_parser(
        "note",
        help="show, create, edit or delete a note",
        description="note <id> shows a note; note create|edit|delete changes one.",
    )
    note.add_argument("target", nargs="?", help="create, edit, delete or a note ID")
    note.add_argument("args", nargs="*", help="title, body words and @Folder")
    note.add_argument("--title", help="new title (edit)")
    note.add_argument("--body", help="new markdown body (edit)")

    legacy_list = commands.add_parser("list", help="(legacy) list notes")
    legacy_list.add_argument("--limit", type=int, default=None)

    show = commands.add_parser("show", help="(legacy) show a note")
    show.add_argument("note_id", nargs="?")

    for name in ("create", "add"):
        create = commands.add_parser(name, help="(legacy) create a note")
        create.add_argument("title", nargs="?")
        create.add_argument("body", nargs="*")

    return parser


class NotesCLI:
    """Command handlers writing human-readable output."""

    def __init__(
        self,
        client_factory: Callable[[], NotesClient],
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self._client_factory = client_factory
        self._client: NotesClient | None = None
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.colors = Palette.for_stream(self.out)

    @property
    def client(self) -> NotesClient:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def _ok(self, message: str) -> None:
        c = self.colors
        self._print(f"{c.green}✓{c.reset} {message}")

    def list_notes(self, limit: int | None) -> None:
        c = self.colors
        notes = self.client.list_notes(limit=limit)
        if not notes:
            self._print(f"{c.yellow}No notes found{c.reset}")
            return
        self._print(f"\n{c.cyan}Your Notes{c.reset} ({len(notes)} shown)\n")
        for index, note in enumerate(notes, start=1):
            self._print(f"{c.gray}{index:>2}.{c.reset} {c.green}{note.name}{c.reset}")
            self._print(f"    {c.gray}Folder: {note.folder}{c.reset}")
            self._print(f"    {c.gray}ID: {note.id}{c.reset}")
            self._print(f"    {c.gray}Modified: {note.modification_date}{c.reset}")
        self._print()

    def list_folders(self) -> None:
        c = self.colors
        folders = self.client.list_folders()
        if not folders:
            self._print(f"{c.yellow}No folders found{c.reset}")
            return
        self._print(f"\n{c.cyan}Your Folders{c.reset} ({len(folders)} total)\n")
        for index, folder in enumerate(folders, start=1):
            noun = "note" if folder.note_count == 1 else "notes"
            self._print(
                f"{c.gray}{index:>2}.{c.reset} {c.green}{folder.name}{c.reset} "
                f"{c.gray}({folder.note_count} {noun}){c.reset}"
            )
        self._print()

    def show_note(self, note_id: str | None) -> None:
        if not note_id:
            raise UsageError(f"Note ID required\n\nUsage: {PROG} note <note-id>")
        c = self.colors
        note = self.client.show(note_id)
        self._print(f"\n{c.cyan}# {note.name}{c.reset}\n")
        self._print(note.markdown())
        self._print()

    def create_note(self, title: str | None, body: str = "", folder: str | None = None) -> None:
        if not title:
            raise UsageError(f"Title required\n\nUsage: {PROG} note create <title> [body] [@FolderName]")
        self._ok(self.client.create(title, body, folder=folder))

    def edit_note(self, note_id: str | None, title: str | None, body: str | None) -> None:
        usage = f'Usage: {PROG} note edit <note-id> [--title "Title"] [--body "Content"]'
        if not note_id:
            raise UsageError(f"Note ID required\n\n{usage}")
        if not title and not body:
            raise UsageError(f"Specify --title or --body to update\n\n{usage}")
        self._ok(self.client.update(note_id, title=title, body=body))

    def delete_note(self, note_id: str | None) -> None:
        if not note_id:
            raise UsageError(f"Note ID required\n\nUsage: {PROG} note delete <note-id>")
        self._ok(self.client.delete_note(note_id))

    def create_folder(self, name: str | None) -> None:
        if not name:
            raise UsageError(f"Folder name required\n\nUsage: {PROG} folder create <name>")
        self._ok(self.client.create_folder(name))

    def delete_folder(self, name: str | None) -> None:
        if not name:
            raise UsageError(f"Folder name required\n\nUsage: {PROG} folder delete <name>")
        self._ok(self.client.delete_folder(name))

    def dispatch(self, args: argparse.Namespace) -> None:
        match args.command:
            case "notes" | "list":
                self.list_notes(args.limit)
            case "folders":
                self.list_folders()
            case "folder" if args.action == "create":
                self.create_folder(args.name)
            case "folder":
                self.delete_folder(args.name)
            case "note":
                self._dispatch_note(args)
            case "show":
                self.show_note(args.note_id)
            case "create" | "add":
                self.create_note(args.title, " ".join(args.body))
            case _:
                raise UsageError(f"Unknown command '{args.command}'")

    def _dispatch_note(self, args: argparse.Namespace) -> None:
        rest: list[str] = args.args
        match args.target:
            case None:
                raise UsageError(f"Note ID or action required\n\nUsage: {PROG} note <note-id>")
            case "create":
                # @Folder may appear anywhere after the title
                folder = next((a[1:] for a in reversed(rest[1:]) if a.startswith("@")), None)
                body = " ".join(a for a in rest[1:] if not a.startswith("@"))
                self.create_note(rest[0] if rest else None, body, folder=folder)
            case "edit":
                self.edit_note(rest[0] if rest else None, args.title, args.body)
            case "delete":
                self.delete_note(rest[0] if rest else None)
            case note_id:
                self.show_note(note_id)


def _configure_logging(config: NotesConfig) -> None:
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(
    argv: Sequence[str] | None = None,
    *,
    client: NotesClient | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Run the CLI and return the process exit code."""
    config = NotesConfig.from_env()
    set_config(config)
    _configure_logging(config)

    parser = build_parser()
    cli = NotesCLI(lambda: client if client is not None else NotesClient(config), out, err)
    c = Palette.for_stream(cli.err)

    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(f"{c.red}Error: {e}{c.reset}", file=cli.err)
        parser.print_help(cli.err)
        return 1

    if args.command is None:
        parser.print_help(cli.out)
        return 0

    try:
        cli.dispatch(args)
    except NotesBridgeError as e:
        print(f"{c.red}Error: {e}{c.reset}", file=cli.err)
        logger.debug("Command failed", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
