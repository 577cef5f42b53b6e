"""AppleScript templates for Notes operations.

Each function returns complete script source for one operation. Text slots
are double-quoted literals and accept only EscapedLiteral values; passing a
plain str raises TypeError, so unescaped text cannot reach the interpreter.

Scripts that return records join fields with FIELD_SEPARATOR and records
with RECORD_SEPARATOR.
"""

from __future__ import annotations

from notesbridge.stages import EscapedLiteral

FIELD_SEPARATOR = "|||"
RECORD_SEPARATOR = "###"


def _slot(value: object, name: str) -> EscapedLiteral:
    if not isinstance(value, EscapedLiteral):
        raise TypeError(
            f"{name} must be an EscapedLiteral, got {type(value).__name__}; "
            "pass it through notesbridge.escape.escape() first"
        )
    return value


def _tell_notes(body: str) -> str:
    return f'tell application "Notes"\n{body}\nend tell\n'


def list_notes_script(limit: int) -> str:
    limit = int(limit)
    return _tell_notes(
        f"""  set noteList to {{}}
  set noteCount to 0
  repeat with aNote in notes
    if noteCount >= {limit} then exit repeat
    set noteId to id of aNote
    set noteName to name of aNote
    try
      set noteFolder to name of container of aNote
    on error
      set noteFolder to "Notes"
    end try
    set noteCreation to creation date of aNote as string
    set noteModification to modification date of aNote as string
    set end of noteList to noteId & "{FIELD_SEPARATOR}" & noteName & "{FIELD_SEPARATOR}" & noteFolder & "{FIELD_SEPARATOR}" & noteCreation & "{FIELD_SEPARATOR}" & noteModification
    set noteCount to noteCount + 1
  end repeat
  set AppleScript's text item delimiters to "{RECORD_SEPARATOR}"
  return noteList as text"""
    )


def list_folders_script() -> str:
    return _tell_notes(
        f"""  set folderList to {{}}
  repeat with aFolder in folders
    set folderId to id of aFolder
    set folderName to name of aFolder
    set folderNoteCount to count of notes in aFolder
    set end of folderList to folderId & "{FIELD_SEPARATOR}" & folderName & "{FIELD_SEPARATOR}" & folderNoteCount
  end repeat
  set AppleScript's text item delimiters to "{RECORD_SEPARATOR}"
  return folderList as text"""
    )


def show_note_script(note_id: EscapedLiteral) -> str:
    note_id = _slot(note_id, "note_id")
    return _tell_notes(
        f"""  try
    set theNote to note id "{note_id}"
    set noteId to id of theNote
    set noteName to name of theNote
    set noteBody to body of theNote
    return noteId & "{FIELD_SEPARATOR}" & noteName & "{FIELD_SEPARATOR}" & noteBody
  on error errMsg
    error "Note not found: " & errMsg
  end try"""
    )


def create_note_script(
    title: EscapedLiteral,
    body: EscapedLiteral,
    folder: EscapedLiteral | None = None,
) -> str:
    title = _slot(title, "title")
    body = _slot(body, "body")
    properties = f'{{name:"{title}", body:"{body}"}}'
    if folder is None:
        return _tell_notes(
            f"""  make new note with properties {properties}
  return "Note created: {title}\""""
        )
    folder = _slot(folder, "folder")
    return _tell_notes(
        f"""  try
    set targetFolder to folder "{folder}"
    make new note at targetFolder with properties {properties}
    return "Note created in folder '{folder}': {title}"
  on error errMsg
    error "Folder '{folder}' not found. Use 'folders list' to see available folders."
  end try"""
    )


def update_note_script(
    note_id: EscapedLiteral,
    title: EscapedLiteral | None = None,
    body: EscapedLiteral | None = None,
) -> str:
    note_id = _slot(note_id, "note_id")
    statements = []
    if title is not None:
        statements.append(f'    set name of theNote to "{_slot(title, "title")}"')
    if body is not None:
        statements.append(f'    set body of theNote to "{_slot(body, "body")}"')
    if not statements:
        raise ValueError("update_note_script needs a title or a body")
    updates = "\n".join(statements)
    return _tell_notes(
        f"""  try
    set theNote to note id "{note_id}"
{updates}
    return "Note updated: " & name of theNote
  on error errMsg
    error "Note not found or update failed: " & errMsg
  end try"""
    )


def delete_note_script(note_id: EscapedLiteral) -> str:
    note_id = _slot(note_id, "note_id")
    return _tell_notes(
        f"""  try
    set theNote to note id "{note_id}"
    set noteName to name of theNote
    delete theNote
    return "Note deleted: " & noteName
  on error errMsg
    error "Note not found: " & errMsg
  end try"""
    )


def create_folder_script(name: EscapedLiteral) -> str:
    name = _slot(name, "name")
    return _tell_notes(
        f"""  try
    make new folder with properties {{name:"{name}"}}
    return "Folder created: {name}"
  on error errMsg
    error "Failed to create folder: " & errMsg
  end try"""
    )


def delete_folder_script(name: EscapedLiteral) -> str:
    name = _slot(name, "name")
    return _tell_notes(
        f"""  try
    set targetFolder to folder "{name}"
    delete targetFolder
    return "Folder deleted: {name}"
  on error errMsg
    error "Folder not found: " & errMsg
  end try"""
    )


__all__ = [
    "FIELD_SEPARATOR",
    "RECORD_SEPARATOR",
    "create_folder_script",
    "create_note_script",
    "delete_folder_script",
    "delete_note_script",
    "list_folders_script",
    "list_notes_script",
    "show_note_script",
    "update_note_script",
]
