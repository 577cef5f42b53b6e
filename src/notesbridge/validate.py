"""Input validation for note titles, bodies and identifiers.

Runs before any transformation. Validation is the only place in the text
core that raises.

Example:
    >>> from notesbridge.validate import validate, TextKind
    >>> validate("  Groceries  ", TextKind.TITLE)
    ValidatedText('Groceries')
    >>> validate("   ", TextKind.TITLE)
    Traceback (most recent call last):
    ...
    notesbridge.errors.EmptyInputError: Title cannot be empty
"""

from __future__ import annotations

from enum import Enum

from notesbridge.errors import EmptyInputError, InvalidTypeError, TooLongError
from notesbridge.stages import ValidatedText

MAX_TITLE_LENGTH = 255


class TextKind(Enum):
    """What a piece of caller text is used for."""

    TITLE = "title"
    BODY = "body"


def validate(text: object, kind: TextKind | str = TextKind.BODY) -> ValidatedText:
    """Validate and trim caller input.

    Titles must be non-empty after trimming and at most 255 characters.
    Bodies are trimmed but may be empty and have no length limit.

    Args:
        text: Raw caller input
        kind: TextKind (or its value, "title" / "body")

    Returns:
        The trimmed text

    Raises:
        InvalidTypeError: If text is not a string
        EmptyInputError: If a title is blank
        TooLongError: If a title exceeds MAX_TITLE_LENGTH
    """
    kind = TextKind(kind)
    if not isinstance(text, str):
        raise InvalidTypeError("Invalid input: expected string")

    trimmed = text.strip()
    if kind is TextKind.TITLE:
        if not trimmed:
            raise EmptyInputError("Title cannot be empty")
        if len(trimmed) > MAX_TITLE_LENGTH:
            raise TooLongError(
                f"Title too long (max {MAX_TITLE_LENGTH} chars)",
                length=len(trimmed),
                max_length=MAX_TITLE_LENGTH,
            )
    return ValidatedText(trimmed)


def validate_identifier(value: object, label: str = "note ID") -> ValidatedText:
    """Validate a lookup key such as a note ID or folder name.

    Raises:
        InvalidTypeError: If value is not a non-blank string
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidTypeError(f"Invalid {label}")
    return ValidatedText(value.strip())


__all__ = ["MAX_TITLE_LENGTH", "TextKind", "validate", "validate_identifier"]
