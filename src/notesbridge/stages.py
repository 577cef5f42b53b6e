"""Trust-stage string types.

Each stage of the pipeline produces its own ``str`` subclass. Stage values
behave like ordinary strings (``in``, slicing, formatting), but every ``str``
operation returns a plain ``str``: a tag cannot survive a transform that did
not go through the stage that owns it.

    RawText        caller input, may be None
    ValidatedText  trimmed, accepted by the validator
    MarkdownText   markdown recovered from stored HTML
    SanitizedHtml  denylisted constructs removed
    EscapedLiteral safe inside a double-quoted AppleScript literal

Script templates accept only EscapedLiteral in their text slots, so the
type is the only way into the interpreter.

Thread Safety:
    All stage values are immutable strings.
"""

from __future__ import annotations

RawText = str | None


class _Stage(str):
    """Base for stage-tagged strings."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"


class ValidatedText(_Stage):
    """Input accepted by the validator: non-null and trimmed."""

    __slots__ = ()


class MarkdownText(_Stage):
    """Text in the supported markdown subset."""

    __slots__ = ()


class SanitizedHtml(_Stage):
    """HTML with the denylisted tags, attributes and schemes removed."""

    __slots__ = ()


class EscapedLiteral(_Stage):
    """Text safe to splice between double quotes in AppleScript source."""

    __slots__ = ()


__all__ = [
    "EscapedLiteral",
    "MarkdownText",
    "RawText",
    "SanitizedHtml",
    "ValidatedText",
]
