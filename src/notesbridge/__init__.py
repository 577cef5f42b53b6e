"""
notesbridge — Markdown in, Apple Notes out, and back again

Renders a small markdown dialect into the inline-styled HTML that Apple
Notes stores, recovers markdown from stored notes, and escapes untrusted
text so it can be spliced into AppleScript without breaking out of its
string literal. Zero runtime dependencies.

Quick Start:
    >>> from notesbridge import render, extract, escape
    >>> html = render("# Groceries\\n\\n- Milk\\n- Eggs")
    >>> extract(html)
    MarkdownText('# Groceries\\n\\n- Milk\\n- Eggs')
    >>> escape('He said "tell me"')
    EscapedLiteral('He said \\\\"t_e_l_l me\\\\"')

    >>> # Talk to Notes (macOS, runs osascript)
    >>> from notesbridge import NotesClient
    >>> client = NotesClient()
    >>> client.create("Groceries", "- Milk\\n- Eggs")
    'Note created: Groceries'

Pipeline:
    write: validate -> render (body) -> escape -> template -> osascript
    read:  osascript -> extract -> markdown

Installation:
    pip install notesbridge          # Core + CLI (zero deps)
    pip install notesbridge[mcp]     # + MCP server for AI assistants
"""

from notesbridge.client import Folder, Note, NotesClient, NoteSummary
from notesbridge.config import (
    NotesConfig,
    config_context,
    get_config,
    reset_config,
    set_config,
)
from notesbridge.errors import (
    EmptyInputError,
    InvalidTypeError,
    NotesBridgeError,
    ScriptError,
    ScriptTimeoutError,
    TooLongError,
    UsageError,
    ValidationError,
)
from notesbridge.escape import ESCAPE_RULES, escape
from notesbridge.renderers.html import RENDER_RULES, HtmlRenderer, render
from notesbridge.renderers.markdown import EXTRACT_RULES, MarkdownExtractor, extract
from notesbridge.rules import FunctionRule, PatternRule, RuleChain
from notesbridge.sanitize import SANITIZE_RULES, sanitize
from notesbridge.script import ScriptRunner
from notesbridge.stages import (
    EscapedLiteral,
    MarkdownText,
    RawText,
    SanitizedHtml,
    ValidatedText,
)
from notesbridge.validate import TextKind, validate

__version__ = "0.3.0"


def markdown_to_literal(markdown: str | None) -> EscapedLiteral:
    """Render a markdown body and escape it for a script template slot.

    The write-path composition for bodies: render (which sanitizes) then
    escape.
    """
    return escape(render(markdown))


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "validate",
    "escape",
    "sanitize",
    "render",
    "extract",
    "markdown_to_literal",
    "TextKind",
    # Stage types
    "RawText",
    "ValidatedText",
    "MarkdownText",
    "SanitizedHtml",
    "EscapedLiteral",
    # Rules
    "PatternRule",
    "FunctionRule",
    "RuleChain",
    "ESCAPE_RULES",
    "SANITIZE_RULES",
    "RENDER_RULES",
    "EXTRACT_RULES",
    # Converters
    "HtmlRenderer",
    "MarkdownExtractor",
    # Client
    "NotesClient",
    "NoteSummary",
    "Folder",
    "Note",
    "ScriptRunner",
    # Configuration (ContextVar-based)
    "NotesConfig",
    "get_config",
    "set_config",
    "reset_config",
    "config_context",
    # Errors
    "NotesBridgeError",
    "ValidationError",
    "InvalidTypeError",
    "EmptyInputError",
    "TooLongError",
    "ScriptError",
    "ScriptTimeoutError",
    "UsageError",
]
