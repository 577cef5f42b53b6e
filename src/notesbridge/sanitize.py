"""Denylist HTML sanitization.

Removes a fixed set of dangerous constructs from an HTML fragment before it
is stored in a note:

- script, iframe, object, embed and form elements (tag and content)
- event-handler attributes with a quoted value anywhere (onclick="...")
- event-handler attributes of any form inside a tag (<body onload=init()>)
- the javascript: URL scheme

This is not an allowlist sanitizer. Everything else passes through
untouched, malformed markup included. Every rule only removes text, and the
chain runs until the fragment stops changing, so removals cannot reassemble
a dangerous construct and sanitize() is idempotent.

Example:
    >>> from notesbridge.sanitize import sanitize
    >>> sanitize('<p onclick="x()">Hi</p><script>alert(1)</script>')
    SanitizedHtml('<p>Hi</p>')

Thread Safety:
    SANITIZE_RULES is immutable; sanitize() is a pure function.
"""

from __future__ import annotations

import re

from notesbridge.rules import PatternRule, RuleChain
from notesbridge.stages import SanitizedHtml
from notesbridge.utils.logger import get_logger

logger = get_logger(__name__)

DANGEROUS_TAGS = ("script", "iframe", "object", "embed", "form")

_FLAGS = re.IGNORECASE | re.DOTALL
_TAG_NAMES = "|".join(DANGEROUS_TAGS)

# Handler attribute inside a tag; the value may be unquoted or unterminated
_TAG_HANDLER = re.compile(r"""(?:\s+|(?<=["'/]))on\w+\s*=\s*[^\s>]*""", _FLAGS)


def _strip_tag_handlers(match: re.Match[str]) -> str:
    return _TAG_HANDLER.sub("", match.group(0))


def _element_rule(tag: str) -> PatternRule:
    # Unclosed open tags are removed on their own
    return PatternRule.compile(
        f"strip-{tag}-element",
        rf"<{tag}\b[^>]*>(?:.*?</{tag}\s*>)?",
        "",
        _FLAGS,
    )


SANITIZE_RULES = RuleChain(
    (
        *(_element_rule(tag) for tag in DANGEROUS_TAGS),
        PatternRule.compile(
            "strip-event-handlers",
            r"""\s*on\w+\s*=\s*(?:"[^"]*"|'[^']*')""",
            "",
            _FLAGS,
        ),
        PatternRule.compile("strip-tag-handlers", r"<[^<>]*>", _strip_tag_handlers),
        PatternRule.compile("strip-javascript-scheme", r"javascript:", "", _FLAGS),
        PatternRule.compile(
            "strip-stray-tags", rf"</?(?:{_TAG_NAMES})\b[^>]*>", "", _FLAGS
        ),
        PatternRule.compile(
            "strip-dangling-brackets", rf"<(?=/?(?:{_TAG_NAMES})\b)", "", _FLAGS
        ),
    )
)


def sanitize(html: str | None) -> SanitizedHtml:
    """Remove denylisted tags, attributes and schemes from HTML.

    Never raises. None yields an empty fragment.

    Args:
        html: Untrusted HTML (or markdown containing raw HTML)

    Returns:
        SanitizedHtml with no denylisted construct left
    """
    if not html:
        return SanitizedHtml("")
    if not isinstance(html, str):
        html = str(html)
    cleaned = SANITIZE_RULES.apply_until_stable(html)
    if len(cleaned) != len(html):
        logger.debug("Sanitizer removed %d characters", len(html) - len(cleaned))
    return SanitizedHtml(cleaned)


__all__ = ["DANGEROUS_TAGS", "SANITIZE_RULES", "sanitize"]
