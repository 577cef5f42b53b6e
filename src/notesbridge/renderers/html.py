"""Markdown to Apple Notes HTML.

Renders the supported markdown subset into inline-styled HTML. Notes keeps
the style attributes, so the fragment displays without a stylesheet.

Supported syntax:
    # / ## / ###        headings
    **bold**, *italic*  emphasis
    `code`              inline code
    ```...```           fenced code (monospace blockquote)
    - item / * item     bullet lists (flat)
    1. item             numbered lists (flat)
    ---                 horizontal rule
    blank line          paragraph break

The input is sanitized before and after the rules run. Rules run in a fixed
order over the whole text: block rules (code, headings, lists) consume
newline structure before the inline and paragraph rules see it, and bold
runs before italic so ``**`` is never read as two italic delimiters.

Thread Safety:
    RENDER_RULES is immutable; render() is a pure function. HtmlRenderer
    holds no per-render state and can be shared across threads.
"""

from __future__ import annotations

import re

from notesbridge.rules import PatternRule, RuleChain
from notesbridge.sanitize import sanitize
from notesbridge.stages import SanitizedHtml

CODE_BLOCK_STYLE = (
    "background:#f5f5f5;padding:12px;border-left:4px solid #ddd;"
    "font-family:monospace;white-space:pre-wrap"
)
INLINE_CODE_STYLE = (
    "background:#f0f0f0;padding:2px 6px;border-radius:3px;font-family:monospace"
)
HEADING_STYLES = {
    1: "font-size:28px;margin:28px 0 20px",
    2: "font-size:24px;margin:24px 0 16px",
    3: "font-size:20px;margin:20px 0 16px",
}
LIST_STYLE = "margin:16px 0;padding-left:24px"
LIST_ITEM_STYLE = "margin-bottom:8px"
RULE_STYLE = "border:none;border-top:1px solid #ddd;margin:24px 0"
PARAGRAPH_STYLE = "margin:12px 0"
CONTAINER_STYLE = "font-size:16px;line-height:1.6;font-family:-apple-system,sans-serif"

_BULLET_MARKER = re.compile(r"^[*\-] ")
_NUMBER_MARKER = re.compile(r"^\d+\. ")


def _list_replacement(tag: str, marker: re.Pattern[str]):
    """Build the replacement turning a run of marker lines into one list."""

    def replace(match: re.Match[str]) -> str:
        items = "".join(
            f'<li style="{LIST_ITEM_STYLE}">{marker.sub("", line, count=1)}</li>'
            for line in match.group(0).strip().split("\n")
        )
        return f'<{tag} style="{LIST_STYLE}">{items}</{tag}>'

    return replace


def _heading_rule(level: int) -> PatternRule:
    return PatternRule.compile(
        f"heading-{level}",
        rf"^{'#' * level} (.+)$",
        rf'<h{level} style="{HEADING_STYLES[level]}">\1</h{level}>',
        re.MULTILINE,
    )


RENDER_RULES = RuleChain(
    (
        PatternRule.compile("normalize-newlines", r"\r\n?", "\n"),
        PatternRule.compile(
            "fenced-code",
            r"```(.*?)```",
            rf'<blockquote style="{CODE_BLOCK_STYLE}">\1</blockquote>',
            re.DOTALL,
        ),
        PatternRule.compile(
            "inline-code", r"`([^`]+)`", rf'<code style="{INLINE_CODE_STYLE}">\1</code>'
        ),
        # Longest prefix first: "### x" must not become <h1>## x</h1>
        _heading_rule(3),
        _heading_rule(2),
        _heading_rule(1),
        PatternRule.compile(
            "bullet-list",
            r"(?:^[*\-] .+$\n?)+",
            _list_replacement("ul", _BULLET_MARKER),
            re.MULTILINE,
        ),
        PatternRule.compile(
            "numbered-list",
            r"(?:^\d+\. .+$\n?)+",
            _list_replacement("ol", _NUMBER_MARKER),
            re.MULTILINE,
        ),
        PatternRule.compile("bold", r"\*\*([^*]+)\*\*", r"<strong>\1</strong>"),
        PatternRule.compile("italic", r"\*([^*]+)\*", r"<em>\1</em>"),
        PatternRule.compile(
            "horizontal-rule", r"^---+$", f'<hr style="{RULE_STYLE}">', re.MULTILINE
        ),
        PatternRule.compile("paragraphs", r"\n\n+", f'</p><p style="{PARAGRAPH_STYLE}">'),
        PatternRule.compile("line-breaks", r"\n", "<br>"),
    )
)


class HtmlRenderer:
    """Render markdown to a sanitized, inline-styled HTML fragment.

    Usage:
        >>> renderer = HtmlRenderer()
        >>> renderer.render("**bold text**")
        SanitizedHtml('<div style="..."><p style="margin:12px 0"><strong>bold text</strong></p></div>')

    A custom chain can be passed to add or reorder rules; the input is
    always sanitized before the chain runs, and its output once more.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: RuleChain | None = None) -> None:
        self._rules = rules if rules is not None else RENDER_RULES

    @property
    def rules(self) -> RuleChain:
        return self._rules

    def render(self, markdown: str | None) -> SanitizedHtml:
        """Render markdown to HTML.

        Args:
            markdown: Markdown source; None is treated as empty

        Returns:
            SanitizedHtml wrapped in the styled container
        """
        # A quote emitted by a rule can close a handler value left open in the input
        body = sanitize(self._rules.apply(sanitize(markdown)))
        return SanitizedHtml(
            f'<div style="{CONTAINER_STYLE}"><p style="{PARAGRAPH_STYLE}">{body}</p></div>'
        )

    convert = render


_DEFAULT_RENDERER = HtmlRenderer()


def render(markdown: str | None) -> SanitizedHtml:
    """Render markdown with the default rule chain."""
    return _DEFAULT_RENDERER.render(markdown)


__all__ = ["HtmlRenderer", "RENDER_RULES", "render"]
