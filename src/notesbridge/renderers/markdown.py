"""Apple Notes HTML back to markdown.

The inverse of renderers.html, plus general stripping for markup that Notes
produces on its own (nested divs, spans, font tags). For the element subset
the renderer emits, extracting a rendered note gives back the same headings,
emphasis, lists, links and rules, though not byte-identical whitespace.

Recognized elements:
    h1-h6, strong/b, em/i, code, monospace blockquote (code block),
    ul/ol/li, hr, br, p, div, a[href]

Everything else is stripped to its text. Only &nbsp; &amp; &lt; &gt; &quot;
and &#39; are decoded.

Thread Safety:
    EXTRACT_RULES is immutable. Ordered-list numbering is local to each
    list match, so extract() is a pure function.
"""

from __future__ import annotations

import re

from notesbridge.rules import PatternRule, RuleChain
from notesbridge.stages import MarkdownText

_FLAGS = re.IGNORECASE | re.DOTALL

_LIST_ITEM = re.compile(r"<li\b[^>]*>(.*?)</li\s*>", _FLAGS)

ENTITIES = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}


def _element(tag: str, attrs: str = r"[^>]*") -> str:
    """Pattern for a whole element, capturing its content as group "body"."""
    return rf"<{tag}\b{attrs}>(?P<body>.*?)</{tag}\s*>"


def _heading(match: re.Match[str]) -> str:
    return f"{'#' * int(match.group('level'))} {match.group('body')}\n\n"


def _unordered_list(match: re.Match[str]) -> str:
    return _LIST_ITEM.sub(r"- \1\n", match.group("body")) + "\n"


def _ordered_list(match: re.Match[str]) -> str:
    counter = 0

    def number(item: re.Match[str]) -> str:
        nonlocal counter
        counter += 1
        return f"{counter}. {item.group(1)}\n"

    return _LIST_ITEM.sub(number, match.group("body")) + "\n"


def _decode_entity(match: re.Match[str]) -> str:
    return ENTITIES[match.group(0)]


EXTRACT_RULES = RuleChain(
    (
        PatternRule.compile("strip-comments", r"<!--.*?-->", "", re.DOTALL),
        PatternRule.compile(
            "headings",
            r"<h(?P<level>[1-6])\b[^>]*>(?P<body>.*?)</h(?P=level)\s*>",
            _heading,
            _FLAGS,
        ),
        PatternRule.compile("strong", _element("strong"), r"**\g<body>**", _FLAGS),
        PatternRule.compile("bold", _element("b"), r"**\g<body>**", _FLAGS),
        PatternRule.compile("emphasis", _element("em"), r"*\g<body>*", _FLAGS),
        PatternRule.compile("italic", _element("i"), r"*\g<body>*", _FLAGS),
        PatternRule.compile(
            "code-block",
            _element("blockquote", r"[^>]*font-family:\s*monospace[^>]*"),
            "```\n\\g<body>\n```\n",
            _FLAGS,
        ),
        PatternRule.compile("inline-code", _element("code"), r"`\g<body>`", _FLAGS),
        PatternRule.compile("unordered-list", _element("ul"), _unordered_list, _FLAGS),
        PatternRule.compile("ordered-list", _element("ol"), _ordered_list, _FLAGS),
        PatternRule.compile("horizontal-rule", r"<hr\b[^>]*>", "\n---\n\n", _FLAGS),
        PatternRule.compile("line-breaks", r"<br\s*/?>", "\n", _FLAGS),
        PatternRule.compile("paragraphs", _element("p"), "\\g<body>\n\n", _FLAGS),
        PatternRule.compile("divs", _element("div"), "\\g<body>\n", _FLAGS),
        PatternRule.compile(
            "links",
            r"""<a\b[^>]*?\bhref\s*=\s*(?P<quote>["'])(?P<href>.*?)(?P=quote)[^>]*>(?P<body>.*?)</a\s*>""",
            r"[\g<body>](\g<href>)",
            _FLAGS,
        ),
        PatternRule.compile("strip-tags", r"<[^>]+>", ""),
        PatternRule.compile(
            "decode-entities", "|".join(map(re.escape, ENTITIES)), _decode_entity
        ),
        PatternRule.compile("collapse-newlines", r"\n{3,}", "\n\n"),
    )
)


class MarkdownExtractor:
    """Extract markdown from a stored HTML fragment.

    Usage:
        >>> MarkdownExtractor().extract("<h1>Groceries</h1><ul><li>Milk</li></ul>")
        MarkdownText('# Groceries\\n\\n- Milk')
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: RuleChain | None = None) -> None:
        self._rules = rules if rules is not None else EXTRACT_RULES

    @property
    def rules(self) -> RuleChain:
        return self._rules

    def extract(self, html: str | None) -> MarkdownText:
        """Convert HTML to markdown.

        Args:
            html: HTML fragment; None and "" yield ""

        Returns:
            Trimmed MarkdownText
        """
        if not html:
            return MarkdownText("")
        if not isinstance(html, str):
            html = str(html)
        return MarkdownText(self._rules.apply(html).strip())

    convert = extract


_DEFAULT_EXTRACTOR = MarkdownExtractor()


def extract(html: str | None) -> MarkdownText:
    """Extract markdown with the default rule chain."""
    return _DEFAULT_EXTRACTOR.extract(html)


__all__ = ["ENTITIES", "EXTRACT_RULES", "MarkdownExtractor", "extract"]
