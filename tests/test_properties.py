"""Property-based tests for the text core using Hypothesis.

These tests verify invariants that hold for any input:
1. Escaped text never ends its literal or re-opens a tell block
2. Sanitized HTML contains no denylisted construct, and sanitizing is idempotent
3. Rendering and extracting never crash and always return tagged strings

Property-based testing finds edge cases that example-based tests miss.
"""

import re
import string

from hypothesis import given, settings
from hypothesis import strategies as st

from notesbridge import (
    EscapedLiteral,
    MarkdownText,
    SanitizedHtml,
    escape,
    extract,
    render,
    sanitize,
)
from notesbridge.sanitize import DANGEROUS_TAGS

# Text salted with the fragments attacks are built from
FRAGMENTS = [
    '"',
    "\\",
    "{",
    "}",
    "\n",
    "\r",
    "\t",
    "tell",
    "end",
    " ",
    "\u200b",
    "\u202e",
    "\x00",
    "<script>",
    "</script>",
    "<scr",
    "ipt>",
    "<iframe",
    "onerror=",
    "on",
    "click=",
    "javascript:",
    "java",
    "script:",
    "<",
    ">",
    "'",
    "**",
    "*",
    "`",
    "# ",
    "- ",
    "1. ",
]

salted_text = st.lists(
    st.one_of(st.sampled_from(FRAGMENTS), st.text(max_size=5)),
    max_size=30,
).map("".join)

ascii_text = st.lists(
    st.one_of(st.sampled_from(FRAGMENTS), st.text(alphabet=string.printable, max_size=5)),
    max_size=30,
).map("".join)


_TAG_NAMES = "|".join(DANGEROUS_TAGS)
_ESCAPE_TOKENS = {"n": "\n", "t": "\t"}


def _has_unescaped_quote(text: str) -> bool:
    return any(len(m.group(1)) % 2 == 0 for m in re.finditer(r'(\\*)"', text))


def _decode(literal: str) -> str:
    """What the interpreter reads from an escaped literal."""
    return re.sub(r"\\(.)", lambda m: _ESCAPE_TOKENS.get(m.group(1), m.group(1)), literal)


def _has_denylisted(html: str) -> bool:
    return (
        "javascript:" in html.lower()
        or re.search(r"""on\w+\s*=\s*(?:"[^"]*"|'[^']*')""", html, re.IGNORECASE) is not None
        or re.search(r"""<[^<>]*[\s"'/]on\w+\s*=[^<>]*>""", html, re.IGNORECASE) is not None
        or re.search(rf"</?(?:{_TAG_NAMES})\b", html, re.IGNORECASE) is not None
    )


class TestEscapeProperties:
    """Escaping invariants over salted input."""

    @given(text=salted_text)
    @settings(max_examples=300)
    def test_literal_cannot_be_closed(self, text: str) -> None:
        """No quote, brace or raw newline survives escaping."""
        result = escape(text)
        assert isinstance(result, EscapedLiteral)
        assert not _has_unescaped_quote(result)
        assert "{" not in result and "}" not in result
        assert "\n" not in result and "\r" not in result

    @given(text=salted_text)
    @settings(max_examples=300)
    def test_no_block_keyword_survives(self, text: str) -> None:
        """The interpreter never reads a bare tell keyword."""
        result = _decode(escape(text))
        assert re.search(r"\btell\b", result, re.IGNORECASE | re.ASCII) is None

    @given(text=salted_text)
    @settings(max_examples=100)
    def test_no_control_or_invisible_characters(self, text: str) -> None:
        """Controls and invisible characters are gone."""
        result = escape(text)
        assert not re.search(
            "[\x00-\x1f\x7f\u2028\u2029\u200b-\u200f\u202a-\u202e\u2060-\u206f\ufeff]", result
        )


class TestSanitizeProperties:
    """Sanitizer invariants over salted input."""

    @given(html=ascii_text)
    @settings(max_examples=300)
    def test_nothing_denylisted_survives(self, html: str) -> None:
        """No denylisted construct is left in the output."""
        assert not _has_denylisted(sanitize(html))

    @given(html=salted_text)
    @settings(max_examples=300)
    def test_idempotent(self, html: str) -> None:
        """Sanitizing twice equals sanitizing once."""
        once = sanitize(html)
        assert sanitize(once) == once

    @given(html=salted_text)
    @settings(max_examples=100)
    def test_never_grows(self, html: str) -> None:
        """Sanitizing only removes text."""
        result = sanitize(html)
        assert isinstance(result, SanitizedHtml)
        assert len(result) <= len(html)


class TestConverterProperties:
    """Renderer and extractor never fail."""

    @given(markdown=ascii_text)
    @settings(max_examples=200)
    def test_render_output_is_clean(self, markdown: str) -> None:
        """Rendered HTML contains nothing denylisted."""
        html = render(markdown)
        assert isinstance(html, SanitizedHtml)
        assert not _has_denylisted(html)

    @given(html=salted_text)
    @settings(max_examples=200)
    def test_extract_is_total(self, html: str) -> None:
        """Extraction always returns trimmed markdown."""
        result = extract(html)
        assert isinstance(result, MarkdownText)
        assert result == result.strip()

    @given(word=st.text(alphabet=string.ascii_letters, min_size=1, max_size=20))
    @settings(max_examples=50)
    def test_simple_constructs_round_trip(self, word: str) -> None:
        """Single constructs around a plain word round-trip."""
        for markdown in (f"# {word}", f"**{word}**", f"*{word}*", f"- {word}", f"1. {word}"):
            assert extract(render(markdown)) == markdown
