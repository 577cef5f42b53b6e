"""AppleScript string-literal escaping.

Turns arbitrary untrusted text into a value that can sit between double
quotes in generated AppleScript source without ending the literal, the
properties record around it, or the surrounding ``tell`` block.

The rule order is a security contract:

- keyword neutralization runs first, before character-level escaping can
  split or hide a word boundary;
- keywords are neutralized again once control characters, invisible
  characters and braces are stripped, because those removals can join the
  halves of a keyword; this pass still runs before escaping, so an escape
  token such as ``\\t`` never creates a word boundary;
- backslashes are doubled before quotes are escaped, otherwise a user
  backslash in front of an escaped quote would unescape it.

Example:
    >>> from notesbridge.escape import escape
    >>> escape("Title} end tell {x}")
    EscapedLiteral('Title end t_e_l_l x')

Thread Safety:
    ESCAPE_RULES is immutable; escape() is a pure function.
"""

from __future__ import annotations

import re

from notesbridge.rules import FunctionRule, PatternRule, RuleChain, literal
from notesbridge.stages import EscapedLiteral
from notesbridge.utils.logger import get_logger

logger = get_logger(__name__)

MAX_LITERAL_LENGTH = 50_000
TRUNCATION_MARKER = "... (truncated)"

# Substitutes are observable in the note: "tell" becomes "t_e_l_l", so
# "end tell" is stored as "end t_e_l_l".
BLOCK_START_SUBSTITUTE = "t_e_l_l"
BLOCK_END_SUBSTITUTE = "e_n_d_t_e_l_l"

# ASCII word boundaries: a non-ASCII letter next to "tell" still bounds the word
_KEYWORD_FLAGS = re.IGNORECASE | re.ASCII

# Zero-width and bidi override characters (Trojan Source mitigation)
_INVISIBLE_PATTERN = "[\u200b-\u200f\u202a-\u202e\u2060-\u206f\ufeff]"

# A cut inside a longer word can leave "tell" at the end of the literal
_CUT_KEYWORD = re.compile(r"tell$", re.IGNORECASE)
_WORD_CHAR = re.compile(r"\w", re.ASCII)


def _truncate(text: str) -> str:
    if len(text) <= MAX_LITERAL_LENGTH:
        return text
    logger.warning(
        "Truncating script literal from %d to %d characters", len(text), MAX_LITERAL_LENGTH
    )
    cut = text[:MAX_LITERAL_LENGTH]
    if _WORD_CHAR.match(text[MAX_LITERAL_LENGTH]):
        cut = _CUT_KEYWORD.sub(BLOCK_START_SUBSTITUTE, cut)
    return cut + TRUNCATION_MARKER


def _neutralize_rules(suffix: str = "") -> tuple[PatternRule, PatternRule]:
    # "tell" first, so the two-word rule only sees what the first one missed
    return (
        PatternRule.compile(
            f"neutralize-block-start{suffix}",
            r"\btell\b",
            literal(BLOCK_START_SUBSTITUTE),
            _KEYWORD_FLAGS,
        ),
        PatternRule.compile(
            f"neutralize-block-end{suffix}",
            r"\bend\s+tell\b",
            literal(BLOCK_END_SUBSTITUTE),
            _KEYWORD_FLAGS,
        ),
    )


_BRACES = r"[{}]"

ESCAPE_RULES = RuleChain(
    (
        *_neutralize_rules(),
        PatternRule.compile(
            "strip-control-chars", r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", ""
        ),
        PatternRule.compile("strip-line-separators", "[\u2028\u2029]", ""),
        PatternRule.compile("strip-invisible", _INVISIBLE_PATTERN, ""),
        PatternRule.compile("strip-braces-early", _BRACES, ""),
        *_neutralize_rules("-rejoined"),
        PatternRule.compile("escape-backslash", r"\\", literal("\\\\")),
        PatternRule.compile("escape-quote", '"', literal('\\"')),
        PatternRule.compile("escape-newline", r"\r\n|\r|\n", literal("\\n")),
        PatternRule.compile("escape-tab", r"\t", literal("\\t")),
        PatternRule.compile("blank-page-breaks", r"[\f\v]", " "),
        PatternRule.compile("strip-braces", _BRACES, ""),
        FunctionRule("truncate", _truncate),
    )
)


def escape(text: str | None) -> EscapedLiteral:
    """Escape text for a double-quoted AppleScript literal.

    Never raises. None and empty input yield an empty literal; other
    non-string values are converted with str().

    Args:
        text: Untrusted text

    Returns:
        EscapedLiteral safe to splice into a template slot
    """
    if not text:
        return EscapedLiteral("")
    if not isinstance(text, str):
        text = str(text)
    return EscapedLiteral(ESCAPE_RULES.apply(text))


__all__ = [
    "BLOCK_END_SUBSTITUTE",
    "BLOCK_START_SUBSTITUTE",
    "ESCAPE_RULES",
    "MAX_LITERAL_LENGTH",
    "TRUNCATION_MARKER",
    "escape",
]
