"""Ordered rewrite rules.

Every transform in notesbridge (escaping, sanitizing, rendering, extracting)
is an ordered chain of named rules. Each rule sees the whole text as left
by the rule before it, so the order of a chain is part of its contract.
Chains are immutable and compose via the | operator.

Example:
    >>> from notesbridge.rules import PatternRule, RuleChain
    >>> bold = PatternRule.compile("bold", r"\\*\\*([^*]+)\\*\\*", r"<strong>\\1</strong>")
    >>> italic = PatternRule.compile("italic", r"\\*([^*]+)\\*", r"<em>\\1</em>")
    >>> chain = bold | italic
    >>> chain.apply("**a** *b*")
    '<strong>a</strong> <em>b</em>'
    >>> chain.names
    ('bold', 'italic')

Thread Safety:
    Rules and chains are immutable after creation. Safe to share.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

Replacement = str | Callable[[re.Match[str]], str]


@runtime_checkable
class RewriteRule(Protocol):
    """Protocol for a single named rewrite step."""

    @property
    def name(self) -> str:
        """Rule identifier, unique within its chain."""
        ...

    def apply(self, text: str) -> str:
        """Rewrite the whole text."""
        ...


@dataclass(frozen=True, slots=True)
class PatternRule:
    """Regex substitution rule.

    ``replacement`` is either an ``re`` template string (``\\1`` refers to a
    group) or a callable receiving the match.
    """

    name: str
    pattern: re.Pattern[str]
    replacement: Replacement

    @classmethod
    def compile(
        cls,
        name: str,
        pattern: str,
        replacement: Replacement,
        flags: int = 0,
    ) -> PatternRule:
        """Create a rule from an uncompiled pattern."""
        return cls(name, re.compile(pattern, flags), replacement)

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)

    def __or__(self, other: RewriteRule | RuleChain) -> RuleChain:
        return RuleChain((self,)) | other


@dataclass(frozen=True, slots=True)
class FunctionRule:
    """Rule backed by an arbitrary str -> str function."""

    name: str
    func: Callable[[str], str]

    def apply(self, text: str) -> str:
        return self.func(text)

    def __or__(self, other: RewriteRule | RuleChain) -> RuleChain:
        return RuleChain((self,)) | other


def literal(text: str) -> Callable[[re.Match[str]], str]:
    """Replacement that inserts ``text`` verbatim (no template processing)."""

    def replace(_match: re.Match[str]) -> str:
        return text

    return replace


class RuleChain:
    """Immutable ordered sequence of rules.

    Usage:
        >>> chain = RuleChain([rule_a, rule_b])
        >>> chain.apply(text)          # rule_a, then rule_b
        >>> chain.get("rule_b").apply(text)
        >>> (chain | rule_c).names
        ('rule_a', 'rule_b', 'rule_c')

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_rules", "_by_name")

    def __init__(self, rules: Iterable[RewriteRule]) -> None:
        self._rules: tuple[RewriteRule, ...] = tuple(rules)
        self._by_name: dict[str, RewriteRule] = {}
        for rule in self._rules:
            if rule.name in self._by_name:
                raise ValueError(f"Duplicate rule name: {rule.name!r}")
            self._by_name[rule.name] = rule

    def apply(self, text: str) -> str:
        """Run every rule once, in order."""
        for rule in self._rules:
            text = rule.apply(text)
        return text

    def apply_until_stable(self, text: str) -> str:
        """Run the chain repeatedly until a pass leaves the text unchanged.

        Only terminates for chains whose rules never grow the text.
        """
        while True:
            result = self.apply(text)
            if result == text:
                return result
            text = result

    def get(self, name: str) -> RewriteRule:
        """Look up a rule by name.

        Raises:
            KeyError: If no rule has that name
        """
        try:
            return self._by_name[name]
        except KeyError:
            available = ", ".join(self.names)
            raise KeyError(f"Unknown rule: {name!r}. Available: {available}") from None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self._rules)

    def __iter__(self) -> Iterator[RewriteRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __or__(self, other: RewriteRule | RuleChain) -> RuleChain:
        """Chain rules: (self | other).apply(t) applies self then other."""
        if isinstance(other, RuleChain):
            return RuleChain((*self._rules, *other._rules))
        return RuleChain((*self._rules, other))

    def __repr__(self) -> str:
        return f"RuleChain({list(self.names)!r})"


__all__ = [
    "FunctionRule",
    "PatternRule",
    "Replacement",
    "RewriteRule",
    "RuleChain",
    "literal",
]
