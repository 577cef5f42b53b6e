"""TextConverter protocol — stable interface for the text converters.

Both directions of the markdown/HTML bridge are rule-chain converters that
take a string and return a stage-tagged string. ``HtmlRenderer`` (markdown
to HTML) and ``MarkdownExtractor`` (HTML to markdown) conform.

Example:
    from notesbridge.renderers.protocol import TextConverter

    def convert_all(converter: TextConverter, texts: list[str]) -> list[str]:
        return [converter.convert(t) for t in texts]

"""

from typing import Protocol

from notesbridge.rules import RuleChain


class TextConverter(Protocol):
    """Protocol for rule-chain text converters."""

    @property
    def rules(self) -> RuleChain:
        """The ordered chain the converter applies."""
        ...

    def convert(self, text: str | None) -> str:
        """Convert text; never raises.

        Args:
            text: Source text; None is treated as empty.

        Returns:
            Converted, stage-tagged string.

        """
        ...
