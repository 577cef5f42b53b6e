"""notesbridge converters.

Converters translate between the markdown a caller writes and the HTML that
Apple Notes stores.

Available Converters:
- HtmlRenderer: markdown to sanitized, inline-styled HTML
- MarkdownExtractor: stored HTML back to markdown

Thread Safety:
Both converters are stateless rule chains. Safe for concurrent use from
multiple threads.

"""

from notesbridge.renderers.html import HtmlRenderer, render
from notesbridge.renderers.markdown import MarkdownExtractor, extract
from notesbridge.renderers.protocol import TextConverter

__all__ = ["HtmlRenderer", "MarkdownExtractor", "TextConverter", "extract", "render"]
