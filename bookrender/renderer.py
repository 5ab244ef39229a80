"""Render book markdown to HTML.

The token stream produced by markdown-it is passed through three
transforms before it reaches the HTML serializer:

1. fenced code block info strings lose their whitespace,
2. link, image and raw HTML destinations are fixed up,
3. straight quotes become curly quotes (when enabled).
"""

import logging
from typing import Iterable, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from .links import LinkContext, NO_CONTEXT, adjust_links
from .quotes import EventQuoteConverter


logger = logging.getLogger(__name__)


def new_cmark_parser() -> MarkdownIt:
    """Create a CommonMark parser with the extensions books rely on."""
    md = MarkdownIt('commonmark')
    md.enable(['table', 'strikethrough'])
    md.use(footnote_plugin)
    md.use(tasklists_plugin)
    return md


def clean_codeblock_headers(token: Token) -> Token:
    """Strip whitespace from a fenced code block's info string.

    ``rust, no_run`` would otherwise end up as a broken class attribute.
    """
    if token.type == 'fence' and token.info:
        info = ''.join(ch for ch in token.info if not ch.isspace())
        return token.copy(info=info)
    return token


class MarkdownRenderer:
    """Renders book chapters to HTML."""

    def __init__(self, curly_quotes: bool = False):
        """
        Args:
            curly_quotes: Convert straight quotes in prose to curly quotes
        """
        self.curly_quotes = curly_quotes
        self.md = new_cmark_parser()

    def render(self, text: str, context: Optional[LinkContext] = None) -> str:
        """Render markdown text to an HTML string.

        Args:
            context: Page and directory information used to fix relative links.
                Without one, links are only rewritten from ``.md`` to ``.html``.
        """
        context = context or NO_CONTEXT
        converter = EventQuoteConverter(self.curly_quotes)

        def transform(token: Token) -> Token:
            token = clean_codeblock_headers(token)
            token = adjust_links(token, context)
            return converter.convert(token)

        env = {}
        tokens = self.md.parse(text, env)
        tokens = list(self._map_tokens(tokens, transform))

        logger.debug('Rendering %d block tokens for %s', len(tokens), context.path or '<no page>')
        return self.md.renderer.render(tokens, self.md.options, env)

    def _map_tokens(self, tokens: Iterable[Token], transform) -> Iterable[Token]:
        """Apply ``transform`` to every token in document order.

        Inline tokens are visited before their children, so the stream seen
        by ``transform`` is the same order the serializer emits.
        """
        for token in tokens:
            token = transform(token)
            if token.children:
                token = token.copy(children=list(self._map_tokens(token.children, transform)))
            yield token


def render_markdown(text: str, curly_quotes: bool = False) -> str:
    """Render markdown with no page context."""
    return MarkdownRenderer(curly_quotes).render(text)


def render_markdown_with_path(
    text: str,
    curly_quotes: bool,
    path: Optional[str] = None,
    src_dir: Optional[str] = None,
    fallback_path: Optional[str] = None,
) -> str:
    """Render markdown for a page at ``path``, probing links against ``src_dir``."""
    context = LinkContext(path=path, src_dir=src_dir, fallback_path=fallback_path)
    return MarkdownRenderer(curly_quotes).render(text, context)
