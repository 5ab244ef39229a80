"""Rewrite link and image destinations so cross-page references survive rendering.

Relative links in the markdown sources point at other ``.md`` pages; the
rendered book serves ``.html``. When a book is translated, pages missing
from the translation are linked to the copy in the fallback (default
language) directory instead.
"""

import logging
import os
import posixpath
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

import mdurl
from markdown_it.token import Token


logger = logging.getLogger(__name__)

SCHEME_LINK = re.compile(r'^[a-z][a-z0-9+.-]*:')
# ``.md`` only counts as an extension right before the end or a fragment
MD_LINK = re.compile(r'^(?P<link>[^#]*)\.md(?P<anchor>#.*)?$')
# Not an HTML parser; only <a href> and <img src> are rewritten.
HTML_LINK = re.compile(r'(<(?:a|img) [^>]*?(?:src|href)=")([^"]+?)"')


@dataclass(frozen=True)
class LinkContext:
    """Per-render information needed to resolve relative links."""
    path: Optional[str] = None  # page being rendered, relative to the book root
    src_dir: Optional[str] = None  # directory existence probes are made against
    fallback_path: Optional[str] = None  # default-language dir, relative to src_dir
    exists: Callable[[str], bool] = field(default=os.path.exists, repr=False, compare=False)


NO_CONTEXT = LinkContext()


def _display(path) -> str:
    return os.fspath(path).replace('\\', '/')


def md_to_html_link(dest: str) -> str:
    """Swap a trailing ``.md`` extension for ``.html``, keeping any fragment."""
    match = MD_LINK.match(dest)
    if not match:
        return dest
    return match.group('link') + '.html' + (match.group('anchor') or '')


def _exists(context: LinkContext, path: str) -> bool:
    """Ask the existence oracle about ``path``; a failed check means missing."""
    try:
        return bool(context.exists(path))
    except OSError as e:
        logger.debug('Treating %s as missing: %s', path, e)
        return False


def _fallback_prefix(dest: str, context: LinkContext) -> Optional[str]:
    """Return the fallback directory prefix if ``dest`` only exists there."""
    if context.src_dir is None:
        return None

    # markdown-it percent-encodes destinations; files are named unencoded
    target = mdurl.decode(dest)
    src_dir = _display(context.src_dir)
    dest_path = f'{src_dir}/{target}'
    logger.debug('Check existing: %s', dest_path)
    if _exists(context, dest_path) or context.fallback_path is None:
        return None

    fallback = _display(context.fallback_path)
    fallback_file = f'{src_dir}/{fallback}/{target}'
    logger.debug('Check fallback: %s', fallback_file)
    if not _exists(context, fallback_file):
        return None

    prefix = f'{fallback}/'
    logger.debug('Redirect link to default translation: %r -> %r', dest, prefix)
    return prefix


def fix(dest: str, context: LinkContext = NO_CONTEXT) -> str:
    """Resolve a single link destination for the rendered page."""
    if dest.startswith('#'):
        # Fragment-only link
        if context.path is None:
            return dest
        base = _display(context.path)
        if base.endswith('.md'):
            base = base[:-3] + '.html'
        return base + dest

    # Don't modify links with schemes like `https`.
    if SCHEME_LINK.match(dest):
        return dest

    fixed_link = ''
    prefix = _fallback_prefix(dest, context)
    redirected = prefix is not None
    if redirected:
        fixed_link += prefix

    if context.path is not None and not redirected:
        base = posixpath.dirname(_display(context.path))
        if base:
            fixed_link += f'{base}/'

    return fixed_link + md_to_html_link(dest)


def fix_html(html: str, context: LinkContext = NO_CONTEXT) -> str:
    """Apply :func:`fix` to ``href``/``src`` values inside a raw HTML fragment."""
    def replace_link(match):
        return f'{match.group(1)}{fix(match.group(2), context)}"'

    return HTML_LINK.sub(replace_link, html)


def adjust_links(token: Token, context: LinkContext = NO_CONTEXT) -> Token:
    """Fix the destination carried by a link, image or raw HTML token."""
    if token.type == 'link_open' and 'href' in token.attrs:
        return token.copy(attrs={**token.attrs, 'href': fix(str(token.attrs['href']), context)})
    if token.type == 'image' and 'src' in token.attrs:
        return token.copy(attrs={**token.attrs, 'src': fix(str(token.attrs['src']), context)})
    if token.type in ('html_block', 'html_inline'):
        return token.copy(content=fix_html(token.content, context))
    return token
