"""Shared string and path helpers for the book renderer."""

import logging
import posixpath
import re


WHITESPACE_RUN = re.compile(r'\s\s+')

# Inline markup that has already been rendered by the time a heading is
# turned into an anchor id.
HEADING_MARKUP = (
    '<em>', '</em>',
    '<code>', '</code>',
    '<strong>', '</strong>',
    '&lt;', '&gt;', '&amp;', '&#39;', '&quot;',
)


def collapse_whitespace(text: str) -> str:
    """Replace runs of two or more whitespace characters with a single space."""
    return WHITESPACE_RUN.sub(' ', text)


def normalize_id(content: str) -> str:
    """Convert a string to a valid HTML element id.

    Alphanumerics (any script), underscores and hyphens are kept, with
    only ASCII letters lowercased. Whitespace becomes a hyphen and
    everything else is dropped.
    """
    chars = []
    for ch in content:
        if ch.isalnum() or ch in '_-':
            chars.append(ch.lower() if ch.isascii() else ch)
        elif ch.isspace():
            chars.append('-')
    return ''.join(chars)


def id_from_content(content: str) -> str:
    """Generate an anchor id from (possibly rendered) heading text."""
    for sub in HEADING_MARKUP:
        content = content.replace(sub, '')

    # Remove spaces and hashes indicating a header
    trimmed = content.strip().lstrip('#').strip()

    return normalize_id(trimmed)


def path_to_root(path: str) -> str:
    """Return the ``../`` prefix leading from a page's directory to the root.

    >>> path_to_root('a/b/c.md')
    '../../'
    """
    parent = posixpath.dirname(str(path).replace('\\', '/'))
    parts = [p for p in parent.split('/') if p and p not in ('.', '..')]
    return '../' * len(parts)


def log_error_chain(exc: BaseException, logger: logging.Logger):
    """Log an exception followed by every exception that caused it."""
    logger.error('Error: %s', exc)

    seen = {id(exc)}
    cause = exc.__cause__ or exc.__context__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        logger.error('\tCaused By: %s', cause)
        cause = cause.__cause__ or cause.__context__
