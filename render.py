#!/usr/bin/env python3
"""
Book Chapter Renderer

Renders a markdown chapter to HTML the way the book builder does: relative
.md links become .html links, links to pages missing from a translation
point at the default-language copy, and quotes can be made curly.

  python render.py chapter.md
  python render.py src/guide/intro.md --src src --fallback ../en -o intro.html
"""

import argparse
import logging
import os
import sys

from bookrender.config import (
    ConfigError,
    RenderConfig,
    build_link_context,
    language_fallback_path,
    load_config,
)
from bookrender.renderer import MarkdownRenderer
from bookrender.utils import log_error_chain


logger = logging.getLogger('bookrender')


def setup_logging(verbose: bool, debug: bool):
    """Configure log level and format for the command line."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')
    logger.setLevel(level)


def resolve_page_path(source: str, src_dir: str) -> str:
    """Return the chapter's path relative to the book source directory.

    Falls back to the file name when the chapter lives outside ``src_dir``.
    """
    if src_dir:
        rel = os.path.relpath(os.path.abspath(source), os.path.abspath(src_dir))
        if rel != '..' and not rel.startswith('..' + os.sep):
            return rel.replace(os.sep, '/')
    return os.path.basename(source)


def build_config(args) -> RenderConfig:
    """Merge the config file (if any) with command-line overrides."""
    config = load_config(args.config) if args.config else RenderConfig()

    if args.curly_quotes:
        config.curly_quotes = True
    if args.src is not None:
        config.src_dir = args.src
    if args.fallback is not None:
        config.fallback_path = args.fallback
    elif args.fallback_language is not None:
        if config.src_dir is None:
            raise ConfigError('--fallback-language needs a source directory (--src or "src")')
        config.fallback_path = language_fallback_path(config.src_dir, args.fallback_language)

    return config


def run(args) -> int:
    """Render one chapter. Returns the process exit status."""
    try:
        config = build_config(args)

        with open(args.source, encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError, ConfigError) as e:
        log_error_chain(e, logger)
        return 1

    if args.print_page:
        page_path = None
    else:
        page_path = args.page or resolve_page_path(args.source, config.src_dir)

    context = build_link_context(config, page_path)
    logger.info('Rendering %s (page: %s)', args.source, page_path or '<print>')

    html = MarkdownRenderer(config.curly_quotes).render(text, context)

    if not args.output:
        sys.stdout.write(html)
        return 0

    try:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(html)
    except OSError as e:
        log_error_chain(e, logger)
        return 1

    print(f"  ✓ Rendered {args.source} → {args.output}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Render a book chapter from markdown to HTML',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python render.py chapter.md --curly-quotes
  python render.py src/fr/intro.md --src src/fr --fallback ../en -o intro.html
  python render.py chapter.md --config render.json --print-page
        """,
    )
    parser.add_argument(
        'source',
        help='Markdown file to render',
    )
    parser.add_argument(
        '--output', '-o',
        default=None,
        help='Output HTML file (default: stdout)',
    )
    parser.add_argument(
        '--config', '-c',
        default=None,
        help='JSON config file with "curly-quotes", "src" and "fallback" keys',
    )
    parser.add_argument(
        '--curly-quotes',
        action='store_true',
        help='Convert straight quotes to curly quotes outside of code',
    )
    parser.add_argument(
        '--src',
        default=None,
        help='Book source directory used to check that linked pages exist',
    )
    parser.add_argument(
        '--fallback',
        default=None,
        help='Default-language directory, relative to --src, for pages missing from a translation',
    )
    parser.add_argument(
        '--fallback-language',
        default=None,
        help='Default language whose directory sits next to --src (e.g. "en" for src/fr -> ../en)',
    )
    parser.add_argument(
        '--page',
        default=None,
        help='Path of the chapter relative to the book root (default: derived from --src)',
    )
    parser.add_argument(
        '--print-page',
        action='store_true',
        help='Render without a page identity, as for the all-in-one print page',
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Log progress')
    parser.add_argument('--debug', action='store_true', help='Log every link check')

    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.debug)
    sys.exit(run(args))


if __name__ == '__main__':
    main()
