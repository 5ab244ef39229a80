"""Straight-to-curly quote conversion for rendered prose."""

from markdown_it.token import Token


# Tokens whose content is code and must never be touched
CODE_TOKENS = ('fence', 'code_block', 'code_inline')


def convert_quotes_to_curly(original_text: str) -> str:
    """Replace straight quotes with opening or closing curly quotes.

    A quote preceded by whitespace opens, anything else closes. The start
    of the text counts as whitespace.
    """
    preceded_by_whitespace = True
    converted = []

    for ch in original_text:
        if ch == "'":
            converted.append('‘' if preceded_by_whitespace else '’')
        elif ch == '"':
            converted.append('“' if preceded_by_whitespace else '”')
        else:
            converted.append(ch)
        preceded_by_whitespace = ch.isspace()

    return ''.join(converted)


class EventQuoteConverter:
    """Applies curly quotes to the text tokens of a single render.

    markdown-it emits a code block as one leaf token carrying its content,
    so the block's start and end coincide with that token: conversion is
    suspended for it and resumes with the next text run.
    """

    def __init__(self, enabled: bool):
        self.enabled = enabled

    def convert(self, token: Token) -> Token:
        if not self.enabled or token.type in CODE_TOKENS:
            return token

        if token.type == 'text':
            return token.copy(content=convert_quotes_to_curly(token.content))

        return token
