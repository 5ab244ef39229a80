from markdown_it.token import Token

from bookrender.quotes import EventQuoteConverter, convert_quotes_to_curly


def test_converts_single_quotes():
    assert convert_quotes_to_curly("'one', 'two'") == "‘one’, ‘two’"


def test_converts_double_quotes():
    assert convert_quotes_to_curly('"one", "two"') == "“one”, “two”"


def test_treats_tab_as_whitespace():
    assert convert_quotes_to_curly("\t'one'") == "\t‘one’"


def test_apostrophes_close():
    assert convert_quotes_to_curly("don't") == "don’t"


def test_other_characters_untouched():
    assert convert_quotes_to_curly("naïve — 中文") == "naïve — 中文"


def test_disabled_converter_is_identity():
    token = Token("text", "", 0, content="'one'")
    assert EventQuoteConverter(False).convert(token) is token


def test_converter_rewrites_text_tokens_only():
    converter = EventQuoteConverter(True)

    text = converter.convert(Token("text", "", 0, content="'one'"))
    assert text.content == "‘one’"

    for kind in ("fence", "code_block", "code_inline"):
        code = Token(kind, "code", 0, content="'two'")
        assert converter.convert(code).content == "'two'"

    html = Token("html_inline", "", 0, content='<span title="x">')
    assert converter.convert(html).content == '<span title="x">'


def test_converter_does_not_mutate_input():
    token = Token("text", "", 0, content='"quoted"')
    EventQuoteConverter(True).convert(token)
    assert token.content == '"quoted"'
