import pytest

from vecalc.errors import LexerError, ParseError
from vecalc.lexer import Lexer, Token


def lex(text):
    return Lexer(text).tokenize()


def types_of(text):
    return [t.type for t in lex(text)]


def test_lex_numbers_and_identifiers():
    toks = lex("123 45.6 foo_bar x1")
    assert toks[0].type == 'NUMBER' and toks[0].value == 123.0
    assert toks[1].type == 'NUMBER' and toks[1].value == 45.6
    assert toks[2].type == 'IDENT' and toks[2].value == 'foo_bar'
    assert toks[3].type == 'IDENT' and toks[3].value == 'x1'
    assert toks[-1].type == 'EOF'


def test_lex_vector_literal_with_spaces():
    toks = lex("< 1, 2.5 ,3 >")
    assert toks[0] == Token('VECTOR', (1.0, 2.5, 3.0), 0)
    assert toks[1].type == 'EOF'


def test_lex_single_component_vector():
    assert lex("<7>")[0].value == (7.0,)


def test_lex_operators_and_word_operators():
    toks = lex("a + b - c * d / e ^ f dot g cross h")
    ops = [t.value for t in toks if t.type == 'OP']
    assert ops == ['+', '-', '*', '/', '^', 'dot', 'cross']


def test_word_operators_need_word_boundary():
    toks = lex("dotx across dot_1")
    assert [t.type for t in toks] == ['IDENT', 'IDENT', 'IDENT', 'EOF']


def test_lex_assignment_and_parens():
    assert types_of("x = (1 + 2)") == [
        'IDENT', 'ASSIGN', 'LPAREN', 'NUMBER', 'OP', 'NUMBER', 'RPAREN', 'EOF'
    ]


def test_minus_is_always_an_operator():
    toks = lex("-3")
    assert toks[0] == Token('OP', '-', 0)
    assert toks[1] == Token('NUMBER', 3.0, 1)


def test_token_positions():
    toks = lex("ab + <1,2>")
    assert [t.pos for t in toks] == [0, 3, 5, 10]


@pytest.mark.parametrize("text", ["1 @ 2", "3.", "1.2.3", "3x", "<>", "<1,>", "<1 2>", "<1,2", "<-1>", "<a>"])
def test_lex_invalid_input_raises(text):
    with pytest.raises(LexerError):
        lex(text)


def test_lexer_error_is_a_parse_error_with_position():
    with pytest.raises(ParseError) as e:
        lex("1 + $")
    assert e.value.pos == 4
    assert "pos 4" in str(e.value)


def test_lex_commands():
    assert lex(".exit") == [Token('COMMAND', 'exit', 1), Token('EOF', None, 5)]
    toks = lex(".debug 2")
    assert toks[1] == Token('DIGIT', 2, 7)
    toks = lex("  .modify speed")
    assert toks[0].value == 'modify'
    assert toks[1] == Token('IDENT', 'speed', 10)


def test_lex_save_keeps_rest_verbatim():
    toks = lex(".save  my file ")
    assert toks[1].type == 'REST'
    assert toks[1].value == ' my file '


@pytest.mark.parametrize("text", [
    ".nope", ".debug 12", ".debug x", ".exit now", ".save", ".save ", ".modify dot",
    ".modify 3", ".debug2", ".exit!",
])
def test_lex_invalid_commands_raise(text):
    with pytest.raises(LexerError):
        lex(text)
