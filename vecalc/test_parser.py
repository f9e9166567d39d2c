import pytest

from vecalc.errors import ParseError
from vecalc.parser import (
    Assignment,
    BinaryOp,
    Command,
    CommandKind,
    Evaluation,
    Literal,
    UnaryNeg,
    VariableRef,
    parse_line,
)
from vecalc.values import Scalar, Vector


def parse_expr(text):
    stmt = parse_line(text)
    assert isinstance(stmt, Evaluation)
    return stmt.expression


def test_parser_number():
    assert parse_expr("42") == Literal(Scalar(42.0))


def test_parser_vector():
    node = parse_expr("<1, 2, 3>")
    assert node == Literal(Vector((1.0, 2.0, 3.0)))
    assert node.value.dims == 3


def test_parser_strict_left_to_right():
    # 3 + 4 * 2 is (3 + 4) * 2
    assert parse_expr("3 + 4 * 2") == BinaryOp(
        '*', BinaryOp('+', Literal(Scalar(3.0)), Literal(Scalar(4.0))), Literal(Scalar(2.0)))


def test_parser_parentheses_group():
    assert parse_expr("3 + (4 * 2)") == BinaryOp(
        '+', Literal(Scalar(3.0)), BinaryOp('*', Literal(Scalar(4.0)), Literal(Scalar(2.0))))


def test_parser_unary_minus_binds_to_next_operand():
    assert parse_expr("-3 + 1") == BinaryOp('+', UnaryNeg(Literal(Scalar(3.0))), Literal(Scalar(1.0)))
    assert parse_expr("2 * -x") == BinaryOp('*', Literal(Scalar(2.0)), UnaryNeg(VariableRef('x')))
    assert parse_expr("--3") == UnaryNeg(UnaryNeg(Literal(Scalar(3.0))))
    assert parse_expr("-(a dot b)") == UnaryNeg(BinaryOp('dot', VariableRef('a'), VariableRef('b')))


def test_parser_binary_minus_after_value():
    assert parse_expr("a - b") == BinaryOp('-', VariableRef('a'), VariableRef('b'))
    assert parse_expr("a - -b") == BinaryOp('-', VariableRef('a'), UnaryNeg(VariableRef('b')))


def test_parser_assignment():
    stmt = parse_line("v = <1,0,0> cross w")
    assert stmt == Assignment(
        'v', BinaryOp('cross', Literal(Vector((1.0, 0.0, 0.0))), VariableRef('w')))


def test_parser_assignment_may_reference_itself():
    assert parse_line("x = x + 1") == Assignment(
        'x', BinaryOp('+', VariableRef('x'), Literal(Scalar(1.0))))


def test_parser_commands():
    assert parse_line(".debug") == Command(CommandKind.DEBUG)
    assert parse_line(".debug 2") == Command(CommandKind.DEBUG, 2)
    assert parse_line(".modify x") == Command(CommandKind.MODIFY, 'x')
    assert parse_line(".exit") == Command(CommandKind.EXIT)
    assert parse_line(".save state") == Command(CommandKind.SAVE, 'state')
    assert parse_line(".load  other ") == Command(CommandKind.LOAD, ' other ')


def test_parser_modify_needs_a_name():
    with pytest.raises(ParseError):
        parse_line(".modify")


@pytest.mark.parametrize("text, pos", [
    ("1 = 2", 0),          # assignment target is not an identifier
    ("x =", 2),            # missing right-hand expression
    ("(1 + 2", 0),         # unbalanced parenthesis
    ("1 + 2)", 5),
    ("3 +", 2),            # operator with no operand
    ("(3 *)", 3),
    ("x = y = 1", 6),
    ("(x) = 1", 4),
    ("1 2", 2),
    ("", 0),
    ("()", 0),
    ("* 2", 0),
    ("-", 0),
])
def test_parser_errors_carry_position(text, pos):
    with pytest.raises(ParseError) as e:
        parse_line(text)
    assert e.value.pos == pos


def test_dot_cannot_be_assigned():
    with pytest.raises(ParseError):
        parse_line("dot = 1")
