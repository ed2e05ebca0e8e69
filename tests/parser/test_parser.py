# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the cflat precedence-climbing parser."""

import pytest

from cflat.lexer.token import Span, Token
from cflat.model.ast import BinaryExpr, IfElseExpr, IfExpr, Op, UnaryExpr, id_expr, int_expr
from cflat.parser.parser import (
    MAX_NESTING_DEPTH,
    BadTokenError,
    ExpectedTokenError,
    MalformedLiteralError,
    NestingTooDeepError,
    ParseError,
    Precedence,
    parse,
    precedence_of,
)

# ###############
# Test Helpers
# ###############


def _render(source: str, **kwargs: bool) -> list[str]:
    """Parse a source string and return each top-level expression's canonical form."""
    return [str(expr) for expr in parse(source, **kwargs)]


def _render_one(source: str) -> str:
    rendered = _render(source)
    assert len(rendered) == 1, rendered
    return rendered[0]


# ###############
# Empty Input
# ###############


class TestEmptyInput:
    def test_empty_string_returns_no_expressions(self) -> None:
        assert parse("") == []

    def test_whitespace_only_returns_no_expressions(self) -> None:
        assert parse(" \n\n ") == []


# ###############
# Primary Expressions
# ###############


class TestPrimary:
    def test_integer(self) -> None:
        assert _render_one("1") == "1"

    def test_identifier(self) -> None:
        assert _render_one("answer") == "answer"

    def test_grouping_parentheses_vanish(self) -> None:
        assert _render_one("(1)") == "1"

    def test_nested_grouping(self) -> None:
        assert _render_one("((x))") == "x"

    def test_unary_minus(self) -> None:
        assert _render_one("-1") == "(- 1)"

    def test_double_unary_minus(self) -> None:
        assert _render_one("--1") == "(- (- 1))"

    def test_digit_grouping_underscores(self) -> None:
        assert parse("1_000") == [int_expr(1000)]

    def test_largest_int32(self) -> None:
        assert parse("2147483647") == [int_expr(2147483647)]

    def test_structure_of_binary_node(self) -> None:
        assert parse("1 + x") == [BinaryExpr(op=Op.PLUS, lhs=int_expr(1), rhs=id_expr("x"))]


# ###############
# Binary Expressions
# ###############


class TestBinary:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("1 + 1", "(+ 1 1)"),
            ("1 > 2", "(> 1 2)"),
            ("a < b", "(< a b)"),
            ("1 + 2 * 3", "(+ 1 (* 2 3))"),
            ("2 * 3 + 4", "(+ (* 2 3) 4)"),
            ("(1 + 2) * 3", "(* (+ 1 2) 3)"),
        ],
    )
    def test_precedence(self, source: str, expected: str) -> None:
        assert _render_one(source) == expected

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("1 + 2 + 3", "(+ (+ 1 2) 3)"),
            ("1 - 2 - 3", "(- (- 1 2) 3)"),
            ("8 / 4 / 2", "(/ (/ 8 4) 2)"),
            ("a > b > c", "(> (> a b) c)"),
        ],
    )
    def test_left_associativity(self, source: str, expected: str) -> None:
        assert _render_one(source) == expected

    def test_comparison_binds_tighter_than_term(self) -> None:
        assert _render_one("1 + 2 > 3") == "(+ 1 (> 2 3))"

    def test_unary_binds_tighter_than_everything(self) -> None:
        assert _render_one("-x * y") == "(* (- x) y)"
        assert _render_one("-1 + 2") == "(+ (- 1) 2)"

    def test_minus_after_operator_is_unary(self) -> None:
        assert _render_one("a - -b") == "(- a (- b))"

    def test_assignment_stops_the_infix_loop(self) -> None:
        with pytest.raises(BadTokenError) as exc_info:
            parse("x = 1")
        assert exc_info.value.token == Token.op("=")
        assert exc_info.value.span == Span(2, 3)

    def test_long_left_chain_renders(self) -> None:
        program = parse(" + ".join(["1"] * 3000))
        assert str(program[0]) == "(+ " * 2999 + "1" + " 1)" * 2999


# ###############
# Top-Level Sequencing
# ###############


class TestProgramUnits:
    def test_adjacent_expressions_are_separate_units(self) -> None:
        assert _render("1 2") == ["1", "2"]

    def test_units_across_lines(self) -> None:
        assert _render("a + b\nc * d\n") == ["(+ a b)", "(* c d)"]

    def test_if_followed_by_expression(self) -> None:
        assert _render("if a { b } c") == ["(if (a) (b))", "c"]


# ###############
# Conditionals
# ###############


class TestConditionals:
    def test_if(self) -> None:
        assert _render_one("if 1 > 3 { a + b }") == "(if ((> 1 3)) ((+ a b)))"

    def test_if_structure(self) -> None:
        assert parse("if a { b }") == [IfExpr(condition=id_expr("a"), body=id_expr("b"))]

    def test_if_else(self) -> None:
        assert _render_one("if x > y { x } else { y }") == "(if ((> x y)) then (x) else (y))"

    def test_else_if_chain(self) -> None:
        source = "if x > y { x } else if x < y { y + y } else { y }"
        assert _render_one(source) == "(if ((> x y)) then (x) else ((if ((< x y)) then ((+ y y)) else (y))))"

    def test_else_if_without_final_else(self) -> None:
        assert parse("if a { b } else if c { d }") == [
            IfElseExpr(
                condition=id_expr("a"),
                then=id_expr("b"),
                otherwise=IfExpr(condition=id_expr("c"), body=id_expr("d")),
            )
        ]

    def test_nested_if_in_body(self) -> None:
        assert _render_one("if a { if b { c } }") == "(if (a) ((if (b) (c))))"

    def test_condition_with_unary(self) -> None:
        assert parse("if -a { 1 }") == [
            IfExpr(condition=UnaryExpr(op=Op.MINUS, operand=id_expr("a")), body=int_expr(1))
        ]


# ###############
# Grouping Strictness
# ###############


class TestGrouping:
    def test_missing_close_paren_is_an_error(self) -> None:
        with pytest.raises(ExpectedTokenError) as exc_info:
            parse("(1")
        assert exc_info.value.expected == Token.op(")")
        assert exc_info.value.token == Token.eof()

    def test_wrong_close_token_is_an_error(self) -> None:
        with pytest.raises(ExpectedTokenError) as exc_info:
            parse("(1]")
        assert exc_info.value.token == Token.op("]")
        assert exc_info.value.span == Span(2, 3)

    def test_lenient_grouping_swallows_any_closing_token(self) -> None:
        assert _render("(1]", lenient_grouping=True) == ["1"]
        assert _render("(1 2", lenient_grouping=True) == ["1"]

    def test_lenient_grouping_still_accepts_close_paren(self) -> None:
        assert _render("(1 + 2) * 3", lenient_grouping=True) == ["(* (+ 1 2) 3)"]


# ###############
# Errors
# ###############


class TestErrors:
    def test_unknown_character_is_bad_token(self) -> None:
        with pytest.raises(BadTokenError) as exc_info:
            parse("@")
        assert exc_info.value.token == Token.error("@")
        assert exc_info.value.span == Span(0, 1)
        assert str(exc_info.value) == "0:1 bad token Error('@')"

    def test_dangling_operator_hits_eof(self) -> None:
        with pytest.raises(BadTokenError) as exc_info:
            parse("1 +")
        assert exc_info.value.token == Token.eof()
        assert exc_info.value.span == Span(3, 3)

    @pytest.mark.parametrize("source", ["1.5", "true", "else", ")", "x = 1", "1 == 2", "!a"])
    def test_tokens_that_cannot_start_an_expression(self, source: str) -> None:
        with pytest.raises(BadTokenError):
            parse(source)

    def test_missing_open_brace(self) -> None:
        with pytest.raises(ExpectedTokenError) as exc_info:
            parse("if a b }")
        assert exc_info.value.expected == Token.op("{")
        assert exc_info.value.token == Token.id("b")
        assert str(exc_info.value) == "5:6 expected Op('{') but found Id('b')"

    def test_missing_close_brace(self) -> None:
        with pytest.raises(ExpectedTokenError) as exc_info:
            parse("if a { b")
        assert exc_info.value.expected == Token.op("}")
        assert exc_info.value.token.is_eof()

    def test_else_requires_brace_or_if(self) -> None:
        with pytest.raises(ExpectedTokenError) as exc_info:
            parse("if a { b } else c")
        assert exc_info.value.expected == Token.op("{")

    @pytest.mark.parametrize("source", ["2147483648", "99999999999", "1__0", "1_"])
    def test_malformed_integer_literal(self, source: str) -> None:
        with pytest.raises(MalformedLiteralError) as exc_info:
            parse(source)
        assert exc_info.value.token == Token.int(source)

    def test_all_errors_share_a_base_class(self) -> None:
        for source in ["@", "(1", "2147483648"]:
            with pytest.raises(ParseError):
                parse(source)


# ###############
# Tracing
# ###############


class TestTrace:
    def test_ast_debug_dumps_each_expression(self) -> None:
        lines: list[str] = []
        parse("1 + 2\nx", ast_debug=True, sink=lines.append)
        assert lines == ["ast[0]: (+ 1 2)", "ast[1]: x"]

    def test_token_debug_traces_scanned_tokens(self) -> None:
        lines: list[str] = []
        parse("-a", token_debug=True, sink=lines.append)
        assert lines == ["Op('-') 0:1", "Id('a') 1:2", "Eof 2:2"]

    def test_failed_parse_dumps_nothing(self) -> None:
        lines: list[str] = []
        with pytest.raises(ParseError):
            parse("1 @", ast_debug=True, sink=lines.append)
        assert lines == []

    def test_ast_debug_defaults_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        parse("-1", ast_debug=True)
        assert capsys.readouterr().err == "ast[0]: (- 1)\n"


# ###############
# Precedence Table
# ###############


class TestPrecedenceTable:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            (Token.op("+"), Precedence.TERM),
            (Token.op("-"), Precedence.TERM),
            (Token.op("*"), Precedence.FACTOR),
            (Token.op("/"), Precedence.FACTOR),
            (Token.op(">="), Precedence.COMPARISON),
            (Token.op("!="), Precedence.COMPARISON),
            (Token.op("="), Precedence.ASSIGNMENT),
            (Token.op("("), Precedence.NONE),
            (Token.keyword("true"), Precedence.PRIMARY),
            (Token.keyword("if"), Precedence.NONE),
            (Token.id("x"), Precedence.NONE),
            (Token.int("1"), Precedence.NONE),
        ],
    )
    def test_precedence_of(self, token: Token, expected: Precedence) -> None:
        assert precedence_of(token) == expected

    def test_order_lowest_to_highest(self) -> None:
        order = [
            Precedence.NONE,
            Precedence.PRIMARY,
            Precedence.TERM,
            Precedence.FACTOR,
            Precedence.COMPARISON,
            Precedence.ASSIGNMENT,
            Precedence.UNARY,
        ]
        assert order == sorted(order)


# ###############
# Nesting Depth
# ###############


class TestNestingDepth:
    def test_groups_at_the_limit_parse(self) -> None:
        source = "(" * MAX_NESTING_DEPTH + "1" + ")" * MAX_NESTING_DEPTH
        assert _render_one(source) == "1"

    def test_unary_at_the_limit_parses(self) -> None:
        assert _render_one("-" * MAX_NESTING_DEPTH + "1") == "(- " * MAX_NESTING_DEPTH + "1" + ")" * MAX_NESTING_DEPTH

    def test_deep_groups_raise_parse_error(self) -> None:
        with pytest.raises(NestingTooDeepError) as exc_info:
            parse("(" * 600 + "1" + ")" * 600)
        assert exc_info.value.token == Token.op("(")
        assert exc_info.value.span == Span(MAX_NESTING_DEPTH, MAX_NESTING_DEPTH + 1)

    def test_deep_unary_raises_parse_error(self) -> None:
        with pytest.raises(NestingTooDeepError) as exc_info:
            parse("-" * 600 + "1")
        assert exc_info.value.token == Token.op("-")
        assert str(exc_info.value) == "128:129 nesting deeper than 128 levels at Op('-')"

    def test_deep_conditionals_raise_parse_error(self) -> None:
        source = "if a { " * 300 + "b" + " }" * 300
        with pytest.raises(NestingTooDeepError) as exc_info:
            parse(source)
        assert exc_info.value.token == Token.keyword("if")

    def test_long_else_if_chain_is_nesting(self) -> None:
        source = "if a { b } else " * 300 + "{ c }"
        with pytest.raises(NestingTooDeepError):
            parse(source)

    def test_depth_is_released_between_siblings(self) -> None:
        group = "(" * MAX_NESTING_DEPTH + "1" + ")" * MAX_NESTING_DEPTH
        assert _render(f"{group} + {group}\n{group}") == ["(+ 1 1)", "1"]

    def test_nesting_error_dumps_nothing(self) -> None:
        lines: list[str] = []
        with pytest.raises(ParseError):
            parse("(" * 600 + "1", ast_debug=True, sink=lines.append)
        assert lines == []
