"""Boolean combinations of filters.

A boolean line combines parenthesised filters with AND, OR, XOR and NOT::

    (due this week) AND NOT (tags include #home)
    ((priority is high) OR (priority is highest)) XOR (is recurring)

Each parenthesised operand is either another boolean expression or a
single filter line, which is compiled through the normal field
dispatch. NOT binds tightest, then AND, then XOR, then OR.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from ...models import Task
from ..components import (
    Filter,
    FilterFunction,
    FilterOrErrorMessage,
    QueryComponentOrError,
)
from ..explanation import Explanation
from .base import Field

LeafParser = Callable[[str, date], FilterOrErrorMessage]

OPERATORS = ("AND", "OR", "XOR", "NOT")

_BOOLEAN_LINE = re.compile(r"^(?:\(|NOT[\s(])")


class BooleanSyntaxError(ValueError):
    """Raised while parsing a malformed boolean expression."""


@dataclass(frozen=True)
class _Node:
    predicate: FilterFunction
    explanation: Explanation


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str


def _is_nested(text: str) -> bool:
    return _BOOLEAN_LINE.search(text) is not None


def tokenize(line: str) -> list[_Token]:
    """Split a boolean line into operators and parenthesised operands."""
    tokens: list[_Token] = []
    position = 0
    length = len(line)
    while position < length:
        char = line[position]
        if char.isspace():
            position += 1
            continue

        if char == "(":
            depth = 0
            end = position
            while end < length:
                if line[end] == "(":
                    depth += 1
                elif line[end] == ")":
                    depth -= 1
                    if depth == 0:
                        break
                end += 1
            if depth != 0:
                raise BooleanSyntaxError("unbalanced parentheses")
            inner = line[position + 1 : end].strip()
            if not inner:
                raise BooleanSyntaxError("empty parentheses")
            tokens.append(_Token("operand", inner))
            position = end + 1
            continue

        if char == ")":
            raise BooleanSyntaxError("unbalanced parentheses")

        end = position
        while end < length and not line[end].isspace() and line[end] not in "()":
            end += 1
        word = line[position:end]
        if word not in OPERATORS:
            raise BooleanSyntaxError(f"unexpected '{word}'; put each filter in parentheses")
        tokens.append(_Token("operator", word))
        position = end

    return tokens


class _ExpressionParser:
    """Recursive descent over the tokens of one boolean line."""

    def __init__(self, tokens: list[_Token], compile_operand: Callable[[str], _Node]) -> None:
        self._tokens = tokens
        self._position = 0
        self._compile_operand = compile_operand

    def parse(self) -> _Node:
        if not self._tokens:
            raise BooleanSyntaxError("empty expression")
        node = self._parse_binary("OR")
        if self._position != len(self._tokens):
            raise BooleanSyntaxError(f"unexpected '{self._tokens[self._position].text}'")
        return node

    def _peek_operator(self, operator: str) -> bool:
        if self._position >= len(self._tokens):
            return False
        token = self._tokens[self._position]
        return token.kind == "operator" and token.text == operator

    def _parse_binary(self, operator: str) -> _Node:
        # OR binds loosest, then XOR, then AND
        operand_parser = {
            "OR": lambda: self._parse_binary("XOR"),
            "XOR": lambda: self._parse_binary("AND"),
            "AND": self._parse_not,
        }[operator]

        nodes = [operand_parser()]
        while self._peek_operator(operator):
            self._position += 1
            nodes.append(operand_parser())
        if len(nodes) == 1:
            return nodes[0]
        return _combine(operator, nodes)

    def _parse_not(self) -> _Node:
        if self._peek_operator("NOT"):
            self._position += 1
            child = self._parse_not()
            return _Node(
                lambda task: not child.predicate(task),
                Explanation.boolean_not(child.explanation),
            )
        return self._parse_operand()

    def _parse_operand(self) -> _Node:
        if self._position >= len(self._tokens):
            raise BooleanSyntaxError("missing operand at end of expression")
        token = self._tokens[self._position]
        if token.kind != "operand":
            raise BooleanSyntaxError(f"unexpected '{token.text}'")
        self._position += 1
        return self._compile_operand(token.text)


def _combine(operator: str, nodes: list[_Node]) -> _Node:
    predicates = [node.predicate for node in nodes]
    explanations = [node.explanation for node in nodes]

    if operator == "AND":
        return _Node(
            lambda task: all(predicate(task) for predicate in predicates),
            Explanation.boolean_and(explanations),
        )
    if operator == "OR":
        return _Node(
            lambda task: any(predicate(task) for predicate in predicates),
            Explanation.boolean_or(explanations),
        )

    def exactly_one(task: Task) -> bool:
        matched = 0
        for predicate in predicates:
            if predicate(task):
                matched += 1
                if matched > 1:
                    return False
        return matched == 1

    return _Node(exactly_one, Explanation.boolean_xor(explanations))


def _leaf_explanation(filter_: Filter) -> Explanation:
    explanation = filter_.explanation
    if explanation.description == filter_.instruction and not explanation.children:
        return Explanation(filter_.instruction)
    return Explanation(f"{filter_.instruction} =>", (explanation,))


class BooleanField(Field):
    """Combine other filters with AND, OR, XOR and NOT.

    The field does not know the other fields; it is given a parser that
    compiles a single filter line, so operands get the same dispatch as
    top-level lines.
    """

    name = "boolean query"

    def __init__(self, parse_leaf: LeafParser) -> None:
        self._parse_leaf = parse_leaf

    def filter_regexp(self) -> re.Pattern[str]:
        return _BOOLEAN_LINE

    def create_filter_or_error(self, line: str, today: date) -> FilterOrErrorMessage:
        try:
            node = self._parse(line, today)
        except BooleanSyntaxError as e:
            return QueryComponentOrError.from_error(line, f"malformed boolean query -- {e}")
        return QueryComponentOrError.from_component(
            line, Filter(line, node.predicate, node.explanation)
        )

    def _parse(self, text: str, today: date) -> _Node:
        def compile_operand(operand: str) -> _Node:
            if _is_nested(operand):
                return self._parse(operand, today)
            result = self._parse_leaf(operand, today)
            if result.component is None:
                raise BooleanSyntaxError(f'{result.error} (in "{operand}")')
            leaf = result.component
            return _Node(leaf.predicate, _leaf_explanation(leaf))

        return _ExpressionParser(tokenize(text), compile_operand).parse()
