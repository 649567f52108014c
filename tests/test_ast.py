import json
from dataclasses import fields

import hypothesis.strategies as st
import pytest
from hypothesis import given

import letter.letter_ast as ast_module
from letter.letter_ast import (
    ASTNode,
    BinaryExpression,
    BlockStatement,
    ClassDeclaration,
    EmptyStatement,
    ExpressionStatement,
    Identifier,
    MemberExpression,
    NullLiteral,
    NumericLiteral,
    Program,
    StringLiteral,
    to_json,
)


def node_classes() -> list[type[ASTNode]]:
    return ASTNode.__subclasses__()


def test_every_node_kind_is_exported() -> None:
    assert all(cls.__name__ in ast_module.__all__ for cls in node_classes())
    assert {cls.type for cls in node_classes()} == {
        "Program",
        "BlockStatement",
        "ExpressionStatement",
        "EmptyStatement",
        "VariableStatement",
        "VariableDeclaration",
        "IfStatement",
        "WhileStatement",
        "DoStatement",
        "ForStatement",
        "FunctionDeclaration",
        "ReturnStatement",
        "ClassDeclaration",
        "Identifier",
        "ThisExpression",
        "Super",
        "NewExpression",
        "CallExpression",
        "MemberExpression",
        "AssignmentExpression",
        "LogicalExpression",
        "BinaryExpression",
        "UnaryExpression",
        "NumericLiteral",
        "StringLiteral",
        "BooleanLiteral",
        "NullLiteral",
    }


def test_type_tag_is_not_a_field() -> None:
    for cls in node_classes():
        assert "type" not in {f.name for f in fields(cls)}  # type: ignore[arg-type]


def test_to_dict_field_order() -> None:
    node = MemberExpression(True, Identifier("a"), NumericLiteral(0))
    assert list(node.to_dict()) == ["type", "computed", "object", "property"]


def test_to_dict_nested() -> None:
    node = BinaryExpression("+", Identifier("x"), NumericLiteral(5))
    assert node.to_dict() == {
        "type": "BinaryExpression",
        "operator": "+",
        "left": {"type": "Identifier", "name": "x"},
        "right": {"type": "NumericLiteral", "value": 5},
    }


def test_to_dict_lists_and_empty_nodes() -> None:
    program = Program([EmptyStatement(), BlockStatement([])])
    assert program.to_dict() == {
        "type": "Program",
        "body": [
            {"type": "EmptyStatement"},
            {"type": "BlockStatement", "body": []},
        ],
    }


def test_class_declaration_serializes_super_class_key() -> None:
    node = ClassDeclaration(Identifier("B"), Identifier("A"), BlockStatement([]))
    d = node.to_dict()
    assert list(d) == ["type", "id", "superClass", "body"]
    assert d["superClass"] == {"type": "Identifier", "name": "A"}


def test_null_literal_value() -> None:
    assert NullLiteral().to_dict() == {"type": "NullLiteral", "value": None}


def test_to_json() -> None:
    program = Program([NullLiteral()])
    text = to_json(program)
    assert "\n" in text
    assert json.loads(text) == program.to_dict()
    assert "\n" not in to_json(program, indent=None)


@pytest.mark.parametrize("indent", [None, 0, 2, 4])  # type: ignore[misc]
def test_to_json_matches_json_module(indent: int | None) -> None:
    program = Program(
        [
            EmptyStatement(),
            BlockStatement([]),
            ClassDeclaration(Identifier("B"), None, BlockStatement([])),
            ExpressionStatement(
                MemberExpression(True, Identifier("a"), StringLiteral('q"é\n'))
            ),
            ExpressionStatement(BinaryExpression("+", NullLiteral(), NumericLiteral(1))),
        ]
    )
    assert to_json(program, indent=indent) == json.dumps(program.to_dict(), indent=indent)


def left_chain(length: int) -> ASTNode:
    node: ASTNode = Identifier("a")
    for _ in range(length - 1):
        node = BinaryExpression("+", node, Identifier("a"))
    return node


def test_long_chain_to_dict() -> None:
    d = left_chain(1200).to_dict()
    depth = 0
    while d["type"] == "BinaryExpression":
        assert d["right"] == {"type": "Identifier", "name": "a"}
        d = d["left"]
        depth += 1
    assert depth == 1199
    assert d == {"type": "Identifier", "name": "a"}


@pytest.mark.parametrize("indent", [None, 2])  # type: ignore[misc]
def test_long_chain_to_json(indent: int | None) -> None:
    text = to_json(Program([ExpressionStatement(left_chain(1200))]), indent=indent)
    assert text.count('"BinaryExpression"') == 1199
    assert text.count('"Identifier"') == 1200
    assert text.startswith('{"type": "Program"') == (indent is None)
    assert text.endswith("}")


def test_node_equality() -> None:
    assert Identifier("x") == Identifier("x")
    assert Identifier("x") != Identifier("y")
    assert NumericLiteral(1) != StringLiteral("1")  # type: ignore[comparison-overlap]
    assert EmptyStatement() != "EmptyStatement"


@given(st.text())  # type: ignore[misc]
def test_string_literal_survives_json(value: str) -> None:
    node = StringLiteral(value)
    assert json.loads(to_json(node))["value"] == value


@given(st.text(min_size=1), st.text(min_size=1))  # type: ignore[misc]
def test_identifier_eq_by_name(a: str, b: str) -> None:
    assert (Identifier(a) == Identifier(b)) == (a == b)
