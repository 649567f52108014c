"""
Defines the abstract syntax tree (AST) node classes for the Letter language.

Every grammar production result has its own node class carrying exactly the
fields that production fills in, so a partially built node cannot exist. The
class-level `type` tag names the node kind.

Classes:
    ASTNode:
        Base class of all nodes. Provides `to_dict()` for serialization.

    Program, BlockStatement, ExpressionStatement, EmptyStatement,
    VariableStatement, VariableDeclaration, IfStatement, WhileStatement,
    DoStatement, ForStatement, FunctionDeclaration, ReturnStatement,
    ClassDeclaration:
        Statement nodes.

    Identifier, ThisExpression, Super, NewExpression, CallExpression,
    MemberExpression, AssignmentExpression, LogicalExpression,
    BinaryExpression, UnaryExpression:
        Expression nodes.

    NumericLiteral, StringLiteral, BooleanLiteral, NullLiteral:
        Literal nodes.

Serialized shape:
    `to_dict()` returns `{"type": <tag>, <field>: <value>, ...}` with fields in
    declaration order and child nodes nested as dicts. Tools consuming
    the JSON rely on these names, including `computed` on member access and
    the operator text on operator nodes.

Example:
    node = BinaryExpression("+", NumericLiteral(2), NumericLiteral(3))
    node.to_dict()["operator"]  # '+'
"""

import json
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

ASTDict = dict[str, Any]
"""Plain-dict form of a node, suitable for JSON output."""


class ASTNode:
    """Base class for every Letter AST node.

    Attributes:
        type (str): The node kind, e.g. "BinaryExpression".
    """

    type: ClassVar[str] = "ASTNode"

    def to_dict(self) -> ASTDict:
        """Converts the node and its descendants to nested dicts.

        Works from an explicit stack, so chains thousands of nodes deep (as
        a left-folded `a + a + ... + a` produces) convert without recursion.
        """
        root: ASTDict = {}
        pending: list[tuple[ASTNode, ASTDict]] = [(self, root)]
        while pending:
            node, out = pending.pop()
            out["type"] = node.type
            for f in fields(node):  # type: ignore[arg-type]
                value = getattr(node, f.name)
                if isinstance(value, list):
                    value = [_placeholder(v, pending) for v in value]
                else:
                    value = _placeholder(value, pending)
                out[f.metadata.get("json", f.name)] = value
        return root


def _placeholder(value: Any, pending: list[tuple[ASTNode, ASTDict]]) -> Any:
    """Returns `value`, or an empty dict that is filled once `value` is popped."""
    if isinstance(value, ASTNode):
        out: ASTDict = {}
        pending.append((value, out))
        return out
    return value


_END = object()


def to_json(node: ASTNode, indent: int | None = 2) -> str:
    """Serializes a node and all its descendants to a JSON string.

    The output matches `json.dumps(node.to_dict(), indent=indent)`, but
    containers are walked with an explicit stack since the json module
    recurses once per nesting level. Scalars are still encoded by `json`.
    """
    item_sep = "," if indent is not None else ", "
    out: list[str] = []
    # [remaining (key, value) pairs, closing bracket, depth of the items]
    frames: list[list[Any]] = []

    def newline(depth: int) -> str:
        return "" if indent is None else "\n" + " " * (indent * depth)

    def start(value: Any, depth: int) -> None:
        if isinstance(value, dict) and value:
            out.append("{")
            frames.append([iter(value.items()), "}", depth + 1])
        elif isinstance(value, list) and value:
            out.append("[")
            frames.append([((None, v) for v in value), "]", depth + 1])
        else:
            out.append(json.dumps(value))

    start(node.to_dict(), 0)
    while frames:
        items, closer, depth = frames[-1]
        item = next(items, _END)
        if item is _END:
            frames.pop()
            out.append(newline(depth - 1) + closer)
            continue
        if out[-1] not in ("{", "["):
            out.append(item_sep)
        out.append(newline(depth))
        key, value = item
        if key is not None:
            out.append(json.dumps(key) + ": ")
        start(value, depth)
    return "".join(out)


# Statements


@dataclass
class Program(ASTNode):
    type: ClassVar[str] = "Program"
    body: list[ASTNode] = field(default_factory=list)


@dataclass
class BlockStatement(ASTNode):
    type: ClassVar[str] = "BlockStatement"
    body: list[ASTNode] = field(default_factory=list)


@dataclass
class ExpressionStatement(ASTNode):
    type: ClassVar[str] = "ExpressionStatement"
    expression: ASTNode


@dataclass
class EmptyStatement(ASTNode):
    type: ClassVar[str] = "EmptyStatement"


@dataclass
class Identifier(ASTNode):
    type: ClassVar[str] = "Identifier"
    name: str


@dataclass
class VariableDeclaration(ASTNode):
    type: ClassVar[str] = "VariableDeclaration"
    id: Identifier
    init: ASTNode | None = None


@dataclass
class VariableStatement(ASTNode):
    type: ClassVar[str] = "VariableStatement"
    declarations: list[VariableDeclaration]


@dataclass
class IfStatement(ASTNode):
    type: ClassVar[str] = "IfStatement"
    test: ASTNode
    consequent: ASTNode
    alternate: ASTNode | None = None


@dataclass
class WhileStatement(ASTNode):
    type: ClassVar[str] = "WhileStatement"
    test: ASTNode
    body: ASTNode


@dataclass
class DoStatement(ASTNode):
    type: ClassVar[str] = "DoStatement"
    body: ASTNode
    test: ASTNode


@dataclass
class ForStatement(ASTNode):
    """`for (init; test; update) body`; each header part may be omitted."""

    type: ClassVar[str] = "ForStatement"
    init: ASTNode | None
    test: ASTNode | None
    update: ASTNode | None
    body: ASTNode


@dataclass
class FunctionDeclaration(ASTNode):
    type: ClassVar[str] = "FunctionDeclaration"
    name: Identifier
    params: list[Identifier]
    body: BlockStatement


@dataclass
class ReturnStatement(ASTNode):
    type: ClassVar[str] = "ReturnStatement"
    argument: ASTNode | None = None


@dataclass
class ClassDeclaration(ASTNode):
    """A class with an optional single superclass.

    Serialized with the `superClass` key.
    """

    type: ClassVar[str] = "ClassDeclaration"
    id: Identifier
    super_class: Identifier | None = field(metadata={"json": "superClass"})
    body: BlockStatement


# Expressions


@dataclass
class ThisExpression(ASTNode):
    type: ClassVar[str] = "ThisExpression"


@dataclass
class Super(ASTNode):
    type: ClassVar[str] = "Super"


@dataclass
class NewExpression(ASTNode):
    type: ClassVar[str] = "NewExpression"
    callee: ASTNode
    arguments: list[ASTNode] = field(default_factory=list)


@dataclass
class CallExpression(ASTNode):
    type: ClassVar[str] = "CallExpression"
    callee: ASTNode
    arguments: list[ASTNode] = field(default_factory=list)


@dataclass
class MemberExpression(ASTNode):
    """Property access: `obj.name` (computed=False) or `obj[expr]` (computed=True)."""

    type: ClassVar[str] = "MemberExpression"
    computed: bool
    object: ASTNode
    property: ASTNode


@dataclass
class AssignmentExpression(ASTNode):
    type: ClassVar[str] = "AssignmentExpression"
    operator: str
    left: ASTNode
    right: ASTNode


@dataclass
class LogicalExpression(ASTNode):
    type: ClassVar[str] = "LogicalExpression"
    operator: str
    left: ASTNode
    right: ASTNode


@dataclass
class BinaryExpression(ASTNode):
    type: ClassVar[str] = "BinaryExpression"
    operator: str
    left: ASTNode
    right: ASTNode


@dataclass
class UnaryExpression(ASTNode):
    type: ClassVar[str] = "UnaryExpression"
    operator: str
    argument: ASTNode


# Literals


@dataclass
class NumericLiteral(ASTNode):
    type: ClassVar[str] = "NumericLiteral"
    value: int


@dataclass
class StringLiteral(ASTNode):
    type: ClassVar[str] = "StringLiteral"
    value: str


@dataclass
class BooleanLiteral(ASTNode):
    type: ClassVar[str] = "BooleanLiteral"
    value: bool


@dataclass
class NullLiteral(ASTNode):
    type: ClassVar[str] = "NullLiteral"
    value: None = None


__all__ = [
    "ASTDict",
    "ASTNode",
    "AssignmentExpression",
    "BinaryExpression",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "ClassDeclaration",
    "DoStatement",
    "EmptyStatement",
    "ExpressionStatement",
    "ForStatement",
    "FunctionDeclaration",
    "Identifier",
    "IfStatement",
    "LogicalExpression",
    "MemberExpression",
    "NewExpression",
    "NullLiteral",
    "NumericLiteral",
    "Program",
    "ReturnStatement",
    "StringLiteral",
    "Super",
    "ThisExpression",
    "UnaryExpression",
    "VariableDeclaration",
    "VariableStatement",
    "WhileStatement",
    "to_json",
]
