"""
Letter Language Parser

Parses Letter source text into an abstract syntax tree (AST).

This module implements a predictive recursive-descent parser: each grammar
production is one `parse_*` method, and the next production is chosen by
looking at a single token of lookahead pulled from the `Tokenizer`. Tokens are
consumed in exactly one place, `match()`.

Supported Constructs
--------------------
- Statements:
    * Blocks `{ ... }` and empty statements `;`
    * Variables: `let a = 1, b;`
    * Control flow: `if`/`else`, `while`, `do ... while`, `for`
    * Functions: `def name(a, b) { ... }` and `return`
    * Classes: `class Foo extends Bar { ... }`

- Expressions, loosest to tightest:
    * Assignment `= *= /= += -=` (right-associative, target checked)
    * Logical `||`, `&&`
    * Equality `== !=`, relational `< > <= >=`
    * Additive `+ -`, multiplicative `* /`
    * Unary `+ - !`
    * Calls `f(a)(b)`, `super(...)`, member access `a.b`, `a[b]`
    * Primaries: literals, identifiers, `this`, `new`, parenthesized expressions

Binary operator levels are parsed with a loop that folds each new operand
into the left side, which makes them left-associative.

Entry Points
------------
- `parse(source)`: module-level helper, one fresh `Parser` per call.
- `Parser().parse(source)`: parse with a reusable parser instance.

Raises
------
SyntaxError
    On the first token a production does not accept, on premature end of
    input, or on an invalid assignment target. Lexical errors surface as
    `LexicalError`, a `SyntaxError` subclass.
"""

from __future__ import annotations

import logging

from letter.letter_ast import (
    AssignmentExpression,
    ASTNode,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ClassDeclaration,
    DoStatement,
    EmptyStatement,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    LogicalExpression,
    MemberExpression,
    NewExpression,
    NullLiteral,
    NumericLiteral,
    Program,
    ReturnStatement,
    StringLiteral,
    Super,
    ThisExpression,
    UnaryExpression,
    VariableDeclaration,
    VariableStatement,
    WhileStatement,
)
from letter.letter_constants import (
    ADDITIVE_OPERATOR,
    COMPLEX_ASSIGN,
    EQUALITY_OPERATOR,
    IDENTIFIER,
    LOGICAL_AND,
    LOGICAL_NOT,
    LOGICAL_OR,
    MULTIPLICATIVE_OPERATOR,
    NUMBER,
    RELATIONAL_OPERATOR,
    SIMPLE_ASSIGN,
    STRING,
    assignment_tokens,
    literal_tokens,
)
from letter.letter_lexer import Token, Tokenizer

logger = logging.getLogger(__name__)

binary_precedence: dict[str, int] = {
    LOGICAL_OR: 1,
    LOGICAL_AND: 2,
    EQUALITY_OPERATOR: 3,
    RELATIONAL_OPERATOR: 4,
    ADDITIVE_OPERATOR: 5,
    MULTIPLICATIVE_OPERATOR: 6,
}
"""Binding strength of each binary operator kind; higher binds tighter."""

logical_operators: frozenset[str] = frozenset({LOGICAL_OR, LOGICAL_AND})


class Parser:
    """
    Letter Parser Class

    Turns a source string into a `Program` node. The parser owns a
    `Tokenizer` and a single lookahead token; both are overwritten by every
    call to `parse()`, so one instance must not run two parses at once.

    Attributes
    ----------
    tokenizer : Tokenizer
        Token source for the current parse.
    lookahead : Token | None
        The next unconsumed token, None at end of input.
    """

    def __init__(self) -> None:
        self.tokenizer: Tokenizer = Tokenizer()
        self.lookahead: Token | None = None

    def parse(self, source: str) -> Program:
        """Parse a full Letter program and return its root node.

        Raises:
            SyntaxError: Also when the source nests deeper than the Python
                stack allows.
        """
        self.tokenizer.init(source)
        # Prime the lookahead for predictive parsing
        self.lookahead = self.tokenizer.get_next_token()

        logger.debug("parsing %d characters", len(source))
        try:
            program = self.parse_program()
        except RecursionError as e:
            tok = self.lookahead
            where = f" at line {tok.line}, col {tok.col}" if tok is not None else ""
            raise SyntaxError(f"Expression nested too deeply{where}") from e
        logger.debug("parsed %d top-level statements", len(program.body))
        return program

    # Token helpers

    def check(self, *types: str) -> bool:
        """Whether the lookahead is one of `types` (never true at end of input)."""
        return self.lookahead is not None and self.lookahead.type in types

    def match(self, type_: str) -> Token:
        """Consume the lookahead if it is of kind `type_` and advance.

        Raises:
            SyntaxError: At end of input, or if the lookahead is of another kind.
        """
        tok = self.lookahead
        if tok is None:
            raise SyntaxError(f'Unexpected end of input, expected: "{type_}"')
        if tok.type != type_:
            raise SyntaxError(
                f'Unexpected token: "{tok.value}", expected: "{type_}" '
                f"at line {tok.line}, col {tok.col}"
            )
        self.lookahead = self.tokenizer.get_next_token()
        return tok

    # Statements

    def parse_program(self) -> Program:
        """Program : StatementList? EOF"""
        if self.lookahead is None:
            return Program([])
        return Program(self.parse_statement_list())

    def parse_statement_list(self, stop: str | None = None) -> list[ASTNode]:
        """Parse one or more statements, up to end of input or the `stop` token."""
        statements = [self.parse_statement()]
        while self.lookahead is not None and self.lookahead.type != stop:
            statements.append(self.parse_statement())
        return statements

    def parse_statement(self) -> ASTNode:
        """Dispatch on the lookahead; anything unrecognized is an expression statement."""
        kind = self.lookahead.type if self.lookahead is not None else None

        if kind == "{":
            return self.parse_block()
        if kind == ";":
            return self.parse_empty()
        if kind == "let":
            return self.parse_variable_statement()
        if kind == "if":
            return self.parse_if()
        if kind == "while":
            return self.parse_while()
        if kind == "do":
            return self.parse_do()
        if kind == "for":
            return self.parse_for()
        if kind == "def":
            return self.parse_function()
        if kind == "return":
            return self.parse_return()
        if kind == "class":
            return self.parse_class()
        return self.parse_expression_statement()

    def parse_block(self) -> BlockStatement:
        """BlockStatement : '{' StatementList? '}'"""
        self.match("{")
        body = [] if self.check("}") else self.parse_statement_list("}")
        self.match("}")
        return BlockStatement(body)

    def parse_empty(self) -> EmptyStatement:
        self.match(";")
        return EmptyStatement()

    def parse_expression_statement(self) -> ExpressionStatement:
        expression = self.parse_expression()
        self.match(";")
        return ExpressionStatement(expression)

    def parse_variable_statement(self) -> VariableStatement:
        """VariableStatement : 'let' VariableDeclarationList ';'"""
        statement = self.parse_variable_statement_init()
        self.match(";")
        return statement

    def parse_variable_statement_init(self) -> VariableStatement:
        """'let' VariableDeclarationList, without the closing ';' (shared with `for`)."""
        self.match("let")
        return VariableStatement(self.parse_variable_declaration_list())

    def parse_variable_declaration_list(self) -> list[VariableDeclaration]:
        declarations = [self.parse_variable_declaration()]
        while self.check(","):
            self.match(",")
            declarations.append(self.parse_variable_declaration())
        return declarations

    def parse_variable_declaration(self) -> VariableDeclaration:
        """VariableDeclaration : Identifier ('=' AssignmentExpression)?"""
        id_ = self.parse_identifier()
        init = None
        if self.lookahead is not None and not self.check(";", ","):
            self.match(SIMPLE_ASSIGN)
            init = self.parse_assignment()
        return VariableDeclaration(id_, init)

    def parse_if(self) -> IfStatement:
        """IfStatement : 'if' '(' Expression ')' Statement ('else' Statement)?

        The `else` is taken as soon as it is seen, so it always belongs to the
        innermost open `if`.
        """
        self.match("if")
        self.match("(")
        test = self.parse_expression()
        self.match(")")
        consequent = self.parse_statement()

        alternate = None
        if self.check("else"):
            self.match("else")
            alternate = self.parse_statement()

        return IfStatement(test, consequent, alternate)

    def parse_while(self) -> WhileStatement:
        self.match("while")
        self.match("(")
        test = self.parse_expression()
        self.match(")")
        return WhileStatement(test, self.parse_statement())

    def parse_do(self) -> DoStatement:
        """DoStatement : 'do' Statement 'while' '(' Expression ')' ';'"""
        self.match("do")
        body = self.parse_statement()
        self.match("while")
        self.match("(")
        test = self.parse_expression()
        self.match(")")
        self.match(";")
        return DoStatement(body, test)

    def parse_for(self) -> ForStatement:
        """ForStatement : 'for' '(' ForInit? ';' Expression? ';' Expression? ')' Statement"""
        self.match("for")
        self.match("(")

        init = None if self.check(";") else self.parse_for_init()
        self.match(";")

        test = None if self.check(";") else self.parse_expression()
        self.match(";")

        update = None if self.check(")") else self.parse_expression()
        self.match(")")

        return ForStatement(init, test, update, self.parse_statement())

    def parse_for_init(self) -> ASTNode:
        if self.check("let"):
            return self.parse_variable_statement_init()
        return self.parse_expression()

    def parse_function(self) -> FunctionDeclaration:
        """FunctionDeclaration : 'def' Identifier '(' ParamList? ')' BlockStatement"""
        self.match("def")
        name = self.parse_identifier()

        self.match("(")
        params = [] if self.check(")") else self.parse_params()
        self.match(")")

        return FunctionDeclaration(name, params, self.parse_block())

    def parse_params(self) -> list[Identifier]:
        params = [self.parse_identifier()]
        while self.check(","):
            self.match(",")
            params.append(self.parse_identifier())
        return params

    def parse_return(self) -> ReturnStatement:
        self.match("return")
        argument = None if self.check(";") else self.parse_expression()
        self.match(";")
        return ReturnStatement(argument)

    def parse_class(self) -> ClassDeclaration:
        """ClassDeclaration : 'class' Identifier ('extends' Identifier)? BlockStatement"""
        self.match("class")
        id_ = self.parse_identifier()

        super_class = None
        if self.check("extends"):
            self.match("extends")
            super_class = self.parse_identifier()

        return ClassDeclaration(id_, super_class, self.parse_block())

    # Expressions

    def parse_expression(self) -> ASTNode:
        return self.parse_assignment()

    def parse_assignment(self) -> ASTNode:
        """AssignmentExpression : LogicalOR (AssignOp AssignmentExpression)?

        The left side is parsed as an ordinary expression first and only then
        checked to be something that can be assigned to.
        """
        left = self.parse_binary()
        if not self.check(*assignment_tokens):
            return left

        operator = self.match(
            SIMPLE_ASSIGN if self.check(SIMPLE_ASSIGN) else COMPLEX_ASSIGN
        ).value
        if not isinstance(left, (Identifier, MemberExpression)):
            raise SyntaxError("Invalid left-hand side in assignment expression")

        return AssignmentExpression(operator, left, self.parse_assignment())

    def parse_binary(self, min_precedence: int = 1) -> ASTNode:
        """Parse the `||` down to `*` / `/` levels in one loop.

        LogicalOR      : LogicalAND ('||' LogicalAND)*
        LogicalAND     : Equality ('&&' Equality)*
        Equality       : Relational (('==' | '!=') Relational)*
        Relational     : Additive (('<' | '>' | '<=' | '>=') Additive)*
        Additive       : Multiplicative (('+' | '-') Multiplicative)*
        Multiplicative : Unary (('*' | '/') Unary)*

        Operators at or above `min_precedence` are folded into the left side;
        the right operand only takes operators that bind strictly tighter, so
        every level is left-associative.
        """
        left = self.parse_unary()
        while (
            self.lookahead is not None
            and binary_precedence.get(self.lookahead.type, 0) >= min_precedence
        ):
            kind = self.lookahead.type
            operator = self.match(kind).value
            right = self.parse_binary(binary_precedence[kind] + 1)
            if kind in logical_operators:
                left = LogicalExpression(operator, left, right)
            else:
                left = BinaryExpression(operator, left, right)
        return left

    def parse_unary(self) -> ASTNode:
        """UnaryExpression : ('+' | '-' | '!') UnaryExpression | LeftHandSide"""
        operators: list[str] = []
        while self.check(ADDITIVE_OPERATOR, LOGICAL_NOT):
            assert self.lookahead is not None  # for mypy
            operators.append(self.match(self.lookahead.type).value)

        # Innermost operator is the one nearest the operand: `!-x` is !(-(x))
        node = self.parse_left_hand_side()
        for operator in reversed(operators):
            node = UnaryExpression(operator, node)
        return node

    def parse_left_hand_side(self) -> ASTNode:
        """LeftHandSideExpression : CallMemberExpression

        `super` must be called; any other member expression may be.
        """
        if self.check("super"):
            return self.parse_call(self.parse_super())

        member = self.parse_member()
        if self.check("("):
            return self.parse_call(member)
        return member

    def parse_call(self, callee: ASTNode) -> CallExpression:
        """Wrap `callee` in one CallExpression per argument group, e.g. `f()()`."""
        call = CallExpression(callee, self.parse_arguments())
        while self.check("("):
            call = CallExpression(call, self.parse_arguments())
        return call

    def parse_arguments(self) -> list[ASTNode]:
        """Arguments : '(' (AssignmentExpression (',' AssignmentExpression)*)? ')'"""
        self.match("(")
        arguments: list[ASTNode] = []
        if not self.check(")"):
            arguments.append(self.parse_assignment())
            while self.check(","):
                self.match(",")
                arguments.append(self.parse_assignment())
        self.match(")")
        return arguments

    def parse_member(self) -> ASTNode:
        """MemberExpression : Primary ('.' Identifier | '[' Expression ']')*"""
        obj = self.parse_primary()
        while self.check(".", "["):
            if self.check("."):
                self.match(".")
                obj = MemberExpression(False, obj, self.parse_identifier())
            else:
                self.match("[")
                prop = self.parse_expression()
                self.match("]")
                obj = MemberExpression(True, obj, prop)
        return obj

    def parse_primary(self) -> ASTNode:
        tok = self.lookahead
        if tok is None:
            raise SyntaxError('Unexpected end of input, expected: "expression"')

        if tok.type in literal_tokens:
            return self.parse_literal()
        if tok.type == "(":
            # ParenthesizedExpression, inline to keep deep nesting shallow
            self.match("(")
            expression = self.parse_assignment()
            self.match(")")
            return expression
        if tok.type == IDENTIFIER:
            return self.parse_identifier()
        if tok.type == "this":
            return self.parse_this()
        if tok.type == "new":
            return self.parse_new()

        raise SyntaxError(
            f'Unexpected primary expression: "{tok.value}" '
            f"at line {tok.line}, col {tok.col}"
        )

    def parse_identifier(self) -> Identifier:
        return Identifier(self.match(IDENTIFIER).value)

    def parse_this(self) -> ThisExpression:
        self.match("this")
        return ThisExpression()

    def parse_super(self) -> Super:
        self.match("super")
        return Super()

    def parse_new(self) -> NewExpression:
        """NewExpression : 'new' MemberExpression Arguments, e.g. `new ns.Point(1, 2)`"""
        self.match("new")
        callee = self.parse_member()
        return NewExpression(callee, self.parse_arguments())

    def parse_literal(self) -> ASTNode:
        """Literal : NUMBER | STRING | 'true' | 'false' | 'null'"""
        assert self.lookahead is not None  # for mypy
        kind = self.lookahead.type

        if kind == NUMBER:
            tok = self.match(NUMBER)
            try:
                return NumericLiteral(int(tok.value))
            except ValueError as e:
                # Digit count above sys.get_int_max_str_digits()
                raise SyntaxError(
                    f"Numeric literal too long ({len(tok.value)} digits) "
                    f"at line {tok.line}, col {tok.col}"
                ) from e
        if kind == STRING:
            # Drop the surrounding quotes; escapes are kept verbatim
            return StringLiteral(self.match(STRING).value[1:-1])
        if kind in ("true", "false"):
            self.match(kind)
            return BooleanLiteral(kind == "true")
        if kind == "null":
            self.match("null")
            return NullLiteral()

        raise AssertionError(f"Unexpected literal: {self.lookahead}")  # pragma: no cover


def parse(source: str) -> Program:
    """Parse `source` with a parser of its own.

    Safe to call from several threads at once, unlike sharing one `Parser`.

    Raises:
        SyntaxError: On the first lexical or syntax error.
    """
    return Parser().parse(source)


__all__ = ["Parser", "parse"]
