"""
Token kinds and the ordered lexical rule table for the Letter language.

The tokenizer walks `token_spec` top to bottom and takes the first rule whose
pattern matches at the start of the remaining input, so the order of the
entries below is the precedence of the rules:

    - skippable text (whitespace, comments) first
    - `!=` / `==` before logical `!`
    - keywords before the catch-all identifier rule
    - compound assignments (`+=`) before their operator prefixes (`+`)

A rule whose kind is `None` is skipped instead of producing a token.

Exports:
    - token_spec: ordered list of (compiled pattern, kind-or-None)
    - keywords: reserved words, each its own token kind
    - literal_tokens: token kinds that start a literal
    - assignment_tokens: token kinds of assignment operators
"""

import re

# Token kinds that are not spelled by their own text
RELATIONAL_OPERATOR = "RELATIONAL_OPERATOR"
EQUALITY_OPERATOR = "EQUALITY_OPERATOR"
LOGICAL_AND = "LOGICAL_AND"
LOGICAL_OR = "LOGICAL_OR"
LOGICAL_NOT = "LOGICAL_NOT"
SIMPLE_ASSIGN = "SIMPLE_ASSIGN"
COMPLEX_ASSIGN = "COMPLEX_ASSIGN"
ADDITIVE_OPERATOR = "ADDITIVE_OPERATOR"
MULTIPLICATIVE_OPERATOR = "MULTIPLICATIVE_OPERATOR"
NUMBER = "NUMBER"
STRING = "STRING"
IDENTIFIER = "IDENTIFIER"

punctuation: tuple[str, ...] = (";", "{", "}", "(", ")", "[", "]", ",", ".")

keywords: tuple[str, ...] = (
    "let",
    "if",
    "else",
    "true",
    "false",
    "null",
    "class",
    "this",
    "extends",
    "super",
    "new",
    "while",
    "do",
    "for",
    "def",
    "return",
)

literal_tokens: frozenset[str] = frozenset({NUMBER, STRING, "true", "false", "null"})

assignment_tokens: frozenset[str] = frozenset({SIMPLE_ASSIGN, COMPLEX_ASSIGN})

_rules: list[tuple[str, str | None]] = [
    # Whitespace and comments
    (r"\s+", None),
    (r"//.*", None),
    (r"/\*[\s\S]*?\*/", None),
    # Delimiters
    *[(re.escape(p), p) for p in punctuation],
    # Comparison and logic
    (r"[<>]=?", RELATIONAL_OPERATOR),
    (r"[=!]=", EQUALITY_OPERATOR),
    (r"&&", LOGICAL_AND),
    (r"\|\|", LOGICAL_OR),
    (r"!", LOGICAL_NOT),
    # Keywords
    *[(rf"\b{kw}\b", kw) for kw in keywords],
    # Assignment
    (r"[*/+\-]=", COMPLEX_ASSIGN),
    (r"=", SIMPLE_ASSIGN),
    # Arithmetic
    (r"[+\-]", ADDITIVE_OPERATOR),
    (r"[*/]", MULTIPLICATIVE_OPERATOR),
    # Literals
    (r"\d+", NUMBER),
    (r'"[^"]*"', STRING),
    (r"'[^']*'", STRING),
    # Must stay last: every keyword is also a valid identifier shape
    (r"\w+", IDENTIFIER),
]

token_spec: list[tuple[re.Pattern[str], str | None]] = [
    (re.compile(pattern), kind) for pattern, kind in _rules
]

__all__ = [
    "ADDITIVE_OPERATOR",
    "COMPLEX_ASSIGN",
    "EQUALITY_OPERATOR",
    "IDENTIFIER",
    "LOGICAL_AND",
    "LOGICAL_NOT",
    "LOGICAL_OR",
    "MULTIPLICATIVE_OPERATOR",
    "NUMBER",
    "RELATIONAL_OPERATOR",
    "SIMPLE_ASSIGN",
    "STRING",
    "assignment_tokens",
    "keywords",
    "literal_tokens",
    "punctuation",
    "token_spec",
]
