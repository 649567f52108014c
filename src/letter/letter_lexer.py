"""
Lexical analyzer for the Letter programming language.

This module turns raw source text into tokens, one token per request:

Classes:
    Token: A single token with kind, matched text, and source location.
    LexicalError: Raised when no lexical rule matches the remaining input.
    Tokenizer: Lazily pulls tokens out of a source string.

Features:
    - Skips whitespace, `//` line comments and `/* */` block comments
    - Ordered rule table: the first rule that matches wins (see `letter_constants`)
    - Recognizes:
        * Keywords (whole words only) and identifiers
        * Integer numbers
        * Single- and double-quoted strings (no escape sequences)
        * Operators and punctuation

Example:
    >>> tokenizer = Tokenizer()
    >>> tokenizer.init("let x = 42;")
    >>> tokenizer.get_next_token()
    Token(let, let)

Exports:
    - Token
    - LexicalError
    - Tokenizer
    - tokenize
"""

import logging
from collections.abc import Iterator
from typing import Any

from letter.letter_constants import token_spec

logger = logging.getLogger(__name__)


class Token:
    """Represents a single lexical token in the Letter language.

    Attributes:
        type (str): The token kind (e.g. 'IDENTIFIER', 'NUMBER', 'let', ';').
        value (str): The raw source text the token was matched from.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, value: str, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        """Tokens compare by kind and text; the location is for diagnostics only."""
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value))


class LexicalError(SyntaxError):
    """No lexical rule matches the input at the current cursor.

    Attributes:
        char (str): The offending character.
        position (int): Offset of the character in the source.
        line (int): 1-based line of the character.
        col (int): 1-based column of the character.
    """

    def __init__(self, char: str, position: int, line: int, col: int) -> None:
        super().__init__(f'Unexpected token: "{char}" at line {line}, col {col}')
        self.char = char
        self.position = position
        self.line = line
        self.col = col


class Tokenizer:
    """Lazily pulls tokens from a source string.

    The tokenizer is created once and re-armed with `init()` for every new
    source. Each call to `get_next_token()` scans from the cursor and returns
    the next token, or None once the input is exhausted.

    Attributes:
        source (str): The text being scanned.
        cursor (int): Offset of the first character not yet consumed.
        line (int): 1-based line at the cursor.
        col (int): 1-based column at the cursor.
    """

    def __init__(self) -> None:
        self.init("")

    def init(self, source: str) -> None:
        """Resets scanning state to the start of `source`."""
        self.source = source
        self.cursor = 0
        self.line = 1
        self.col = 1

    def is_eof(self) -> bool:
        """Whether the cursor reached the end of the source."""
        return self.cursor == len(self.source)

    def has_more_tokens(self) -> bool:
        """Whether there is unscanned input left.

        Trailing whitespace or comments count as input, so this may report
        True while the next `get_next_token()` call returns None.
        """
        return self.cursor < len(self.source)

    def get_next_token(self) -> Token | None:
        """Scans and returns the next token.

        Returns:
            Token | None: The next token, or None at end of input.

        Raises:
            LexicalError: If no rule matches the input at the cursor.
        """
        while self.has_more_tokens():
            remaining = self.source[self.cursor :]

            for pattern, kind in token_spec:
                matched = pattern.match(remaining)
                if matched is None or not matched.group(0):
                    continue

                line, col = self.line, self.col
                self._advance(matched.group(0))
                if kind is not None:
                    return Token(kind, matched.group(0), line, col)
                # Skipped text: rescan from the first rule
                break
            else:
                raise LexicalError(remaining[0], self.cursor, self.line, self.col)

        return None

    def tokens(self) -> Iterator[Token]:
        """Yields the remaining tokens until end of input."""
        token = self.get_next_token()
        while token is not None:
            yield token
            token = self.get_next_token()

    def _advance(self, text: str) -> None:
        self.cursor += len(text)
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.col = len(text) - text.rfind("\n")
        else:
            self.col += len(text)


def tokenize(source: str) -> list[Token]:
    """Tokenizes a whole source string.

    Args:
        source (str): Letter source code.

    Returns:
        list[Token]: Every token of the source, in order.

    Raises:
        LexicalError: On the first character no rule accepts.
    """
    tokenizer = Tokenizer()
    tokenizer.init(source)
    tokens = list(tokenizer.tokens())
    logger.debug("tokenized %d characters into %d tokens", len(source), len(tokens))
    return tokens


__all__ = ["LexicalError", "Token", "Tokenizer", "tokenize"]
