import pytest

from letter.letter_lexer import Tokenizer
from letter.letter_parser import Parser


@pytest.fixture  # type: ignore[misc]
def tokenizer() -> Tokenizer:
    return Tokenizer()


@pytest.fixture  # type: ignore[misc]
def parser() -> Parser:
    return Parser()
