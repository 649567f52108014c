import io
import json
import subprocess
import sys

import pytest

from letter import letter_cli
from letter.letter_ast import Program


def test_run_letter_prints_ast(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter("x = 1;")
    out = json.loads(capsys.readouterr().out)
    assert out["type"] == "Program"
    assert out["body"][0]["expression"]["type"] == "AssignmentExpression"


def test_run_letter_prints_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter("X + 5 > 10;", tokens=True, ast=False)
    assert capsys.readouterr().out.splitlines() == [
        "Token(IDENTIFIER, X)",
        "Token(ADDITIVE_OPERATOR, +)",
        "Token(NUMBER, 5)",
        "Token(RELATIONAL_OPERATOR, >)",
        "Token(NUMBER, 10)",
        "Token(;, ;)",
    ]


def test_run_letter_tokens_then_ast(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter("a;", tokens=True, indent=0)
    lines = capsys.readouterr().out.splitlines()
    assert lines[:2] == ["Token(IDENTIFIER, a)", "Token(;, ;)"]
    assert json.loads(lines[2])["body"][0]["type"] == "ExpressionStatement"
    assert len(lines) == 3


def test_run_letter_raises_syntax_error() -> None:
    with pytest.raises(SyntaxError, match="Invalid left-hand side"):
        letter_cli.run_letter("5 = 3;")


def test_run_letter_uses_parse(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    seen: list[str] = []

    def fake_parse(source: str) -> Program:
        seen.append(source)
        return Program([])

    monkeypatch.setattr("letter.letter_cli.parse", fake_parse)
    letter_cli.run_letter("whatever")
    assert seen == ["whatever"]
    assert json.loads(capsys.readouterr().out) == {"type": "Program", "body": []}


def test_main_with_source_argument(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.main(["let a = 1;"])
    out = json.loads(capsys.readouterr().out)
    assert out["body"][0]["type"] == "VariableStatement"


def test_main_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("p.calc();"))
    letter_cli.main(["--indent", "0"])
    out = capsys.readouterr().out
    assert out.count("\n") == 1
    assert json.loads(out)["body"][0]["expression"]["type"] == "CallExpression"


def test_main_tokens_only(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.main(["--tokens", "--no-ast", "let"])
    assert capsys.readouterr().out == "Token(let, let)\n"


def test_main_syntax_error_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        letter_cli.main(["a +"])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("[error] >>> Unexpected end of input")


def test_main_lexical_error_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        letter_cli.main(["--tokens", "a @ b"])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert 'Unexpected token: "@"' in captured.err


def test_main_deep_nesting_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        letter_cli.main(["(" * 10000 + "a" + ")" * 10000 + ";"])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith("[error] >>> Expression nested too deeply")


def test_main_prints_long_chain(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.main([" * ".join(["x"] * 1500) + ";"])
    out = capsys.readouterr().out
    assert out.count('"BinaryExpression"') == 1499
    assert out.count('"operator": "*"') == 1499


def test_main_verbose_logs(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("DEBUG", logger="letter")
    letter_cli.main(["--verbose", "a; b;"])
    assert "parsed 2 top-level statements" in caplog.text


def test_cli_as_subprocess() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "letter.letter_cli", "x;"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert json.loads(result.stdout)["body"][0]["expression"] == {
        "type": "Identifier",
        "name": "x",
    }
