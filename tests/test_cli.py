"""
Command-line interface tests for envresolve.
"""

from __future__ import annotations

import json

import yaml

from envresolve.cli import format_dotenv, main
from envresolve.environment import Environment
from envresolve.parsing import parse


def _write_env(tmp_path, text: str, name: str = ".env") -> str:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_cli_show_json(tmp_path, capsys):
    """
    The show command prints the resolved environment as JSON.
    """
    path = _write_env(tmp_path, "HOST=db\nURL=postgres://${HOST}/app\n")
    exit_code = main(["--file", path, "show", "--format", "json"])
    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {"HOST": "db", "URL": "postgres://db/app"}


def test_cli_show_yaml_without_interpolation(tmp_path, capsys):
    """
    Interpolation can be disabled from the command line.
    """
    path = _write_env(tmp_path, "A=1\nB=${A}\n")
    exit_code = main(["--file", path, "--no-interpolate", "show", "--format", "yaml"])
    assert exit_code == 0
    assert yaml.safe_load(capsys.readouterr().out) == {"A": "1", "B": "${A}"}


def test_cli_show_dotenv_round_trips(tmp_path, capsys):
    """
    The dotenv output parses back to the same values.
    """
    path = _write_env(tmp_path, 'MULTI="line1\\nline2"\nQUOTE="say \\"hi\\" # not a comment"\n')
    exit_code = main(["--file", path, "show"])
    assert exit_code == 0
    output = capsys.readouterr().out
    assert parse(output) == {"MULTI": "line1\nline2", "QUOTE": 'say "hi" # not a comment'}


def test_cli_show_dotenv_keeps_form_feed(tmp_path, capsys):
    """
    Control characters that are not line breaks survive the dotenv output.
    """
    path = _write_env(tmp_path, 'PAGE="a\x0cb"\nSEP="c d"\n')
    assert main(["--file", path, "show"]) == 0
    assert parse(capsys.readouterr().out) == {"PAGE": "a\x0cb", "SEP": "c d"}


def test_format_dotenv_escapes_and_sorts():
    """
    Values are double-quoted with backslashes and control characters escaped.
    """
    env = Environment({"B": 'a\\b"c', "A": "x\ty"})
    assert format_dotenv(env) == 'A="x\\ty"\nB="a\\\\b\\"c"'


def test_cli_later_files_and_overrides_win(tmp_path, capsys):
    """
    Later files override earlier ones, and --set overrides everything.
    """
    base = _write_env(tmp_path, "A=base\nB=base\nC=base\n")
    local = _write_env(tmp_path, "B=local\n", name=".env.local")
    exit_code = main(
        ["--file", base, "--file", local, "--set", "C=cli", "show", "--format", "json"]
    )
    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {"A": "base", "B": "local", "C": "cli"}


def test_cli_config_file(tmp_path, capsys, monkeypatch):
    """
    Load options can come from a YAML file.
    """
    _write_env(tmp_path, "A=1\n")
    _write_env(tmp_path, "B=${A}\n", name=".env.local")
    config = tmp_path / "envresolve.yml"
    config.write_text("files: [.env, .env.local, .env.absent]\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    exit_code = main(["--config", str(config), "show", "--format", "json"])
    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {"A": "1", "B": "1"}


def test_cli_merge_process(tmp_path, capsys, monkeypatch):
    """
    The process environment can be included underneath the files.
    """
    monkeypatch.setenv("ENVRESOLVE_CLI_VAR", "from-process")
    path = _write_env(tmp_path, "A=1\n")
    exit_code = main(["--file", path, "--merge-process", "get", "ENVRESOLVE_CLI_VAR"])
    assert exit_code == 0
    assert capsys.readouterr().out == "from-process\n"


def test_cli_get_and_default(tmp_path, capsys):
    """
    The get command prints one value, or the default when missing.
    """
    path = _write_env(tmp_path, "PORT=8080\n")
    assert main(["--file", path, "get", "PORT"]) == 0
    assert main(["--file", path, "get", "HOST", "--default", "localhost"]) == 0
    assert capsys.readouterr().out == "8080\nlocalhost\n"


def test_cli_get_missing_key_fails(tmp_path, capsys):
    """
    A missing key without a default exits with code 2 and names the key.
    """
    path = _write_env(tmp_path, "PORT=8080\n")
    assert main(["--file", path, "get", "SECRET_KEY"]) == 2
    assert "SECRET_KEY" in capsys.readouterr().err


def test_cli_check_types(tmp_path, capsys):
    """
    The check command verifies presence and conversion.
    """
    path = _write_env(tmp_path, "PORT=8080\nWORKERS=4\nNAME=api\n")
    assert main(["--file", path, "check", "PORT", "WORKERS", "--type", "int"]) == 0
    assert capsys.readouterr().out == "ok\n"
    assert main(["--file", path, "check", "PORT", "NAME", "--type", "int"]) == 2
    err = capsys.readouterr().err
    assert "NAME" in err
    assert "expected int" in err


def test_cli_missing_file_fails(tmp_path, capsys):
    """
    An explicitly named file must exist.
    """
    assert main(["--file", str(tmp_path / "absent.env"), "show"]) == 2
    assert "Environment file not found" in capsys.readouterr().err


def test_cli_parse_error_fails(tmp_path, capsys):
    """
    Parse errors are reported with their line number.
    """
    path = _write_env(tmp_path, "GOOD=1\n9BAD=2\n")
    assert main(["--file", path, "show"]) == 2
    assert "line 2" in capsys.readouterr().err


def test_cli_invalid_override_fails(tmp_path, capsys):
    """
    Malformed overrides are rejected.
    """
    path = _write_env(tmp_path, "A=1\n")
    assert main(["--file", path, "--set", "NOEQUALS", "show"]) == 2
    assert "key=value" in capsys.readouterr().err
