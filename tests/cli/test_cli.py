"""Tests for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from firebase_tools_cli import __version__
from firebase_tools_cli.cli.main import cli
from firebase_tools_cli.config import CliConfig


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def patched_connection(connection: Any) -> Any:
    with patch(
        "firebase_tools_cli.cli.context.FirebaseConnection", return_value=connection
    ) as factory:
        yield factory


class TestCLI:
    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("firestore:query", "rtdb:query", "remote-config:convert"):
            assert name in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestRtdbCommands:
    def test_query_json(self, runner: CliRunner, patched_connection: Any, connection: Any) -> None:
        result = runner.invoke(
            cli,
            [
                "rtdb:query",
                "users",
                "--where",
                "age,>=,18",
                "--order-by",
                "age,desc",
                "--json",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert list(data["results"]) == ["u1", "u3"]
        assert data["summary"] == {"totalResults": 2, "isPrimitive": False}
        assert data["path"] == "/users"
        assert data["query"] == {"where": "age,>=,18", "orderBy": "age,desc", "limit": None}
        assert connection.closed is True

    def test_query_human_output(self, runner: CliRunner, patched_connection: Any) -> None:
        result = runner.invoke(cli, ["rtdb:query", "users", "-w", "age,>,20"])
        assert result.exit_code == 0, result.output
        assert "u1" in result.output
        assert "u2" not in result.output
        assert "Query Summary" in result.output

    def test_database_url_flag_is_validated(
        self, runner: CliRunner, patched_connection: Any
    ) -> None:
        result = runner.invoke(
            cli, ["rtdb:query", "users", "--database-url", "https://x.example.com"]
        )
        assert result.exit_code == 1
        assert "Invalid Realtime Database URL" in result.output

    def test_database_url_reaches_connection(
        self, runner: CliRunner, patched_connection: Any
    ) -> None:
        url = "https://demo-default-rtdb.firebaseio.com/"
        result = runner.invoke(cli, ["rtdb:query", "motd", "--database-url", url])
        assert result.exit_code == 0, result.output
        kwargs = patched_connection.call_args.kwargs
        assert kwargs["database_url"] == url.rstrip("/")

    def test_malformed_where_exits_with_error(
        self, runner: CliRunner, patched_connection: Any
    ) -> None:
        result = runner.invoke(cli, ["rtdb:query", "users", "--where", "age>=18"])
        assert result.exit_code == 1
        assert "Invalid query" in result.output
        patched_connection.assert_not_called()

    def test_invalid_limit(self, runner: CliRunner, patched_connection: Any) -> None:
        result = runner.invoke(cli, ["rtdb:query", "users", "--limit", "0"])
        assert result.exit_code == 1
        assert "positive" in result.output

    def test_non_ascii_digit_limit(self, runner: CliRunner, patched_connection: Any) -> None:
        result = runner.invoke(cli, ["rtdb:query", "users", "--limit", "③"])
        assert result.exit_code == 1
        assert "Invalid query" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_missing_path_reported_once(
        self, runner: CliRunner, patched_connection: Any
    ) -> None:
        result = runner.invoke(cli, ["rtdb:query", "/nothing/here"])
        assert result.exit_code == 0, result.output
        assert result.output.count("No data found") == 1
        assert "/nothing/here" in result.output

    def test_output_file(
        self, runner: CliRunner, patched_connection: Any, tmp_path: Path
    ) -> None:
        target = tmp_path / "users"
        result = runner.invoke(cli, ["rtdb:query", "users", "--output", str(target)])
        assert result.exit_code == 0, result.output
        written = json.loads((tmp_path / "users.json").read_text(encoding="utf-8"))
        assert written["summary"]["totalResults"] == 3
        assert "File size" in result.output

    def test_list_json(self, runner: CliRunner, patched_connection: Any) -> None:
        result = runner.invoke(cli, ["rtdb:list", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["summary"]["totalTopLevelNodes"] == 3
        assert [n["name"] for n in data["nodes"]] == ["users", "settings", "motd"]


class TestGlobalOptions:
    def test_flags_and_config_precedence(
        self, runner: CliRunner, patched_connection: Any
    ) -> None:
        CliConfig(default_project="from-config", service_account_path="cfg.json").save()
        result = runner.invoke(
            cli, ["--project", "from-flag", "rtdb:query", "motd", "--json"]
        )
        assert result.exit_code == 0, result.output
        kwargs = patched_connection.call_args.kwargs
        assert kwargs["project_id"] == "from-flag"
        assert kwargs["service_account_path"] == "cfg.json"

    def test_environment_variable(
        self, runner: CliRunner, patched_connection: Any
    ) -> None:
        result = runner.invoke(
            cli, ["rtdb:query", "motd", "--json"], env={"FIREBASE_PROJECT": "from-env"}
        )
        assert result.exit_code == 0, result.output
        assert patched_connection.call_args.kwargs["project_id"] == "from-env"


class TestRemoteConfigCommand:
    def test_convert(self, runner: CliRunner, tmp_path: Path) -> None:
        source = tmp_path / "defaults.json"
        source.write_text(json.dumps({"enabled": True, "title": "Hi"}), encoding="utf-8")
        target = tmp_path / "template"
        result = runner.invoke(
            cli,
            ["remote-config:convert", str(source), "-o", str(target), "--add-conditions"],
        )
        assert result.exit_code == 0, result.output
        template = json.loads((tmp_path / "template.json").read_text(encoding="utf-8"))
        assert template["parameters"]["enabled"]["valueType"] == "BOOLEAN"
        assert len(template["conditions"]) == 2

    def test_invalid_json(self, runner: CliRunner, tmp_path: Path) -> None:
        source = tmp_path / "bad.json"
        source.write_text("{", encoding="utf-8")
        result = runner.invoke(cli, ["remote-config:convert", str(source)])
        assert result.exit_code == 1
        assert "Invalid JSON file" in result.output


class TestConfigCommands:
    def test_set_then_show(self, runner: CliRunner, isolated_config_home: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "config:set",
                "--project",
                "demo",
                "--database-url",
                "https://demo.firebaseio.com/",
            ],
        )
        assert result.exit_code == 0, result.output
        saved = json.loads((isolated_config_home / "config.json").read_text(encoding="utf-8"))
        assert saved["default_project"] == "demo"
        assert saved["database_url"] == "https://demo.firebaseio.com"

        result = runner.invoke(cli, ["config:show"])
        assert result.exit_code == 0
        assert "demo" in result.output

    def test_set_requires_a_value(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["config:set"])
        assert result.exit_code == 2
