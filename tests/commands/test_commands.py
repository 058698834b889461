"""Tests for the pokedex subcommands driven through the root CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pokedex.cli import cli
from pokedex.commands._context import AppContext
from pokedex.config.settings import PokedexSettings


def _init(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["init"])
    assert result.exit_code == 0, result.output


def _create(runner: CliRunner, *args: str) -> None:
    result = runner.invoke(cli, ["create", *args])
    assert result.exit_code == 0, result.output


@pytest.mark.usefixtures("_isolated_dir")
class TestInitCommand:
    def test_creates_database(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "init"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "init_store"
        assert (tmp_path / "pokedex.db").is_file()

    def test_second_init_warns_on_stderr(self, cli_runner: CliRunner) -> None:
        _init(cli_runner)
        result = cli_runner.invoke(cli, ["init"])
        assert result.exit_code == 0
        assert "WARNING: Store already exists" in result.stderr
        assert "WARNING" not in result.stdout

    def test_memory_backend_unsupported(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--backend", "memory", "init"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "UNSUPPORTED_BACKEND"

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["init", "--examples"])
        assert result.exit_code == 0
        assert "pokedex init" in result.output


@pytest.mark.usefixtures("_isolated_dir")
class TestCreateCommand:
    def test_create(self, cli_runner: CliRunner) -> None:
        _init(cli_runner)
        result = cli_runner.invoke(
            cli, ["--json", "create", "125", "Electabuzz", "-t", "Fire", "--type", "Electric"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "create_pokemon"
        assert data["data"] == {"number": 125, "name": "Electabuzz", "types": ["Fire", "Electric"]}

    def test_human_output(self, cli_runner: CliRunner) -> None:
        _init(cli_runner)
        result = cli_runner.invoke(cli, ["create", "25", "Pikachu", "-t", "Electric"])
        assert result.exit_code == 0
        assert "Pikachu" in result.stdout

    def test_conflict(self, cli_runner: CliRunner) -> None:
        _init(cli_runner)
        _create(cli_runner, "25", "Pikachu", "-t", "Electric")
        result = cli_runner.invoke(cli, ["--json", "create", "25", "Raichu", "-t", "Electric"])
        assert result.exit_code == 1
        assert result.stdout == ""
        error = json.loads(result.stderr)["error"]
        assert error["code"] == "CONFLICT"
        assert error["message"] == "The Pokemon already exists"

    @pytest.mark.parametrize(
        "args",
        [
            ["0", "Missingno", "-t", "Fire"],
            ["25", "", "-t", "Electric"],
            ["25", "Pikachu"],
            ["25", "Pikachu", "-t", "Water"],
        ],
    )
    def test_bad_request(self, cli_runner: CliRunner, args: list[str]) -> None:
        _init(cli_runner)
        result = cli_runner.invoke(cli, ["--json", "create", *args])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "BAD_REQUEST"

    def test_non_integer_number_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["create", "pika", "Pikachu", "-t", "Electric"])
        assert result.exit_code == 2

    def test_missing_store_is_unavailable(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "create", "25", "Pikachu", "-t", "Electric"])
        assert result.exit_code == 1
        # The backend also logs why it could not open the store.
        assert '"code": "UNAVAILABLE"' in result.stderr
        assert '"backend": "sqlite"' in result.stderr
        assert not (tmp_path / "pokedex.db").exists()

    def test_memory_backend(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--backend", "memory", "create", "25", "Pikachu", "-t", "Electric"]
        )
        assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_dir")
class TestQueryCommands:
    def test_get(self, cli_runner: CliRunner) -> None:
        _init(cli_runner)
        _create(cli_runner, "6", "Charizard", "-t", "Fire")
        result = cli_runner.invoke(cli, ["--json", "query", "get", "6"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["name"] == "Charizard"

    def test_get_missing(self, cli_runner: CliRunner) -> None:
        _init(cli_runner)
        result = cli_runner.invoke(cli, ["--json", "query", "get", "6"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "NOT_FOUND"

    def test_get_out_of_range(self, cli_runner: CliRunner) -> None:
        _init(cli_runner)
        result = cli_runner.invoke(cli, ["--json", "query", "get", "899"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "BAD_REQUEST"

    def test_list_sorted(self, cli_runner: CliRunner) -> None:
        _init(cli_runner)
        _create(cli_runner, "25", "Pikachu", "-t", "Electric")
        _create(cli_runner, "6", "Charizard", "-t", "Fire")
        result = cli_runner.invoke(cli, ["--json", "query", "list"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["count"] == 2
        assert [item["number"] for item in data["items"]] == [6, 25]

    def test_list_quiet(self, cli_runner: CliRunner) -> None:
        _init(cli_runner)
        _create(cli_runner, "25", "Pikachu", "-t", "Electric")
        _create(cli_runner, "6", "Charizard", "-t", "Fire")
        result = cli_runner.invoke(cli, ["-q", "query", "list"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["6", "25"]

    def test_list_table(self, cli_runner: CliRunner) -> None:
        _init(cli_runner)
        _create(cli_runner, "25", "Pikachu", "-t", "Electric")
        result = cli_runner.invoke(cli, ["query", "list"])
        assert result.exit_code == 0
        assert "Pikachu" in result.stdout
        assert "1 pokemon" in result.stdout

    def test_group_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["query", "--examples"])
        assert result.exit_code == 0
        assert "pokedex query list" in result.output

    def test_subcommand_examples_skip_argument_checks(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["query", "get", "--examples"])
        assert result.exit_code == 0
        header, blank, *_ = result.stdout.splitlines()
        assert header.startswith("Examples for '")
        assert header.endswith(" query get':")
        assert blank == ""
        assert "  pokedex query get 25" in result.output


@pytest.mark.usefixtures("_isolated_dir")
class TestDeleteCommand:
    def test_delete(self, cli_runner: CliRunner) -> None:
        _init(cli_runner)
        _create(cli_runner, "25", "Pikachu", "-t", "Electric")
        result = cli_runner.invoke(cli, ["--json", "delete", "25"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"] == {"number": 25}

        again = cli_runner.invoke(cli, ["--json", "delete", "25"])
        assert again.exit_code == 1
        assert json.loads(again.stderr)["error"]["code"] == "NOT_FOUND"


@pytest.mark.usefixtures("_isolated_dir")
class TestAppContext:
    def test_unbuildable_repository_exits_after_reporting(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        settings = PokedexSettings.from_cli(root=tmp_path, backend="airtable", json_output=True)
        ctx = AppContext(settings)
        with pytest.raises(SystemExit) as exc_info:
            ctx.repository  # noqa: B018
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert err.count('"code": "UNAVAILABLE"') == 1
        assert '"backend": "airtable"' in err
        assert ctx._repository is None

    def test_repository_built_once(self, tmp_path: Path) -> None:
        settings = PokedexSettings.from_cli(root=tmp_path, backend="memory")
        ctx = AppContext(settings)
        try:
            assert ctx.repository is ctx.repository
        finally:
            ctx.close()
