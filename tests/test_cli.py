"""
Tests for the etfi command-line interface.
"""
import json
import logging

import pytest

from etfi import cli
from etfi.cli import ExitCode, main
from etfi.logging_setup import LOGGER_NAME


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ETFI_LOG_LEVEL", "ETFI_LOG_FORMAT", "ETFI_DATA_PATH", "ETFI_DOCS_ENABLED", "ETFI_STRICT_VERSION"):
        monkeypatch.delenv(name, raising=False)
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


class TestLabels:

    def test_plain_output(self, snapshot_file, capsys):
        assert main(["labels", "--data", str(snapshot_file)]) == ExitCode.OK

        assert capsys.readouterr().out.splitlines() == ["Bonus Gold"]

    def test_json_output(self, snapshot_file, capsys):
        assert main(["labels", "--data", str(snapshot_file), "--json"]) == ExitCode.OK

        assert json.loads(capsys.readouterr().out) == ["Bonus Gold"]

    def test_data_path_from_environment(self, snapshot_file, monkeypatch, capsys):
        monkeypatch.setenv("ETFI_DATA_PATH", str(snapshot_file))

        assert main(["labels"]) == ExitCode.OK
        assert "Bonus Gold" in capsys.readouterr().out

    def test_bonus_yields_html(self, snapshot_file, capsys):
        assert main(["bonus-yields", "-d", str(snapshot_file)]) == ExitCode.OK

        out = capsys.readouterr().out
        assert "<span>Bonus Yields</span>" in out
        assert "<span>Bonus Gold</span>" in out


class TestResolve:

    def test_resolve_prints_structure(self, snapshot_file, capsys):
        assert main(["resolve", "--data", str(snapshot_file)]) == ExitCode.OK

        data = json.loads(capsys.readouterr().out)
        assert data["active_rule_count"] == 1
        assert data["entries"][0]["modifier_ids"] == ["MOD_TOWN_GOLD", "MOD_CITY_SCIENCE"]

    def test_modifier(self, snapshot_file, capsys):
        assert main(["modifier", "MOD_TOWN_GOLD", "--data", str(snapshot_file)]) == ExitCode.OK

        data = json.loads(capsys.readouterr().out)
        assert data["description_text"] == "+2 Gold in Towns"

    def test_unknown_modifier(self, snapshot_file, capsys):
        assert main(["modifier", "MOD_NOPE", "--data", str(snapshot_file)]) == ExitCode.NOT_FOUND

        assert "ETFI_MODIFIER_NOT_FOUND" in capsys.readouterr().err

    def test_requirement_set(self, snapshot_file, capsys):
        assert main(["requirement-set", "REQSET_TOWN", "--data", str(snapshot_file)]) == ExitCode.OK

        data = json.loads(capsys.readouterr().out)
        assert data["requirements"][0]["requirement_type"] == "REQUIREMENT_CITY_IS_TOWN"

    def test_unknown_requirement_set(self, snapshot_file):
        assert main(["requirement-set", "REQSET_NOPE", "--data", str(snapshot_file)]) == ExitCode.NOT_FOUND


class TestValidate:

    def test_valid_snapshot(self, snapshot_file, capsys):
        assert main(["validate", "--data", str(snapshot_file)]) == ExitCode.OK

        data = json.loads(capsys.readouterr().out)
        assert data["valid"] is True
        assert data["active_rules"] == 1
        assert data["tables"]["Modifiers"] == 2
        assert data["locale_entries"] == 4

    def test_version_mismatch(self, tmp_path, capsys):
        path = tmp_path / "old.yaml"
        path.write_text("schema_version: '0.9.0'\n", encoding="utf-8")

        assert main(["validate", "--data", str(path)]) == ExitCode.INPUT_INVALID
        assert "ETFI_SNAPSHOT_VERSION_MISMATCH" in capsys.readouterr().err

    def test_lenient_version_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "old.yaml"
        path.write_text("schema_version: '0.9.0'\n", encoding="utf-8")
        monkeypatch.setenv("ETFI_STRICT_VERSION", "false")

        assert main(["validate", "--data", str(path)]) == ExitCode.OK


class TestExitCodes:

    def test_no_snapshot(self, capsys):
        assert main(["labels"]) == ExitCode.INPUT_INVALID
        assert "ETFI_DATA_PATH" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        assert main(["labels", "--data", str(tmp_path / "missing.yaml")]) == ExitCode.INPUT_INVALID

    def test_bad_configuration(self, snapshot_file, monkeypatch, capsys):
        monkeypatch.setenv("ETFI_LOG_FORMAT", "xml")

        assert main(["labels", "--data", str(snapshot_file)]) == ExitCode.CONFIG_ERROR
        assert "Configuration error" in capsys.readouterr().err

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_unexpected_error(self, snapshot_file, monkeypatch, capsys):
        def boom(args):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(cli, "cmd_labels", boom)

        assert main(["labels", "--data", str(snapshot_file)]) == ExitCode.INTERNAL_ERROR
        assert "kaboom" in capsys.readouterr().err


class TestServe:

    def test_runs_app_with_uvicorn(self, snapshot_file, monkeypatch):
        calls = []
        monkeypatch.setattr("uvicorn.run", lambda app, host, port: calls.append((app, host, port)))

        assert main(["serve", "--data", str(snapshot_file), "--port", "9001"]) == ExitCode.OK

        app, host, port = calls[0]
        assert (host, port) == ("127.0.0.1", 9001)
        assert app.state.snapshot.tables.row_counts()["Modifiers"] == 2
