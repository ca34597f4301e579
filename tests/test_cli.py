import datetime
import sys
import types

import pytest
from click.testing import CliRunner

from tersify.cli.interface import main_cli_group


@pytest.fixture
def inspected_module(monkeypatch):
    module = types.ModuleType("fake_inspected_module")
    module.DATA = {"day": datetime.date(2018, 8, 12), "count": 3}
    monkeypatch.setitem(sys.modules, "fake_inspected_module", module)
    return module


@pytest.fixture
def no_entry_points(monkeypatch):
    monkeypatch.setattr("tersify.plugins.discovery.entry_points", lambda group: [])


def test_plugins_lists_builtin_types(no_entry_points):
    runner = CliRunner()
    result = runner.invoke(main_cli_group, ["plugins"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "datetime.datetime" in result.output
    assert "uuid.UUID" in result.output


def test_plugins_with_everything_disabled():
    runner = CliRunner()
    result = runner.invoke(main_cli_group, ["--no-builtins", "--no-entry-points", "plugins"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "No plugins registered." in result.output


def test_show_tersifies_nested_objects(inspected_module, no_entry_points):
    runner = CliRunner()
    result = runner.invoke(main_cli_group, ["show", "fake_inspected_module:DATA"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "Summary(" in result.output
    assert "2018-08-12" in result.output
    assert "'count': 3" in result.output


def test_show_raw_skips_tersification(inspected_module, no_entry_points):
    runner = CliRunner()
    result = runner.invoke(main_cli_group, ["show", "--raw", "fake_inspected_module:DATA"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "datetime.date(2018, 8, 12)" in result.output
    assert "Summary(" not in result.output


def test_show_rejects_malformed_target():
    runner = CliRunner()
    result = runner.invoke(main_cli_group, ["--no-entry-points", "show", "no_colon_here"])

    assert result.exit_code == 2
    assert "module:attribute" in result.output


def test_show_rejects_missing_target():
    runner = CliRunner()
    result = runner.invoke(main_cli_group, ["--no-entry-points", "show", "definitely_not_a_module_xyz:DATA"])

    assert result.exit_code == 2
    assert "could not import" in result.output


def test_invalid_config_exits_with_error(tmp_path):
    (tmp_path / ".tersify.toml").write_text('builtin_plugins = "yes"\n')
    runner = CliRunner()
    result = runner.invoke(main_cli_group, ["plugins"])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_broken_configured_plugin_exits_with_error(tmp_path):
    (tmp_path / ".tersify.toml").write_text('plugins = ["definitely_not_a_module_xyz:Plugin"]\nentry_points = false\n')
    runner = CliRunner()
    result = runner.invoke(main_cli_group, ["plugins"])

    assert result.exit_code == 1
    assert "could not load plugin" in result.output


def test_json_logs_are_written_for_verbose_runs():
    runner = CliRunner()
    result = runner.invoke(main_cli_group, ["-vv", "--json-logs", "--no-builtins", "--no-entry-points", "plugins"], catch_exceptions=False)

    assert result.exit_code == 0
    assert '"event": "plugin_registry_initialized"' in result.output


def test_malformed_pyproject_section_exits_with_error(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[tool]\ntersify = "oops"\n')
    runner = CliRunner()
    result = runner.invoke(main_cli_group, ["plugins"])

    assert result.exit_code == 1
    assert "must be a table" in result.output
