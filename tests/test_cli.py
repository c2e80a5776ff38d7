"""Tests for the click command line."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from build_order import cli as cli_module
from build_order.cli import cli
from build_order.errors import AnalysisError

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_scan_lists_projects(runner):
    result = runner.invoke(cli, ["scan", str(FIXTURES / "solution")])
    assert result.exit_code == 0
    assert "Found 3 project(s)" in result.output
    assert "visualbasic (1)" in result.output
    assert "-> ..\\Core\\Core.csproj" in result.output


def test_plan_text(runner):
    result = runner.invoke(cli, ["plan", str(FIXTURES / "solution")])
    assert result.exit_code == 0
    assert "Build Levels: 3" in result.output
    assert "Circular Dependencies: None" in result.output


def test_plan_json_to_file(runner, tmp_path):
    target = tmp_path / "reports" / "plan.json"
    result = runner.invoke(cli, [
        "plan", str(FIXTURES / "solution"),
        "--format", "json", "--output", str(target), "--include-packages",
    ])
    assert result.exit_code == 0

    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["summary"]["projectsFound"] == 3
    assert data["summary"]["buildLevels"] == 3
    names = [level["projects"][0]["projectName"] for level in data["levels"]]
    assert names == ["Utils", "Core", "App"]
    assert data["levels"][2]["projects"][0]["packages"] == [
        {"name": "Newtonsoft.Json", "version": "13.0.1"},
    ]


def test_plan_with_cycles_exits_one(runner):
    result = runner.invoke(cli, ["plan", str(FIXTURES / "cyclic"), "--detect-cycles-only"])
    assert result.exit_code == 1
    assert "CIRCULAR DEPENDENCIES DETECTED:" in result.output
    assert "Build Order:" not in result.output


def test_plan_empty_directory_exits_one(runner, tmp_path):
    result = runner.invoke(cli, ["plan", str(tmp_path)])
    assert result.exit_code == 1
    assert "Projects Found: 0" in result.output


def test_plan_missing_directory(runner, tmp_path):
    result = runner.invoke(cli, ["plan", str(tmp_path / "missing")])
    assert result.exit_code == 2


def test_plan_analysis_error_exits_two(runner, tmp_path, monkeypatch):
    def boom(config, progress=None):
        raise AnalysisError("graph exploded")

    monkeypatch.setattr(cli_module, "run_analysis", boom)
    result = runner.invoke(cli, ["plan", str(tmp_path)])
    assert result.exit_code == 2
    assert "graph exploded" in result.output


def test_plan_invalid_format_env_exits_two(runner, monkeypatch):
    monkeypatch.setenv("BUILD_ORDER_FORMAT", "xml")
    result = runner.invoke(cli, ["plan", str(FIXTURES / "solution")])
    assert result.exit_code == 2
    assert "BUILD_ORDER_FORMAT" in result.output
    assert "xml" in result.output


def test_plan_format_flag_overrides_invalid_env(runner, monkeypatch):
    monkeypatch.setenv("BUILD_ORDER_FORMAT", "xml")
    result = runner.invoke(cli, ["plan", str(FIXTURES / "solution"), "--format", "text"])
    assert result.exit_code == 0
    assert "Build Levels: 3" in result.output


def test_plan_unwritable_output_exits_two(runner, tmp_path):
    blocker = tmp_path / "report"
    blocker.write_text("not a directory", encoding="utf-8")
    result = runner.invoke(cli, [
        "plan", str(FIXTURES / "solution"), "--output", str(blocker / "out.txt"),
    ])
    assert result.exit_code == 2
    assert "Error:" in result.output
    assert blocker.read_text(encoding="utf-8") == "not a directory"
