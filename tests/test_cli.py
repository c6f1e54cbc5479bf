from __future__ import annotations

import json
from pathlib import Path

import pytest

from pipefuse.cli import main, parse_stage
from pipefuse.config import CONFIG_ENV_VAR


def test_cli_demo(capsys) -> None:
    exit_code = main(["--log-level", "ERROR", "demo"])
    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out.strip() == "40 60 80"


def test_cli_run_applies_stages_in_order(capsys) -> None:
    exit_code = main([
        "--log-level",
        "ERROR",
        "run",
        "1",
        "2",
        "3",
        "4",
        "5",
        "--stage",
        "take:2",
        "--stage",
        "filter:odd",
        "--stage",
        "map:add=1,mul=3",
    ])
    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out.strip() == "6"


def test_cli_run_without_stages_echoes_items(capsys) -> None:
    assert main(["--log-level", "ERROR", "run", "3", "1"]) == 0
    assert capsys.readouterr().out.strip() == "3 1"


def test_cli_run_reports_allocation_error(capsys) -> None:
    exit_code = main(["--log-level", "ERROR", "run", "1", "2", "3", "--stage", "filter:gt=0", "--max-elements", "1"])
    assert exit_code == 1
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize(
    "spec",
    ["map", "map:pow=2", "filter:odd=1", "filter:gt", "take:x", "take:-1", "zip:1", "map:div=0"],
)
def test_cli_rejects_malformed_stage(spec: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["run", "1", "--stage", spec])
    assert excinfo.value.code == 2


def test_parse_stage_builds_payloads() -> None:
    kind, transforms = parse_stage("map:add=1,sub=2")
    assert kind == "map"
    assert [func(10) for func in transforms] == [11, 8]
    assert parse_stage("take:4") == ("take", 4)
    kind, predicate = parse_stage("filter:lt=3")
    assert kind == "filter" and predicate(2)


def test_cli_demo_reports_allocation_error_from_config_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"max_elements": 2, "log_level": "ERROR"}))
    exit_code = main(["--config", str(path), "demo"])
    assert exit_code == 1
    assert capsys.readouterr().out == ""


def test_cli_demo_reports_allocation_error_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"max_elements": 0}))
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert main(["--log-level", "ERROR", "demo"]) == 1
    assert capsys.readouterr().out == ""


def test_cli_rejects_unknown_log_level_in_config(tmp_path: Path, capsys) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"log_level": "verbose"}))
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(path), "demo"])
    assert excinfo.value.code == 2
    assert "log_level" in capsys.readouterr().err


@pytest.mark.parametrize("value", ["-1", "many"])
def test_cli_rejects_invalid_max_elements(value: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["run", "--max-elements", value])
    assert excinfo.value.code == 2


def test_cli_run_with_zero_max_elements_and_no_items(capsys) -> None:
    assert main(["--log-level", "ERROR", "run", "--max-elements", "0"]) == 0
    assert capsys.readouterr().out.strip() == ""
