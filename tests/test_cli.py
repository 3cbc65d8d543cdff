"""Tests for CLI run/batch/sweep/landscapes flow."""

from __future__ import annotations

import json

from cli.main import run_cli


def test_cli_run_with_flags(capsys) -> None:
    code = run_cli(
        [
            "run",
            "--landscape",
            "Convex Bowl",
            "--algorithm",
            "genetic",
            "--population-size",
            "8",
            "--max-iterations",
            "6",
            "--seed",
            "3",
            "--snapshot",
        ]
    )

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["summary"]["iterations"] == 6
    assert payload["experiment"]["algorithm"] == "GENETIC"
    assert len(payload["snapshot"]["agents"]) == 8
    assert len(payload["snapshot"]["history"]) == 7


def test_cli_run_switches_disallowed_algorithm(capsys) -> None:
    code = run_cli(["run", "--landscape", "Cognitive Sandbox", "--algorithm", "GREEDY", "--max-iterations", "3"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["experiment"]["algorithm"] == "SIMULATED_ANNEALING"


def test_cli_run_from_config(tmp_path, capsys) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"landscape": "Ackley Function", "algo": "SIMULATED_ANNEALING", "maxIterations": 4, "seed": 1}),
        encoding="utf-8",
    )

    assert run_cli(["run", "--config", str(config_path)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["summary"]["landscape"] == "Ackley Function"


def test_cli_batch(tmp_path, capsys) -> None:
    config_path = tmp_path / "batch.yaml"
    config_path.write_text(
        "\n".join(
            [
                "- landscape: Convex Bowl",
                "  max_iterations: 3",
                "  seed: 1",
                "- landscape: Rastrigin Function",
                "  algorithm: GREEDY",
                "  max_iterations: 3",
                "  seed: 2",
            ]
        ),
        encoding="utf-8",
    )

    assert run_cli(["batch", "--config", str(config_path)]) == 0
    results = json.loads(capsys.readouterr().out)
    assert [result["status"] for result in results] == ["completed", "completed"]


def test_cli_landscapes(capsys) -> None:
    assert run_cli(["landscapes"]) == 0
    rows = json.loads(capsys.readouterr().out)
    sandbox = next(row for row in rows if row["name"] == "Cognitive Sandbox")
    assert sandbox["algorithms"] == ["SIMULATED_ANNEALING", "GENETIC"]


def test_cli_rejects_invalid_configuration(capsys) -> None:
    assert run_cli(["run", "--step-size", "-1"]) == 2
    assert run_cli(["run", "--landscape", "Flatland"]) == 2
    capsys.readouterr()
