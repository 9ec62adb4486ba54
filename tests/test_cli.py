"""Tests for the command line interface and batch workflow."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from lotka_lab import Config, run_simulation
from lotka_lab.cli import app
from lotka_lab.simulation import SimulationSession
from lotka_lab.workflow import run_from_config_file

CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs"

runner = CliRunner()


def test_run_predator_prey():
    result = runner.invoke(app, ["run", "--model", "predator_prey", "--steps", "50", "--no-progress"])
    assert result.exit_code == 0, result.output
    assert "H drift" in result.output
    assert "Prey" in result.output


def test_run_with_config_and_overrides():
    result = runner.invoke(
        app,
        ["run", str(CONFIG_DIR / "competition.yaml"), "-n", "100", "--set", "r1=1.2", "--no-progress"],
    )
    assert result.exit_code == 0, result.output
    assert "Coexistence" in result.output
    assert "H drift" not in result.output


def test_run_rejects_unknown_parameter():
    result = runner.invoke(app, ["run", "--set", "bogus=1", "--no-progress"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_run_rejects_unknown_model():
    result = runner.invoke(app, ["run", "--model", "mutualism", "--no-progress"])
    assert result.exit_code == 1


def test_presets():
    result = runner.invoke(app, ["presets"])
    assert result.exit_code == 0, result.output
    assert "Preset scenarios" in result.output


def test_presets_rejects_unknown_model():
    result = runner.invoke(app, ["presets", "--model", "mutualism"])
    assert result.exit_code == 1


def test_analyze_competition():
    result = runner.invoke(app, ["analyze", str(CONFIG_DIR / "competition.yaml")])
    assert result.exit_code == 0, result.output
    assert "Predicted outcome: Coexistence" in result.output
    assert "Equilibrium" in result.output


def test_analyze_reports_advisories():
    result = runner.invoke(app, ["analyze", "--model", "predator_prey", "--set", "a=2.0"])
    assert result.exit_code == 0, result.output
    assert "error" in result.output


def test_watch_runs_for_duration():
    result = runner.invoke(app, ["watch", "--model", "predator_prey", "--duration", "0.3"])
    assert result.exit_code == 0, result.output


def test_missing_config_file(tmp_path):
    result = runner.invoke(app, ["run", str(tmp_path / "missing.yaml"), "--no-progress"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_run_simulation_leaves_session_paused():
    snapshot = run_simulation(Config(model="predator_prey"), 100, verbose=False)
    assert snapshot.step_count == 100
    assert not snapshot.running
    assert snapshot.conserved_quantity.is_conserved


def test_run_simulation_continues_existing_session():
    session = SimulationSession()
    run_simulation(Config(), 10, verbose=False, session=session)
    snapshot = run_simulation(Config(), 15, verbose=False, session=session)
    assert snapshot.step_count == 25


def test_run_simulation_rejects_negative_steps():
    with pytest.raises(ValueError):
        run_simulation(Config(), -1, verbose=False)


def test_run_from_config_file():
    snapshot = run_from_config_file(
        CONFIG_DIR / "predator_prey.yaml", 20, overrides=["a=0.12"], verbose=False
    )
    assert snapshot.parameters.a == 0.12
    assert snapshot.step_count == 20
