"""Tests for configuration loading, overrides and parameter records."""

from pathlib import Path

import numpy as np
import pytest

from lotka_lab.config import (
    CompetitionParameters,
    Config,
    IntegrationConfig,
    ModelKind,
    PredatorPreyParameters,
    default_parameters,
    load_config,
    parameters_from_dict,
    save_config,
)
from lotka_lab.errors import InvalidParameter

CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs"


def test_load_competition_config():
    config = load_config(CONFIG_DIR / "competition.yaml")

    assert config.model == ModelKind.COMPETITION
    params = config.build_parameters()
    assert isinstance(params, CompetitionParameters)
    assert (params.K1, params.K2, params.a12, params.a21) == (120.0, 100.0, 0.4, 0.5)
    assert config.integration.dt == 0.05
    assert config.integration.extinction_floor == 1e-10
    assert config.integration.history_limit == 2000


def test_load_predator_prey_config():
    config = load_config(CONFIG_DIR / "predator_prey.yaml")

    assert config.model == ModelKind.PREDATOR_PREY
    assert config.build_parameters() == PredatorPreyParameters()
    assert config.realism.attack_rate_warning == 0.1
    # sections left out of the file keep their defaults
    assert config.integration.decimation == 5


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_save_and_load_round_trip(tmp_path):
    config = Config(
        model="predator_prey",
        parameters={"a": 0.12, "N1_0": 30.0},
        integration=IntegrationConfig(dt=0.01, history_limit=500),
    )
    path = tmp_path / "nested" / "session.yaml"
    save_config(config, path)
    loaded = load_config(path)

    assert loaded.to_dict() == config.to_dict()
    assert loaded.build_parameters() == PredatorPreyParameters(a=0.12, N1_0=30.0)


def test_empty_config_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    config = load_config(path)

    assert config.model == ModelKind.COMPETITION
    assert config.build_parameters() == CompetitionParameters()


def test_unknown_parameter_fails_at_load():
    with pytest.raises(InvalidParameter) as excinfo:
        Config.from_dict({"model": "competition", "parameters": {"a": 0.1}})
    assert excinfo.value.name == "a"


def test_unknown_model_fails_at_load():
    with pytest.raises(ValueError, match="Unknown model type"):
        Config.from_dict({"model": "mutualism"})


def test_extra_keys_are_kept():
    config = Config.from_dict({"name": "demo", "model": "predator_prey"})
    assert config.name == "demo"
    assert config.to_dict()["name"] == "demo"


def test_with_overrides():
    config = load_config(CONFIG_DIR / "competition.yaml")
    updated = config.with_overrides(["r1=1.5", "parameters.K2=90", "integration.dt=0.1"])

    params = updated.build_parameters()
    assert params.r1 == 1.5
    assert params.K2 == 90.0
    assert updated.integration.dt == 0.1
    # overrides return a new config
    assert config.build_parameters().r1 == 1.0
    assert config.integration.dt == 0.05


def test_with_overrides_rejects_unknown_parameter():
    with pytest.raises(InvalidParameter):
        Config(model="predator_prey").with_overrides(["K1=10"])


def test_model_kind_parse():
    assert ModelKind.parse("competition") == ModelKind.COMPETITION
    assert ModelKind.parse("Predator-Prey") == ModelKind.PREDATOR_PREY
    assert ModelKind.parse("predatorprey") == ModelKind.PREDATOR_PREY
    assert ModelKind.parse(ModelKind.PREDATOR_PREY) is ModelKind.PREDATOR_PREY
    with pytest.raises(ValueError):
        ModelKind.parse("mutualism")


def test_parameter_records():
    params = CompetitionParameters(r1=2, K1=150)
    assert params.r1 == 2.0 and isinstance(params.r1, float)
    assert params.initial_state() == (50.0, 40.0)
    assert params.kind == ModelKind.COMPETITION
    assert set(params.to_dict()) == {"r1", "r2", "K1", "K2", "a12", "a21", "N1_0", "N2_0"}

    assert PredatorPreyParameters.field_names() == ("r1", "r2", "a", "b", "N1_0", "N2_0")
    assert default_parameters("predator_prey") == PredatorPreyParameters()
    assert parameters_from_dict("competition", {"a12": 0.9}).a12 == 0.9

    from_numpy = PredatorPreyParameters(r1=np.float32(0.5), N1_0=np.int64(12))
    assert (from_numpy.r1, from_numpy.N1_0) == (0.5, 12.0)
    assert isinstance(from_numpy.N1_0, float)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), np.float64("nan"), None, "1.0", False])
def test_parameter_records_reject_invalid_values(value):
    with pytest.raises(InvalidParameter) as excinfo:
        PredatorPreyParameters(b=value)
    assert excinfo.value.name == "b"


def test_with_updates_returns_new_record():
    params = PredatorPreyParameters()
    updated = params.with_updates(a=0.2)
    assert updated.a == 0.2
    assert params.a == 0.1
    with pytest.raises(InvalidParameter):
        params.with_updates(K1=100.0)
