"""Configuration management for lotka-lab."""

from .core import Config, load_config, save_config
from .schemas import (
    ModelKind,
    CompetitionParameters,
    PredatorPreyParameters,
    ParameterSet,
    IntegrationConfig,
    RealismThresholds,
    default_parameters,
    parameters_from_dict,
)

__all__ = [
    "Config",
    "load_config",
    "save_config",
    "ModelKind",
    "CompetitionParameters",
    "PredatorPreyParameters",
    "ParameterSet",
    "IntegrationConfig",
    "RealismThresholds",
    "default_parameters",
    "parameters_from_dict",
]
