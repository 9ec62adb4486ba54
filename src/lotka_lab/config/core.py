"""Core configuration management."""

from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union
import yaml
from omegaconf import DictConfig, OmegaConf

from .schemas import (
    IntegrationConfig,
    ModelKind,
    ParameterSet,
    RealismThresholds,
    parameters_from_dict,
)

_SECTIONS = {"model", "parameters", "integration", "realism"}


class Config:
    """Main configuration container for a lotka-lab session."""

    def __init__(
        self,
        model: Union[str, ModelKind] = ModelKind.COMPETITION,
        parameters: Optional[Dict[str, float]] = None,
        integration: Optional[IntegrationConfig] = None,
        realism: Optional[RealismThresholds] = None,
        **kwargs,
    ):
        self.model = ModelKind.parse(model)
        self.parameters = dict(parameters or {})
        self.integration = integration or IntegrationConfig()
        self.realism = realism or RealismThresholds()

        # Store any additional configuration
        for key, value in kwargs.items():
            setattr(self, key, value)

    def build_parameters(self) -> ParameterSet:
        """Parameter set for ``self.model``; unspecified fields take canonical defaults."""
        return parameters_from_dict(self.model, self.parameters)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        config_dict = dict(config_dict or {})

        integration = IntegrationConfig(**(config_dict.get("integration") or {}))
        realism = RealismThresholds(**(config_dict.get("realism") or {}))

        other_keys = {k: v for k, v in config_dict.items() if k not in _SECTIONS}

        config = cls(
            model=config_dict.get("model", ModelKind.COMPETITION),
            parameters=config_dict.get("parameters") or {},
            integration=integration,
            realism=realism,
            **other_keys,
        )
        # fail on unknown or non-finite parameters at load time
        config.build_parameters()
        return config

    @classmethod
    def from_hydra_config(cls, hydra_config: DictConfig) -> "Config":
        """Create Config from Hydra DictConfig."""
        return cls.from_dict(OmegaConf.to_container(hydra_config, resolve=True))

    def with_overrides(self, overrides: Iterable[str]) -> "Config":
        """Apply ``key=value`` dotlist overrides, e.g. ``parameters.r1=1.5``.

        Bare parameter names (``r1=1.5``) are treated as ``parameters.r1``.
        """
        dotlist = []
        for item in overrides:
            key = item.split("=", 1)[0]
            if "." not in key and key not in _SECTIONS:
                item = f"parameters.{item}"
            dotlist.append(item)

        merged = OmegaConf.merge(
            OmegaConf.create(self.to_dict()), OmegaConf.from_dotlist(dotlist)
        )
        return Config.from_hydra_config(merged)

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to dictionary."""
        result = {
            "model": self.model.value,
            "parameters": dict(self.parameters),
            "integration": self.integration.to_dict(),
            "realism": self.realism.to_dict(),
        }

        # Add other attributes
        for key, value in self.__dict__.items():
            if key not in _SECTIONS:
                if isinstance(value, Path):
                    result[key] = str(value)
                else:
                    result[key] = value

        return result


def load_config(config_path: Union[str, Path]) -> Config:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        config_dict = yaml.safe_load(f)

    return Config.from_dict(config_dict or {})


def save_config(config: Config, save_path: Union[str, Path]) -> None:
    """Save configuration to YAML file."""
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    with open(save_path, "w") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2)
