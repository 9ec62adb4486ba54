"""Configuration schemas for lotka-lab."""

import math
import numbers
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Tuple, Union

from ..errors import InvalidParameter

DEFAULT_DT = 0.05
TICK_INTERVAL = 0.05
EXTINCTION_FLOOR = 1e-10
CONSERVATION_TOLERANCE = 0.01
HISTORY_LIMIT = 2000
DECIMATION = 5


class ModelKind(str, Enum):
    """Which pair of Lotka-Volterra equations a session integrates."""

    COMPETITION = "competition"
    PREDATOR_PREY = "predator_prey"

    @classmethod
    def parse(cls, value: Union[str, "ModelKind"]) -> "ModelKind":
        """Accept enum members as well as the spellings used in config files."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        if key == "predatorprey":
            key = "predator_prey"
        for kind in cls:
            if kind.value == key:
                return kind
        raise ValueError(
            f"Unknown model type: {value}. "
            f"Available types: {[kind.value for kind in cls]}"
        )


def _check_finite(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameter(name, value, "must be a real number")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameter(name, value)
    return value


class _ParameterSetMixin:
    """Shared behaviour of the per-model parameter records."""

    kind: ModelKind

    def __post_init__(self):
        # frozen dataclass: coerce ints to floats through object.__setattr__
        for f in fields(self):
            object.__setattr__(self, f.name, _check_finite(f.name, getattr(self, f.name)))

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def with_updates(self, **changes: float):
        """Return a validated copy with the given fields replaced."""
        unknown = [name for name in changes if name not in self.field_names()]
        if unknown:
            raise InvalidParameter(
                unknown[0],
                changes[unknown[0]],
                f"not a {self.kind.value} parameter; expected one of {list(self.field_names())}",
            )
        return replace(self, **changes)

    def initial_state(self) -> Tuple[float, float]:
        return self.N1_0, self.N2_0

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {name: getattr(self, name) for name in self.field_names()}


@dataclass(frozen=True)
class CompetitionParameters(_ParameterSetMixin):
    """Parameters of the logistic Lotka-Volterra competition model."""

    r1: float = 1.0
    """Intrinsic growth rate of species 1"""

    r2: float = 0.8
    """Intrinsic growth rate of species 2"""

    K1: float = 200.0
    """Carrying capacity of species 1"""

    K2: float = 180.0
    """Carrying capacity of species 2"""

    a12: float = 0.5
    """Effect of species 2 on species 1"""

    a21: float = 0.6
    """Effect of species 1 on species 2"""

    N1_0: float = 50.0
    """Initial population of species 1"""

    N2_0: float = 40.0
    """Initial population of species 2"""

    kind = ModelKind.COMPETITION


@dataclass(frozen=True)
class PredatorPreyParameters(_ParameterSetMixin):
    """Parameters of the classic Lotka-Volterra predator-prey model."""

    r1: float = 1.0
    """Prey growth rate"""

    r2: float = 1.0
    """Predator death rate"""

    a: float = 0.1
    """Attack rate of predators on prey"""

    b: float = 0.075
    """Conversion efficiency of eaten prey into predators"""

    N1_0: float = 40.0
    """Initial prey population"""

    N2_0: float = 9.0
    """Initial predator population"""

    kind = ModelKind.PREDATOR_PREY


ParameterSet = Union[CompetitionParameters, PredatorPreyParameters]

PARAMETER_CLASSES = {
    ModelKind.COMPETITION: CompetitionParameters,
    ModelKind.PREDATOR_PREY: PredatorPreyParameters,
}


def default_parameters(kind: Union[str, ModelKind]) -> ParameterSet:
    """Canonical parameter set for a model kind."""
    return PARAMETER_CLASSES[ModelKind.parse(kind)]()


def parameters_from_dict(kind: Union[str, ModelKind], values: Mapping[str, Any]) -> ParameterSet:
    """Build a parameter set, filling missing fields from the canonical defaults."""
    return default_parameters(kind).with_updates(**dict(values))


@dataclass
class IntegrationConfig:
    """Numerical constants of the stepping loop."""

    solver: str = "rk4"
    """Integrator name ('rk4', 'euler')"""

    dt: float = DEFAULT_DT
    """Fixed integration step in model time units"""

    tick_interval: float = TICK_INTERVAL
    """Wall-clock seconds between scheduler ticks"""

    extinction_floor: float = EXTINCTION_FLOOR
    """Lower bound applied to both populations after every step"""

    conservation_tolerance: float = CONSERVATION_TOLERANCE
    """Relative drift of H below which it counts as conserved"""

    history_limit: int = HISTORY_LIMIT
    """Number of points kept at full resolution"""

    decimation: int = DECIMATION
    """Keep every n-th point once the history limit is exceeded"""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "solver": self.solver,
            "dt": self.dt,
            "tick_interval": self.tick_interval,
            "extinction_floor": self.extinction_floor,
            "conservation_tolerance": self.conservation_tolerance,
            "history_limit": self.history_limit,
            "decimation": self.decimation,
        }


@dataclass
class RealismThresholds:
    """Biological plausibility limits used for advisory warnings."""

    growth_rate_warning: float = 2.0
    growth_rate_error: float = 10.0

    attack_rate_warning: float = 0.1
    attack_rate_error: float = 1.0

    conversion_warning: float = 0.2
    conversion_error: float = 0.5

    carrying_capacity_warning: float = 10.0
    """Carrying capacities below this trigger a warning"""

    competition_warning: float = 2.0

    fractional_population: float = 1.0
    """Populations below one individual raise the atto-fox flag"""

    near_extinction: float = 1e-6

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

