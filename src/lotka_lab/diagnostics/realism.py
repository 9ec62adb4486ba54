"""Biological realism checks for parameters and populations.

None of these checks stop a simulation. They produce advisories that the
presentation layer shows next to the charts, summarised as a status badge.
The badge reads "unrealistic" as soon as an error-class advisory or a
near-extinction state is present, "borderline" for warnings only, and
"realistic" otherwise.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config.schemas import (
    CompetitionParameters,
    ModelKind,
    ParameterSet,
    PredatorPreyParameters,
    RealismThresholds,
)

WARNING = "warning"
ERROR = "error"


@dataclass(frozen=True)
class Advisory:
    """A single plausibility finding about one parameter."""

    severity: str
    parameter: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary."""
        return {"severity": self.severity, "parameter": self.parameter, "message": self.message}


@dataclass(frozen=True)
class RealismWarnings:
    """Population flags and parameter advisories for the current session state."""

    near_extinction: bool = False
    atto_fox_problem: bool = False
    advisories: Tuple[Advisory, ...] = field(default_factory=tuple)

    @property
    def unrealistic_parameter_messages(self) -> List[str]:
        return [advisory.message for advisory in self.advisories]

    @property
    def has_errors(self) -> bool:
        return self.near_extinction or any(a.severity == ERROR for a in self.advisories)

    @property
    def has_warnings(self) -> bool:
        return self.atto_fox_problem or any(a.severity == WARNING for a in self.advisories)

    @property
    def status(self) -> str:
        if self.has_errors:
            return "unrealistic"
        if self.has_warnings:
            return "borderline"
        return "realistic"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "near_extinction": self.near_extinction,
            "atto_fox_problem": self.atto_fox_problem,
            "unrealistic_parameter_messages": self.unrealistic_parameter_messages,
            "advisories": [a.to_dict() for a in self.advisories],
            "status": self.status,
        }


def _graded(
    name: str, value: float, warn_above: float, error_above: float, warning: str, error: str
) -> List[Advisory]:
    if value > error_above:
        return [Advisory(ERROR, name, error)]
    if value > warn_above:
        return [Advisory(WARNING, name, warning)]
    return []


def _predator_prey_advisories(p: PredatorPreyParameters, t: RealismThresholds) -> List[Advisory]:
    advisories = []
    advisories += _graded(
        "r1", p.r1, t.growth_rate_warning, t.growth_rate_error,
        f"High prey growth rate ({p.r1:.2f}) - most organisms have r < {t.growth_rate_warning:g}",
        f"Extremely unrealistic prey growth rate ({p.r1:.2f})",
    )
    advisories += _graded(
        "r2", p.r2, t.growth_rate_warning, t.growth_rate_error,
        f"High predator death rate ({p.r2:.2f})",
        f"Extremely unrealistic predator death rate ({p.r2:.2f})",
    )
    advisories += _graded(
        "a", p.a, t.attack_rate_warning, t.attack_rate_error,
        f"Very high predation rate ({p.a:.3f}) - may be unrealistic",
        f"Impossible predation efficiency ({p.a:.3f})",
    )
    advisories += _graded(
        "b", p.b, t.conversion_warning, t.conversion_error,
        f"Very high predator efficiency ({p.b:.3f})",
        f"Impossible predator conversion efficiency ({p.b:.3f})",
    )
    return advisories


def _competition_advisories(p: CompetitionParameters, t: RealismThresholds) -> List[Advisory]:
    advisories = []
    for name in ("r1", "r2"):
        advisories += _graded(
            name, getattr(p, name), t.growth_rate_warning, t.growth_rate_error,
            f"High growth rate {name}={getattr(p, name):.2f} - most organisms have r < {t.growth_rate_warning:g}",
            f"Extremely unrealistic growth rate {name}={getattr(p, name):.2f}",
        )
    for name in ("K1", "K2"):
        if getattr(p, name) < t.carrying_capacity_warning:
            advisories.append(Advisory(
                WARNING, name,
                f"Very low carrying capacity {name}={getattr(p, name):g} may lead to unrealistic dynamics",
            ))
    for name in ("a12", "a21"):
        if getattr(p, name) > t.competition_warning:
            advisories.append(Advisory(
                WARNING, name,
                f"Very strong competition {name}={getattr(p, name):.2f} - may lead to rapid exclusion",
            ))
    return advisories


def check_parameters(
    params: ParameterSet, thresholds: Optional[RealismThresholds] = None
) -> Tuple[Advisory, ...]:
    """
    Compare a parameter set against the static plausibility thresholds.

    Args:
        params: Parameter set of either model
        thresholds: Limits to apply (defaults to ``RealismThresholds()``)

    Returns:
        Tuple of advisories; a parameter past its error limit yields only the error
    """
    thresholds = thresholds or RealismThresholds()
    if isinstance(params, PredatorPreyParameters):
        return tuple(_predator_prey_advisories(params, thresholds))
    return tuple(_competition_advisories(params, thresholds))


def check_populations(
    state: Sequence[float], kind: ModelKind, thresholds: Optional[RealismThresholds] = None
) -> Tuple[bool, bool]:
    """Return ``(near_extinction, atto_fox_problem)`` for the current populations."""
    thresholds = thresholds or RealismThresholds()
    lowest = min(state[0], state[1])
    near_extinction = lowest <= thresholds.near_extinction
    # fractional organisms are only flagged for the predator-prey cycles
    atto_fox = kind == ModelKind.PREDATOR_PREY and lowest < thresholds.fractional_population
    return near_extinction, atto_fox


def assess_realism(
    state: Sequence[float], params: ParameterSet, thresholds: Optional[RealismThresholds] = None
) -> RealismWarnings:
    """Full set of realism warnings for one state and parameter set."""
    near_extinction, atto_fox = check_populations(state, params.kind, thresholds)
    return RealismWarnings(
        near_extinction=near_extinction,
        atto_fox_problem=atto_fox,
        advisories=check_parameters(params, thresholds),
    )
