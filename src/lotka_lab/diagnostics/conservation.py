"""Tracking of the predator-prey conserved quantity H."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from ..config.schemas import CONSERVATION_TOLERANCE, PredatorPreyParameters
from ..dynamics.systems.predator_prey import PredatorPreyModel

_MODEL = PredatorPreyModel()


def conserved_quantity(state: Sequence[float], params: PredatorPreyParameters) -> float:
    """H(N1, N2) = r2 ln N1 - b N1 + r1 ln N2 - a N2 for a floored state."""
    return _MODEL.conserved_quantity(state[0], state[1], params)


def drift_percent(initial: float, current: float) -> float:
    """Relative change of H in percent of ``|initial|``."""
    if initial == current:
        return 0.0
    if initial == 0.0:
        # no scale to compare against; any change counts as total drift
        return float("inf") if current > 0 else float("-inf")
    return 100.0 * (current - initial) / abs(initial)


@dataclass(frozen=True)
class ConservedQuantityDiagnostic:
    """Initial and current value of H and how far it has drifted."""

    initial: float
    current: float
    drift_percent: float
    is_conserved: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "initial": self.initial,
            "current": self.current,
            "drift_percent": self.drift_percent,
            "is_conserved": self.is_conserved,
        }


class ConservedQuantityTracker:
    """Keeps H fixed at its value at the start of a run and measures drift."""

    def __init__(self, tolerance: float = CONSERVATION_TOLERANCE):
        self.tolerance = tolerance
        self.diagnostic: Optional[ConservedQuantityDiagnostic] = None

    def start(self, state: Sequence[float], params: PredatorPreyParameters) -> ConservedQuantityDiagnostic:
        h0 = conserved_quantity(state, params)
        self.diagnostic = ConservedQuantityDiagnostic(
            initial=h0, current=h0, drift_percent=0.0, is_conserved=True
        )
        return self.diagnostic

    def update(self, state: Sequence[float], params: PredatorPreyParameters) -> ConservedQuantityDiagnostic:
        if self.diagnostic is None:
            return self.start(state, params)

        initial = self.diagnostic.initial
        current = conserved_quantity(state, params)
        drift = drift_percent(initial, current)
        self.diagnostic = ConservedQuantityDiagnostic(
            initial=initial,
            current=current,
            drift_percent=drift,
            # NaN drift (overflowed state) compares False and is reported as not conserved
            is_conserved=abs(drift) < self.tolerance * 100.0,
        )
        return self.diagnostic

    def clear(self) -> None:
        self.diagnostic = None
