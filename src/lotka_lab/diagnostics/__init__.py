"""Diagnostics derived from the session state after every step."""

from .conservation import (
    ConservedQuantityDiagnostic,
    ConservedQuantityTracker,
    conserved_quantity,
    drift_percent,
)
from .realism import (
    Advisory,
    RealismWarnings,
    assess_realism,
    check_parameters,
    check_populations,
)
from .outcome import (
    CompetitionOutcome,
    OscillationPattern,
    classify_oscillation,
    estimate_period,
    mean_period,
    predict_competition_outcome,
)

__all__ = [
    "ConservedQuantityDiagnostic",
    "ConservedQuantityTracker",
    "conserved_quantity",
    "drift_percent",
    "Advisory",
    "RealismWarnings",
    "assess_realism",
    "check_parameters",
    "check_populations",
    "CompetitionOutcome",
    "OscillationPattern",
    "classify_oscillation",
    "estimate_period",
    "mean_period",
    "predict_competition_outcome",
]
