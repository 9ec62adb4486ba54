"""Population model implementations."""

from .competition import CompetitionModel
from .predator_prey import PredatorPreyModel

__all__ = [
    "CompetitionModel",
    "PredatorPreyModel",
]
