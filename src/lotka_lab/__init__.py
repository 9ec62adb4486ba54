"""
lotka-lab: simulation engine for two-species Lotka-Volterra models.

This package provides:
1. Competition and predator-prey models with their equilibria and nullclines
2. Fixed-step RK4 integration with an extinction floor
3. An interactive session driven by a periodic scheduler
4. Conserved-quantity and biological-realism diagnostics

Example:
    >>> import lotka_lab as ll
    >>>
    >>> session = ll.SimulationSession(model="predator_prey")
    >>> session.start()
    >>> for _ in range(100):
    ...     snapshot = session.tick()
    >>> snapshot.conserved_quantity.is_conserved
    True
    >>> session.set_parameter("a", 0.12)
    >>> session.reset()
"""

import jax

# Populations and H are tracked in double precision
jax.config.update("jax_enable_x64", True)

__version__ = "0.1.0"

from .config import Config, ModelKind, load_config
from .config.schemas import CompetitionParameters, PredatorPreyParameters
from .dynamics import create_model, PopulationModel
from .simulation import (
    create_integrator,
    Integrator,
    PeriodicScheduler,
    SessionSnapshot,
    SimulationSession,
    State,
    TrajectoryPoint,
)
from .diagnostics import ConservedQuantityDiagnostic, RealismWarnings
from .errors import InvalidParameter, SessionStateError
from .scenarios import get_preset, list_presets
from .workflow import run_simulation

__all__ = [
    "Config",
    "ModelKind",
    "load_config",
    "CompetitionParameters",
    "PredatorPreyParameters",
    "create_model",
    "PopulationModel",
    "create_integrator",
    "Integrator",
    "PeriodicScheduler",
    "SessionSnapshot",
    "SimulationSession",
    "State",
    "TrajectoryPoint",
    "ConservedQuantityDiagnostic",
    "RealismWarnings",
    "InvalidParameter",
    "SessionStateError",
    "get_preset",
    "list_presets",
    "run_simulation",
]
