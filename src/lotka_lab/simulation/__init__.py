"""Simulation module: integrators, scheduler and the interactive session."""

from .base import Integrator, State, TrajectoryPoint
from .factory import create_integrator
from .ode_engine import RK4Integrator, EulerIntegrator
from .scheduler import PeriodicScheduler
from .session import SimulationSession, SessionSnapshot, HistoryView

__all__ = [
    "Integrator",
    "State",
    "TrajectoryPoint",
    "create_integrator",
    "RK4Integrator",
    "EulerIntegrator",
    "PeriodicScheduler",
    "SimulationSession",
    "SessionSnapshot",
    "HistoryView",
]
