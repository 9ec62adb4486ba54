"""Factory functions for creating integrators."""

from typing import Dict, Type
from .base import Integrator
from .ode_engine import EulerIntegrator, RK4Integrator
from ..config.schemas import EXTINCTION_FLOOR


# Registry of available integrators
INTEGRATOR_REGISTRY: Dict[str, Type[Integrator]] = {
    "rk4": RK4Integrator,
    "runge_kutta": RK4Integrator,  # Alias
    "euler": EulerIntegrator,
}


def create_integrator(solver: str = "rk4", extinction_floor: float = EXTINCTION_FLOOR) -> Integrator:
    """
    Create an integrator by name.

    Args:
        solver: Integrator name (case-insensitive)
        extinction_floor: Lower bound applied to populations after each step

    Returns:
        Configured integrator

    Raises:
        ValueError: If integrator type is not recognized
    """
    integrator_type = solver.lower().replace("-", "_")

    if integrator_type not in INTEGRATOR_REGISTRY:
        available_types = list(INTEGRATOR_REGISTRY.keys())
        raise ValueError(
            f"Unknown integrator type: {solver}. "
            f"Available types: {available_types}"
        )

    integrator_class = INTEGRATOR_REGISTRY[integrator_type]
    return integrator_class(extinction_floor=extinction_floor)
