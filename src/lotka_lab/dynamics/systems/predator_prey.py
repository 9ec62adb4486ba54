import math
import jax.numpy as jnp
from typing import Any, Dict, Optional, Tuple
from ..base import PopulationModel
from ...config.schemas import ModelKind, PredatorPreyParameters


class PredatorPreyModel(PopulationModel):
    """
    Classic Lotka-Volterra predator-prey system.

        dN1/dt = r1 N1 - a N1 N2      (prey)
        dN2/dt = -r2 N2 + b N1 N2     (predator)

    The flow has the first integral

        H = r2 ln N1 - b N1 + r1 ln N2 - a N2

    so exact trajectories are closed orbits around (r2/b, r1/a).
    """

    kind = ModelKind.PREDATOR_PREY
    parameter_class = PredatorPreyParameters
    species_labels = ("Prey", "Predator")

    def pack_parameters(self, params: PredatorPreyParameters) -> jnp.ndarray:
        return jnp.array([params.r1, params.r2, params.a, params.b], dtype=jnp.float64)

    def compute_derivatives(self, t: float, state: jnp.ndarray, args: jnp.ndarray) -> jnp.ndarray:
        n1, n2 = state[0], state[1]
        r1, r2, a, b = args[0], args[1], args[2], args[3]

        dn1 = r1 * n1 - a * n1 * n2
        dn2 = -r2 * n2 + b * n1 * n2
        return jnp.stack([dn1, dn2])

    def equilibrium(self, params: PredatorPreyParameters) -> Optional[Tuple[float, float]]:
        if params.a == 0.0 or params.b == 0.0:
            return None
        return params.r2 / params.b, params.r1 / params.a

    def nullclines(self, params: PredatorPreyParameters) -> Dict[str, Any]:
        # prey growth stops on a horizontal line, predator growth on a vertical one
        return {
            "prey": {"n2": params.r1 / params.a if params.a else float("inf")},
            "predator": {"n1": params.r2 / params.b if params.b else float("inf")},
        }

    def conserved_quantity(self, n1: float, n2: float, params: PredatorPreyParameters) -> float:
        return (
            params.r2 * math.log(n1)
            - params.b * n1
            + params.r1 * math.log(n2)
            - params.a * n2
        )
