import jax.numpy as jnp
from typing import Any, Dict, Optional, Tuple
from ..base import PopulationModel
from ...config.schemas import CompetitionParameters, ModelKind


class CompetitionModel(PopulationModel):
    """
    Logistic Lotka-Volterra competition between two species.

        dN1/dt = r1 N1 (1 - (N1 + a12 N2) / K1)
        dN2/dt = r2 N2 (1 - (N2 + a21 N1) / K2)
    """

    kind = ModelKind.COMPETITION
    parameter_class = CompetitionParameters

    def pack_parameters(self, params: CompetitionParameters) -> jnp.ndarray:
        return jnp.array(
            [params.r1, params.r2, params.K1, params.K2, params.a12, params.a21],
            dtype=jnp.float64,
        )

    def compute_derivatives(self, t: float, state: jnp.ndarray, args: jnp.ndarray) -> jnp.ndarray:
        n1, n2 = state[0], state[1]
        r1, r2, K1, K2, a12, a21 = args[0], args[1], args[2], args[3], args[4], args[5]

        dn1 = r1 * n1 * (1.0 - (n1 + a12 * n2) / K1)
        dn2 = r2 * n2 * (1.0 - (n2 + a21 * n1) / K2)
        return jnp.stack([dn1, dn2])

    def equilibrium(self, params: CompetitionParameters) -> Optional[Tuple[float, float]]:
        denom = 1.0 - params.a12 * params.a21
        if denom == 0.0:
            return None
        n1 = (params.K1 - params.a12 * params.K2) / denom
        n2 = (params.K2 - params.a21 * params.K1) / denom
        if n1 > 0 and n2 > 0:
            return n1, n2
        return None

    def coexistence_possible(self, params: CompetitionParameters) -> bool:
        """True when the interior equilibrium exists and is stable (a12 a21 < 1)."""
        return 1.0 - params.a12 * params.a21 > 0 and self.equilibrium(params) is not None

    def nullclines(self, params: CompetitionParameters) -> Dict[str, Any]:
        """
        Straight-line isoclines given by their axis intercepts.

        Species 1: N1 = K1 - a12 N2, species 2: N2 = K2 - a21 N1. An intercept
        is ``inf`` when the corresponding coefficient is zero.
        """

        def intercept(k: float, coeff: float) -> float:
            return k / coeff if coeff > 0 else float("inf")

        return {
            "species1": {
                "n1_intercept": params.K1,
                "n2_intercept": intercept(params.K1, params.a12),
            },
            "species2": {
                "n1_intercept": intercept(params.K2, params.a21),
                "n2_intercept": params.K2,
            },
        }
