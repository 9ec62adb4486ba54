"""Base classes for two-species population models."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Type
import jax.numpy as jnp

from ..config.schemas import ModelKind, ParameterSet
from ..errors import InvalidParameter


class PopulationModel(ABC):
    """Abstract base class for the Lotka-Volterra model variants.

    Models are stateless: everything that varies between runs lives in the
    parameter set. Two instances of the same class compare equal, which lets
    the integrators use a model as a static argument to ``jax.jit``.
    """

    kind: ModelKind
    parameter_class: Type[ParameterSet]
    species_labels: Tuple[str, str] = ("Species 1", "Species 2")

    def __eq__(self, other: Any) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    def default_parameters(self) -> ParameterSet:
        """Canonical parameter set for this model."""
        return self.parameter_class()

    def check_parameters(self, params: ParameterSet) -> ParameterSet:
        """Ensure ``params`` belongs to this model."""
        if not isinstance(params, self.parameter_class):
            raise InvalidParameter(
                "parameters",
                type(params).__name__,
                f"{self.kind.value} model requires {self.parameter_class.__name__}",
            )
        return params

    @abstractmethod
    def pack_parameters(self, params: ParameterSet) -> jnp.ndarray:
        """
        Flatten the rate parameters into the vector passed to ``compute_derivatives``.

        Args:
            params: Parameter set of this model

        Returns:
            1D float array of rate constants
        """
        pass

    @abstractmethod
    def compute_derivatives(self, t: float, state: jnp.ndarray, args: jnp.ndarray) -> jnp.ndarray:
        """
        Compute the time derivative of the population vector.

        Args:
            t: Current time (the models are autonomous)
            state: Array ``[N1, N2]``
            args: Packed rate parameters from ``pack_parameters``

        Returns:
            Array ``[dN1/dt, dN2/dt]``
        """
        pass

    @abstractmethod
    def equilibrium(self, params: ParameterSet) -> Optional[Tuple[float, float]]:
        """Interior equilibrium ``(N1*, N2*)``, or None when there is none."""
        pass

    @abstractmethod
    def nullclines(self, params: ParameterSet) -> Dict[str, Any]:
        """Geometry of the zero-growth isoclines in the (N1, N2) plane."""
        pass

    def conserved_quantity(self, n1: float, n2: float, params: ParameterSet) -> Optional[float]:
        """First integral of the flow, if the model has one."""
        return None

    def derivatives(self, n1: float, n2: float, params: ParameterSet) -> Tuple[float, float]:
        """Convenience wrapper around ``compute_derivatives`` for plain floats."""
        d = self.compute_derivatives(
            0.0, jnp.array([n1, n2], dtype=jnp.float64), self.pack_parameters(params)
        )
        return float(d[0]), float(d[1])

    def get_model_info(self, params: ParameterSet) -> Dict[str, Any]:
        """
        Get a summary of the model at the given parameters.

        Returns:
            Dictionary with model type, labels, equilibrium and nullclines
        """
        return {
            "model": self.kind.value,
            "species": list(self.species_labels),
            "parameters": params.to_dict(),
            "equilibrium": self.equilibrium(params),
            "nullclines": self.nullclines(params),
        }
