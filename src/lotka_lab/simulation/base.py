"""Base classes for the fixed-step integrators."""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, Tuple, Union
import jax.numpy as jnp
import numpy as np

from ..config.schemas import EXTINCTION_FLOOR, ModelKind, ParameterSet
from ..dynamics.base import PopulationModel
from ..dynamics.factory import create_model


class State(NamedTuple):
    """Population pair at one instant."""

    n1: float
    n2: float


class TrajectoryPoint(NamedTuple):
    """One recorded sample of the trajectory."""

    time: float
    n1: float
    n2: float


class Integrator(ABC):
    """Abstract base class for one-step ODE integrators.

    ``step`` is pure: the result depends only on its arguments, so two runs
    with the same inputs produce identical trajectories.
    """

    name: str = "base"

    def __init__(self, extinction_floor: float = EXTINCTION_FLOOR):
        self.extinction_floor = float(extinction_floor)
        self._packed: Optional[Tuple[ParameterSet, jnp.ndarray]] = None

    @abstractmethod
    def advance(
        self, model: PopulationModel, y: jnp.ndarray, theta: jnp.ndarray, h: float
    ) -> jnp.ndarray:
        """
        Advance the raw state vector by one step of size ``h``.

        Args:
            model: Population model providing the vector field
            y: Array ``[N1, N2]``
            theta: Packed rate parameters
            h: Step size

        Returns:
            Next state vector, floored at ``extinction_floor``
        """
        pass

    def step(
        self,
        state: State,
        params: ParameterSet,
        model: Union[ModelKind, str, PopulationModel],
        h: float,
    ) -> State:
        """
        Compute the state one step of size ``h`` after ``state``.

        Args:
            state: Current populations
            params: Parameter set matching ``model``
            model: Model kind or model instance
            h: Step size in model time units

        Returns:
            Next populations, each at least ``extinction_floor``
        """
        model = create_model(model)
        model.check_parameters(params)

        y = jnp.array([state[0], state[1]], dtype=jnp.float64)
        y_next = np.asarray(self.advance(model, y, self._theta(model, params), float(h)))
        return State(float(y_next[0]), float(y_next[1]))

    def _theta(self, model: PopulationModel, params: ParameterSet) -> jnp.ndarray:
        # parameter sets are frozen, so the packed vector can be reused until they change
        if self._packed is None or self._packed[0] != params:
            self._packed = (params, model.pack_parameters(params))
        return self._packed[1]
