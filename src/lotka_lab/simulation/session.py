"""Interactive simulation session: the state machine driven by the UI layer."""

import collections.abc
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Union

from .base import Integrator, State, TrajectoryPoint
from .factory import create_integrator
from .scheduler import PeriodicScheduler
from ..config.core import Config
from ..config.schemas import (
    IntegrationConfig,
    ModelKind,
    ParameterSet,
    RealismThresholds,
    default_parameters,
)
from ..diagnostics.conservation import ConservedQuantityDiagnostic, ConservedQuantityTracker
from ..diagnostics.outcome import classify_oscillation, predict_competition_outcome
from ..diagnostics.realism import RealismWarnings, check_parameters, check_populations
from ..dynamics.factory import create_model
from ..errors import SessionStateError
from ..scenarios import get_preset

logger = logging.getLogger(__name__)


class HistoryView(collections.abc.Sequence):
    """Read-only view of the first ``length`` points of a history list.

    The session only ever appends to its list (reset swaps in a new one), so
    a view taken under the lock never observes later appends.
    """

    def __init__(self, points: List[TrajectoryPoint], length: int):
        self._points = points
        self._length = length

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._points[i] for i in range(*index.indices(self._length)))
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("history index out of range")
        return self._points[index]

    def __iter__(self) -> Iterator[TrajectoryPoint]:
        for i in range(self._length):
            yield self._points[i]

    def __repr__(self) -> str:
        return f"HistoryView(len={self._length})"


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything the presentation layer needs to draw one frame."""

    model_type: ModelKind
    parameters: ParameterSet
    running: bool
    elapsed_time: float
    current_state: State
    conserved_quantity: Optional[ConservedQuantityDiagnostic]
    realism_warnings: RealismWarnings
    history: Sequence[TrajectoryPoint]
    step_count: int

    @property
    def outcome(self) -> str:
        """Predicted competition outcome or the observed predator-prey pattern."""
        if self.model_type == ModelKind.COMPETITION:
            return predict_competition_outcome(self.parameters).value
        return classify_oscillation([point.n1 for point in self.history]).value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "model_type": self.model_type.value,
            "parameters": self.parameters.to_dict(),
            "running": self.running,
            "elapsed_time": self.elapsed_time,
            "current_state": {"N1": self.current_state.n1, "N2": self.current_state.n2},
            "conserved_quantity": (
                self.conserved_quantity.to_dict() if self.conserved_quantity else None
            ),
            "realism_warnings": self.realism_warnings.to_dict(),
            "history": [
                {"time": p.time, "N1": p.n1, "N2": p.n2} for p in self.history
            ],
            "step_count": self.step_count,
            "outcome": self.outcome,
        }


class SimulationSession:
    """
    Owns one simulated population pair and advances it tick by tick.

    States are idle (not running, possibly with history) and running. While
    running, an attached ``PeriodicScheduler`` calls the session once per
    ``tick_interval`` and each call performs exactly one integration step of
    ``dt``. Without a scheduler the caller drives ``tick()`` directly.

    All mutating operations and ``snapshot()`` are serialised by one lock, so
    the session may be shared between a UI thread and the scheduler thread.
    The scheduler itself is started and stopped outside that lock. After a
    stop the session re-reads ``running`` and restarts the scheduler if a
    concurrent ``start()`` won, so a running session always has a ticker.

    Args:
        model: Model kind to simulate
        parameters: Initial parameter set (defaults to the model's canonical one)
        integration: Step size, floor, history policy and solver name
        realism: Plausibility thresholds for the advisories
        scheduler: Tick source used by ``start()``; None for manual ticking
        on_tick: Called with each snapshot produced by the scheduler
    """

    def __init__(
        self,
        model: Union[str, ModelKind] = ModelKind.COMPETITION,
        parameters: Optional[ParameterSet] = None,
        integration: Optional[IntegrationConfig] = None,
        realism: Optional[RealismThresholds] = None,
        scheduler: Optional[PeriodicScheduler] = None,
        on_tick: Optional[Callable[[SessionSnapshot], None]] = None,
    ):
        self._lock = threading.RLock()
        self._integration = integration or IntegrationConfig()
        self._realism = realism or RealismThresholds()
        self._integrator: Integrator = create_integrator(
            self._integration.solver, self._integration.extinction_floor
        )
        self._scheduler = scheduler
        self.on_tick = on_tick

        self._model = create_model(ModelKind.parse(model))
        self._parameters = self._model.check_parameters(
            parameters if parameters is not None else self._model.default_parameters()
        )
        self._conservation = ConservedQuantityTracker(self._integration.conservation_tolerance)
        self._running = False
        self._reset_locked()

    @classmethod
    def from_config(
        cls,
        config: Config,
        scheduler: Optional[PeriodicScheduler] = None,
        on_tick: Optional[Callable[[SessionSnapshot], None]] = None,
    ) -> "SimulationSession":
        """Create a session from a loaded ``Config``."""
        return cls(
            model=config.model,
            parameters=config.build_parameters(),
            integration=config.integration,
            realism=config.realism,
            scheduler=scheduler,
            on_tick=on_tick,
        )

    # ------------------------------------------------------------------
    # Queries

    @property
    def model_kind(self) -> ModelKind:
        return self._model.kind

    @property
    def parameters(self) -> ParameterSet:
        return self._parameters

    @property
    def running(self) -> bool:
        return self._running

    @property
    def state(self) -> State:
        return self._state

    @property
    def elapsed_time(self) -> float:
        return self._elapsed_time

    @property
    def step_count(self) -> int:
        return self._step_count

    @property
    def integration(self) -> IntegrationConfig:
        return self._integration

    def snapshot(self) -> SessionSnapshot:
        """Consistent, read-only view of the session at this instant."""
        with self._lock:
            return self._snapshot_locked()

    # ------------------------------------------------------------------
    # Commands

    def start(self) -> None:
        """Begin ticking. No-op if already running."""
        with self._lock:
            if self._running:
                return
            self._running = True
            logger.info(
                "Session started: %s at t=%.2f", self._model.kind.value, self._elapsed_time
            )
        if self._scheduler is not None:
            self._scheduler.start(self._on_timer)

    def pause(self) -> None:
        """Stop ticking. Idempotent; no tick runs after this returns."""
        with self._lock:
            was_running = self._running
            self._running = False
            elapsed = self._elapsed_time
        self._stop_scheduler()
        if was_running:
            logger.info("Session paused at t=%.2f", elapsed)

    def stop(self) -> None:
        """Alias of ``pause()``."""
        self.pause()

    def reset(self) -> None:
        """Stop and return to t=0 with the current parameters' initial populations."""
        with self._lock:
            self._reset_locked()
            kind, state = self._model.kind, self._state
        self._stop_scheduler()
        logger.info("Session reset: %s, N=(%g, %g)", kind.value, *state)

    def set_parameter(self, name: str, value: float) -> None:
        """
        Change one parameter of the active model.

        The trajectory is not re-seeded; rates apply from the next tick and
        initial populations from the next ``reset()``.

        Raises:
            InvalidParameter: If ``name`` is not a parameter of the active
                model or ``value`` is not a finite number
        """
        with self._lock:
            self._parameters = self._parameters.with_updates(**{name: value})
            self._refresh_advisories()
        logger.debug("Parameter %s set to %r", name, value)

    def set_all_parameters(self, values: Optional[Mapping[str, float]] = None, **kwargs: float) -> None:
        """Apply several parameter changes at once; nothing changes if any is invalid."""
        changes = dict(values or {})
        changes.update(kwargs)
        with self._lock:
            self._parameters = self._parameters.with_updates(**changes)
            self._refresh_advisories()
        logger.debug("Parameters updated: %s", changes)

    def set_model(self, kind: Union[str, ModelKind]) -> None:
        """Switch model kind, load its canonical parameters and reset."""
        kind = ModelKind.parse(kind)
        with self._lock:
            self._model = create_model(kind)
            self._parameters = default_parameters(kind)
            self._reset_locked()
        self._stop_scheduler()
        logger.info("Switched model to %s", kind.value)

    def load_preset(self, name: str) -> None:
        """Load a named preset scenario, switching model if needed, and reset."""
        preset = get_preset(name)
        params = preset.build_parameters()
        with self._lock:
            self._model = create_model(preset.model)
            self._parameters = params
            self._reset_locked()
        self._stop_scheduler()
        logger.info("Loaded preset '%s'", preset.name)

    def tick(self) -> SessionSnapshot:
        """
        Advance by one integration step.

        Returns:
            Snapshot after the step

        Raises:
            SessionStateError: If the session is not running
        """
        with self._lock:
            if not self._running:
                raise SessionStateError("tick() called while the session is not running")
            self._advance()
            return self._snapshot_locked()

    def close(self) -> None:
        self.pause()

    def __enter__(self) -> "SimulationSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals (_on_timer and _stop_scheduler take the lock, the rest expect it held)

    def _on_timer(self) -> bool:
        with self._lock:
            if not self._running:
                return False
            self._advance()
            snapshot = self._snapshot_locked()
        if self.on_tick is not None:
            self.on_tick(snapshot)
        return True

    def _stop_scheduler(self) -> None:
        if self._scheduler is None:
            return
        self._scheduler.stop()
        # a start() racing this stop may have found the old thread still active
        with self._lock:
            restart = self._running
        if restart:
            self._scheduler.start(self._on_timer)

    def _reset_locked(self) -> None:
        self._running = False
        self._step_count = 0
        self._elapsed_time = 0.0

        floor = self._integration.extinction_floor
        n1_0, n2_0 = self._parameters.initial_state()
        self._state = State(max(n1_0, floor), max(n2_0, floor))
        self._history: List[TrajectoryPoint] = [TrajectoryPoint(0.0, *self._state)]

        if self._model.kind == ModelKind.PREDATOR_PREY:
            self._conservation.start(self._state, self._parameters)
        else:
            self._conservation.clear()

        self._advisories = check_parameters(self._parameters, self._realism)
        self._warnings = RealismWarnings(advisories=self._advisories)

    def _refresh_advisories(self) -> None:
        self._advisories = check_parameters(self._parameters, self._realism)
        self._warnings = RealismWarnings(
            near_extinction=self._warnings.near_extinction,
            atto_fox_problem=self._warnings.atto_fox_problem,
            advisories=self._advisories,
        )

    def _advance(self) -> None:
        dt = self._integration.dt
        self._step_count += 1
        self._elapsed_time = self._step_count * dt
        self._state = self._integrator.step(self._state, self._parameters, self._model, dt)

        if self._model.kind == ModelKind.PREDATOR_PREY:
            self._conservation.update(self._state, self._parameters)

        near_extinction, atto_fox = check_populations(
            self._state, self._model.kind, self._realism
        )
        self._warnings = RealismWarnings(near_extinction, atto_fox, self._advisories)

        # full resolution up to the limit, then every n-th insertion index
        limit = self._integration.history_limit
        k = self._step_count
        if len(self._history) < limit or (k > limit and k % self._integration.decimation == 0):
            self._history.append(TrajectoryPoint(self._elapsed_time, *self._state))

    def _snapshot_locked(self) -> SessionSnapshot:
        return SessionSnapshot(
            model_type=self._model.kind,
            parameters=self._parameters,
            running=self._running,
            elapsed_time=self._elapsed_time,
            current_state=self._state,
            conserved_quantity=(
                self._conservation.diagnostic
                if self._model.kind == ModelKind.PREDATOR_PREY
                else None
            ),
            realism_warnings=self._warnings,
            history=HistoryView(self._history, len(self._history)),
            step_count=self._step_count,
        )
