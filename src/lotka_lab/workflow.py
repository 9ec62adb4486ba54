"""Batch runs of a simulation session with progress reporting."""

from pathlib import Path
from typing import Iterable, Optional, Union
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from .config import Config, load_config
from .simulation.session import SessionSnapshot, SimulationSession

console = Console()


def run_simulation(
    config: Config,
    n_steps: int,
    verbose: bool = True,
    session: Optional[SimulationSession] = None,
) -> SessionSnapshot:
    """
    Advance a fresh session ``n_steps`` ticks as fast as possible.

    Args:
        config: Model, parameters and integration settings
        n_steps: Number of integration steps
        verbose: Whether to show a progress bar
        session: Existing session to drive instead of creating one from ``config``

    Returns:
        Snapshot after the last step (the session is left paused)
    """
    if n_steps < 0:
        raise ValueError(f"n_steps must be non-negative, got {n_steps}")

    if session is None:
        session = SimulationSession.from_config(config)

    session.start()
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            console=console,
            disable=not verbose,
        ) as progress:
            task = progress.add_task(
                f"🚀 Simulating {session.model_kind.value}...", total=n_steps
            )
            for _ in range(n_steps):
                session.tick()
                progress.advance(task)
            progress.update(task, description="✅ Simulation completed")
    finally:
        session.pause()

    snapshot = session.snapshot()
    if verbose:
        console.print(
            f"[green]✓[/green] {snapshot.step_count} steps, t = {snapshot.elapsed_time:.2f}, "
            f"{len(snapshot.history)} points retained"
        )
    return snapshot


def run_from_config_file(
    config_path: Union[str, Path],
    n_steps: int,
    overrides: Iterable[str] = (),
    verbose: bool = True,
) -> SessionSnapshot:
    """Load a YAML config, apply ``key=value`` overrides and run it."""
    config = load_config(config_path)
    overrides = list(overrides)
    if overrides:
        config = config.with_overrides(overrides)
    return run_simulation(config, n_steps, verbose=verbose)
