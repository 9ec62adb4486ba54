"""Main CLI entry point for lotka-lab."""

import logging
import time
import typer
from pathlib import Path
from typing import List, Optional
from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.table import Table

from ..config import Config, ModelKind, load_config
from ..diagnostics.realism import check_parameters
from ..diagnostics.outcome import mean_period, predict_competition_outcome
from ..dynamics import create_model
from ..scenarios import list_presets
from ..simulation import PeriodicScheduler, SessionSnapshot, SimulationSession
from ..workflow import run_simulation

app = typer.Typer(
    name="lotka-lab",
    help="Two-species Lotka-Volterra simulation engine",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Simulate competition and predator-prey dynamics."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _build_config(
    config_path: Optional[Path], model: Optional[str], overrides: Optional[List[str]]
) -> Config:
    config = load_config(config_path) if config_path else Config()
    if model is not None:
        requested = Config(model=model)
        if requested.model != config.model:
            # parameters of the other model do not carry over
            config = Config(
                model=requested.model,
                integration=config.integration,
                realism=config.realism,
            )
    if overrides:
        config = config.with_overrides(overrides)
    return config


def _summary_table(snapshot: SessionSnapshot) -> Table:
    model = create_model(snapshot.model_type)
    label1, label2 = model.species_labels

    table = Table(title=f"{snapshot.model_type.value} @ t = {snapshot.elapsed_time:.2f}")
    table.add_column("Quantity")
    table.add_column("Value", justify="right")

    table.add_row("Steps", str(snapshot.step_count))
    table.add_row(label1, f"{snapshot.current_state.n1:.4f}")
    table.add_row(label2, f"{snapshot.current_state.n2:.4f}")

    equilibrium = model.equilibrium(snapshot.parameters)
    if equilibrium is not None:
        table.add_row("Equilibrium", f"({equilibrium[0]:.3f}, {equilibrium[1]:.3f})")

    cq = snapshot.conserved_quantity
    if cq is not None:
        colour = "green" if cq.is_conserved else "red"
        table.add_row("H initial", f"{cq.initial:.6f}")
        table.add_row("H current", f"{cq.current:.6f}")
        table.add_row("H drift", f"[{colour}]{cq.drift_percent:.4f}%[/{colour}]")

    table.add_row("Outcome", snapshot.outcome)
    warnings = snapshot.realism_warnings
    table.add_row("Realism", warnings.status)
    if warnings.near_extinction:
        table.add_row("", "[red]population near extinction[/red]")
    if warnings.atto_fox_problem:
        table.add_row("", "[yellow]atto-fox problem: fewer than one individual[/yellow]")
    for advisory in warnings.advisories:
        colour = "red" if advisory.severity == "error" else "yellow"
        table.add_row("", f"[{colour}]{advisory.message}[/{colour}]")
    return table


@app.command()
def run(
    config: Optional[Path] = typer.Argument(None, help="Configuration file path"),
    steps: int = typer.Option(2000, "--steps", "-n", help="Number of integration steps"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="competition or predator_prey"),
    overrides: Optional[List[str]] = typer.Option(None, "--set", "-s", help="Override, e.g. r1=1.5"),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show progress bar"),
):
    """Run a batch simulation and print a summary."""
    try:
        cfg = _build_config(config, model, overrides)
        snapshot = run_simulation(cfg, steps, verbose=progress)
        console.print(_summary_table(snapshot))

        if snapshot.model_type == ModelKind.PREDATOR_PREY:
            times = [p.time for p in snapshot.history]
            period = mean_period(times, [p.n1 for p in snapshot.history])
            if period is not None:
                console.print(f"Mean prey period: {period:.3f}")
    except Exception as e:
        console.print(f"[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def watch(
    config: Optional[Path] = typer.Argument(None, help="Configuration file path"),
    duration: float = typer.Option(10.0, "--duration", "-d", help="Wall-clock seconds to run"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="competition or predator_prey"),
    overrides: Optional[List[str]] = typer.Option(None, "--set", "-s", help="Override, e.g. r1=1.5"),
):
    """Run the session in real time and show a live table."""
    try:
        cfg = _build_config(config, model, overrides)
        scheduler = PeriodicScheduler(cfg.integration.tick_interval)
        with SimulationSession.from_config(cfg, scheduler=scheduler) as session:
            session.start()
            deadline = time.monotonic() + duration
            with Live(_summary_table(session.snapshot()), console=console, refresh_per_second=10) as live:
                while time.monotonic() < deadline:
                    time.sleep(0.1)
                    live.update(_summary_table(session.snapshot()))
    except KeyboardInterrupt:
        console.print("[yellow]Stopped[/yellow]")
    except Exception as e:
        console.print(f"[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def presets(
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Only presets of this model"),
):
    """List the preset scenarios."""
    try:
        table = Table(title="Preset scenarios")
        table.add_column("Key")
        table.add_column("Model")
        table.add_column("Outcome")
        table.add_column("Parameters")
        for preset in list_presets(model):
            params = ", ".join(f"{k}={v:g}" for k, v in preset.parameters.items())
            table.add_row(preset.key, preset.model.value, preset.outcome, params)
        console.print(table)
    except Exception as e:
        console.print(f"[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def analyze(
    config: Optional[Path] = typer.Argument(None, help="Configuration file path"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="competition or predator_prey"),
    overrides: Optional[List[str]] = typer.Option(None, "--set", "-s", help="Override, e.g. r1=1.5"),
):
    """Show equilibrium, nullclines and advisories without integrating."""
    try:
        cfg = _build_config(config, model, overrides)
        params = cfg.build_parameters()
        population_model = create_model(cfg.model)
        info = population_model.get_model_info(params)

        console.print(f"[bold]{cfg.model.value}[/bold]: {info['parameters']}")
        console.print(f"Equilibrium: {info['equilibrium']}")
        console.print(f"Nullclines: {info['nullclines']}")
        if cfg.model == ModelKind.COMPETITION:
            console.print(f"Predicted outcome: {predict_competition_outcome(params).value}")
        for advisory in check_parameters(params, cfg.realism):
            colour = "red" if advisory.severity == "error" else "yellow"
            console.print(f"[{colour}]{advisory.severity}: {advisory.message}[/{colour}]")
    except Exception as e:
        console.print(f"[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
