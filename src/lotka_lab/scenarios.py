"""Preset parameter scenarios for both models."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .config.schemas import ModelKind, ParameterSet, parameters_from_dict


@dataclass(frozen=True)
class PresetScenario:
    """A named parameter set with the behaviour it is meant to show."""

    name: str
    model: ModelKind
    description: str
    outcome: str
    parameters: Dict[str, float] = field(default_factory=dict)
    explanation: str = ""
    biological_example: str = ""

    @property
    def key(self) -> str:
        return _slug(self.name)

    def build_parameters(self) -> ParameterSet:
        return parameters_from_dict(self.model, self.parameters)


def _slug(name: str) -> str:
    return name.strip().lower().replace("-", " ").replace("_", " ").replace(" ", "-")


PRESETS: List[PresetScenario] = [
    PresetScenario(
        name="Competitive Exclusion",
        model=ModelKind.COMPETITION,
        description="Strong competitor excludes weaker species",
        outcome="Species 2 Wins",
        parameters={"r1": 1.0, "r2": 0.9, "K1": 200, "K2": 180, "a12": 1.2, "a21": 0.4, "N1_0": 50, "N2_0": 40},
        explanation=(
            "Species 2 has a strong competitive advantage (a12 > K1/K2 while a21 < K2/K1). "
            "Species 1 cannot persist when species 2 is present at equilibrium."
        ),
        biological_example="Large ground finches excluding medium ground finches in drought years.",
    ),
    PresetScenario(
        name="Stable Coexistence",
        model=ModelKind.COMPETITION,
        description="Both species coexist at equilibrium",
        outcome="Coexistence",
        parameters={"r1": 1.0, "r2": 0.8, "K1": 200, "K2": 180, "a12": 0.4, "a21": 0.3, "N1_0": 50, "N2_0": 40},
        explanation=(
            "Interspecific competition is weaker than intraspecific competition for both species "
            "(a12 < K1/K2 and a21 < K2/K1), so both reach a stable equilibrium."
        ),
        biological_example="Forest trees with different shade tolerances.",
    ),
    PresetScenario(
        name="Classic Oscillations",
        model=ModelKind.PREDATOR_PREY,
        description="Standard predator-prey cycles",
        outcome="Stable Cycles",
        parameters={"r1": 1.0, "r2": 1.0, "a": 1.0, "b": 1.0, "N1_0": 10, "N2_0": 10},
        explanation="All rates equal to one give neutral cycles of constant amplitude and period.",
        biological_example="The idealised relationship described by Lotka and Volterra.",
    ),
    PresetScenario(
        name="Fast Prey Growth",
        model=ModelKind.PREDATOR_PREY,
        description="Rapidly reproducing prey with moderate predation",
        outcome="Large Oscillations",
        parameters={"r1": 2.0, "r2": 1.0, "a": 1.5, "b": 1.0, "N1_0": 8, "N2_0": 12},
        explanation="A high prey growth rate with strong predation gives fast cycles with high prey peaks.",
        biological_example="Voles or lemmings with boom-bust cycles.",
    ),
    PresetScenario(
        name="Efficient Predators",
        model=ModelKind.PREDATOR_PREY,
        description="Predators with strong conversion rates",
        outcome="Tight Cycles",
        parameters={"r1": 1.0, "r2": 0.8, "a": 0.8, "b": 1.5, "N1_0": 12, "N2_0": 8},
        explanation="Efficient conversion of prey lowers prey minima and raises predator peaks.",
        biological_example="Arctic foxes feeding on lemmings.",
    ),
    PresetScenario(
        name="Slow Dynamics",
        model=ModelKind.PREDATOR_PREY,
        description="Large organisms with slower population dynamics",
        outcome="Wide Oscillations",
        parameters={"r1": 0.5, "r2": 0.4, "a": 0.6, "b": 0.7, "N1_0": 15, "N2_0": 6},
        explanation="Reduced rates give slow, wide oscillations typical of long generation times.",
        biological_example="Caribou and wolves.",
    ),
]


def list_presets(model: Optional[Union[str, ModelKind]] = None) -> List[PresetScenario]:
    """All presets, optionally restricted to one model kind."""
    if model is None:
        return list(PRESETS)
    kind = ModelKind.parse(model)
    return [preset for preset in PRESETS if preset.model == kind]


def get_preset(name: str) -> PresetScenario:
    """
    Look up a preset by name or slug (``"Slow Dynamics"`` or ``"slow-dynamics"``).

    Raises:
        ValueError: If no preset has that name
    """
    key = _slug(name)
    for preset in PRESETS:
        if preset.key == key:
            return preset
    raise ValueError(
        f"Unknown preset: {name}. Available presets: {[p.key for p in PRESETS]}"
    )
