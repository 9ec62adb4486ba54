"""Factory functions for creating population models."""

from typing import Dict, Type, Union
from .base import PopulationModel
from ..config.schemas import ModelKind

# Import model implementations
from .systems.competition import CompetitionModel
from .systems.predator_prey import PredatorPreyModel


# Registry of available models
MODEL_REGISTRY: Dict[str, Type[PopulationModel]] = {
    ModelKind.COMPETITION.value: CompetitionModel,
    ModelKind.PREDATOR_PREY.value: PredatorPreyModel,
}


def create_model(model_type: Union[str, ModelKind, PopulationModel]) -> PopulationModel:
    """
    Create a population model from its type.

    Args:
        model_type: ModelKind, registry name, or an existing model (returned as is)

    Returns:
        Model instance

    Raises:
        ValueError: If model type is not recognized
    """
    if isinstance(model_type, PopulationModel):
        return model_type

    name = model_type.value if isinstance(model_type, ModelKind) else str(model_type)
    if name not in MODEL_REGISTRY:
        try:
            name = ModelKind.parse(name).value
        except ValueError:
            pass

    if name not in MODEL_REGISTRY:
        available_types = list(MODEL_REGISTRY.keys())
        raise ValueError(
            f"Unknown population model type: {model_type}. "
            f"Available types: {available_types}"
        )

    return MODEL_REGISTRY[name]()


def register_model(name: str, model_class: Type[PopulationModel]) -> None:
    """
    Register a new population model type.

    Args:
        name: Name to register the model under
        model_class: PopulationModel class to register
    """
    if not issubclass(model_class, PopulationModel):
        raise ValueError("model_class must be a subclass of PopulationModel")

    MODEL_REGISTRY[name] = model_class


def list_available_models() -> Dict[str, Type[PopulationModel]]:
    """
    Get a dictionary of all available model types.

    Returns:
        Dictionary mapping model names to classes
    """
    return MODEL_REGISTRY.copy()
