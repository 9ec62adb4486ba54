"""Dynamics module for the two-species population models."""

from .base import PopulationModel
from .factory import create_model, register_model, list_available_models
from . import systems

__all__ = [
    "PopulationModel",
    "create_model",
    "register_model",
    "list_available_models",
    "systems",
]
