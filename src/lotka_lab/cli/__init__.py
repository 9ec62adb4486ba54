"""Command-line interface for lotka-lab."""

from .main import app

__all__ = ["app"]
