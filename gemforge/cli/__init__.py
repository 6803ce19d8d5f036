"""Command-line interface for GemForge."""
from .main import cli

__all__ = ["cli"]
