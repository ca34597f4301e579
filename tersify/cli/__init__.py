# tersify/cli/__init__.py
"""Command-line inspection tool for tersify."""
from .interface import main_cli_group

__all__ = ["main_cli_group"]
