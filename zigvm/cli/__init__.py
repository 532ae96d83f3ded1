"""
zigvm CLI module.

This module provides the command-line interface for zigvm.
"""

from .parser import CLI, main
from . import utils

__all__ = ["CLI", "main", "utils"]
