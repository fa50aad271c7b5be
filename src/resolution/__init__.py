"""Dependency coordinate resolution and library lookup."""

from .coordinates import DependencyCoordinate, parse_coordinate, resolve_path
from .locator import first_match, locate

__all__ = [
    "DependencyCoordinate",
    "parse_coordinate",
    "resolve_path",
    "first_match",
    "locate",
]
