"""Syntax-tree analyzers for Go source files."""

from .structs import StructCounter, walk

__all__ = ["StructCounter", "walk"]
