"""Adapters around the Go toolchain: package resolution and source lookup."""

from .base import PackageResolver
from .locator import SourceLocator
from .resolver import GoListResolver

__all__ = ["GoListResolver", "PackageResolver", "SourceLocator"]
