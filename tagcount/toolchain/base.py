"""Base classes for package resolvers."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..models import ResolveResult


class PackageResolver(ABC):
    """Contract for turning package specifiers into package identifiers."""

    @abstractmethod
    def resolve(self, specifiers: Sequence[str]) -> ResolveResult:
        """Resolve specifiers, keeping partial results when some of them fail."""
