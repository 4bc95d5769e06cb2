"""Core data models shared across tagcount components."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Counts:
    """Struct tallies for a file, a package or a whole run."""

    total: int = 0
    tagged: int = 0

    def __add__(self, other: "Counts") -> "Counts":
        if not isinstance(other, Counts):
            return NotImplemented
        return Counts(total=self.total + other.total, tagged=self.tagged + other.tagged)


@dataclass(frozen=True)
class ResolveResult:
    """Packages produced by a resolver plus the error it reported, if any."""

    packages: List[str] = field(default_factory=list)
    error: Optional[str] = None
    diagnostics: str = ""
