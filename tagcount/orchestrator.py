"""Coordinate resolution, enumeration and counting for a tagcount run."""

from __future__ import annotations

from typing import Optional, Sequence

from .analyzers.structs import StructCounter
from .config import TagCountConfig
from .errors import LocateError, ResolutionError
from .files import list_source_files
from .logging import get_logger
from .models import Counts
from .toolchain.base import PackageResolver
from .toolchain.locator import SourceLocator
from .toolchain.resolver import GoListResolver


class Orchestrator:
    """Runs the resolve → enumerate → count pipeline and folds the totals."""

    def __init__(
        self,
        resolver: PackageResolver,
        locator: SourceLocator,
        counter: Optional[StructCounter] = None,
    ) -> None:
        self.resolver = resolver
        self.locator = locator
        self.counter = counter or StructCounter()
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_config(cls, config: TagCountConfig) -> "Orchestrator":
        resolver = GoListResolver(config.go.binary, timeout=config.go.timeout)
        locator = SourceLocator.from_environment(config.go)
        return cls(resolver, locator)

    def run(self, specifiers: Sequence[str]) -> Counts:
        result = self.resolver.resolve(specifiers)
        self.logger.info(
            "Counting structs in %d packages resolved from %d specifiers",
            len(result.packages),
            len(specifiers),
        )
        if result.error:
            if not result.packages:
                raise ResolutionError(result.error)
            self.logger.warning("%s", result.error)

        totals = Counts()
        for package in result.packages:
            totals += self.count_package(package)
        self.logger.info(
            "Counted %d packages: %d structs, %d tagged",
            len(result.packages),
            totals.total,
            totals.tagged,
        )
        return totals

    def count_package(self, package: str) -> Counts:
        try:
            files = list_source_files(package, self.locator)
        except LocateError as exc:
            self.logger.warning("%s", exc)
            return Counts()

        counts = Counts()
        for path in files:
            if path is None:
                continue
            counts += self.counter.count(path)
        self.logger.debug("%s: %d structs, %d tagged", package, counts.total, counts.tagged)
        return counts


__all__ = ["Orchestrator"]
