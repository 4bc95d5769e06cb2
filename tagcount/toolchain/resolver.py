"""Package resolution backed by `go list`."""

from __future__ import annotations

import subprocess
from typing import Callable, List, Optional, Sequence

from .base import PackageResolver
from ..logging import get_logger
from ..models import ResolveResult

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


class GoListResolver(PackageResolver):
    """Expands specifiers with `go list -e` and drops synthetic packages."""

    def __init__(
        self,
        binary: str = "go",
        *,
        timeout: Optional[float] = None,
        runner: Runner | None = None,
    ) -> None:
        self.binary = binary
        self.timeout = timeout
        self._runner = runner or self._default_runner
        self.logger = get_logger("resolver")

    def resolve(self, specifiers: Sequence[str]) -> ResolveResult:
        args = [self.binary, "list", "-e", "--", *specifiers]
        self.logger.debug("Running %s", " ".join(args))

        error: Optional[str] = None
        try:
            completed = self._runner(args, timeout=self.timeout)
        except subprocess.TimeoutExpired as exc:
            stdout = _as_text(exc.stdout)
            stderr = _as_text(exc.stderr)
            error = f"{self.binary} list timed out after {exc.timeout:g}s"
        except OSError as exc:
            return ResolveResult(packages=[], error=f"could not exec {self.binary} list: {exc}")
        else:
            stdout = completed.stdout or ""
            stderr = completed.stderr or ""
            if completed.returncode != 0:
                error = f"{self.binary} list exited with status {completed.returncode}"

        for line in stderr.splitlines():
            if line.strip():
                self.logger.warning("%s", line.rstrip())

        packages = self._parse_packages(stdout)
        self.logger.debug("Resolved %d packages", len(packages))
        return ResolveResult(packages=packages, error=error, diagnostics=stderr)

    @staticmethod
    def _parse_packages(output: str) -> List[str]:
        packages: List[str] = []
        for line in output.splitlines():
            package = line.strip()
            # go list reports directories outside GOPATH and modules as "_/abs/dir".
            if not package or package.startswith("_"):
                continue
            packages.append(package)
        return packages

    @staticmethod
    def _default_runner(
        args: Sequence[str],
        *,
        timeout: Optional[float] = None,
    ) -> "subprocess.CompletedProcess[str]":
        return subprocess.run(
            list(args),
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


__all__ = ["GoListResolver", "Runner"]
