"""Locate package directories the way `go build` searches its source roots."""

from __future__ import annotations

import os
import re
import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from ..config import GoConfig
from ..errors import LocateError
from ..logging import get_logger

_MODULE_RE = re.compile(r"^\s*module\s+\"?([^\s\"]+)\"?", re.MULTILINE)

logger = get_logger("locator")


class SourceLocator:
    """Maps package identifiers to directories using ordered search roots.

    Roots are tried in order (GOROOT/src, each GOPATH/src, extra roots) and the
    first existing directory wins. The workspace comes next: when its go.mod
    declares module ``M``, identifiers under ``M`` resolve beneath it, and
    anything else is looked up in its vendor directory. When a go binary is
    configured, `go list -f {{.Dir}}` is asked last, which covers packages
    that only live in the module cache.
    """

    def __init__(
        self,
        roots: Iterable[Path],
        workspace: Optional[Path] = None,
        *,
        binary: Optional[str] = None,
        runner: Callable[..., str] | None = None,
    ) -> None:
        self.roots: List[Path] = [Path(root) for root in roots]
        self.workspace = Path(workspace) if workspace is not None else None
        self.binary = binary
        self._runner = runner or _default_runner
        self._module_path: Optional[str] = None
        self._module_loaded = False

    @classmethod
    def from_environment(
        cls,
        config: GoConfig,
        *,
        workspace: Optional[Path] = None,
        runner: Callable[..., str] | None = None,
    ) -> "SourceLocator":
        """Build a locator from config, then environment variables, then `go env`."""
        goroot = config.goroot or _env_path("GOROOT")
        gopath = list(config.gopath) or _env_path_list("GOPATH")

        if goroot is None or not gopath:
            reported = _query_go_env(config.binary, runner or _default_runner)
            if goroot is None and reported.get("GOROOT"):
                goroot = Path(reported["GOROOT"])
            if not gopath and reported.get("GOPATH"):
                gopath = [Path(entry) for entry in reported["GOPATH"].split(os.pathsep) if entry]
        if not gopath:
            gopath = [Path.home() / "go"]

        roots: List[Path] = []
        if goroot is not None:
            roots.append(goroot / "src")
        roots.extend(entry / "src" for entry in gopath)
        roots.extend(config.extra_roots)
        return cls(
            roots,
            workspace=workspace if workspace is not None else Path.cwd(),
            binary=config.binary,
            runner=runner,
        )

    def locate(self, package: str) -> Path:
        """Return the directory holding ``package`` or raise LocateError."""
        if _is_local(package):
            candidate = Path(package)
            if candidate.is_dir():
                return candidate
            raise LocateError(f"cannot find package {package!r}: no such directory")

        for root in self.roots:
            candidate = root / package
            if candidate.is_dir():
                return candidate

        workspace_dir = self._workspace_dir(package) or self._vendor_dir(package)
        if workspace_dir is not None:
            return workspace_dir

        listed_dir = self._listed_dir(package)
        if listed_dir is not None:
            return listed_dir

        searched = ", ".join(str(root / package) for root in self.roots) or "(no roots)"
        raise LocateError(f"cannot find package {package!r} in any of: {searched}")

    def _workspace_dir(self, package: str) -> Optional[Path]:
        if self.workspace is None:
            return None
        module = self._module()
        if not module:
            return None
        if package == module:
            candidate = self.workspace
        elif package.startswith(f"{module}/"):
            candidate = self.workspace / package[len(module) + 1 :]
        else:
            return None
        return candidate if candidate.is_dir() else None

    def _vendor_dir(self, package: str) -> Optional[Path]:
        if self.workspace is None:
            return None
        candidate = self.workspace / "vendor" / package
        return candidate if candidate.is_dir() else None

    def _listed_dir(self, package: str) -> Optional[Path]:
        if not self.binary:
            return None
        args = [self.binary, "list", "-e", "-f", "{{.Dir}}", "--", package]
        try:
            output = self._runner(args, cwd=self.workspace)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("%s list could not locate %s: %s", self.binary, package, exc)
            return None
        lines = [line.strip() for line in output.splitlines() if line.strip()]
        if not lines:
            return None
        candidate = Path(lines[0])
        return candidate if candidate.is_dir() else None

    def _module(self) -> Optional[str]:
        if not self._module_loaded:
            self._module_loaded = True
            self._module_path = _read_module_path(self.workspace / "go.mod") if self.workspace else None
        return self._module_path


def _is_local(package: str) -> bool:
    return os.path.isabs(package) or package in {".", ".."} or package.startswith(("./", "../"))


def _read_module_path(go_mod: Path) -> Optional[str]:
    try:
        text = go_mod.read_text(encoding="utf-8")
    except OSError:
        return None
    match = _MODULE_RE.search(text)
    return match.group(1) if match else None


def _env_path(name: str) -> Optional[Path]:
    value = os.environ.get(name, "").strip()
    return Path(value) if value else None


def _env_path_list(name: str) -> List[Path]:
    value = os.environ.get(name, "")
    return [Path(entry) for entry in value.split(os.pathsep) if entry.strip()]


def _query_go_env(binary: str, runner: Callable[..., str]) -> dict[str, str]:
    names = ["GOROOT", "GOPATH"]
    try:
        output = runner([binary, "env", *names])
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("could not query %s env: %s", binary, exc)
        return {}
    values = [line.strip() for line in output.splitlines()]
    return {name: value for name, value in zip(names, values) if value}


def _default_runner(args: Sequence[str], *, cwd: Optional[Path] = None) -> str:
    completed = subprocess.run(
        list(args),
        cwd=str(cwd) if cwd is not None else None,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout


__all__ = ["SourceLocator"]
