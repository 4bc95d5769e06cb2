"""Source file enumeration for located Go packages."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .errors import LocateError
from .toolchain.locator import SourceLocator

SOURCE_SUFFIX = ".go"
_EXCLUDED_PREFIXES = (".", "_")


def list_source_files(package: str, locator: SourceLocator) -> List[Optional[Path]]:
    """Return the package's source files in name order.

    Files whose base name starts with ``.`` or ``_`` are kept as ``None`` so
    positions line up with the directory listing; callers skip them.
    Raises LocateError when the package directory cannot be found or read.
    """
    directory = locator.locate(package)
    try:
        matches = sorted(
            path for path in directory.iterdir() if path.suffix == SOURCE_SUFFIX and path.is_file()
        )
    except OSError as exc:
        raise LocateError(f"cannot read package {package!r} directory {directory}: {exc}") from exc
    return [None if is_excluded(path) else path for path in matches]


def is_excluded(path: Path) -> bool:
    return path.name.startswith(_EXCLUDED_PREFIXES)


__all__ = ["SOURCE_SUFFIX", "is_excluded", "list_source_files"]
