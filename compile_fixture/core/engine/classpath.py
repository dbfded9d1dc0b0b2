"""
Classpath assembly.

A classpath is an ordered list of archive paths joined with the
platform path separator (``:`` on POSIX, ``;`` on Windows).
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ClasspathSpec:
    """Ordered archive list for one compiler or runtime invocation."""

    entries: list[Path] = field(default_factory=list)
    separator: str = os.pathsep

    def add(self, *paths: Path) -> ClasspathSpec:
        self.entries.extend(Path(p) for p in paths)
        return self

    def extend(self, paths: Iterable[Path]) -> ClasspathSpec:
        self.entries.extend(Path(p) for p in paths)
        return self

    def join(self) -> str:
        """The separator-joined classpath string."""
        return join_classpath(self.entries, self.separator)

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        return self.join()


def join_classpath(paths: Iterable[Path | str], separator: str = os.pathsep) -> str:
    """Join paths in order with the path separator."""
    return separator.join(str(p) for p in paths)
