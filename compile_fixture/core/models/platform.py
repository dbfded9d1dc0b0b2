"""
Platform version model — one target-platform release on disk.

Discovered once at startup from a directory of version folders
(``android-19``, ``android-21``, ...). Each folder holds the
dependency archives bindings for that release are compiled against.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict

_NON_DIGITS = re.compile(r"[^0-9]")


def parse_revision(name: str) -> int:
    """Extract the integer revision from a version name.

    Every non-digit character is dropped: ``android-21`` → 21.

    Raises:
        ValueError: If the name contains no digits.
    """
    digits = _NON_DIGITS.sub("", name)
    if not digits:
        raise ValueError(f"No revision number in version name: {name!r}")
    return int(digits)


class PlatformVersion(BaseModel):
    """A target-platform release and its dependency directory."""

    model_config = ConfigDict(frozen=True)

    name: str
    revision: int
    directory: Path

    @classmethod
    def from_directory(cls, directory: Path) -> PlatformVersion:
        """Build a version from its directory; the name is the folder name."""
        resolved = Path(directory).resolve()
        return cls(
            name=resolved.name,
            revision=parse_revision(resolved.name),
            directory=resolved,
        )

    def __str__(self) -> str:
        return self.name
