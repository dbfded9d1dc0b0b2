"""
Artifact cache — one compiled archive per platform version.

Populated once during fixture setup and read by every test after it.
Entries are never overwritten; once setup seals the cache it becomes
read-only, so concurrent readers need no coordination. Writes are
serialized by a lock.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

from compile_fixture.core.errors import CacheError
from compile_fixture.core.models.platform import PlatformVersion

logger = logging.getLogger(__name__)


class ArtifactCache:
    """Mapping from version directory to its compiled archive."""

    def __init__(self) -> None:
        self._entries: dict[Path, Path] = {}
        self._versions: dict[Path, PlatformVersion] = {}
        self._lock = threading.Lock()
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(self, version: PlatformVersion, artifact: Path) -> None:
        """Record the compiled archive for ``version``.

        Raises:
            CacheError: If the cache is sealed or the version is cached.
        """
        with self._lock:
            if self._sealed:
                raise CacheError(f"Artifact cache is sealed; cannot add {version.name}")
            if version.directory in self._entries:
                raise CacheError(
                    f"Version {version.name} already cached at {self._entries[version.directory]}"
                )
            self._entries[version.directory] = Path(artifact)
            self._versions[version.directory] = version
        logger.debug("Cached %s → %s", version.name, artifact)

    def get(self, version: PlatformVersion) -> Path | None:
        """Look up the archive for a version."""
        return self._entries.get(version.directory)

    def require(self, version: PlatformVersion) -> Path:
        """Look up the archive for a version that must already be compiled."""
        artifact = self._entries.get(version.directory)
        if artifact is None:
            raise CacheError(f"No compiled artifact for version {version.name}")
        return artifact

    def seal(self) -> None:
        """Make the cache read-only for the rest of its lifetime."""
        with self._lock:
            self._sealed = True

    def versions(self) -> list[PlatformVersion]:
        return list(self._versions.values())

    def clear(self, delete_files: bool = False) -> None:
        """Drop every entry and unseal; optionally delete the archives."""
        with self._lock:
            if delete_files:
                for artifact in self._entries.values():
                    artifact.unlink(missing_ok=True)
            self._entries.clear()
            self._versions.clear()
            self._sealed = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "sealed": self._sealed,
            "entries": {
                v.name: str(self._entries[d]) for d, v in self._versions.items()
            },
        }

    def __contains__(self, version: object) -> bool:
        if not isinstance(version, PlatformVersion):
            return False
        return version.directory in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
