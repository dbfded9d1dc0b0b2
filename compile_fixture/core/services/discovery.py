"""
Version discovery — find platform-version folders and their archives.

Expects structure::

    workdir/original/
        android-15/
            android.jar
            support-v4.jar
        android-21/
            android.jar
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from compile_fixture.core.models.platform import PlatformVersion

logger = logging.getLogger(__name__)


def is_version_directory(path: Path, pattern: str = r"\d") -> bool:
    """A visible directory whose name matches ``pattern`` and has a digit."""
    if not path.is_dir() or path.name.startswith("."):
        return False
    if not any(ch.isdigit() for ch in path.name):
        return False
    return re.search(pattern, path.name) is not None


def is_archive(path: Path, suffix: str = ".jar") -> bool:
    """A regular file with the archive suffix."""
    return path.is_file() and path.name.endswith(suffix)


def list_archives(directory: Path, suffix: str = ".jar") -> list[Path]:
    """Dependency archives directly inside ``directory``, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted(
        (p.resolve() for p in directory.iterdir() if is_archive(p, suffix)),
        key=lambda p: p.name,
    )


def discover_versions(root: Path, pattern: str = r"\d") -> list[PlatformVersion]:
    """Discover every platform version under ``root``.

    Returns versions sorted by revision, then name. A missing root
    yields an empty list.
    """
    if not root.is_dir():
        logger.debug("Versions directory not found: %s", root)
        return []

    versions = [
        PlatformVersion.from_directory(child)
        for child in root.iterdir()
        if is_version_directory(child, pattern)
    ]
    versions.sort(key=lambda v: (v.revision, v.name))
    logger.info("Discovered %d platform versions: %s", len(versions), [v.name for v in versions])
    return versions
