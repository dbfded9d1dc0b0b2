"""
Disposable artifacts — temp files owned by a single invocation.

Compiled test archives live only as long as the test that produced
them. ``disposable_artifact`` guarantees they are removed on every
exit path, including a failed assertion.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


def create_temp_artifact(
    prefix: str,
    suffix: str = ".jar",
    directory: Path | None = None,
) -> Path:
    """Create an empty temp file and return its path.

    The file descriptor is closed immediately; only the name is handed
    to the external tool, which overwrites the file.
    """
    fd, name = tempfile.mkstemp(prefix=f"{prefix}-", suffix=suffix, dir=directory)
    os.close(fd)
    return Path(name)


def delete_artifact(path: Path | None) -> None:
    """Remove an artifact if it exists."""
    if path is None:
        return
    path.unlink(missing_ok=True)
    logger.debug("Deleted artifact %s", path)


@contextmanager
def disposable_artifact(path: Path) -> Iterator[Path]:
    """Take ownership of ``path``: yield it, then delete it however the block exits."""
    try:
        yield path
    finally:
        delete_artifact(path)
