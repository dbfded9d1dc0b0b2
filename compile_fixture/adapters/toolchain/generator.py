"""
Binding generator adapter — produce version-specific source files.

The generator itself is an external collaborator. The fixture only
needs to hand it a request (revision, version name, dependency
archives, excluded files) and get back the paths of the temporary
sources it wrote.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from compile_fixture.adapters.shell.process import ProcessRunner
from compile_fixture.core.errors import GenerationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    """What to generate bindings for."""

    revision: int
    version: str
    archives: tuple[Path, ...]
    excluded_files: frozenset[str] = frozenset()


@dataclass
class GeneratedSources:
    """Temporary source files written by a generator run.

    The owner must call ``cleanup`` once the sources are compiled.
    """

    files: list[Path] = field(default_factory=list)
    workdir: Path | None = None

    def cleanup(self) -> None:
        """Delete every generated file (and the scratch directory, if any)."""
        for path in self.files:
            path.unlink(missing_ok=True)
        if self.workdir is not None:
            shutil.rmtree(self.workdir, ignore_errors=True)


class BindingGenerator(ABC):
    """Abstract binding generator."""

    @abstractmethod
    def generate(self, request: GenerationRequest) -> GeneratedSources:
        """Write the source files for ``request`` and return their paths."""


class CommandBindingGenerator(BindingGenerator):
    """Run an external generator executable.

    The command is invoked as::

        <command...> --revision N --version V --output DIR
                     [--exclude NAME]... ARCHIVE...

    and every file it leaves under DIR is part of the source set.
    """

    def __init__(
        self,
        command: Sequence[str],
        runner: ProcessRunner | None = None,
        temp_dir: Path | None = None,
    ):
        if not command:
            raise ValueError("Generator command must not be empty")
        self.command = list(command)
        self.runner = runner or ProcessRunner()
        self.temp_dir = temp_dir

    def build_args(self, request: GenerationRequest, output: Path) -> list[str]:
        args = [
            *self.command,
            "--revision", str(request.revision),
            "--version", request.version,
            "--output", str(output),
        ]
        for name in sorted(request.excluded_files):
            args.extend(["--exclude", name])
        args.extend(str(a) for a in request.archives)
        return args

    def generate(self, request: GenerationRequest) -> GeneratedSources:
        workdir = Path(tempfile.mkdtemp(prefix=f"gen-{request.version}-", dir=self.temp_dir))
        result = self.runner.run(self.build_args(request, workdir))
        if result.exit_code != 0:
            shutil.rmtree(workdir, ignore_errors=True)
            raise GenerationError(
                f"Binding generator failed for {request.version} "
                f"(exit code {result.exit_code}):\n{result.output}"
            )

        files = sorted(p for p in workdir.rglob("*") if p.is_file())
        logger.debug("Generator wrote %d files for %s", len(files), request.version)
        return GeneratedSources(files=files, workdir=workdir)
