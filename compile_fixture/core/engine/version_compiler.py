"""
Version compiler — turn one platform version into a cached archive.

Flow:
    list archives → generate bindings → compile → delete sources → cache

A version that fails to compile aborts the caller: every test depends
on a fully populated cache, so partial success is never reported.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from compile_fixture.adapters.toolchain.compiler import CompilerAdapter
from compile_fixture.adapters.toolchain.generator import BindingGenerator, GenerationRequest
from compile_fixture.core.engine.cache import ArtifactCache
from compile_fixture.core.engine.classpath import ClasspathSpec
from compile_fixture.core.errors import CompilationError, GenerationError
from compile_fixture.core.models.platform import PlatformVersion
from compile_fixture.core.services.discovery import list_archives
from compile_fixture.core.services.tempfiles import create_temp_artifact, delete_artifact

logger = logging.getLogger(__name__)


class VersionCompiler:
    """Compile generated bindings for platform versions into the cache."""

    def __init__(
        self,
        compiler: CompilerAdapter,
        generator: BindingGenerator,
        cache: ArtifactCache,
        archive_suffix: str = ".jar",
        excluded_files: Iterable[str] = (),
        temp_dir: Path | None = None,
    ):
        self.compiler = compiler
        self.generator = generator
        self.cache = cache
        self.archive_suffix = archive_suffix
        self.excluded_files = frozenset(excluded_files)
        self.temp_dir = temp_dir

    def compile(self, version: PlatformVersion) -> Path:
        """Compile one version and register its archive.

        Returns:
            Path to the cached archive.

        Raises:
            GenerationError: If the generator produced no sources.
            CompilationError: On diagnostics or a non-zero exit code.
        """
        archives = list_archives(version.directory, self.archive_suffix)
        classpath = ClasspathSpec().extend(archives).join()

        request = GenerationRequest(
            revision=version.revision,
            version=version.name,
            archives=tuple(archives),
            excluded_files=self.excluded_files,
        )
        generated = self.generator.generate(request)

        output: Path | None = None
        try:
            sources = [f for f in generated.files if f.name not in self.excluded_files]
            if not sources:
                raise GenerationError(f"No sources generated for version {version.name}")
            logger.info("Compiling %s: %d sources, %d archives", version.name, len(sources), len(archives))

            output = create_temp_artifact(f"lib-{version.name}", self.archive_suffix, self.temp_dir)
            result = self.compiler.compile(output, classpath, sources)
        except BaseException:
            delete_artifact(output)
            raise
        finally:
            generated.cleanup()

        if not result.ok:
            delete_artifact(output)
            raise CompilationError(result, context=version.name)

        self.cache.register(version, output)
        return output

    def compile_all(self, versions: Iterable[PlatformVersion]) -> list[Path]:
        """Compile every version that is not cached yet, in order."""
        compiled = []
        for version in versions:
            if version in self.cache:
                logger.debug("Version %s already cached, skipping", version.name)
                continue
            compiled.append(self.compile(version))
        return compiled
