"""
Compile fixture — the lifecycle a test harness drives.

    setup()                          once: compile every version into the cache
    run_compile_test(src, version)   per test
    run_emulated_test(src, version)  per test
    teardown()                       once: drop the cache

The cache is owned by the fixture and may be injected, so several
fixtures (or test sessions) can share one populated cache or keep
isolated ones.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeVar

from compile_fixture.adapters.base import ToolAdapter
from compile_fixture.adapters.registry import AdapterRegistry
from compile_fixture.adapters.shell.process import ProcessRunner
from compile_fixture.adapters.toolchain.compiler import CompilerAdapter
from compile_fixture.adapters.toolchain.generator import BindingGenerator, CommandBindingGenerator
from compile_fixture.adapters.toolchain.runtime import RuntimeEmulatorAdapter
from compile_fixture.core.engine.cache import ArtifactCache
from compile_fixture.core.engine.executor import TestExecutor
from compile_fixture.core.engine.test_compiler import TestCompiler
from compile_fixture.core.engine.version_compiler import VersionCompiler
from compile_fixture.core.errors import CacheError, PreconditionError
from compile_fixture.core.models.fixture import FixtureConfig
from compile_fixture.core.models.platform import PlatformVersion
from compile_fixture.core.services.discovery import discover_versions

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ToolAdapter)


def default_registry(config: FixtureConfig, runner: ProcessRunner | None = None) -> AdapterRegistry:
    """Registry with the configured compiler and runtime launcher."""
    runner = runner or ProcessRunner(config.compiler.diagnostic_marker)
    registry = AdapterRegistry()
    registry.register(CompilerAdapter(config.compiler_path(), runner))
    registry.register(RuntimeEmulatorAdapter(
        launcher=config.runtime.launcher,
        runner_class=config.runtime.runner_class,
        runner=runner,
    ))
    return registry


class CompileFixture:
    """Compile bindings per platform version, then compile and run tests."""

    def __init__(
        self,
        config: FixtureConfig,
        cache: ArtifactCache | None = None,
        registry: AdapterRegistry | None = None,
        generator: BindingGenerator | None = None,
    ):
        self.config = config
        self.cache = cache if cache is not None else ArtifactCache()
        self.registry = registry if registry is not None else default_registry(config)
        self._generator = generator
        self._versions: list[PlatformVersion] | None = None

    # ── Collaborators ───────────────────────────────────────────

    def _tool(self, name: str, kind: type[T]) -> T:
        adapter = self.registry.require(name)
        if not isinstance(adapter, kind):
            raise TypeError(
                f"Adapter '{name}' is {type(adapter).__name__}, expected {kind.__name__}"
            )
        return adapter

    @property
    def compiler(self) -> CompilerAdapter:
        return self._tool("compiler", CompilerAdapter)

    @property
    def runtime(self) -> RuntimeEmulatorAdapter:
        return self._tool("runtime", RuntimeEmulatorAdapter)

    @property
    def generator(self) -> BindingGenerator:
        if self._generator is None:
            command = self.config.generator.command
            if not command:
                raise PreconditionError("No binding generator configured (generator.command)")
            self._generator = CommandBindingGenerator(
                command,
                runner=ProcessRunner(self.config.compiler.diagnostic_marker),
                temp_dir=self.config.temp_path(),
            )
        return self._generator

    @property
    def versions(self) -> list[PlatformVersion]:
        """Platform versions found under the versions directory (scanned once)."""
        if self._versions is None:
            self._versions = discover_versions(
                self.config.versions_path(),
                self.config.version_pattern,
            )
        return self._versions

    def version(self, name: str) -> PlatformVersion:
        """Look up a discovered version by directory name."""
        for version in self.versions:
            if version.name == name:
                return version
        raise KeyError(f"Unknown platform version: {name}")

    # ── Lifecycle ───────────────────────────────────────────────

    def setup(self) -> ArtifactCache:
        """Compile every version into the cache. Idempotent.

        Raises:
            PreconditionError: If the compiler executable is missing.
            CompilationError: If any version fails to compile.
        """
        compiler = self.compiler
        if not compiler.is_available():
            raise PreconditionError(f"Compiler not found: {compiler.executable}")

        if self.cache.sealed:
            logger.debug("Artifact cache already sealed (%d entries)", len(self.cache))
        else:
            version_compiler = VersionCompiler(
                compiler=compiler,
                generator=self.generator,
                cache=self.cache,
                archive_suffix=self.config.archive_suffix,
                excluded_files=self.config.generator.excluded_files,
                temp_dir=self.config.temp_path(),
            )
            version_compiler.compile_all(self.versions)
            logger.info("Compiled %d platform versions", len(self.cache))

        self.cache.seal()
        return self.cache

    def teardown(self, delete_artifacts: bool = True) -> None:
        """Release the cache; the next setup recompiles from scratch."""
        self.cache.clear(delete_files=delete_artifacts)

    # ── Tests ───────────────────────────────────────────────────

    def _executor(self) -> TestExecutor:
        if not self.cache.sealed:
            raise CacheError("Fixture setup has not completed")
        test_compiler = TestCompiler(
            compiler=self.compiler,
            cache=self.cache,
            archive_suffix=self.config.archive_suffix,
            temp_dir=self.config.temp_path(),
        )
        return TestExecutor(test_compiler, self.runtime, self.cache, self.config)

    def _resolve(self, version: PlatformVersion | str) -> PlatformVersion:
        return self.version(version) if isinstance(version, str) else version

    def run_compile_test(self, source: Path, version: PlatformVersion | str) -> None:
        """Assert that ``source`` compiles against ``version``."""
        self._executor().run_compile_test(Path(source), self._resolve(version))

    def run_emulated_test(self, source: Path, version: PlatformVersion | str) -> None:
        """Assert that ``source`` compiles and runs cleanly under the harness."""
        self._executor().run_emulated_test(Path(source), self._resolve(version))
