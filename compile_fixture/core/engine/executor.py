"""
Test executor — the two test-level entry points.

    compile check:  compile → delete
    emulated run:   compile (+ test-support archives) → launch harness → delete

Each call is independent and stateless apart from reading the
artifact cache.
"""

from __future__ import annotations

import logging
from pathlib import Path

from compile_fixture.adapters.toolchain.runtime import RuntimeEmulatorAdapter
from compile_fixture.core.engine.cache import ArtifactCache
from compile_fixture.core.engine.classpath import ClasspathSpec
from compile_fixture.core.engine.test_compiler import TestCompiler, require_source
from compile_fixture.core.errors import PreconditionError, RuntimeTestError
from compile_fixture.core.models.fixture import FixtureConfig
from compile_fixture.core.models.platform import PlatformVersion
from compile_fixture.core.services.tempfiles import disposable_artifact

logger = logging.getLogger(__name__)


def runtime_properties(config: FixtureConfig) -> dict[str, str]:
    """System properties handed to the emulated-runtime launcher."""
    runtime = config.runtime
    props = dict(runtime.extra_properties)
    props.update({
        "robolectric.offline": "true",
        "robolectric.dependency.dir": str(config.lib_path()),
        "android.manifest": str(config.resolve(runtime.manifest)),
        "android.resources": str(config.resolve(runtime.resources)),
        "android.assets": str(config.resolve(runtime.assets)),
    })
    return props


def require_lib_dir(config: FixtureConfig) -> Path:
    """Fail unless the support archive directory exists."""
    lib_dir = config.lib_path()
    if not lib_dir.is_dir():
        raise PreconditionError(f"Support archive directory not found: {lib_dir}")
    return lib_dir


class TestExecutor:
    """Run compile checks and emulated-runtime tests."""

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        test_compiler: TestCompiler,
        runtime: RuntimeEmulatorAdapter,
        cache: ArtifactCache,
        config: FixtureConfig,
    ):
        self.test_compiler = test_compiler
        self.runtime = runtime
        self.cache = cache
        self.config = config

    def test_support_archives(self) -> list[Path]:
        return [self.config.lib_file(n) for n in self.config.runtime.test_support_archives]

    def runtime_classpath(self, version: PlatformVersion, test_artifact: Path) -> ClasspathSpec:
        """Cached version artifact, test artifact, runtime support, test support, extras."""
        runtime = self.config.runtime
        spec = ClasspathSpec()
        spec.add(self.cache.require(version), Path(test_artifact).absolute())
        spec.add(self.config.lib_file(runtime.runtime_archive))
        spec.extend(self.test_support_archives())
        spec.extend(self.config.lib_file(n) for n in runtime.runtime_archives)
        return spec

    def run_compile_test(self, source: Path, version: PlatformVersion) -> None:
        """Check that ``source`` compiles; the archive is discarded."""
        require_source(source)
        artifact = self.test_compiler.compile(source, version)
        with disposable_artifact(artifact):
            logger.debug("%s compiles against %s", source.name, version.name)

    def run_emulated_test(self, source: Path, version: PlatformVersion) -> None:
        """Compile ``source`` and run the test class under the harness.

        Raises:
            PreconditionError: If the source or the support archive directory is missing.
            RuntimeTestError: If the run wrote anything to its diagnostic stream.
        """
        require_source(source)
        require_lib_dir(self.config)
        compiled = self.test_compiler.compile(source, version, self.test_support_archives())
        with disposable_artifact(compiled) as artifact:
            classpath = self.runtime_classpath(version, artifact).join()
            result = self.runtime.run_test(
                classpath,
                runtime_properties(self.config),
                self.config.runtime.test_class,
            )

        if result.diagnostics:
            raise RuntimeTestError(result, context=f"{source.name} on {version.name}")
        logger.info(
            "Emulated run of %s on %s passed (exit code %d)",
            source.name, version.name, result.exit_code,
        )
