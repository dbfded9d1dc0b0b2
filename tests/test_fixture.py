"""
End-to-end tests for the compile fixture lifecycle.

Runs the real process runner against the fake compiler and launcher
scripts from conftest.py.
"""

import sys
from pathlib import Path

import pytest

from compile_fixture.adapters.mock import ScriptedRunner
from compile_fixture.adapters.toolchain.runtime import RuntimeEmulatorAdapter
from compile_fixture.core.engine.cache import ArtifactCache
from compile_fixture.core.errors import CacheError, CompilationError, PreconditionError
from compile_fixture.core.use_cases.fixture import CompileFixture, default_registry

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")


@pytest.fixture
def fixture(fixture_config, generator) -> CompileFixture:
    return CompileFixture(fixture_config, generator=generator)


@pytest.fixture
def ready(fixture) -> CompileFixture:
    fixture.setup()
    return fixture


# ── Setup ────────────────────────────────────────────────────────────


class TestSetup:
    def test_one_entry_per_version(self, ready):
        assert [v.name for v in ready.versions] == ["android-15", "android-21"]
        assert len(ready.cache) == 2
        for version in ready.versions:
            assert ready.cache.require(version).is_file()

    def test_cache_sealed_after_setup(self, ready):
        assert ready.cache.sealed

    def test_version_archive_built_from_version_classpath(self, ready):
        artifact = ready.cache.require(ready.version("android-15"))
        classpath = artifact.read_text().strip()
        assert classpath.endswith("support-v4.jar")
        assert "android-15" in classpath

    def test_excluded_file_not_compiled(self, ready, generator):
        # InterfaceWorkarounds.kt contains a syntax error; compiling it would fail setup
        assert all(
            "InterfaceWorkarounds.kt" not in {p.name for p in out.files}
            for out in generator.outputs
        )

    def test_generated_sources_removed(self, ready, generator):
        for out in generator.outputs:
            assert not any(p.exists() for p in out.files)

    def test_idempotent(self, ready, generator):
        before = ready.cache.to_dict()
        ready.setup()
        assert len(generator.requests) == 2
        assert ready.cache.to_dict() == before

    def test_shared_cache_short_circuits(self, fixture_config, generator, ready):
        other = CompileFixture(fixture_config, cache=ready.cache, generator=generator)
        other.setup()
        assert len(generator.requests) == 2

    def test_unsealed_cache_is_topped_up(self, fixture_config, generator, fixture):
        cache = ArtifactCache()
        first = fixture.version("android-15")
        cache.register(first, fixture_config.temp_path() / "lib-android-15.jar")
        CompileFixture(fixture_config, cache=cache, generator=generator).setup()
        assert [r.version for r in generator.requests] == ["android-21"]
        assert cache.sealed and len(cache) == 2

    def test_missing_compiler(self, fixture_config, generator, fixture_root):
        (fixture_root / "lib" / "Kotlin" / "kotlinc" / "bin" / "kotlinc-jvm").unlink()
        fixture = CompileFixture(fixture_config, generator=generator)
        with pytest.raises(PreconditionError, match="Compiler not found"):
            fixture.setup()
        assert generator.requests == []

    def test_one_bad_version_fails_setup(self, fixture_config, binding_sources, fixture_root):
        from compile_fixture.adapters.mock import StaticBindingGenerator

        broken = dict(binding_sources, **{"Broken.kt": "SYNTAX_ERROR\n"})
        fixture = CompileFixture(
            fixture_config,
            generator=StaticBindingGenerator(broken, temp_dir=fixture_root / "tmp"),
        )
        with pytest.raises(CompilationError) as exc_info:
            fixture.setup()
        assert exc_info.value.result.diagnostics.startswith("ERROR:")
        assert exc_info.value.result.exit_code == 1
        assert not fixture.cache.sealed

    def test_no_generator_configured(self, fixture_config):
        fixture = CompileFixture(fixture_config)
        with pytest.raises(PreconditionError, match="generator"):
            fixture.setup()

    def test_teardown_deletes_archives(self, ready):
        artifacts = [ready.cache.require(v) for v in ready.versions]
        ready.teardown()
        assert len(ready.cache) == 0
        assert not any(a.exists() for a in artifacts)

    def test_teardown_then_setup_recompiles(self, ready, generator):
        ready.teardown()
        ready.setup()
        assert len(generator.requests) == 4
        assert len(ready.cache) == 2


# ── Compile Tests ────────────────────────────────────────────────────


class TestRunCompileTest:
    def test_valid_source(self, ready, fixture_root, temp_dir):
        ready.run_compile_test(fixture_root / "testData" / "valid.kt", "android-21")
        assert list(temp_dir.glob("compile-*")) == []

    def test_malformed_source(self, ready, fixture_root, temp_dir):
        with pytest.raises(CompilationError) as exc_info:
            ready.run_compile_test(fixture_root / "testData" / "broken.kt", "android-15")
        result = exc_info.value.result
        assert "Expecting a top level declaration" in result.diagnostics
        assert result.exit_code != 0
        assert isinstance(exc_info.value, AssertionError)
        assert list(temp_dir.glob("compile-*")) == []

    def test_informational_stderr_is_not_a_failure(self, ready, fixture_root):
        # the fake compiler prints a "warning:" line on stderr after a clean compile
        ready.run_compile_test(fixture_root / "testData" / "valid.kt", "android-15")

    def test_missing_source(self, ready, fixture_root):
        with pytest.raises(PreconditionError):
            ready.run_compile_test(fixture_root / "testData" / "absent.kt", "android-15")

    def test_unknown_version(self, ready, fixture_root):
        with pytest.raises(KeyError):
            ready.run_compile_test(fixture_root / "testData" / "valid.kt", "android-99")

    def test_before_setup(self, fixture, fixture_root):
        with pytest.raises(CacheError, match="setup"):
            fixture.run_compile_test(fixture_root / "testData" / "valid.kt", "android-15")


# ── Emulated Runs ────────────────────────────────────────────────────


class TestRunEmulatedTest:
    def test_passes(self, ready, fixture_root, temp_dir):
        ready.run_emulated_test(fixture_root / "testData" / "valid.kt", "android-21")
        assert list(temp_dir.glob("compile-*")) == []

    def test_malformed_source(self, ready, fixture_root):
        with pytest.raises(CompilationError):
            ready.run_emulated_test(fixture_root / "testData" / "broken.kt", "android-21")


# ── Injected Registry ────────────────────────────────────────────────


class TestInjectedRegistry:
    def test_scripted_runner_registry(self, fixture_config, generator, fixture_root):
        runner = ScriptedRunner()
        registry = default_registry(fixture_config, runner)
        fixture = CompileFixture(fixture_config, cache=ArtifactCache(), registry=registry, generator=generator)
        fixture.setup()
        fixture.run_emulated_test(fixture_root / "testData" / "valid.kt", "android-15")
        assert runner.call_count == 4
        assert runner.calls[-1][0][0] == fixture_config.runtime.launcher

    def test_wrong_adapter_kind(self, fixture_config, generator):
        class MisnamedLauncher(RuntimeEmulatorAdapter):
            @property
            def name(self) -> str:
                return "compiler"

        registry = default_registry(fixture_config)
        registry.register(MisnamedLauncher())
        fixture = CompileFixture(fixture_config, registry=registry, generator=generator)
        with pytest.raises(TypeError, match="expected CompilerAdapter"):
            fixture.setup()

    def test_missing_adapter(self, fixture_config, generator):
        registry = default_registry(fixture_config)
        registry.unregister("runtime")
        fixture = CompileFixture(fixture_config, registry=registry, generator=generator)
        with pytest.raises(KeyError, match="runtime"):
            fixture.runtime

    def test_registry_lists_tools(self, fixture_config):
        registry = default_registry(fixture_config)
        assert sorted(registry.list_adapters()) == ["compiler", "runtime"]
        status = registry.adapter_status()
        assert status["compiler"]["available"] is True
        assert status["runtime"]["available"] is True

    def test_version_lookup(self, fixture, fixture_root):
        version = fixture.version("android-21")
        assert version.revision == 21
        assert version.directory == (fixture_root / "workdir" / "original" / "android-21").resolve()
