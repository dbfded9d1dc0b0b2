"""
Fixture model — where the toolchain, version archives and test
resources live.

Loaded from fixture.yml. Every path is relative to the directory that
holds the config file unless it is absolute.
"""

from __future__ import annotations

import platform
from pathlib import Path

from pydantic import BaseModel, Field


class CompilerConfig(BaseModel):
    """The external compiler and how its diagnostics look."""

    path: str = "lib/Kotlin/kotlinc/bin/kotlinc-jvm"
    windows_suffix: str = ".bat"
    diagnostic_marker: str = "ERROR"


class GeneratorConfig(BaseModel):
    """The external binding generator.

    ``excluded_files`` are left out of the generated source set when a
    version is compiled. The interface-workarounds file is excluded by
    default: it is generated for consumers, never compiled here.
    """

    command: list[str] = Field(default_factory=list)
    excluded_files: list[str] = Field(
        default_factory=lambda: ["InterfaceWorkarounds.kt"]
    )


class RuntimeConfig(BaseModel):
    """The emulated-runtime harness and its fixed support files."""

    launcher: str = "java"
    lib_dir: str = "lib"
    runtime_archive: str = "Kotlin/kotlinc/lib/kotlin-runtime.jar"
    test_support_archives: list[str] = Field(
        default_factory=lambda: [
            "junit-4.11.jar",
            "robolectric-with-dependencies.jar",
        ]
    )
    runtime_archives: list[str] = Field(
        default_factory=lambda: [
            "hamcrest-all-1.3.jar",
            "android-all-4.1.2_r1-robolectric-0.jar",
        ]
    )
    manifest: str = "dsl/testData/robolectric/AndroidManifest.xml"
    resources: str = "dsl/testData/robolectric/res"
    assets: str = "dsl/testData/robolectric/assets"
    runner_class: str = "org.junit.runner.JUnitCore"
    test_class: str = "test.RobolectricTest"
    extra_properties: dict[str, str] = Field(
        default_factory=lambda: {"apple.awt.UIElement": "true"}
    )


class FixtureConfig(BaseModel):
    """Root fixture configuration — loaded from fixture.yml."""

    version: int = 1

    root: Path = Field(default_factory=Path.cwd)
    versions_dir: str = "workdir/original"
    version_pattern: str = r"\d"
    archive_suffix: str = ".jar"
    temp_dir: str | None = None

    compiler: CompilerConfig = Field(default_factory=CompilerConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)

    def resolve(self, path: str | Path) -> Path:
        """Resolve a configured path against the fixture root."""
        p = Path(path)
        if not p.is_absolute():
            p = self.root / p
        return p.resolve()

    def compiler_path(self) -> Path:
        """Absolute compiler path, with the Windows launcher suffix if needed."""
        raw = self.compiler.path
        if platform.system() == "Windows" and not raw.endswith(self.compiler.windows_suffix):
            raw += self.compiler.windows_suffix
        return self.resolve(raw)

    def versions_path(self) -> Path:
        return self.resolve(self.versions_dir)

    def lib_path(self) -> Path:
        return self.resolve(self.runtime.lib_dir)

    def lib_file(self, name: str) -> Path:
        """A support archive inside the runtime library directory."""
        return (self.lib_path() / name).resolve()

    def temp_path(self) -> Path | None:
        return self.resolve(self.temp_dir) if self.temp_dir else None
