"""
Shared test fixtures and configuration.

The external toolchain is simulated with small POSIX shell scripts:

    fake compiler   writes its classpath into the -d archive; sources
                    containing SYNTAX_ERROR produce an "ERROR:" line on
                    stderr and exit code 1
    fake launcher   prints its arguments and a JUnit-style summary
"""

import stat
from pathlib import Path

import pytest

from compile_fixture.adapters.mock import StaticBindingGenerator
from compile_fixture.core.models.fixture import (
    CompilerConfig,
    FixtureConfig,
    RuntimeConfig,
)

FAKE_COMPILER = """\
#!/bin/sh
out=""
cp=""
while [ $# -gt 0 ]; do
  case "$1" in
    -d) out="$2"; shift 2 ;;
    -classpath) cp="$2"; shift 2 ;;
    *) break ;;
  esac
done
status=0
for src in "$@"; do
  echo "compiling $src"
  if grep -q "SYNTAX_ERROR" "$src"; then
    echo "ERROR: $src: (1, 1) Expecting a top level declaration" >&2
    status=1
  fi
done
if [ $status -eq 0 ]; then
  printf '%s\\n' "$cp" > "$out"
  echo "warning: classpath entry is a directory" >&2
fi
exit $status
"""

FAKE_LAUNCHER = """\
#!/bin/sh
for arg in "$@"; do
  echo "arg: $arg"
done
echo "OK (1 test)"
"""

BINDING_SOURCES = {
    "Layouts.kt": "package kotlinx.android.anko\n\nfun layouts() = Unit\n",
    "Views.kt": "package kotlinx.android.anko\n\nfun views() = Unit\n",
    "InterfaceWorkarounds.kt": "package kotlinx.android.anko\n\nSYNTAX_ERROR\n",
}

def _write_script(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fixture_root(tmp_path: Path) -> Path:
    """A fixture tree with two platform versions and fake tools.

    Layout::

        lib/Kotlin/kotlinc/bin/kotlinc-jvm   fake compiler
        lib/Kotlin/kotlinc/lib/kotlin-runtime.jar
        lib/*.jar                            support archives
        lib/fake-java                        fake launcher
        workdir/original/android-15/         android.jar, support-v4.jar
        workdir/original/android-21/         android.jar
        workdir/original/docs/               not a version
        testData/                            test sources
    """
    root = tmp_path / "fixture"
    lib = root / "lib"
    _write_script(lib / "Kotlin" / "kotlinc" / "bin" / "kotlinc-jvm", FAKE_COMPILER)
    _write_script(lib / "fake-java", FAKE_LAUNCHER)

    (lib / "Kotlin" / "kotlinc" / "lib").mkdir(parents=True)
    (lib / "Kotlin" / "kotlinc" / "lib" / "kotlin-runtime.jar").touch()
    for name in (
        "junit-4.11.jar",
        "robolectric-with-dependencies.jar",
        "hamcrest-all-1.3.jar",
        "android-all-4.1.2_r1-robolectric-0.jar",
    ):
        (lib / name).touch()

    versions = root / "workdir" / "original"
    (versions / "android-15").mkdir(parents=True)
    (versions / "android-15" / "android.jar").touch()
    (versions / "android-15" / "support-v4.jar").touch()
    (versions / "android-15" / "README.txt").touch()
    (versions / "android-21").mkdir()
    (versions / "android-21" / "android.jar").touch()
    (versions / "docs").mkdir()

    test_data = root / "testData"
    test_data.mkdir()
    (test_data / "valid.kt").write_text("fun main() = Unit\n")
    (test_data / "broken.kt").write_text("SYNTAX_ERROR\n")

    (root / "tmp").mkdir()
    return root


@pytest.fixture
def fixture_config(fixture_root: Path) -> FixtureConfig:
    """Config pointing at the fake toolchain."""
    return FixtureConfig(
        root=fixture_root,
        temp_dir="tmp",
        compiler=CompilerConfig(),
        runtime=RuntimeConfig(launcher=str(fixture_root / "lib" / "fake-java")),
    )


@pytest.fixture
def generator(fixture_root: Path) -> StaticBindingGenerator:
    """Generator double writing the binding sources."""
    return StaticBindingGenerator(BINDING_SOURCES, temp_dir=fixture_root / "tmp")


@pytest.fixture
def write_script():
    """Write an executable shell script: write_script(path, content)."""
    return _write_script


@pytest.fixture
def binding_sources() -> dict[str, str]:
    return dict(BINDING_SOURCES)


@pytest.fixture
def temp_dir(fixture_root: Path) -> Path:
    return fixture_root / "tmp"
