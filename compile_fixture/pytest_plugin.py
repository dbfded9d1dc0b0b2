"""
pytest integration — one compile fixture per test session.

Enable with ``-p compile_fixture.pytest_plugin`` or
``pytest_plugins = ["compile_fixture.pytest_plugin"]`` in a conftest.

    def test_layout_dsl(compile_fixture, platform_versions):
        for version in platform_versions:
            compile_fixture.run_compile_test(Path("testData/layout.kt"), version)
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from compile_fixture.core.config.loader import ConfigError, load_config
from compile_fixture.core.models.fixture import FixtureConfig
from compile_fixture.core.models.platform import PlatformVersion
from compile_fixture.core.observability.health import check_toolchain
from compile_fixture.core.observability.logging_config import setup_logging
from compile_fixture.core.use_cases.fixture import CompileFixture, default_registry

ENV_CONFIG = "CFX_CONFIG"


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("compile-fixture")
    group.addoption(
        "--compile-fixture-config",
        dest="compile_fixture_config",
        default=None,
        help="Path to fixture.yml (default: $CFX_CONFIG, then search upward).",
    )
    group.addoption(
        "--compile-fixture-keep",
        dest="compile_fixture_keep",
        action="store_true",
        default=False,
        help="Keep compiled version archives after the session.",
    )


def pytest_configure(config: pytest.Config) -> None:
    setup_logging()


def _config_path(config: pytest.Config) -> Path | None:
    raw = config.getoption("compile_fixture_config") or os.environ.get(ENV_CONFIG)
    return Path(raw) if raw else None


def pytest_report_header(config: pytest.Config) -> list[str]:
    try:
        fixture_config = load_config(_config_path(config), allow_default=True)
    except ConfigError as e:
        return [f"compile-fixture: {e}"]
    health = check_toolchain(fixture_config, default_registry(fixture_config))
    lines = [f"compile-fixture: {fixture_config.root} (toolchain {health.status})"]
    lines.extend(f"  {c.name}: {c.message}" for c in health.problems())
    return lines


@pytest.fixture(scope="session")
def compile_fixture_config(pytestconfig: pytest.Config) -> FixtureConfig:
    """The loaded fixture.yml."""
    return load_config(_config_path(pytestconfig), allow_default=True)


@pytest.fixture(scope="session")
def compile_fixture(
    pytestconfig: pytest.Config,
    compile_fixture_config: FixtureConfig,
) -> Iterator[CompileFixture]:
    """A fixture whose cache holds every platform version, compiled once."""
    fixture = CompileFixture(compile_fixture_config)
    fixture.setup()
    yield fixture
    fixture.teardown(delete_artifacts=not pytestconfig.getoption("compile_fixture_keep"))


@pytest.fixture(scope="session")
def platform_versions(compile_fixture: CompileFixture) -> list[PlatformVersion]:
    """Every platform version compiled during setup."""
    return compile_fixture.versions
