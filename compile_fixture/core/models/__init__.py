"""
Domain models — Pydantic types for the compile fixture.

All models are re-exported here for convenient access:

    from compile_fixture.core.models import PlatformVersion, ProcessResult, FixtureConfig
"""

from compile_fixture.core.models.fixture import (
    CompilerConfig,
    FixtureConfig,
    GeneratorConfig,
    RuntimeConfig,
)
from compile_fixture.core.models.platform import PlatformVersion, parse_revision
from compile_fixture.core.models.process import LineKind, ProcessResult

__all__ = [
    # fixture.py
    "CompilerConfig",
    "FixtureConfig",
    "GeneratorConfig",
    # process.py
    "LineKind",
    # platform.py
    "PlatformVersion",
    "ProcessResult",
    "RuntimeConfig",
    "parse_revision",
]
