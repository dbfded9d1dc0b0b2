"""Use cases — the fixture lifecycle seen by a test harness."""

from compile_fixture.core.use_cases.fixture import CompileFixture, default_registry

__all__ = ["CompileFixture", "default_registry"]
