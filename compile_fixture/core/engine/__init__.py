"""
Fixture engine — compile versions into the cache, then compile and
run tests against it.
"""

from compile_fixture.core.engine.cache import ArtifactCache
from compile_fixture.core.engine.classpath import ClasspathSpec, join_classpath
from compile_fixture.core.engine.executor import TestExecutor
from compile_fixture.core.engine.test_compiler import TestCompiler
from compile_fixture.core.engine.version_compiler import VersionCompiler

__all__ = [
    "ArtifactCache",
    "ClasspathSpec",
    "TestCompiler",
    "TestExecutor",
    "VersionCompiler",
    "join_classpath",
]
