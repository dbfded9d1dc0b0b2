"""Adapters — tool bindings for the compiler, runtime and generator.

Public re-exports for convenient access.
"""

from compile_fixture.adapters.base import ToolAdapter
from compile_fixture.adapters.mock import ScriptedRunner, StaticBindingGenerator
from compile_fixture.adapters.registry import AdapterRegistry
from compile_fixture.adapters.shell.process import ProcessRunner, classify_line

__all__ = [
    "AdapterRegistry",
    "ProcessRunner",
    "ScriptedRunner",
    "StaticBindingGenerator",
    "ToolAdapter",
    "classify_line",
]
