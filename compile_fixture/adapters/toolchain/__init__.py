"""Toolchain adapters: compiler, emulated runtime, binding generator."""

from compile_fixture.adapters.toolchain.compiler import CompilerAdapter
from compile_fixture.adapters.toolchain.generator import (
    BindingGenerator,
    CommandBindingGenerator,
    GeneratedSources,
    GenerationRequest,
)
from compile_fixture.adapters.toolchain.runtime import RuntimeEmulatorAdapter

__all__ = [
    "BindingGenerator",
    "CommandBindingGenerator",
    "CompilerAdapter",
    "GeneratedSources",
    "GenerationRequest",
    "RuntimeEmulatorAdapter",
]
