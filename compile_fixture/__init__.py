"""Compile fixture — compile generated bindings per platform version and
run compile checks and emulated-runtime tests against them."""

__version__ = "0.1.0"
