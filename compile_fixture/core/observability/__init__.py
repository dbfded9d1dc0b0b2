"""Observability — logging setup and toolchain health."""
