"""Core services: discovery and disposable files."""
