"""
Toolchain health — is everything the fixture needs actually on disk?

Reports the compiler, the runtime launcher, the versions directory and
every support archive the emulated run puts on its classpath. Used by
the pytest plugin's header line and by setup diagnostics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from compile_fixture.adapters.registry import AdapterRegistry
from compile_fixture.core.models.fixture import FixtureConfig
from compile_fixture.core.services.discovery import discover_versions

logger = logging.getLogger(__name__)


@dataclass
class ComponentHealth:
    """Health of a single toolchain component."""

    name: str
    status: str = "unknown"  # healthy, degraded, unhealthy, unknown
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "message": self.message,
            "details": self.details,
        }


@dataclass
class SystemHealth:
    """Aggregate health of the toolchain."""

    status: str = "healthy"
    timestamp: str = ""
    components: list[ComponentHealth] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.timestamp:
            self.timestamp = datetime.now(UTC).isoformat()

    def add(self, component: ComponentHealth) -> None:
        self.components.append(component)
        self._recalculate()

    def _recalculate(self) -> None:
        statuses = [c.status for c in self.components]
        if any(s == "unhealthy" for s in statuses):
            self.status = "unhealthy"
        elif any(s == "degraded" for s in statuses):
            self.status = "degraded"
        elif all(s == "healthy" for s in statuses):
            self.status = "healthy"
        else:
            self.status = "unknown"

    @property
    def healthy(self) -> bool:
        return self.status == "healthy"

    def problems(self) -> list[ComponentHealth]:
        return [c for c in self.components if c.status != "healthy"]

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "timestamp": self.timestamp,
            "components": [c.to_dict() for c in self.components],
        }


def check_adapters(registry: AdapterRegistry) -> list[ComponentHealth]:
    """One component per registered tool adapter."""
    components = []
    for name, info in registry.adapter_status().items():
        available = info["available"]
        components.append(ComponentHealth(
            name=name,
            status="healthy" if available else "unhealthy",
            message=f"{info['executable']} {'found' if available else 'not found'}",
            details=info,
        ))
    return components


def check_versions(config: FixtureConfig) -> ComponentHealth:
    """The versions directory must hold at least one version folder."""
    root = config.versions_path()
    if not root.is_dir():
        return ComponentHealth(name="versions", status="unhealthy", message=f"{root} missing")
    versions = discover_versions(root, config.version_pattern)
    if not versions:
        return ComponentHealth(name="versions", status="degraded", message=f"No versions in {root}")
    return ComponentHealth(
        name="versions",
        status="healthy",
        message=f"{len(versions)} versions",
        details={"versions": [v.name for v in versions]},
    )


def check_support_archives(config: FixtureConfig) -> ComponentHealth:
    """Archives the emulated run needs; missing ones only degrade health."""
    runtime = config.runtime
    names = [runtime.runtime_archive, *runtime.test_support_archives, *runtime.runtime_archives]
    missing = [n for n in names if not config.lib_file(n).is_file()]
    if missing:
        return ComponentHealth(
            name="support_archives",
            status="degraded",
            message=f"{len(missing)}/{len(names)} archives missing",
            details={"missing": missing, "lib_dir": str(config.lib_path())},
        )
    return ComponentHealth(
        name="support_archives",
        status="healthy",
        message=f"All {len(names)} archives present",
    )


def check_toolchain(config: FixtureConfig, registry: AdapterRegistry) -> SystemHealth:
    """Run all toolchain checks and return aggregate status."""
    health = SystemHealth()
    for component in check_adapters(registry):
        health.add(component)
    health.add(check_versions(config))
    health.add(check_support_archives(config))
    for problem in health.problems():
        logger.warning("Toolchain %s: %s", problem.name, problem.message)
    return health
