"""
Runtime adapter — launch the emulated-runtime test harness.

Invocation shape:

    <launcher> -cp <classpath> -D<prop>=<value>... <runner class> <test class>

Output is not classified: the emulated run has no diagnostic marker,
so everything the child prints is informational.
"""

from __future__ import annotations

import shutil
from collections.abc import Mapping
from pathlib import Path

from compile_fixture.adapters.base import ToolAdapter
from compile_fixture.adapters.shell.process import ProcessRunner
from compile_fixture.core.models.process import ProcessResult


class RuntimeEmulatorAdapter(ToolAdapter):
    """Run a compiled test class under the runtime-emulation harness."""

    def __init__(
        self,
        launcher: str = "java",
        runner_class: str = "org.junit.runner.JUnitCore",
        runner: ProcessRunner | None = None,
    ):
        super().__init__(runner)
        self.launcher = launcher
        self.runner_class = runner_class

    @property
    def name(self) -> str:
        return "runtime"

    @property
    def executable(self) -> str:
        return self.launcher

    def is_available(self) -> bool:
        if Path(self.launcher).is_file():
            return True
        return shutil.which(self.launcher) is not None

    def build_args(
        self,
        classpath: str,
        properties: Mapping[str, str],
        test_class: str,
    ) -> list[str]:
        """Assemble the launcher argument vector."""
        args = [self.launcher, "-cp", classpath]
        args.extend(f"-D{key}={value}" for key, value in properties.items())
        args.extend([self.runner_class, test_class])
        return args

    def run_test(
        self,
        classpath: str,
        properties: Mapping[str, str],
        test_class: str,
    ) -> ProcessResult:
        return self.runner.run(self.build_args(classpath, properties, test_class), compiler=False)
