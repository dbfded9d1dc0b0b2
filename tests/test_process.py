"""
Tests for the process runner — line classification, stream capture,
exit codes and launch failures.
"""

import sys
import textwrap

import pytest

from compile_fixture.adapters.shell.process import ProcessRunner, classify_line
from compile_fixture.core.models.process import LineKind


def python_args(code: str) -> list[str]:
    return [sys.executable, "-c", textwrap.dedent(code)]


# ── classify_line ────────────────────────────────────────────────────


class TestClassifyLine:
    def test_marker_in_compiler_mode(self):
        assert classify_line("ERROR: foo.kt: (1, 1)", compiler=True) is LineKind.DIAGNOSTIC

    def test_marker_outside_compiler_mode(self):
        assert classify_line("ERROR: foo.kt: (1, 1)", compiler=False) is LineKind.INFO

    def test_marker_must_be_prefix(self):
        assert classify_line("  ERROR: indented", compiler=True) is LineKind.INFO
        assert classify_line("warning: ERROR later", compiler=True) is LineKind.INFO

    def test_plain_line(self):
        assert classify_line("compiling foo.kt", compiler=True) is LineKind.INFO

    def test_custom_marker(self):
        assert classify_line("error: x", compiler=True, marker="error:") is LineKind.DIAGNOSTIC
        assert classify_line("ERROR: x", compiler=True, marker="error:") is LineKind.INFO


# ── ProcessRunner ────────────────────────────────────────────────────


class TestProcessRunner:
    def test_captures_stdout(self):
        result = ProcessRunner().run(python_args("print('hello')\nprint('world')"))
        assert result.output == "hello\nworld\n"
        assert result.diagnostics == ""
        assert result.exit_code == 0
        assert result.ok

    def test_exit_code(self):
        result = ProcessRunner().run(python_args("import sys; sys.exit(3)"))
        assert result.exit_code == 3
        assert not result.ok

    def test_compiler_mode_routes_marker_lines(self):
        code = """
            import sys
            print("compiling a.kt")
            print("ERROR: a.kt: (1, 1) bad", file=sys.stderr)
            print("warning: unused", file=sys.stderr)
            print("ERROR: b.kt: (2, 2) worse", file=sys.stderr)
        """
        result = ProcessRunner().run(python_args(code), compiler=True)
        assert result.diagnostics == "ERROR: a.kt: (1, 1) bad\nERROR: b.kt: (2, 2) worse\n"
        assert result.output == "compiling a.kt\nwarning: unused\n"

    def test_non_compiler_mode_keeps_everything_informational(self):
        code = """
            import sys
            print("ERROR: looks bad", file=sys.stderr)
        """
        result = ProcessRunner().run(python_args(code), compiler=False)
        assert result.diagnostics == ""
        assert result.output == "ERROR: looks bad\n"

    def test_stdout_before_stderr_order_within_stream(self):
        code = """
            import sys
            for i in range(3):
                print(f"err {i}", file=sys.stderr, flush=True)
                print(f"out {i}", flush=True)
        """
        result = ProcessRunner().run(python_args(code))
        assert result.output.splitlines() == [
            "out 0", "out 1", "out 2",
            "err 0", "err 1", "err 2",
        ]

    def test_large_output_on_both_pipes_does_not_deadlock(self):
        code = """
            import sys
            line = "x" * 200
            for _ in range(5000):
                sys.stderr.write(line + "\\n")
                sys.stdout.write(line + "\\n")
        """
        result = ProcessRunner().run(python_args(code))
        assert result.exit_code == 0
        assert len(result.output.splitlines()) == 10000

    def test_records_args_and_duration(self):
        args = python_args("pass")
        result = ProcessRunner().run(args)
        assert list(result.args) == args
        assert result.duration_ms >= 0

    def test_logs_argument_vector(self, caplog):
        with caplog.at_level("INFO", logger="compile_fixture.adapters.shell.process"):
            ProcessRunner().run(python_args("pass"))
        assert any("Exec process" in r.message for r in caplog.records)

    def test_missing_executable_raises(self, tmp_path):
        with pytest.raises(OSError):
            ProcessRunner().run([str(tmp_path / "no-such-compiler")])

    def test_custom_marker(self):
        code = """
            import sys
            print("e: a.kt: bad", file=sys.stderr)
        """
        result = ProcessRunner(diagnostic_marker="e:").run(python_args(code), compiler=True)
        assert result.diagnostics == "e: a.kt: bad\n"
