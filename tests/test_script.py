"""Tests for the script runner.

The runner is exercised against the Python interpreter standing in for
osascript: both read a program from stdin and write results to stdout.
"""

import subprocess
import sys

import pytest

from notesbridge import NotesConfig, ScriptError, ScriptRunner, ScriptTimeoutError


def _python(code: str) -> tuple[str, ...]:
    return (sys.executable, "-c", code)


ECHO_STDIN = _python("import sys; sys.stdout.write('  ' + sys.stdin.read() + '\\n')")


class TestRun:
    """Running scripts through a real child process."""

    def test_returns_trimmed_stdout(self) -> None:
        """Stdout is returned without surrounding whitespace."""
        runner = ScriptRunner(interpreter=ECHO_STDIN)
        assert runner.run('return "hello"') == 'return "hello"'

    def test_script_sent_on_stdin(self) -> None:
        """Multi-line scripts arrive intact on stdin."""
        runner = ScriptRunner(interpreter=ECHO_STDIN)
        script = 'tell application "Notes"\n  count notes\nend tell'
        assert runner.run(script) == script

    def test_non_zero_exit(self) -> None:
        """A failing exit raises with the code and stderr."""
        runner = ScriptRunner(
            interpreter=_python("import sys; sys.stderr.write('execution error: boom\\n'); sys.exit(3)")
        )
        with pytest.raises(ScriptError, match="execution error: boom") as exc_info:
            runner.run("x")
        assert exc_info.value.returncode == 3
        assert "boom" in exc_info.value.stderr

    def test_non_zero_exit_without_stderr(self) -> None:
        """A silent failure still gets a message."""
        runner = ScriptRunner(interpreter=_python("import sys; sys.exit(1)"))
        with pytest.raises(ScriptError, match="AppleScript failed"):
            runner.run("x")

    def test_timeout(self) -> None:
        """A hung interpreter is killed after the timeout."""
        runner = ScriptRunner(interpreter=_python("import time; time.sleep(10)"), timeout=0.2)
        with pytest.raises(ScriptTimeoutError, match="AppleScript timeout") as exc_info:
            runner.run("x")
        assert exc_info.value.timeout == 0.2

    def test_missing_interpreter(self) -> None:
        """A missing executable becomes a ScriptError."""
        runner = ScriptRunner(interpreter=("notesbridge-no-such-interpreter",))
        with pytest.raises(ScriptError, match="Could not start"):
            runner.run("x")

    def test_stderr_on_success_is_not_an_error(self) -> None:
        """Warnings on stderr do not fail a successful run."""
        runner = ScriptRunner(
            interpreter=_python("import sys; sys.stderr.write('warn'); print('ok')"), debug=True
        )
        assert runner.run("x") == "ok"


class TestSubprocessCall:
    def test_no_shell_and_timeout_passed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The default command reads stdin, with no shell involved."""
        calls: list[dict] = []

        def fake_run(command, **kwargs):
            calls.append({"command": command, **kwargs})
            return subprocess.CompletedProcess(command, 0, stdout="done\n", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)
        runner = ScriptRunner(timeout=4.0)
        assert runner.run("script") == "done"

        (call,) = calls
        assert call["command"] == ("osascript", "-")
        assert call["input"] == "script"
        assert call["timeout"] == 4.0
        assert not call.get("shell")


class TestConstruction:
    """Building runners."""

    def test_empty_interpreter_rejected(self) -> None:
        """A runner needs a command to run."""
        with pytest.raises(ValueError):
            ScriptRunner(interpreter=())

    def test_from_config(self) -> None:
        """from_config() copies timeout and interpreter."""
        runner = ScriptRunner.from_config(NotesConfig(timeout=2.5, interpreter=ECHO_STDIN))
        assert runner.timeout == 2.5
        assert runner.run("ping") == "ping"
