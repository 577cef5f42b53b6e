"""Run generated AppleScript through the external interpreter.

The script is written to the interpreter's standard input (never passed on
the command line, never through a shell). The interpreter's trimmed stdout
is the result; a non-zero exit is a ScriptError carrying stderr. A script
that runs past the timeout is killed.

Example:
    >>> runner = ScriptRunner(timeout=5.0)
    >>> runner.run('return "hello"')
    'hello'
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from notesbridge.config import NotesConfig
from notesbridge.errors import ScriptError, ScriptTimeoutError
from notesbridge.utils.logger import get_logger

logger = get_logger(__name__)


class ScriptRunner:
    """Execute scripts with a timeout.

    Thread Safety:
        Holds only immutable settings; each run() spawns its own process.
    """

    __slots__ = ("_command", "_timeout", "_debug")

    def __init__(
        self,
        *,
        interpreter: Sequence[str] = ("osascript", "-"),
        timeout: float = 15.0,
        debug: bool = False,
    ) -> None:
        if not interpreter:
            raise ValueError("interpreter command must not be empty")
        self._command = tuple(interpreter)
        self._timeout = timeout
        self._debug = debug

    @classmethod
    def from_config(cls, config: NotesConfig) -> ScriptRunner:
        return cls(interpreter=config.interpreter, timeout=config.timeout, debug=config.debug)

    @property
    def timeout(self) -> float:
        return self._timeout

    def run(self, script: str) -> str:
        """Run one script and return its trimmed standard output.

        Raises:
            ScriptTimeoutError: If the interpreter ran past the timeout
            ScriptError: If it exited non-zero or could not be started
        """
        logger.debug("Running %d-character script with %s", len(script), self._command[0])
        try:
            completed = subprocess.run(
                self._command,
                input=script,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ScriptTimeoutError(self._timeout) from e
        except OSError as e:
            raise ScriptError(f"Could not start {self._command[0]}: {e}") from e

        stderr = completed.stderr or ""
        if completed.returncode != 0:
            raise ScriptError(
                stderr.strip() or "AppleScript failed",
                returncode=completed.returncode,
                stderr=stderr,
            )
        if stderr and self._debug:
            logger.warning("AppleScript warning: %s", stderr.strip())
        return (completed.stdout or "").strip()


__all__ = ["ScriptRunner"]
