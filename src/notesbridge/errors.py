"""Exception classes for notesbridge.

Validation errors are the only failures raised by the text core. The
escaper, sanitizer, renderer and extractor never raise: dangerous or
malformed input is removed, not rejected.
"""

from __future__ import annotations


class NotesBridgeError(Exception):
    """Base exception for all notesbridge errors.

    Subclass this for specific error categories.
    """

    pass


class ValidationError(NotesBridgeError):
    """Caller input rejected before any transformation ran.

    The input itself is defective; retrying with the same value fails again.
    """

    pass


class InvalidTypeError(ValidationError):
    """Input is absent or not a string."""

    pass


class EmptyInputError(ValidationError):
    """Title is blank after trimming."""

    pass


class TooLongError(ValidationError):
    """Title exceeds the maximum length."""

    def __init__(self, message: str, length: int, max_length: int) -> None:
        """Initialize with the offending and allowed lengths.

        Args:
            message: Error description
            length: Length of the rejected input
            max_length: Maximum accepted length
        """
        self.length = length
        self.max_length = max_length
        super().__init__(message)


class ScriptError(NotesBridgeError):
    """The external interpreter exited with a failure.

    Raised for non-zero exit codes and when the interpreter cannot be
    started at all.
    """

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        """Initialize script error.

        Args:
            message: Error description (usually the interpreter's stderr)
            returncode: Interpreter exit code, None if it never ran
            stderr: Raw standard error output
        """
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class ScriptTimeoutError(ScriptError):
    """The interpreter did not finish within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__("AppleScript timeout")


class UsageError(NotesBridgeError):
    """An operation was invoked without the arguments it needs."""

    pass
