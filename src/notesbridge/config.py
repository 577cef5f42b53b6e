"""ContextVar-based client configuration for notesbridge.

Provides context-local configuration using Python's ContextVars (PEP 567).
NotesClient reads the active config when it is not given one explicitly.

Usage:
    # Explicit
    client = NotesClient(NotesConfig(timeout=30.0))

    # From the environment (DEBUG=true, NOTESBRIDGE_TIMEOUT=30)
    set_config(NotesConfig.from_env())

    # Temporarily, e.g. in tests
    with config_context(NotesConfig(interpreter=("cat",))):
        client = NotesClient()

"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields


@dataclass(frozen=True, slots=True)
class NotesConfig:
    """Immutable client configuration.

    Attributes:
        timeout: Seconds before a running script is killed
        debug: Log interpreter warnings and tracebacks
        interpreter: Command that reads AppleScript from stdin
        list_limit: Default number of notes returned by list operations

    """

    timeout: float = 15.0
    debug: bool = False
    interpreter: tuple[str, ...] = ("osascript", "-")
    list_limit: int = 20

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, object]) -> NotesConfig:
        """Create NotesConfig from a dictionary.

        Unknown keys are silently ignored.

        Example:
            >>> NotesConfig.from_dict({"timeout": 5, "color": "red"}).timeout
            5
        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "interpreter" in filtered:
            filtered["interpreter"] = tuple(filtered["interpreter"])  # type: ignore[arg-type]
        return cls(**filtered)  # type: ignore[arg-type]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> NotesConfig:
        """Create NotesConfig from environment variables.

        Reads DEBUG ("true" enables), NOTESBRIDGE_TIMEOUT (seconds) and
        NOTESBRIDGE_LIST_LIMIT. Unset or malformed numbers keep defaults.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {"debug": env.get("DEBUG", "").lower() == "true"}
        for key, name, convert in (
            ("NOTESBRIDGE_TIMEOUT", "timeout", float),
            ("NOTESBRIDGE_LIST_LIMIT", "list_limit", int),
        ):
            raw = env.get(key)
            if not raw:
                continue
            try:
                values[name] = convert(raw)
            except ValueError:
                continue
        return cls.from_dict(values)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: NotesConfig = NotesConfig()

_config: ContextVar[NotesConfig] = ContextVar("notes_config", default=_DEFAULT_CONFIG)


def get_config() -> NotesConfig:
    """Get the configuration active in the current context."""
    return _config.get()


def set_config(config: NotesConfig) -> None:
    """Set the configuration for the current context."""
    _config.set(config)


def reset_config() -> None:
    """Reset to the default configuration."""
    _config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: NotesConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.
    """
    previous = _config.get()
    _config.set(config)
    try:
        yield
    finally:
        _config.set(previous)


__all__ = [
    "NotesConfig",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
]
