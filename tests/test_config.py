"""Tests for ContextVar-based client configuration.

Validates defaults, environment loading, thread isolation and context
manager behavior.
"""

from threading import Thread

import pytest

from notesbridge import (
    NotesClient,
    NotesConfig,
    config_context,
    get_config,
    reset_config,
    set_config,
)


class TestNotesConfigDataclass:
    """Test NotesConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        """Defaults match the interpreter's expected settings."""
        config = NotesConfig()
        assert config.timeout == 15.0
        assert config.debug is False
        assert config.interpreter == ("osascript", "-")
        assert config.list_limit == 20

    def test_immutability(self) -> None:
        """Config is frozen and cannot be modified."""
        config = NotesConfig()
        with pytest.raises(AttributeError):
            config.timeout = 1.0  # type: ignore[misc]

    def test_custom_values(self) -> None:
        """Config can be created with custom values."""
        config = NotesConfig(timeout=30.0, debug=True)
        assert config.timeout == 30.0
        assert config.debug is True
        assert config.list_limit == 20  # Still default


class TestFromDict:
    """Test NotesConfig.from_dict()."""

    def test_known_keys(self) -> None:
        """Known keys are applied."""
        config = NotesConfig.from_dict({"timeout": 5, "list_limit": 3})
        assert config.timeout == 5
        assert config.list_limit == 3

    def test_unknown_keys_ignored(self) -> None:
        """Unknown keys are skipped rather than raising."""
        config = NotesConfig.from_dict({"timeout": 5, "color": "red"})
        assert config.timeout == 5
        assert not hasattr(config, "color")

    def test_interpreter_list_becomes_tuple(self) -> None:
        """A list from JSON or TOML is frozen into a tuple."""
        config = NotesConfig.from_dict({"interpreter": ["cat"]})
        assert config.interpreter == ("cat",)

    def test_empty_dict_gives_defaults(self) -> None:
        """An empty mapping is the default config."""
        assert NotesConfig.from_dict({}) == NotesConfig()


class TestFromEnv:
    """Test NotesConfig.from_env()."""

    def test_empty_environment(self) -> None:
        """No variables means defaults."""
        assert NotesConfig.from_env({}) == NotesConfig()

    def test_debug_flag(self) -> None:
        """Only "true", in any case, enables debug."""
        assert NotesConfig.from_env({"DEBUG": "true"}).debug is True
        assert NotesConfig.from_env({"DEBUG": "TRUE"}).debug is True
        assert NotesConfig.from_env({"DEBUG": "1"}).debug is False

    def test_numbers(self) -> None:
        """Timeout and list limit are parsed from strings."""
        config = NotesConfig.from_env({"NOTESBRIDGE_TIMEOUT": "30", "NOTESBRIDGE_LIST_LIMIT": "5"})
        assert config.timeout == 30.0
        assert config.list_limit == 5

    def test_malformed_numbers_keep_defaults(self) -> None:
        """Unparseable numbers fall back to the defaults."""
        config = NotesConfig.from_env({"NOTESBRIDGE_TIMEOUT": "soon", "NOTESBRIDGE_LIST_LIMIT": "x"})
        assert config.timeout == 15.0
        assert config.list_limit == 20

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a mapping, os.environ is read."""
        monkeypatch.setenv("NOTESBRIDGE_TIMEOUT", "7")
        assert NotesConfig.from_env().timeout == 7.0


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        """Reset config after each test."""
        reset_config()

    def test_default_config(self) -> None:
        """get_config() returns defaults when nothing is set."""
        assert get_config() == NotesConfig()

    def test_set_config(self) -> None:
        """set_config() replaces the active config."""
        set_config(NotesConfig(timeout=1.0))
        assert get_config().timeout == 1.0

    def test_reset_config(self) -> None:
        """reset_config() restores defaults."""
        set_config(NotesConfig(timeout=1.0))
        reset_config()
        assert get_config().timeout == 15.0

    def test_client_uses_active_config(self) -> None:
        """A client built without a config picks up the active one."""
        set_config(NotesConfig(list_limit=3))
        assert NotesClient().config.list_limit == 3


class TestConfigContext:
    """Test the config_context() manager."""

    def teardown_method(self) -> None:
        reset_config()

    def test_temporary_override(self) -> None:
        """The override is visible inside the block only."""
        with config_context(NotesConfig(debug=True)):
            assert get_config().debug is True
        assert get_config().debug is False

    def test_nested(self) -> None:
        """Nested contexts restore the outer config on exit."""
        with config_context(NotesConfig(timeout=1.0)):
            with config_context(NotesConfig(timeout=2.0)):
                assert get_config().timeout == 2.0
            assert get_config().timeout == 1.0

    def test_restored_after_exception(self) -> None:
        """The previous config returns even when the block raises."""
        with pytest.raises(RuntimeError), config_context(NotesConfig(timeout=1.0)):
            raise RuntimeError("boom")
        assert get_config().timeout == 15.0


class TestThreadIsolation:
    """ContextVar config is per thread."""

    def teardown_method(self) -> None:
        reset_config()

    def test_threads_do_not_share_config(self) -> None:
        """A config set in one thread is invisible to others."""
        seen: dict[str, float] = {}

        def worker() -> None:
            set_config(NotesConfig(timeout=99.0))
            seen["worker"] = get_config().timeout

        set_config(NotesConfig(timeout=1.0))
        thread = Thread(target=worker)
        thread.start()
        thread.join()

        assert seen["worker"] == 99.0
        assert get_config().timeout == 1.0
