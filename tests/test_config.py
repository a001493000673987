"""Tests for settings."""

import pytest
from pydantic import ValidationError

from readeof.config import Settings


class TestSettings:
    """SUT: Settings"""

    def test_defaults(self):
        """Defaults should match the documented values."""
        s = Settings()
        assert s.encoding == "utf-8"
        assert s.decode_errors == "replace"
        assert s.buffer_size == 16384
        assert s.poll_interval == 1.0
        assert s.log_level == "INFO"
        assert s.log_file is None

    def test_environment_override(self, monkeypatch):
        """READEOF_* variables should override defaults."""
        monkeypatch.setenv("READEOF_BUFFER_SIZE", "4096")
        monkeypatch.setenv("READEOF_POLL_INTERVAL", "0.5")
        monkeypatch.setenv("readeof_encoding", "latin-1")

        s = Settings()
        assert s.buffer_size == 4096
        assert s.poll_interval == 0.5
        assert s.encoding == "latin-1"

    def test_invalid_environment_value(self, monkeypatch):
        """A non-positive buffer size from the environment should be rejected."""
        monkeypatch.setenv("READEOF_BUFFER_SIZE", "0")
        with pytest.raises(ValidationError):
            Settings()
