"""Tests for option models."""

import pytest
from pydantic import ValidationError

from readeof.config import settings
from readeof.models.options import ReadOptions, StreamOptions
from readeof.models.state import TailState


class TestReadOptions:
    """SUT: ReadOptions"""

    def test_defaults_from_settings(self):
        """Defaults should come from the settings instance."""
        options = ReadOptions()
        assert options.encoding == settings.encoding
        assert options.errors == settings.decode_errors
        assert options.buffer_size == settings.buffer_size

    def test_default_values(self):
        """Out of the box: utf-8, replace, 16KB."""
        options = ReadOptions()
        assert options.encoding == "utf-8"
        assert options.errors == "replace"
        assert options.buffer_size == 16 * 1024

    def test_settings_change_applies_to_new_options(self, monkeypatch):
        """Defaults should be read when the model is created."""
        monkeypatch.setattr(settings, "buffer_size", 128)
        assert ReadOptions().buffer_size == 128

    def test_invalid_buffer_size(self):
        """Buffer size below 1 should be rejected."""
        with pytest.raises(ValidationError):
            ReadOptions(buffer_size=0)

    def test_unknown_encoding(self):
        """Unknown codec names should be rejected."""
        with pytest.raises(ValidationError):
            ReadOptions(encoding="no-such-codec")

    def test_unknown_error_handler(self):
        """Unknown codec error handlers should be rejected."""
        with pytest.raises(ValidationError):
            ReadOptions(errors="no-such-handler")

    def test_validation_error_is_value_error(self):
        """Invalid arguments surface as ValueError."""
        with pytest.raises(ValueError):
            ReadOptions(buffer_size=-5)

    def test_resolve_ignores_none(self):
        """resolve() should fall back to settings for None values."""
        options = ReadOptions.resolve(encoding=None, buffer_size=64, errors=None)
        assert options.buffer_size == 64
        assert options.encoding == settings.encoding

    def test_decode_replaces_invalid_bytes(self):
        """Undecodable bytes should become U+FFFD by default."""
        assert ReadOptions().decode(b"ok\xff") == "ok�"

    def test_decode_strict(self):
        """errors='strict' should raise on undecodable bytes."""
        with pytest.raises(UnicodeDecodeError):
            ReadOptions(errors="strict").decode(b"\xff")


class TestStreamOptions:
    """SUT: StreamOptions"""

    def test_default_poll_interval(self):
        """Poll interval should default to one second."""
        assert StreamOptions().poll_interval == 1.0

    def test_invalid_poll_interval(self):
        """Poll interval must be positive."""
        with pytest.raises(ValidationError):
            StreamOptions(poll_interval=0)

    def test_resolve(self):
        """resolve() should accept stream-only fields."""
        options = StreamOptions.resolve(poll_interval=0.25, buffer_size=None)
        assert options.poll_interval == 0.25
        assert options.buffer_size == settings.buffer_size


class TestTailState:
    """SUT: TailState"""

    def test_values(self):
        """States should serialize to their lowercase names."""
        assert [state.value for state in TailState] == ["initial_read", "watching", "stopped", "failed"]
