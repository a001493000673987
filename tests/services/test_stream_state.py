"""Tests for StreamState."""

from readeof.services.stream_state import StreamState, split_lines


class TestSplitLines:
    """SUT: split_lines"""

    def test_drops_empty_segments(self):
        """Empty segments between or after line feeds are dropped."""
        assert split_lines("a\n\nb\n") == ["a", "b"]

    def test_keeps_unterminated_last_line(self):
        """A final line without a line feed is still a line."""
        assert split_lines("a\nb") == ["a", "b"]

    def test_empty(self):
        assert split_lines("") == []


class TestStreamState:
    """SUT: StreamState"""

    def test_feed_complete_lines(self):
        """Terminated lines are returned and the remainder is empty."""
        state = StreamState()
        assert state.feed("c\nd\n") == ["c", "d"]
        assert state.remainder == ""

    def test_feed_reassembles_partial_line(self):
        """A line split across chunks should come out whole."""
        state = StreamState()
        assert state.feed("hel") == []
        assert state.remainder == "hel"
        assert state.feed("lo\nwor") == ["hello"]
        assert state.feed("ld\n") == ["world"]

    def test_feed_skips_blank_lines(self):
        """Blank lines are not emitted."""
        state = StreamState()
        assert state.feed("\n\nx\n\n") == ["x"]

    def test_crlf_keeps_carriage_return(self):
        """Only line feeds split lines."""
        state = StreamState()
        assert state.feed("a\r\nb\r\n") == ["a\r", "b\r"]

    def test_reset(self):
        """reset() returns to position 0 with no remainder."""
        state = StreamState(position=120, remainder="partial")
        state.reset()
        assert state.position == 0
        assert state.remainder == ""

    def test_flush(self):
        """flush() hands back the remainder once."""
        state = StreamState()
        state.feed("tail")
        assert state.flush() == "tail"
        assert state.flush() is None
