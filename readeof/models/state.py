"""Follow-mode state machine."""

from enum import Enum


class TailState(str, Enum):
    """Lifecycle of a follow (tail -f) iteration."""

    INITIAL_READ = "initial_read"
    WATCHING = "watching"
    STOPPED = "stopped"
    FAILED = "failed"
