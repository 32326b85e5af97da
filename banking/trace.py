"""Request-scoped trace identifiers carried through context variables."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

KEY = "trace_id"

_current_trace_id: ContextVar[str] = ContextVar(KEY, default="")


@contextmanager
def with_trace_id(trace_id: str) -> Iterator[str]:
    """Make ``trace_id`` the current trace id for the duration of the block."""
    token = _current_trace_id.set(trace_id)
    try:
        yield trace_id
    finally:
        _current_trace_id.reset(token)


def get_trace_id() -> str:
    """Return the current trace id, or an empty string when none is set."""
    return _current_trace_id.get()