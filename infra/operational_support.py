from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Iterator

_TRACE_ID_CTX: ContextVar[str | None] = ContextVar("pm_trace_id", default=None)


def create_incident_id() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"inc-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    value = _TRACE_ID_CTX.get()
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    """Tag every log record emitted inside the block (one engine run) with a trace id."""
    normalized = (trace_id or "").strip() or create_incident_id()
    token = _TRACE_ID_CTX.set(normalized)
    try:
        yield normalized
    finally:
        _TRACE_ID_CTX.reset(token)


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


__all__ = [
    "create_incident_id",
    "current_trace_id",
    "bind_trace_id",
    "TraceIdLogFilter",
]
