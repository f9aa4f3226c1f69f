"""Key/value pairs bound to the current call and appended to every log line."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

_bound: ContextVar[Mapping[str, object]] = ContextVar("finsynth_log_context", default={})


def _without_none(values: Mapping[str, object]) -> dict[str, object]:
    return {key: value for key, value in values.items() if value is not None}


def render(values: Mapping[str, object]) -> str:
    return "".join(f"{key}={value} " for key, value in values.items())


class LogContext:
    """Fields such as ``request_id`` or ``dataset`` shown on each record."""

    def bind(self, **values: object) -> None:
        _bound.set({**_bound.get(), **_without_none(values)})

    def unbind(self, *keys: str) -> None:
        _bound.set({key: value for key, value in _bound.get().items() if key not in keys})

    @contextmanager
    def scope(self, **values: object) -> Iterator[None]:
        """Bind ``values`` inside the block and restore the previous fields after."""

        token = _bound.set({**_bound.get(), **_without_none(values)})
        try:
            yield
        finally:
            _bound.reset(token)

    def clear(self) -> None:
        _bound.set({})

    def as_dict(self) -> dict[str, object]:
        return dict(_bound.get())


class ContextFilter(logging.Filter):
    """Render the bound fields into ``record.context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        # Queue listeners replay records that were already rendered on the caller's thread.
        if not hasattr(record, "context"):
            record.context = render(_bound.get())
        return True


log_context = LogContext()
