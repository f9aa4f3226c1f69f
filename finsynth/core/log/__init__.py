"""Logging setup: rich console output, optional daily log files and bound context."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener, TimedRotatingFileHandler
from pathlib import Path
from queue import SimpleQueue
from threading import RLock
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from .context import ContextFilter, log_context
from .progress import progress_manager
from .timing import timeit

__all__ = [
    "init_logging",
    "get_logger",
    "shutdown_logging",
    "log_context",
    "progress_manager",
    "timeit",
]

CONSOLE_FORMAT = "%(context)s%(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(context)s%(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    app_name: str = "finsynth"
    level: str | int = "INFO"
    log_dir: Optional[Path] = None
    console: bool = True
    rich_tracebacks: bool = True
    queue: bool = True

    @property
    def numeric_level(self) -> int:
        if isinstance(self.level, int):
            return self.level
        return getattr(logging, self.level.upper(), logging.INFO)


class _LoggingState:
    """Handlers installed on the root logger by ``init_logging``."""

    def __init__(self) -> None:
        self.lock = RLock()
        self.config: Optional[LoggingConfig] = None
        self.root_handlers: list[logging.Handler] = []
        self.listener: Optional[QueueListener] = None


_state = _LoggingState()
_context_filter = ContextFilter()


def _console_handler(cfg: LoggingConfig, console: Console) -> logging.Handler:
    handler = RichHandler(
        console=console,
        rich_tracebacks=cfg.rich_tracebacks,
        show_path=False,
        markup=False,
        log_time_format=DATE_FORMAT,
    )
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(cfg: LoggingConfig) -> logging.Handler:
    """``<log_dir>/<app_name>.log``, rolled over at midnight."""

    directory = Path(cfg.log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(directory / f"{cfg.app_name}.log", when="midnight", encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _build_handlers(cfg: LoggingConfig) -> list[logging.Handler]:
    if cfg.rich_tracebacks:
        install_rich_traceback(show_locals=False)

    handlers: list[logging.Handler] = []
    if cfg.console:
        console = Console(stderr=True)
        progress_manager.use_console(console)
        handlers.append(_console_handler(cfg, console))
    if cfg.log_dir is not None:
        handlers.append(_file_handler(cfg))

    for handler in handlers:
        handler.setLevel(cfg.numeric_level)
        handler.addFilter(_context_filter)
    return handlers


def _teardown() -> None:
    root = logging.getLogger()
    if _state.listener is not None:
        _state.listener.stop()
        for handler in _state.listener.handlers:
            handler.close()
    for handler in _state.root_handlers:
        root.removeHandler(handler)
        handler.close()
    _state.listener = None
    _state.root_handlers = []
    _state.config = None
    progress_manager.reset_console()


def init_logging(
    app_name: str = "finsynth",
    level: str | int = "INFO",
    log_dir: Optional[Path | str] = None,
    *,
    console: bool = True,
    rich_tracebacks: bool = True,
    queue: bool = True,
) -> None:
    """Configure root logging for the process.

    Calling again with the same arguments is a no-op; different arguments
    replace the handlers installed by the previous call. Handlers owned by
    anything else are left alone.
    """

    cfg = LoggingConfig(
        app_name=app_name,
        level=level,
        log_dir=Path(log_dir) if log_dir else None,
        console=console,
        rich_tracebacks=rich_tracebacks,
        queue=queue,
    )
    with _state.lock:
        if _state.config == cfg:
            return
        _teardown()

        root = logging.getLogger()
        root.setLevel(logging.NOTSET)
        handlers = _build_handlers(cfg)
        if cfg.queue and handlers:
            queue_handler = QueueHandler(SimpleQueue())
            queue_handler.setLevel(cfg.numeric_level)
            queue_handler.addFilter(_context_filter)
            _state.listener = QueueListener(queue_handler.queue, *handlers, respect_handler_level=True)
            _state.listener.start()
            _state.root_handlers = [queue_handler]
        else:
            _state.root_handlers = handlers

        for handler in _state.root_handlers:
            root.addHandler(handler)
        _state.config = cfg


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger, setting up console logging on first use."""

    with _state.lock:
        if _state.config is None:
            init_logging()
        app_name = _state.config.app_name
    return logging.getLogger(name or app_name)


def shutdown_logging() -> None:
    """Stop the queue listener and remove the handlers ``init_logging`` added."""

    with _state.lock:
        _teardown()
