"""telelog wiring for the view engine.

Each ``OrderedView.apply`` runs inside ``apply_span``, which profiles the
call under the ``view`` component and logs the resulting position counts.
Items that an edit names but the view does not hold are reported through
``record_lookup_miss``. Logger settings come from ``ORDERED_VIEW_*``
environment variables unless ``configure`` is given an explicit config.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "ORDERED_VIEW_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "ordered_view")

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").strip().lower() in {"1", "true", "yes", "on"}


def load_config() -> Any:
    """Build a ``telelog.Config`` from the ``ORDERED_VIEW_*`` variables."""

    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())
    console = not _env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)
    if _env("LOG_FILE"):
        config.with_file_output(_env("LOG_FILE"))
    if _env_flag("LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))
    config.with_profiling(True)
    return config


def configure(config: Optional[Any] = None) -> None:
    """Adopt ``config`` (or re-read the environment) for new loggers."""

    global _CONFIG
    _CONFIG = config if config is not None else load_config()
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _CONFIG
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGERS:
        if _CONFIG is None:
            _CONFIG = load_config()
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _CONFIG)
    return _LOGGERS[logger_name]


def _emit(log: Any, level: str, message: str, data: Dict[str, Any]) -> None:
    pairs = [(str(key), str(value)) for key, value in data.items()]
    with_data = getattr(log, f"{level}_with", None)
    if with_data is not None:
        with_data(message, pairs)
    else:
        getattr(log, level)(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


def record_lookup_miss(
    category: str, item: Any, *, logger_name: Optional[str] = None
) -> None:
    """Log an edit entry that matched nothing in the view."""

    record_event(
        "view.lookup_miss",
        data={"category": category, "item": repr(item)},
        logger_name=logger_name,
    )


@dataclass
class ApplySpan:
    """Handle yielded by ``apply_span``."""

    logger: Any
    mode: str
    size: int
    counts: Dict[str, int] = field(default_factory=dict)

    def record_counts(self, **counts: int) -> None:
        self.counts.update(counts)
        payload = {"mode": self.mode, **self.counts}
        _emit(self.logger, "debug", "event::view.applied", payload)

    def fail(self, reason: str) -> None:
        _emit(
            self.logger,
            "error",
            "view::apply failed",
            {"mode": self.mode, "size": self.size, "reason": reason},
        )


@contextmanager
def apply_span(
    mode: str, size: int, *, logger_name: Optional[str] = None
) -> Iterator[ApplySpan]:
    """Profile one ``apply`` call; failures are logged and re-raised."""

    log = get_logger(logger_name)
    log.add_context("mode", mode)
    try:
        with log.track_component("view"), log.profile("view::apply"):
            handle = ApplySpan(logger=log, mode=mode, size=size)
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        log.remove_context("mode")


__all__ = [
    "ApplySpan",
    "apply_span",
    "configure",
    "get_logger",
    "load_config",
    "record_event",
    "record_lookup_miss",
]
