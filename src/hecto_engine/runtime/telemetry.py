"""Structured logging for the editor, backed by telelog.

Everything else in the package goes through four helpers:

``configure(...)`` -- pick settings from the environment, a preset or a
    ready ``telelog.Config``
``get_logger(name)`` -- a cached telelog logger for ``name``
``record_event(name, ...)`` -- one ``event::<name>`` line with key/value data
``span(name, ...)`` -- profile a block, optionally as a tracked component

Console output stays off unless ``HECTO_LOG_CONSOLE`` is set: while the
editor runs, the terminal belongs to the host UI.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "HECTO_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "hecto_engine")
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LogSettings:
    level: str = "INFO"
    console: bool = False
    colored: bool = True
    json: bool = False
    file: Optional[str] = None
    buffered: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogSettings":
        env = os.environ if environ is None else environ

        def flag(name: str) -> bool:
            return env.get(f"{ENV_PREFIX}{name}", "").lower() in _TRUTHY

        return cls(
            level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
            console=flag("LOG_CONSOLE"),
            colored=not flag("NO_COLOR"),
            json=flag("LOG_JSON"),
            file=env.get(f"{ENV_PREFIX}LOG_FILE") or None,
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.file:
            config.with_file_output(self.file)
        if self.buffered:
            config.with_buffering(True)
        config.with_profiling(True)
        return config


def _preset(name: str) -> LogSettings:
    key = name.lower()
    if key == "development":
        return LogSettings(level="DEBUG", console=True)
    if key == "production":
        log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE") or "hecto.log"
        return LogSettings(level="INFO", file=log_file, buffered=True)
    raise ValueError(f"Unknown preset '{name}'.")


_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration and forget cached loggers.

    ``config`` is a ready ``telelog.Config``; ``preset`` is ``"development"``
    or ``"production"``. With neither, settings come from ``HECTO_LOG_*``.
    """

    global _config
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if config is None:
        settings = _preset(preset) if preset else LogSettings.from_env()
        config = settings.build()
    _config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _config
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _loggers:
        if _config is None:
            _config = LogSettings.from_env().build()
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emit(log: Any, level: str, message: str, payload: Mapping[str, Any]) -> None:
    """Log through ``<level>_with`` when the logger has it, else inline the data."""

    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        pairs: List[Tuple[str, str]] = [(str(k), _text(v)) for k, v in payload.items()]
        structured(message, pairs)
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(payload)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """What ``span`` yields; metadata added here lands on a failure record."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``.

    ``component=True`` tracks the block as a component named ``name``; a
    string names the component. ``metadata`` is attached as logger context
    only while the block runs. An exception leaving the block is logged as
    ``span::fail`` and propagates unchanged.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(log, name, component_name, dict(context))

    for key, value in context.items():
        log.add_context(key, value)
    try:
        with ExitStack() as stack:
            if component_name:
                stack.enter_context(log.track_component(component_name))
            stack.enter_context(log.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key in context:
            log.remove_context(key)


__all__ = [
    "LogSettings",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
