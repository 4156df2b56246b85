"""telelog wiring for the editor.

The screen belongs to the editor while a session runs, so nothing is written
to the console unless ``TEXTPAD_LOG_CONSOLE`` is set. A trace goes to
``TEXTPAD_LOG_FILE`` or the file given with ``--log-file``; without either,
log lines are dropped.

``span`` wraps a block in ``logger.profile`` (and optionally
``track_component``) and writes ``span::fail`` when the block raises.
``record_event`` writes one ``event::<name>`` line with key/value pairs.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TEXTPAD_"
ROOT_LOGGER = "textpad"
LEVELS = ("debug", "info", "warning", "error")

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


@dataclass(frozen=True)
class TelemetrySettings:
    """What the telelog config is built from."""

    level: str = "info"
    log_file: str = ""
    console: bool = False
    colored: bool = True
    json: bool = False

    def __post_init__(self) -> None:
        if self.level.lower() not in LEVELS:
            raise ValueError(f"unknown log level {self.level!r}")
        object.__setattr__(self, "level", self.level.lower())

    def with_overrides(
        self, *, log_file: Optional[str] = None, level: Optional[str] = None
    ) -> "TelemetrySettings":
        changes: Dict[str, Any] = {}
        if log_file:
            changes["log_file"] = log_file
        if level:
            changes["level"] = level
        return replace(self, **changes)


def _flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(ENV_PREFIX + name, "").strip().lower() in _TRUTHY


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> TelemetrySettings:
    """Read ``TEXTPAD_LOG_*`` variables; unset or unknown values keep defaults."""

    env = os.environ if environ is None else environ
    level = (env.get(ENV_PREFIX + "LOG_LEVEL") or "info").lower()
    return TelemetrySettings(
        level=level if level in LEVELS else "info",
        log_file=env.get(ENV_PREFIX + "LOG_FILE", ""),
        console=_flag(env, "LOG_CONSOLE"),
        colored=not _flag(env, "NO_COLOR"),
        json=_flag(env, "LOG_JSON"),
    )


def build_config(settings: TelemetrySettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level.upper())
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    if settings.json:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    # Spans rely on logger.profile.
    config.with_profiling(True)
    return config


def configure(settings: Optional[TelemetrySettings] = None) -> None:
    """Install a new telelog config and drop every cached logger."""

    global _config
    _config = build_config(settings or settings_from_env())
    _loggers.clear()


def configure_from_options(
    *, log_file: Optional[str] = None, level: Optional[str] = None
) -> TelemetrySettings:
    """Apply ``--log-file``/``--log-level`` on top of the environment."""

    settings = settings_from_env().with_overrides(log_file=log_file, level=level)
    configure(settings)
    return settings


def get_logger(name: Optional[str] = None) -> Any:
    global _config
    key = name or ROOT_LOGGER
    logger = _loggers.get(key)
    if logger is None:
        if _config is None:
            _config = build_config(settings_from_env())
        logger = tl.Logger.with_config(key, _config)
        _loggers[key] = logger
    return logger


def _pairs(data: Mapping[str, Any]) -> List[Tuple[str, str]]:
    return [
        (str(key), value if isinstance(value, str) else repr(value))
        for key, value in data.items()
    ]


def _emit(logger: Any, level: str, message: str, data: Mapping[str, Any]) -> None:
    level = level.lower()
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, _pairs(data))
        return
    plain = getattr(logger, level, None)
    if plain is None:
        raise ValueError(f"unsupported log level {level!r}")
    plain(f"{message} {dict(data)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Lets the wrapped block attach metadata reported on failure."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata}
        payload["reason"] = reason
        if self.component:
            payload["component"] = self.component
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` also tracks the block as a component named ``name``;
    a string names the component explicitly. ``metadata`` is added to the
    logger context for the duration of the block.
    """

    logger = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    handle = SpanHandle(logger, name, component_name, dict(metadata or {}))

    with ExitStack() as stack:
        for key, value in (metadata or {}).items():
            logger.add_context(key, str(value))
            stack.callback(logger.remove_context, key)
        if component_name:
            stack.enter_context(logger.track_component(component_name))
        stack.enter_context(logger.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "LEVELS",
    "SpanHandle",
    "TelemetrySettings",
    "build_config",
    "configure",
    "configure_from_options",
    "get_logger",
    "record_event",
    "settings_from_env",
    "span",
]
