"""telelog wiring for the editing engine.

Everything else logs through two calls:

``record_event(name, ...)`` -- one structured ``event::<name>`` line
``span(name, ...)`` -- a profiled block, optionally tracked as a component

The telelog configuration is built lazily from ``PAREDIT_ENGINE_*``
environment variables unless ``configure`` installs one explicitly.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "PAREDIT_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "paredit_engine")

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})

# (Config method, argument) steps applied in order.
PRESETS: Dict[str, Tuple[Tuple[str, Any], ...]] = {
    "development": (
        ("with_min_level", "DEBUG"),
        ("with_console_output", True),
        ("with_colored_output", True),
        ("with_json_format", False),
    ),
    # Editors embedding the engine and test runs: spans stay, console goes.
    "quiet": (
        ("with_min_level", "WARNING"),
        ("with_console_output", False),
    ),
    "production": (
        ("with_min_level", "INFO"),
        ("with_console_output", False),
        ("with_buffering", True),
    ),
}

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_WORDS


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set, frozenset)):
        return repr(value)
    return str(value)


def _preset_config(preset: str) -> Any:
    key = preset.lower()
    if key not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}'.")
    config = tl.Config()
    for method, argument in PRESETS[key]:
        getattr(config, method)(argument)
    if key == "production":
        config.with_file_output(env("LOG_FILE") or "paredit_engine.log")
    return config


def _env_config() -> Any:
    preset = env("LOG_PRESET")
    if preset:
        return _preset_config(preset)

    config = tl.Config()
    config.with_min_level((env("LOG_LEVEL") or "INFO").upper())
    console = not env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))
    if env_flag("LOG_JSON", False):
        config.with_json_format(True)
    log_file = env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    if env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(int(env("LOG_BUFFER_SIZE") or "2048"))
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install a telelog configuration and drop cached loggers.

    Parameters
    ----------
    config:
        Explicit ``tl.Config`` instance to adopt.
    preset:
        One of :data:`PRESETS`. ``config`` and ``preset`` are mutually
        exclusive; with neither, the environment decides (including
        ``PAREDIT_ENGINE_LOG_PRESET``).

    Profiling is always switched on because spans are built on it.
    """

    global _config
    if config is not None and preset is not None:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset is not None:
        config = _preset_config(preset)
    elif config is None:
        config = _env_config()
    config.with_profiling(True)
    _config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` called ``name``."""

    if _config is None:
        configure()
    logger_name = name or DEFAULT_LOGGER_NAME
    log = _loggers.get(logger_name)
    if log is None:
        log = tl.Logger.with_config(logger_name, _config)
        _loggers[logger_name] = log
    return log


def _write(log: Any, level: str, message: str, payload: Mapping[str, Any]) -> None:
    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
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
    _write(
        get_logger(logger_name),
        level,
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass(slots=True)
class SpanHandle:
    """Yielded by :func:`span`; metadata added here is logged when the block ends."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def payload(self, **extra: Any) -> Dict[str, Any]:
        data: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            data["component"] = self.component_name
        data.update(extra)
        return data

    def fail(self, reason: str) -> None:
        _write(self.logger, "error", "span::fail", self.payload(reason=reason))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block and (optionally) track it as a telelog component.

    ``component=True`` reuses ``name`` as the component; a string names it.
    ``metadata`` is pushed as logger context for the duration of the block.
    An exception is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    context = {key: _text(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        if handle.metadata != context:
            _write(log, "debug", "span::done", handle.payload())


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "env",
    "env_flag",
    "get_logger",
    "record_event",
    "span",
]
