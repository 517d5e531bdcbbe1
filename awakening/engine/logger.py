"""Per-concern log channels for the planner.

``optimizer`` traces every solved plan and is noisy, so it starts disabled.
``advisor`` reports remote tip failures. ``ui`` follows input changes in the
planner window. Each channel is toggled from ``logChannels`` in settings.json.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Dict

CHANNEL_DEFAULTS = {
    "optimizer": False,
    "advisor": True,
    "ui": True,
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_log = logging.getLogger("awakening")


@dataclass
class LoggerConfig:
    """Root level plus the on/off state of each planner channel."""

    level: int = logging.INFO
    channels: Dict[str, bool] = field(default_factory=CHANNEL_DEFAULTS.copy)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggerConfig":
        level = logging.getLevelName(str(data.get("logLevel", "INFO")).upper())
        if not isinstance(level, int):
            level = logging.INFO
        channels = CHANNEL_DEFAULTS.copy()
        for name, flag in data.get("logChannels", {}).items():
            if name not in channels:
                _log.warning("Ignoring unknown log channel %r", name)
                continue
            channels[name] = bool(flag)
        return cls(level=level, channels=channels)


class ChannelLogger:
    """Emits to ``awakening.<name>`` only while the channel is enabled."""

    def __init__(self, name: str, enabled: bool) -> None:
        self.enabled = enabled
        self._logger = logging.getLogger(f"awakening.{name}")

    def _emit(self, level: int, msg: str, args: tuple) -> None:
        if self.enabled:
            self._logger.log(level, msg, *args)

    def debug(self, msg: str, *args) -> None:
        self._emit(logging.DEBUG, msg, args)

    def info(self, msg: str, *args) -> None:
        self._emit(logging.INFO, msg, args)

    def warning(self, msg: str, *args) -> None:
        self._emit(logging.WARNING, msg, args)

    def error(self, msg: str, *args) -> None:
        self._emit(logging.ERROR, msg, args)


@dataclass(frozen=True)
class PlannerChannels:
    optimizer: ChannelLogger
    advisor: ChannelLogger
    ui: ChannelLogger


def init_logger(config: LoggerConfig) -> PlannerChannels:
    """Configure stdout logging and build the planner's channels."""

    logging.basicConfig(level=config.level, format=LOG_FORMAT, stream=sys.stdout)
    _log.setLevel(config.level)
    return PlannerChannels(
        optimizer=ChannelLogger("optimizer", config.channels["optimizer"]),
        advisor=ChannelLogger("advisor", config.channels["advisor"]),
        ui=ChannelLogger("ui", config.channels["ui"]),
    )


__all__ = ["CHANNEL_DEFAULTS", "ChannelLogger", "LoggerConfig", "PlannerChannels", "init_logger"]
