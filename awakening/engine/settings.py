"""Runtime settings loaded from settings.json."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from awakening.engine.logger import LoggerConfig
from awakening.planner.model import clamp_level, coerce_stock
from awakening.planner.optimizer import PreferenceMode

SETTINGS_PATH = Path("settings.json")

_log = logging.getLogger("awakening.settings")


def _number(data: Dict[str, Any], key: str, default, cast: Callable = int):
    """Read ``data[key]`` as a number, keeping ``default`` when it is not one."""

    if key not in data:
        return default
    try:
        return cast(data[key])
    except (TypeError, ValueError):
        _log.warning("Ignoring non-numeric %s=%r; using %s", key, data[key], default)
        return default


@dataclass
class AdvisorSettings:
    """Connection details for the optional tip service."""

    endpoint: Optional[str] = None
    timeout: float = 5.0
    max_attempts: int = 3
    base_delay: float = 0.5

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdvisorSettings":
        return cls(
            endpoint=data.get("endpoint") or None,
            timeout=_number(data, "timeout", 5.0, float),
            max_attempts=max(1, _number(data, "maxAttempts", 3)),
            base_delay=max(0.0, _number(data, "baseDelay", 0.5, float)),
        )


@dataclass
class PlannerDefaults:
    """Initial values shown when the planner opens."""

    character: str = "Unnamed Superhuman"
    current_level: int = 0
    target_level: int = 3
    character_stones: int = 90
    universal_stones: int = 0
    mode: PreferenceMode = PreferenceMode.CONSERVE_UNIVERSAL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlannerDefaults":
        defaults = cls()
        mode = defaults.mode
        if "mode" in data:
            try:
                mode = PreferenceMode.parse(data["mode"])
            except ValueError:
                _log.warning("Ignoring unknown planner mode %r", data["mode"])
        return cls(
            character=str(data.get("character", defaults.character)),
            current_level=clamp_level(_number(data, "currentLevel", defaults.current_level)),
            target_level=clamp_level(_number(data, "targetLevel", defaults.target_level)),
            character_stones=coerce_stock(data.get("characterStones", defaults.character_stones)),
            universal_stones=coerce_stock(data.get("universalStones", defaults.universal_stones)),
            mode=mode,
        )


@dataclass
class PlannerSettings:
    resolution: Tuple[int, int] = (540, 900)
    max_fps: int = 60
    log: LoggerConfig = field(default_factory=LoggerConfig)
    planner: PlannerDefaults = field(default_factory=PlannerDefaults)
    advisor: AdvisorSettings = field(default_factory=AdvisorSettings)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "PlannerSettings":
        path = path or SETTINGS_PATH
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            _log.warning("Could not parse %s; using defaults", path)
            return cls()
        defaults = cls()
        resolution = defaults.resolution
        raw = data.get("resolution")
        if raw is not None:
            try:
                resolution = (int(raw[0]), int(raw[1]))
            except (TypeError, ValueError, IndexError):
                _log.warning("Ignoring malformed resolution %r", raw)
        return cls(
            resolution=resolution,
            max_fps=max(1, _number(data, "maxFps", defaults.max_fps)),
            log=LoggerConfig.from_dict(data),
            planner=PlannerDefaults.from_dict(data.get("planner", {})),
            advisor=AdvisorSettings.from_dict(data.get("advisor", {})),
        )


__all__ = ["AdvisorSettings", "PlannerDefaults", "PlannerSettings", "SETTINGS_PATH"]
