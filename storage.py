"""
🧠 STORAGE — File-based persistence
===================================
Routine saved to disk after every change. Refresh → everything still there.
Broken or missing files fall back to the built-in defaults.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from conflicts import find_first_conflict
from models import Schedule, ScheduleConfig, TimeSlot, default_config


logger = logging.getLogger(__name__)

DATA_DIR = Path(os.environ.get("SCHEDULER_DATA_DIR", Path(__file__).parent / "data"))

CONFIG_KEY = "config"
SCHEDULE_KEY = "schedule"
GENERATED_KEY = "has_generated_schedule"
ALL_KEYS = (CONFIG_KEY, SCHEDULE_KEY, GENERATED_KEY)

_LOAD_ERRORS = (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError)


def _ensure_data_dir() -> None:
    """Create data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def _key_file(key: str) -> Path:
    return DATA_DIR / f"{key}.json"


def _read_key(key: str):
    """Raw JSON value for key, or None if the file is absent."""
    path = _key_file(key)
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _write_key(key: str, value) -> None:
    _ensure_data_dir()
    with open(_key_file(key), "w", encoding="utf-8") as f:
        json.dump(value, f, indent=2, ensure_ascii=False)


def _config_to_dict(config: ScheduleConfig) -> dict:
    """Convert ScheduleConfig to JSON-serializable dict."""
    return {
        "days": config.days,
        "class_names": config.class_names,
        "time_slots": [{"start": s.start, "end": s.end} for s in config.time_slots],
    }


def _dict_to_config(d: dict) -> ScheduleConfig:
    """Convert dict from JSON back to ScheduleConfig."""
    defaults = default_config()
    class_names = [str(c) for c in d.get("class_names", defaults.class_names)]
    days = [str(x) for x in d.get("days", defaults.days)]
    raw_slots = d.get("time_slots")
    slots = (
        [TimeSlot(str(s["start"]), str(s["end"])) for s in raw_slots]
        if raw_slots is not None
        else defaults.time_slots
    )
    if not class_names or not slots or not days:
        raise ValueError("Config needs at least one class, day and slot")
    if any(not c.strip() for c in class_names):
        raise ValueError("Blank class name in saved config")
    if len(set(class_names)) != len(class_names):
        raise ValueError("Duplicate class names in saved config")
    if len(set(days)) != len(days):
        raise ValueError("Duplicate day names in saved config")
    return ScheduleConfig(days=days, class_names=class_names, time_slots=slots)


def load_config() -> ScheduleConfig:
    """Load routine config from disk. Defaults if missing or unreadable."""
    try:
        data = _read_key(CONFIG_KEY)
        if data is None:
            return default_config()
        return _dict_to_config(data)
    except _LOAD_ERRORS as e:
        logger.warning("Saved config is unreadable, using defaults: %s", e)
        return default_config()


def save_config(config: ScheduleConfig) -> None:
    """Save routine config to disk. Overwrites existing file."""
    _write_key(CONFIG_KEY, _config_to_dict(config))


def load_schedule(config: ScheduleConfig) -> Optional[Schedule]:
    """
    Load the saved grid, shaped by config.
    Returns None if there is no grid, or it is broken / does not match config,
    or it double-books a teacher.
    """
    try:
        data = _read_key(SCHEDULE_KEY)
        if data is None:
            return None
        schedule = Schedule.from_dict(data, config)
    except _LOAD_ERRORS as e:
        logger.warning("Saved schedule is unreadable or does not match config, discarding: %s", e)
        return None
    clash = find_first_conflict(schedule, schedule.days, schedule.class_names, schedule.time_slots)
    if clash is not None:
        logger.warning("Saved schedule double-books a teacher, discarding: %s", clash.message)
        return None
    return schedule


def save_schedule(schedule: Optional[Schedule]) -> None:
    """Save the grid. None removes the saved grid."""
    if schedule is None:
        _clear_key(SCHEDULE_KEY)
        return
    _write_key(SCHEDULE_KEY, schedule.to_dict())


def load_has_generated() -> bool:
    """Was a grid generated before? (config form hidden if so)"""
    try:
        return bool(_read_key(GENERATED_KEY))
    except _LOAD_ERRORS as e:
        logger.warning("Saved generated flag is unreadable: %s", e)
        return False


def save_has_generated(flag: bool) -> None:
    _write_key(GENERATED_KEY, bool(flag))


def _clear_key(key: str) -> None:
    path = _key_file(key)
    if path.exists():
        path.unlink()


def clear_state() -> None:
    """Remove every saved key (e.g. when starting a new routine)."""
    for key in ALL_KEYS:
        _clear_key(key)
