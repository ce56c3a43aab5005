# settings.py - persisted engine settings with environment overrides
import os
import json
from typing import Optional

_DEFAULT_SETTINGS = {
    "double_pick_ms": 400,        # max gap between two picks on one target
    "win_announce_delay_ms": 100,
    "debug_checks": True,         # verify 52-card conservation after each mutation
}

_CURRENT_SETTINGS = dict(_DEFAULT_SETTINGS)

_ENV_OVERRIDES = {
    "KLONDIKE_DOUBLE_PICK_MS": "double_pick_ms",
    "KLONDIKE_WIN_DELAY_MS": "win_announce_delay_ms",
    "KLONDIKE_DEBUG_CHECKS": "debug_checks",
}

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _settings_dir() -> str:
    # Prefer %APPDATA% on Windows, else ~/.klondike_engine
    base = os.environ.get("APPDATA")
    if base:
        return os.path.join(base, "KlondikeEngine")
    return os.path.join(os.path.expanduser("~"), ".klondike_engine")


def _settings_path() -> str:
    return os.path.join(_settings_dir(), "settings.json")


def _coerce(key, raw):
    if key == "debug_checks":
        if isinstance(raw, str):
            text = raw.strip().lower()
            if text in _TRUE:
                return True
            if text in _FALSE:
                return False
            raise ValueError(f"not a boolean: {raw!r}")
        return bool(raw)
    return max(0, int(raw))


def _apply(source: dict):
    for key in _DEFAULT_SETTINGS:
        if key not in source:
            continue
        try:
            _CURRENT_SETTINGS[key] = _coerce(key, source[key])
        except (TypeError, ValueError):
            pass


def _apply_env():
    for env_name, key in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_name, "").strip()
        if raw:
            _apply({key: raw})


def get_current_settings():
    return dict(_CURRENT_SETTINGS)


def get_setting(key: str):
    return _CURRENT_SETTINGS[key]


def reset_settings():
    _CURRENT_SETTINGS.clear()
    _CURRENT_SETTINGS.update(_DEFAULT_SETTINGS)


def load_settings(path: Optional[str] = None):
    """Reload defaults, then the settings file, then environment overrides."""
    reset_settings()
    try:
        with open(path or _settings_path(), "r", encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                _apply(data)
    except Exception:
        pass
    _apply_env()
    return get_current_settings()


def save_settings(new_values: dict, path: Optional[str] = None):
    # Merge and write to disk
    _apply({k: new_values[k] for k in _DEFAULT_SETTINGS if k in new_values})
    target = path or _settings_path()
    try:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            json.dump(_CURRENT_SETTINGS, f, indent=2)
    except Exception:
        pass


# Load any persisted settings and apply now
load_settings()
