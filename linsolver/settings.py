"""
LinSolver — Local JSON storage for solver settings.

Data is persisted in ``<project>/data/linsolver.json``.
"""

import json
import logging
import os

logger = logging.getLogger(__name__)

_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "data")
_DATA_FILE = os.path.join(_DATA_DIR, "linsolver.json")

# ── Default settings ────────────────────────────────────────────────────
DEFAULT_SETTINGS = {
    "default_method": "inverse",   # "inverse" or "jacobi"
    "tolerance": 1e-6,
    "max_iterations": 100,
    "log_level": "INFO",
}

_METHODS = {"inverse", "jacobi"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _ensure_dir() -> None:
    os.makedirs(_DATA_DIR, exist_ok=True)


def _load_db() -> dict:
    if os.path.exists(_DATA_FILE):
        try:
            with open(_DATA_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                return data
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", _DATA_FILE, exc)
    return {}


def _save_db(db: dict) -> None:
    _ensure_dir()
    with open(_DATA_FILE, "w", encoding="utf-8") as f:
        json.dump(db, f, indent=2, ensure_ascii=False)


def _validate(settings: dict) -> None:
    if settings["default_method"] not in _METHODS:
        raise ValueError(
            f"default_method must be one of {sorted(_METHODS)}, "
            f"got {settings['default_method']!r}"
        )
    tol = settings["tolerance"]
    if isinstance(tol, bool) or not isinstance(tol, (int, float)) or tol <= 0:
        raise ValueError(f"tolerance must be a positive number, got {tol!r}")
    iters = settings["max_iterations"]
    if isinstance(iters, bool) or not isinstance(iters, int) or iters < 0:
        raise ValueError(f"max_iterations must be a non-negative integer, got {iters!r}")
    if str(settings["log_level"]).upper() not in _LOG_LEVELS:
        raise ValueError(f"Unknown log_level {settings['log_level']!r}")


# ── Settings ─────────────────────────────────────────────────────────────

def get_settings() -> dict:
    """Return stored settings merged over the defaults.

    Unknown keys are dropped, so new defaults are always present.
    """
    stored = _load_db().get("settings", {})
    merged = dict(DEFAULT_SETTINGS)
    merged.update({k: v for k, v in stored.items() if k in DEFAULT_SETTINGS})
    try:
        _validate(merged)
    except ValueError as exc:
        logger.warning("Stored settings are invalid (%s); using defaults", exc)
        return dict(DEFAULT_SETTINGS)
    return merged


def save_settings(updates: dict) -> dict:
    """Validate and persist *updates* on top of the current settings."""
    unknown = set(updates) - set(DEFAULT_SETTINGS)
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    settings = get_settings()
    settings.update(updates)
    _validate(settings)
    db = _load_db()
    db["settings"] = settings
    _save_db(db)
    return settings


def reset_settings() -> dict:
    """Restore the defaults on disk."""
    db = _load_db()
    db["settings"] = dict(DEFAULT_SETTINGS)
    _save_db(db)
    return dict(DEFAULT_SETTINGS)
