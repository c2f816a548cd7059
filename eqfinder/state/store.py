"""Persistent settings and the entries cache."""

from datetime import datetime, UTC
import json
import logging
import os
from pathlib import Path

from eqfinder.core.models import Entry
from eqfinder.database.indexer import group_entries_by_label
from eqfinder.state.paths import DATABASE_ENV, default_database_root, ensure_dirs, entries_cache_file, settings_file

logger = logging.getLogger(__name__)


def _now_iso():
    return datetime.now(UTC).isoformat()


def default_settings():
    return {
        "version": 1,
        "database_root": None,
        "max_results": 50,
        "max_suggestions": 10,
        "sources": [],
        "updated_at": _now_iso(),
    }


def load_settings():
    ensure_dirs()
    sf = settings_file()
    base = default_settings()
    if sf.exists():
        try:
            with sf.open("r") as f:
                base.update(json.load(f))
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable settings file %s: %s", sf, exc)
    return base


def _atomic_write_json(path, payload):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    with tmp.open("w") as f:
        json.dump(payload, f, indent=2)
    tmp.replace(path)


def save_settings(settings):
    ensure_dirs()
    settings = dict(settings)
    settings["updated_at"] = _now_iso()
    _atomic_write_json(settings_file(), settings)
    return settings


def database_root(settings=None, override=None):
    """Explicit argument, then environment, then settings, then the default."""
    if override:
        return Path(override).expanduser()
    if os.environ.get(DATABASE_ENV):
        return default_database_root()
    configured = (settings or {}).get("database_root")
    if configured:
        return Path(configured).expanduser()
    return default_database_root()


def write_entries_json(path, entries, grouped=False):
    if grouped:
        payload = {
            label: [e.to_dict() for e in group]
            for label, group in group_entries_by_label(entries).items()
        }
    else:
        payload = [e.to_dict() for e in entries]
    _atomic_write_json(path, payload)
    return path


def save_entries_cache(entries, database_root, results_mtime=None):
    payload = {
        "version": 1,
        "created_at": _now_iso(),
        "database_root": str(database_root),
        "results_mtime": results_mtime,
        "entries": [e.to_dict() for e in entries],
    }
    _atomic_write_json(entries_cache_file(), payload)
    return entries_cache_file()


def load_entries_cache():
    """Return ``(database_root, entries, results_mtime)`` or ``None`` without a usable cache."""
    cf = entries_cache_file()
    if not cf.exists():
        return None
    try:
        with cf.open("r") as f:
            data = json.load(f)
        entries = [Entry.from_dict(item) for item in data["entries"]]
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.warning("ignoring unreadable entries cache %s: %s", cf, exc)
        return None
    return Path(data.get("database_root", "")), entries, data.get("results_mtime")
