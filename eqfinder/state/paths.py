"""Managed path layout."""

import os
from pathlib import Path

DATABASE_ENV = "EQFINDER_DATABASE"


def config_dir():
    return Path.home() / ".config" / "eqfinder"


def data_dir():
    return Path.home() / ".local" / "share" / "eqfinder"


def cache_dir():
    return Path.home() / ".cache" / "eqfinder"


def settings_file():
    return config_dir() / "settings.json"


def entries_cache_file():
    return cache_dir() / "entries.json"


def lock_file():
    return cache_dir() / "lock"


def default_database_root():
    override = os.environ.get(DATABASE_ENV)
    if override:
        return Path(override).expanduser()
    return data_dir() / "autoeqDB"


def ensure_dirs():
    for p in [config_dir(), data_dir(), cache_dir()]:
        p.mkdir(parents=True, exist_ok=True)
