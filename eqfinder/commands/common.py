"""Shared command helpers."""

import logging

from eqfinder.database.indexer import Database, build_database
from eqfinder.database.result_path import results_mtime
from eqfinder.state.locks import cache_lock
from eqfinder.state.store import database_root, load_entries_cache, load_settings, save_entries_cache

logger = logging.getLogger(__name__)


def resolve_database_root(args, settings=None):
    return database_root(settings or load_settings(), getattr(args, "database", None))


def rebuild_database(root):
    mtime = results_mtime(root / "results")
    db = build_database(root)
    with cache_lock():
        save_entries_cache(db.entries, root, results_mtime=mtime)
    return db


def load_database(args, settings=None):
    """Return a database snapshot, from the entries cache when it matches."""
    settings = settings or load_settings()
    root = resolve_database_root(args, settings)

    cached = None if getattr(args, "rebuild", False) else load_entries_cache()
    if cached is not None and cached[0] == root and cached[2] == results_mtime(root / "results"):
        db = Database(results_root=root / "results", entries=tuple(cached[1]))
    else:
        logger.info("building database from %s", root)
        db = rebuild_database(root)

    sources = {s.lower() for s in settings.get("sources") or []}
    if sources:
        kept = tuple(e for e in db.entries if e.source.lower() in sources)
        db = Database(results_root=db.results_root, entries=kept, name_indexes=db.name_indexes, diagnostics=db.diagnostics)
    return db


def print_entries(entries, db=None, show_paths=False):
    for entry in entries:
        secondary = entry.secondary_text()
        line = f"{entry.label}  ({secondary}, {entry.form})" if secondary else f"{entry.label}  ({entry.form})"
        print(line)
        if show_paths and db is not None:
            print(f"    {db.profile_path(entry)}")
