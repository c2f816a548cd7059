"""Index command."""

import json

from eqfinder.commands.common import rebuild_database, resolve_database_root
from eqfinder.constants import ExitCode
from eqfinder.database.indexer import compute_statistics
from eqfinder.state.store import write_entries_json


def run(args):
    root = resolve_database_root(args)
    if not root.is_dir():
        print(f"error: database not found: {root}")
        return ExitCode.NOT_FOUND

    try:
        db = rebuild_database(root)
    except OSError as exc:
        print(f"error: indexing failed: {exc}")
        return ExitCode.RUNTIME_ERROR

    if getattr(args, "export", None):
        write_entries_json(args.export, db.entries, grouped=getattr(args, "grouped", False))

    stats = compute_statistics(db.entries)
    if getattr(args, "json", False):
        payload = stats.to_dict()
        payload["name_indexes"] = {source: index.size() for source, index in db.name_indexes.items()}
        payload["diagnostics"] = list(db.diagnostics)
        print(json.dumps(payload, indent=2))
    else:
        print(stats)
        for source, index in db.name_indexes.items():
            print(f"- name index {source}: {index.size()} items")
        if db.diagnostics:
            print(f"warnings: {len(db.diagnostics)} (run with --verbose for details)")
        if getattr(args, "export", None):
            print(f"exported entries to {args.export}")
    return ExitCode.OK
