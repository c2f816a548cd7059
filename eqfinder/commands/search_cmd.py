"""Search command."""

import json

from eqfinder.commands.common import load_database, print_entries
from eqfinder.constants import ExitCode
from eqfinder.state.store import load_settings


def _matches(value, wanted):
    return wanted is None or value.lower() == wanted.lower()


def run(args):
    query = " ".join(args.query or []).strip()
    if not query:
        print("error: missing search query")
        return ExitCode.USAGE

    settings = load_settings()
    db = load_database(args, settings)
    max_results = args.max or settings.get("max_results", 50)

    results = [
        e
        for e in db.search.search(query, max_results=len(db.entries))
        if _matches(e.source, args.source) and _matches(e.rig, args.rig) and _matches(e.form, args.form)
    ][:max_results]

    if getattr(args, "json", False):
        payload = [dict(e.to_dict(), profile_path=str(db.profile_path(e))) for e in results]
        print(json.dumps(payload, indent=2))
    elif not results:
        print(f"no results for {query!r}")
    else:
        print_entries(results, db, show_paths=getattr(args, "paths", False))
    return ExitCode.OK
