"""Facets command."""

import json

from eqfinder.commands.common import load_database
from eqfinder.constants import ExitCode


def run(args):
    engine = load_database(args).search
    payload = {
        "sources": engine.get_all_sources(),
        "rigs": engine.get_all_rigs(),
        "forms": engine.get_all_forms(),
    }
    if getattr(args, "json", False):
        print(json.dumps(payload, indent=2))
    else:
        for name, values in payload.items():
            print(f"{name}:")
            for value in values:
                print(f"  {value}")
    return ExitCode.OK
