"""Autocomplete command."""

from eqfinder.commands.common import load_database
from eqfinder.constants import ExitCode
from eqfinder.state.store import load_settings


def run(args):
    settings = load_settings()
    db = load_database(args, settings)
    max_suggestions = args.max or settings.get("max_suggestions", 10)
    for label in db.search.get_suggestions(args.prefix, max_suggestions=max_suggestions):
        print(label)
    return ExitCode.OK
