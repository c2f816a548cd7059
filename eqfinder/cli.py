"""CLI entry and command wiring."""

import argparse
import logging
import sys

from eqfinder.commands import (
    browse_cmd,
    facets_cmd,
    index_cmd,
    search_cmd,
    show_cmd,
    suggest_cmd,
)
from eqfinder.constants import ExitCode


COMMANDS = {
    "index": index_cmd.run,
    "search": search_cmd.run,
    "suggest": suggest_cmd.run,
    "facets": facets_cmd.run,
    "browse": browse_cmd.run,
    "show": show_cmd.run,
}


def _add_database_args(p):
    p.add_argument("--database", help="Database root containing measurements/ and results/")
    p.add_argument("--rebuild", action="store_true", help="Ignore the entries cache")


def build_parser():
    parser = argparse.ArgumentParser(prog="eqfinder")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command")

    p_index = sub.add_parser("index", help="Build the database index")
    p_index.add_argument("--database", help="Database root containing measurements/ and results/")
    p_index.add_argument("--export", help="Write entries as JSON to this file")
    p_index.add_argument("--grouped", action="store_true", help="Group exported entries by name")
    p_index.add_argument("--json", action="store_true")

    p_search = sub.add_parser("search", help="Search headphones")
    p_search.add_argument("query", nargs="*")
    p_search.add_argument("--source")
    p_search.add_argument("--rig")
    p_search.add_argument("--form")
    p_search.add_argument("--max", type=int)
    p_search.add_argument("--paths", action="store_true", help="Show profile file paths")
    p_search.add_argument("--json", action="store_true")
    _add_database_args(p_search)

    p_suggest = sub.add_parser("suggest", help="Autocomplete headphone names")
    p_suggest.add_argument("prefix")
    p_suggest.add_argument("--max", type=int)
    _add_database_args(p_suggest)

    p_facets = sub.add_parser("facets", help="List sources, rigs and forms")
    p_facets.add_argument("--json", action="store_true")
    _add_database_args(p_facets)

    p_browse = sub.add_parser("browse", help="Browse brand -> model -> variant")
    p_browse.add_argument("query", nargs="?", help="Brand query")
    p_browse.add_argument("--brand")
    p_browse.add_argument("--model")
    _add_database_args(p_browse)

    p_show = sub.add_parser("show", help="Parse and validate an EQ profile file")
    p_show.add_argument("path")
    p_show.add_argument("--kind", choices=["graphic", "fixed_band"])
    p_show.add_argument("--json", action="store_true")

    return parser


def normalize_shorthand_args(argv):
    if not argv:
        return argv

    known = set(COMMANDS.keys())
    first = argv[0]
    if first in known or first.startswith("-"):
        return argv

    # Shorthand: `eqfinder sony wh-1000` searches.
    return ["search", *argv]


def configure_logging(verbose=False):
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv=None):
    raw_argv = list(sys.argv[1:] if argv is None else argv)
    argv = normalize_shorthand_args(raw_argv)
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return ExitCode.USAGE

    return COMMANDS[args.command](args)
