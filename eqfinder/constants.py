"""Shared constants."""

from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    USAGE = 2
    RUNTIME_ERROR = 10
    NOT_FOUND = 20
    INVALID_PROFILE = 30


APP_NAME = "eqfinder"
UNKNOWN = "unknown"

RIG_HMS = "HMS II.3"
RIG_BK5128 = "Bruel & Kjaer 5128"

FORM_KEYWORDS = ("in-ear", "over-ear", "earbud")

NAME_INDEX_FILE = "name_index.tsv"
RESULT_README = "README.md"
