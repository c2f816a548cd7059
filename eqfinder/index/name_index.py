"""Name index: merged name records for one measurement source."""

import csv
import logging
from pathlib import Path
from types import MappingProxyType

from eqfinder.core.models import Entry, NameRecord

logger = logging.getLogger(__name__)

TSV_COLUMNS = ("name", "form", "rig", "manufacturer", "true_model", "false_name")
HEADER_ALIASES = {
    "model": "name",
    "true model": "true_model",
    "false name": "false_name",
}


def normalize_name(name):
    return " ".join(name.split()).casefold()


class NameIndexBuilder:
    """Exclusive, mutable stage of a name index.

    Populate with ``add`` and call ``build`` to get the immutable snapshot.
    """

    def __init__(self, aliases=None, preserve_case=False):
        self._aliases = {normalize_name(k): v for k, v in (aliases or {}).items()}
        self._preserve_case = preserve_case
        self._records = {}
        self._diagnostics = []

    def key_for(self, name):
        canonical = self._aliases.get(normalize_name(name), name)
        if self._preserve_case:
            return canonical.strip()
        return normalize_name(canonical)

    def add(self, record):
        key = self.key_for(record.name)
        existing = self._records.get(key)
        self._records[key] = record if existing is None else existing.merge(record)

    def add_diagnostic(self, message):
        logger.warning(message)
        self._diagnostics.append(message)

    def size(self):
        return len(self._records)

    def __len__(self):
        return self.size()

    def build(self):
        return NameIndex(self._records, self._diagnostics, key_for=self.key_for)


class NameIndex:
    """Read-only snapshot of merged name records keyed by device identity."""

    def __init__(self, records=None, diagnostics=(), key_for=normalize_name):
        self._records = MappingProxyType(dict(records or {}))
        self._key_for = key_for
        self.diagnostics = tuple(diagnostics)

    def size(self):
        return len(self._records)

    def __len__(self):
        return self.size()

    def __iter__(self):
        return iter(self._records.values())

    def __contains__(self, name):
        return self._key_for(name) in self._records

    def __repr__(self):
        return f"NameIndex(items={self.size()})"

    def names(self):
        return [r.name for r in self._records.values()]

    def get(self, name, default=None):
        return self._records.get(self._key_for(name), default)

    def find(self, name):
        record = self.get(name)
        return [record] if record is not None else []

    def find_one(self, name, form=None, rig=None):
        matches = self.find(name)
        if not matches:
            raise KeyError(f"no name record found for {name!r}")
        if form is not None:
            matches = [r for r in matches if r.form == form]
            if not matches:
                raise KeyError(f"no name record found for {name!r} with form {form!r}")
        if rig is not None:
            matches = [r for r in matches if r.rig == rig]
            if not matches:
                raise KeyError(f"no name record found for {name!r} with rig {rig!r}")
        return matches[0]

    def merged(self, other):
        """Fold ``other`` into a copy of this index. Neither input changes."""
        records = dict(self._records)
        for record in other:
            key = self._key_for(record.name)
            existing = records.get(key)
            records[key] = record if existing is None else existing.merge(record)
        return NameIndex(records, self.diagnostics + other.diagnostics, key_for=self._key_for)

    def to_entries(self, source):
        return [
            Entry(label=r.name, source=source, rig=r.rig, form=r.form, form_directory=r.form)
            for r in self._records.values()
        ]


def _header_columns(row):
    columns = []
    for cell in row:
        key = cell.strip().lower()
        columns.append(HEADER_ALIASES.get(key, key.replace(" ", "_")))
    if "name" in columns:
        return columns
    return None


def read_name_index_tsv(path, aliases=None):
    """Load a provider ``name_index.tsv`` into a name index."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"name index not found: {p}")

    builder = NameIndexBuilder(aliases=aliases)
    columns = None
    first_row = True
    with p.open("r", newline="", encoding="utf-8") as f:
        reader = csv.reader(f, delimiter="\t", quoting=csv.QUOTE_NONE)
        for line_number, row in enumerate(reader, start=1):
            if not row or not any(cell.strip() for cell in row):
                continue
            if row[0].strip().startswith("#"):
                continue
            if first_row:
                first_row = False
                columns = _header_columns(row)
                if columns is not None:
                    continue
            if columns is not None:
                values = dict(zip(columns, row))
                row = [values.get(c) for c in TSV_COLUMNS]
            try:
                record = NameRecord.from_tsv_row(row)
            except ValueError as exc:
                builder.add_diagnostic(f"{p.name}:{line_number}: {exc}")
                continue
            if record is None:
                builder.add_diagnostic(f"{p.name}:{line_number}: missing name, row skipped")
                continue
            if record.rig == "ignore":
                continue
            builder.add(record)

    index = builder.build()
    logger.info("loaded %d name records from %s", index.size(), p)
    return index

