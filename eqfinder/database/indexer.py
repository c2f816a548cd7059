"""Database build: name indexes per source, entries per result."""

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
import csv
from dataclasses import dataclass, field
import logging
from pathlib import Path
from types import MappingProxyType

from eqfinder.constants import NAME_INDEX_FILE, RIG_HMS, UNKNOWN
from eqfinder.core.models import Entry
from eqfinder.crawlers.registry import LEGACY_HMS_SOURCES, crawler_for
from eqfinder.database.result_path import GRAPHIC_EQ, resolve_profile_path, scan_results
from eqfinder.index.name_index import read_name_index_tsv
from eqfinder.search.engine import MeasurementSearch

logger = logging.getLogger(__name__)


def load_name_indexes(measurements_root, max_workers=4):
    """Return ``(indexes, diagnostics)`` with one name index per source.

    Sources shipping a ``name_index.tsv`` are read from it; known sources
    without one are crawled. Crawlers run on worker threads, each producing its
    own index; results are collected here one at a time.
    """
    root = Path(measurements_root)
    diagnostics = []
    if not root.is_dir():
        message = f"measurements directory does not exist: {root}"
        logger.warning(message)
        return {}, [message]

    indexes = {}
    crawlers = {}
    for source_dir in sorted(root.iterdir()):
        if not source_dir.is_dir():
            continue
        source = source_dir.name
        tsv = source_dir / NAME_INDEX_FILE
        if tsv.is_file():
            try:
                indexes[source] = read_name_index_tsv(tsv)
            except (OSError, ValueError, csv.Error) as exc:
                message = f"failed to load name index for {source}: {exc}"
                logger.warning(message)
                diagnostics.append(message)
            continue
        crawler = crawler_for(source, source_dir)
        if crawler is not None:
            crawlers[source] = crawler

    if crawlers:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = {source: pool.submit(c.read_name_index) for source, c in crawlers.items()}
            for source, future in futures.items():
                indexes[source] = future.result()

    for source in sorted(indexes):
        diagnostics.extend(indexes[source].diagnostics)
        logger.info("name index for %s: %d items", source, indexes[source].size())
    return indexes, diagnostics


def resolve_rig(result, name_indexes):
    rig = result.rig
    if rig:
        return rig
    index = name_indexes.get(result.source_name)
    if index is not None:
        record = index.get(result.headphone_name)
        if record is not None and record.rig != UNKNOWN:
            return record.rig
    if result.source_name in LEGACY_HMS_SOURCES:
        return RIG_HMS
    return UNKNOWN


def build_entries(results_root, name_indexes):
    results, diagnostics = scan_results(results_root)
    entries = [
        Entry(
            label=r.headphone_name,
            source=r.source_name,
            rig=resolve_rig(r, name_indexes),
            form=r.form,
            form_directory=r.form_rig,
        )
        for r in results
    ]
    logger.info("indexed %d entries", len(entries))
    return entries, diagnostics


@dataclass(frozen=True)
class Database:
    """Immutable snapshot of one database build."""

    results_root: Path
    entries: tuple[Entry, ...]
    name_indexes: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    diagnostics: tuple[str, ...] = ()

    @property
    def search(self):
        return MeasurementSearch(self.entries)

    def profile_path(self, entry, kind=GRAPHIC_EQ):
        return resolve_profile_path(self.results_root, entry, kind)


def build_database(root, max_workers=4):
    root = Path(root).expanduser()
    name_indexes, diagnostics = load_name_indexes(root / "measurements", max_workers=max_workers)
    entries, entry_diagnostics = build_entries(root / "results", name_indexes)
    return Database(
        results_root=root / "results",
        entries=tuple(entries),
        name_indexes=MappingProxyType(dict(name_indexes)),
        diagnostics=tuple(diagnostics + entry_diagnostics),
    )


def group_entries_by_label(entries):
    grouped = {}
    for entry in entries:
        grouped.setdefault(entry.label, []).append(entry)
    return grouped


@dataclass(frozen=True)
class IndexStatistics:
    total_entries: int
    unique_headphones: int
    source_breakdown: dict[str, int]
    rig_breakdown: dict[str, int]
    form_breakdown: dict[str, int]

    @property
    def unique_sources(self):
        return len(self.source_breakdown)

    @property
    def unique_rigs(self):
        return len(self.rig_breakdown)

    @property
    def unique_forms(self):
        return len(self.form_breakdown)

    def to_dict(self):
        return {
            "total_entries": self.total_entries,
            "unique_headphones": self.unique_headphones,
            "sources": self.source_breakdown,
            "rigs": self.rig_breakdown,
            "forms": self.form_breakdown,
        }

    def __str__(self):
        lines = [
            "Index statistics:",
            f"  Total entries: {self.total_entries}",
            f"  Unique headphones: {self.unique_headphones}",
            f"  Unique sources: {self.unique_sources}",
            f"  Unique rigs: {self.unique_rigs}",
            f"  Unique forms: {self.unique_forms}",
        ]
        for title, breakdown in (
            ("Sources", self.source_breakdown),
            ("Rigs", self.rig_breakdown),
            ("Forms", self.form_breakdown),
        ):
            lines.append(f"{title}:")
            lines.extend(f"  {k}: {v}" for k, v in breakdown.items())
        return "\n".join(lines)


def compute_statistics(entries):
    return IndexStatistics(
        total_entries=len(entries),
        unique_headphones=len({e.label for e in entries}),
        source_breakdown=dict(sorted(Counter(e.source for e in entries).items())),
        rig_breakdown=dict(sorted(Counter(e.rig for e in entries).items())),
        form_breakdown=dict(sorted(Counter(e.form for e in entries).items())),
    )
