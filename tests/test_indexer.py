import os
import tempfile
import unittest
from pathlib import Path

from eqfinder.core.models import Entry
from eqfinder.database.indexer import (
    build_database,
    build_entries,
    compute_statistics,
    group_entries_by_label,
    load_name_indexes,
)
from eqfinder.database.result_path import ResultPath, parse_form_rig, resolve_profile_path, results_mtime
from eqfinder.parsers.detect import GRAPHIC, load_profile


def make_database(root):
    root = Path(root)
    files = [
        "measurements/Innerfidelity/data/over-ear/Sennheiser HD 600.csv",
        "results/README.md",
        "results/oratory1990/over-ear/AKG K371/README.md",
        "results/Innerfidelity/over-ear/Sennheiser HD 600/README.md",
        "results/crinacle/711 in-ear/64 Audio Nio/README.md",
        "results/Someone/over-ear/Foo Bar/README.md",
    ]
    for rel in files:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("x\n")
    tsv = root / "measurements" / "oratory1990" / "name_index.tsv"
    tsv.parent.mkdir(parents=True, exist_ok=True)
    tsv.write_text("name\tform\trig\nAKG K371\tover-ear\tGRAS 43AG-7\n", encoding="utf-8")
    return root


class FormRigTests(unittest.TestCase):
    def test_parse_form_rig(self):
        self.assertEqual(parse_form_rig("Bruel & Kjaer 5128 in-ear"), ("Bruel & Kjaer 5128", "in-ear"))
        self.assertEqual(parse_form_rig("711 in-ear"), ("711", "in-ear"))
        self.assertEqual(parse_form_rig("over-ear"), ("", "over-ear"))
        self.assertEqual(parse_form_rig("HMS II.3 earbud"), ("HMS II.3", "earbud"))
        self.assertEqual(parse_form_rig("misc"), ("", "unknown"))

    def test_result_path_depth(self):
        root = Path("/db/results")
        result = ResultPath.from_readme(root / "crinacle" / "711 in-ear" / "Nio" / "README.md", root)
        self.assertEqual(result.rig, "711")
        self.assertEqual(result.form, "in-ear")
        self.assertEqual(result.profile_path("GraphicEQ").name, "Nio GraphicEQ.txt")
        with self.assertRaises(ValueError):
            ResultPath.from_readme(root / "a" / "b" / "c" / "d" / "README.md", root)

    def test_has_profile(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            readme = root / "oratory1990" / "over-ear" / "HD 600" / "README.md"
            readme.parent.mkdir(parents=True)
            readme.write_text("x\n")
            (readme.parent / "HD 600 GraphicEQ.txt").write_text("GraphicEQ: 20 0.0\n")
            result = ResultPath.from_readme(readme, root)
            self.assertTrue(result.has_profile("GraphicEQ"))
            self.assertFalse(result.has_profile("FixedBandEQ"))

    def test_resolve_profile_path(self):
        entry = Entry("64 Audio Nio", "crinacle", rig="711", form="in-ear", form_directory="711 in-ear")
        path = resolve_profile_path("/db/results", entry, "FixedBandEQ")
        self.assertEqual(path, Path("/db/results/crinacle/711 in-ear/64 Audio Nio/64 Audio Nio FixedBandEQ.txt"))
        with self.assertRaises(ValueError):
            resolve_profile_path("/db/results", entry, "Unknown")


class IndexerTests(unittest.TestCase):
    def test_load_name_indexes_reads_tsv_and_crawls(self):
        with tempfile.TemporaryDirectory() as td:
            root = make_database(td)
            indexes, diagnostics = load_name_indexes(root / "measurements")

        self.assertEqual(set(indexes), {"Innerfidelity", "oratory1990"})
        self.assertEqual(indexes["Innerfidelity"].get("Sennheiser HD 600").rig, "HMS II.3")
        self.assertEqual(indexes["oratory1990"].get("AKG K371").rig, "GRAS 43AG-7")
        self.assertEqual(diagnostics, [])

    def test_missing_measurements_directory(self):
        with tempfile.TemporaryDirectory() as td:
            indexes, diagnostics = load_name_indexes(Path(td) / "missing")
        self.assertEqual(indexes, {})
        self.assertEqual(len(diagnostics), 1)

    def test_build_database_resolves_rigs(self):
        with tempfile.TemporaryDirectory() as td:
            root = make_database(td)
            db = build_database(root)

        by_label = {e.label: e for e in db.entries}
        self.assertEqual(len(db.entries), 4)
        self.assertEqual(by_label["AKG K371"].rig, "GRAS 43AG-7")
        self.assertEqual(by_label["Sennheiser HD 600"].rig, "HMS II.3")
        self.assertEqual(by_label["64 Audio Nio"].rig, "711")
        self.assertEqual(by_label["64 Audio Nio"].form, "in-ear")
        self.assertEqual(by_label["Foo Bar"].rig, "unknown")
        self.assertEqual(db.search.search("nio")[0].label, "64 Audio Nio")
        self.assertEqual(
            db.profile_path(by_label["64 Audio Nio"]),
            root / "results" / "crinacle" / "711 in-ear" / "64 Audio Nio" / "64 Audio Nio GraphicEQ.txt",
        )

    def test_default_profile_path_loads_as_graphic_eq(self):
        with tempfile.TemporaryDirectory() as td:
            root = make_database(td)
            db = build_database(root)
            entry = next(e for e in db.entries if e.label == "64 Audio Nio")
            db.profile_path(entry).write_text("GraphicEQ: 20 -1.0; 1000 0.0; 20000 2.0\n", encoding="utf-8")
            loaded = load_profile(db.profile_path(entry))
        self.assertEqual(loaded.kind, GRAPHIC)
        self.assertTrue(loaded.ok)

    def test_results_mtime(self):
        with tempfile.TemporaryDirectory() as td:
            self.assertIsNone(results_mtime(Path(td) / "missing"))
            root = make_database(td) / "results"
            form_dir = root / "crinacle" / "711 in-ear"
            later = int(results_mtime(root)) + 100
            os.utime(form_dir, (later, later))
            self.assertEqual(results_mtime(root), later)

    def test_legacy_source_falls_back_to_hms(self):
        with tempfile.TemporaryDirectory() as td:
            readme = Path(td) / "results" / "Headphone.com Legacy" / "over-ear" / "HD 580" / "README.md"
            readme.parent.mkdir(parents=True)
            readme.write_text("x\n")
            entries, diagnostics = build_entries(Path(td) / "results", {})
        self.assertEqual(entries[0].rig, "HMS II.3")
        self.assertEqual(diagnostics, [])

    def test_rebuild_returns_new_snapshot(self):
        with tempfile.TemporaryDirectory() as td:
            root = make_database(td)
            first = build_database(root)
            extra = root / "results" / "crinacle" / "711 in-ear" / "Moondrop Aria" / "README.md"
            extra.parent.mkdir(parents=True)
            extra.write_text("x\n")
            second = build_database(root)
        self.assertEqual(len(first.entries), 4)
        self.assertEqual(len(second.entries), 5)

    def test_statistics_and_grouping(self):
        entries = [
            Entry("HD 600", "oratory1990", rig="GRAS 43AG-7", form="over-ear"),
            Entry("HD 600", "Innerfidelity", rig="HMS II.3", form="over-ear"),
            Entry("Nio", "crinacle", rig="711", form="in-ear"),
        ]
        stats = compute_statistics(entries)
        self.assertEqual(stats.total_entries, 3)
        self.assertEqual(stats.unique_headphones, 2)
        self.assertEqual(stats.unique_sources, 3)
        self.assertEqual(stats.form_breakdown, {"in-ear": 1, "over-ear": 2})
        self.assertIn("Total entries: 3", str(stats))
        self.assertEqual(len(group_entries_by_label(entries)["HD 600"]), 2)


if __name__ == "__main__":
    unittest.main()
