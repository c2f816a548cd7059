import tempfile
import unittest
from pathlib import Path

from eqfinder.core.models import GraphicEQ, GraphicEQBand
from eqfinder.parsers import graphic_eq


class GraphicEQParseTests(unittest.TestCase):
    def test_parses_band_line(self):
        eq = graphic_eq.parse_text("GraphicEQ: 25 -10.0; 40 -8.5; 63 -7.0")
        self.assertEqual(
            [(b.frequency, b.gain) for b in eq.bands],
            [(25.0, -10.0), (40.0, -8.5), (63.0, -7.0)],
        )
        self.assertEqual(eq.metadata, {})
        self.assertEqual(eq.diagnostics, ())

    def test_header_is_case_insensitive(self):
        eq = graphic_eq.parse_text("graphiceq: 100 1.5")
        self.assertEqual(eq.bands, (GraphicEQBand(100.0, 1.5),))

    def test_other_lines_become_metadata(self):
        eq = graphic_eq.parse_text("Source: AutoEq\n\n# comment\nGraphicEQ: 20 1.0\nTarget: Harman over-ear 2018\n")
        self.assertEqual(eq.metadata, {"Source": "AutoEq", "Target": "Harman over-ear 2018"})
        self.assertEqual(len(eq.bands), 1)

    def test_malformed_pairs_are_skipped(self):
        eq = graphic_eq.parse_text("GraphicEQ: 25 -10.0; abc 1.0; 40; 63 -7.0;")
        self.assertEqual([b.frequency for b in eq.bands], [25.0, 63.0])
        self.assertEqual(len(eq.diagnostics), 2)

    def test_non_finite_values_are_skipped(self):
        eq = graphic_eq.parse_text("GraphicEQ: 20 -1.0; 30 nan; inf 2.0; 40 infinity; 50 0.5")
        self.assertEqual([b.frequency for b in eq.bands], [20.0, 50.0])
        self.assertEqual(len(eq.diagnostics), 3)
        self.assertTrue(all("non-numeric" in d for d in eq.diagnostics))
        self.assertEqual(graphic_eq.to_line(eq), "GraphicEQ: 20 -1.0; 50 0.5")

    def test_parse_file(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "HD 600 GraphicEQ.txt"
            p.write_text("GraphicEQ: 20 -1.0; 30 -0.5\n", encoding="utf-8")
            eq = graphic_eq.parse_file(p)
            self.assertEqual(len(eq.bands), 2)
            with self.assertRaises(FileNotFoundError):
                graphic_eq.parse_file(Path(td) / "missing.txt")


class GraphicEQSerializeTests(unittest.TestCase):
    def test_to_line_format(self):
        eq = GraphicEQ(bands=(GraphicEQBand(25.0, -10.0), GraphicEQBand(31.5, 1.23)))
        self.assertEqual(graphic_eq.to_line(eq), "GraphicEQ: 25 -10.0; 31 1.2")

    def test_round_trip(self):
        eq = GraphicEQ(bands=(GraphicEQBand(20.0, 1.23), GraphicEQBand(31.5, -4.0), GraphicEQBand(1000.0, 0.0)))
        reparsed = graphic_eq.parse_text(graphic_eq.to_line(eq))
        self.assertEqual(
            [(b.frequency, b.gain) for b in reparsed.bands],
            [(float(int(b.frequency)), round(b.gain, 1)) for b in eq.bands],
        )

    def test_file_format_appends_metadata(self):
        eq = GraphicEQ(bands=(GraphicEQBand(20.0, 1.0),), metadata={"Source": "AutoEq"})
        self.assertEqual(graphic_eq.to_file_format(eq), "GraphicEQ: 20 1.0\nSource: AutoEq\n")
        self.assertEqual(graphic_eq.parse_text(graphic_eq.to_file_format(eq)), eq)


class GraphicEQValidateTests(unittest.TestCase):
    def test_valid_profile(self):
        eq = graphic_eq.parse_text("GraphicEQ: 25 -10.0; 40 -8.5; 63 -7.0")
        self.assertEqual(graphic_eq.validate(eq), [])

    def test_reports_problems(self):
        eq = GraphicEQ(bands=(GraphicEQBand(100.0, 1.0), GraphicEQBand(50.0, 45.0), GraphicEQBand(100.0, 0.0)))
        errors = graphic_eq.validate(eq)
        self.assertTrue(any("Duplicate" in e for e in errors))
        self.assertTrue(any("Unusual gain" in e for e in errors))
        self.assertTrue(any("ascending" in e for e in errors))

    def test_empty_profile(self):
        self.assertEqual(graphic_eq.validate(GraphicEQ()), ["No EQ bands found"])

    def test_non_finite_band_is_reported(self):
        eq = GraphicEQ(bands=(GraphicEQBand(20.0, 0.0), GraphicEQBand(30.0, float("nan"))))
        errors = graphic_eq.validate(eq)
        self.assertEqual(len(errors), 1)
        self.assertIn("Unusual gain value at 30 Hz", errors[0])


if __name__ == "__main__":
    unittest.main()
