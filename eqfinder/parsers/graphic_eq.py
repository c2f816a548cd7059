"""GraphicEQ text format.

    GraphicEQ: 25 -10.0; 40 -8.5; 63 -7.0; ... 16000 -2.5

One ``GraphicEQ:`` line of ``frequency gain`` pairs separated by ``;``.
Any other ``key: value`` line is kept as metadata.
"""

import logging
import math
from pathlib import Path

from eqfinder.core.models import GraphicEQ, GraphicEQBand

logger = logging.getLogger(__name__)

HEADER = "graphiceq:"
MAX_ABS_GAIN_DB = 30.0


def _parse_pairs(data, diagnostics):
    bands = []
    for pair in data.split(";"):
        pair = pair.strip()
        if not pair:
            continue
        parts = pair.split()
        if len(parts) < 2:
            diagnostics.append(f"skipped GraphicEQ pair without gain: {pair!r}")
            continue
        try:
            frequency, gain = float(parts[0]), float(parts[1])
        except ValueError:
            frequency = gain = math.nan
        if not (math.isfinite(frequency) and math.isfinite(gain)):
            diagnostics.append(f"skipped non-numeric GraphicEQ pair: {pair!r}")
            continue
        bands.append(GraphicEQBand(frequency=frequency, gain=gain))
    return bands


def parse_text(content):
    bands = []
    metadata = {}
    diagnostics = []

    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.lower().startswith(HEADER):
            bands.extend(_parse_pairs(line[len(HEADER):], diagnostics))
            continue
        key, sep, value = line.partition(":")
        if sep and key.strip():
            metadata[key.strip()] = value.strip()

    for message in diagnostics:
        logger.warning(message)
    return GraphicEQ(bands=tuple(bands), metadata=metadata, diagnostics=tuple(diagnostics))


def parse_file(path):
    p = Path(path).expanduser()
    if not p.is_file():
        raise FileNotFoundError(f"GraphicEQ file not found: {p}")
    return parse_text(p.read_text(encoding="utf-8"))


def to_line(eq):
    points = "; ".join(f"{int(b.frequency)} {b.gain:.1f}" for b in eq.bands)
    return f"GraphicEQ: {points}"


def to_file_format(eq):
    lines = [to_line(eq)]
    lines.extend(f"{key}: {value}" for key, value in eq.metadata.items())
    return "\n".join(lines) + "\n"


def validate(eq):
    """Return human-readable problems with ``eq``; empty when it looks sane."""
    errors = []
    if not eq.bands:
        errors.append("No EQ bands found")

    seen = set()
    duplicates = []
    for band in eq.bands:
        if band.frequency in seen and band.frequency not in duplicates:
            duplicates.append(band.frequency)
        seen.add(band.frequency)
    if duplicates:
        errors.append("Duplicate frequencies found: " + ", ".join(f"{f:g}" for f in duplicates))

    for band in eq.bands:
        if not math.isfinite(band.frequency):
            errors.append(f"Invalid frequency: {band.frequency}")
        if not math.isfinite(band.gain) or abs(band.gain) > MAX_ABS_GAIN_DB:
            errors.append(f"Unusual gain value at {band.frequency:g} Hz: {band.gain} dB")

    for prev, cur in zip(eq.bands, eq.bands[1:]):
        if cur.frequency <= prev.frequency:
            errors.append("Frequencies are not in ascending order")
            break

    return errors
