"""Fixed 10-band EQ text format.

    Preamp: -12.1 dB
    Filter 1: ON PK Fc 31 Hz Gain 3.8 dB Q 1.41
    Filter 2: ON PK Fc 62 Hz Gain 2.0 dB Q 1.41

Only peaking filters are modelled. Q is accepted but not kept: the format
uses one fixed bandwidth for every band.
"""

import logging
from pathlib import Path
import re

from eqfinder.core.models import FixedBandEQ, FixedBandEQBand

logger = logging.getLogger(__name__)

PREAMP_RE = re.compile(r"Preamp:\s*([-+]?[\d.]+)\s*dB", re.IGNORECASE)
FILTER_RE = re.compile(
    r"Filter\s+\d+:\s+(ON|OFF)\s+PK\s+Fc\s+([\d.]+)\s+Hz\s+Gain\s+([-+]?[\d.]+)\s+dB",
    re.IGNORECASE,
)
FILTER_PREFIX_RE = re.compile(r"Filter\s+\d+:", re.IGNORECASE)

FIXED_BAND_Q = 1.41
MAX_ABS_PREAMP_DB = 20.0
MAX_ABS_GAIN_DB = 20.0
MAX_FREQUENCY_HZ = 24000.0


def _parse_preamp(line):
    match = PREAMP_RE.search(line)
    if match is None:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None


def _parse_filter(line):
    match = FILTER_RE.search(line)
    if match is None:
        return None
    try:
        frequency = float(match.group(2))
        gain = float(match.group(3))
    except ValueError:
        return None
    return FixedBandEQBand(frequency=frequency, gain=gain, enabled=match.group(1).upper() == "ON")


def parse_text(content):
    preamp = 0.0
    bands = []
    diagnostics = []
    dropped = []

    for line in content.splitlines():
        line = line.strip()
        if not line:
            continue
        lowered = line.lower()
        if lowered.startswith("preamp:"):
            value = _parse_preamp(line)
            if value is None:
                diagnostics.append(f"ignored malformed preamp line: {line!r}")
            else:
                preamp = value
        elif FILTER_PREFIX_RE.match(line):
            band = _parse_filter(line)
            if band is None:
                dropped.append(line)
                diagnostics.append(f"dropped filter line: {line!r}")
            else:
                bands.append(band)

    for message in diagnostics:
        logger.warning(message)
    return FixedBandEQ(
        preamp=preamp,
        bands=tuple(bands),
        diagnostics=tuple(diagnostics),
        dropped_filters=tuple(dropped),
    )


def parse_file(path):
    p = Path(path).expanduser()
    if not p.is_file():
        raise FileNotFoundError(f"FixedBandEQ file not found: {p}")
    return parse_text(p.read_text(encoding="utf-8"))


def to_file_format(eq):
    lines = [f"Preamp: {eq.preamp:.1f} dB"]
    for i, band in enumerate(eq.bands, start=1):
        state = "ON" if band.enabled else "OFF"
        lines.append(
            f"Filter {i}: {state} PK Fc {band.frequency:g} Hz Gain {band.gain:.1f} dB Q {FIXED_BAND_Q:.2f}"
        )
    return "\n".join(lines) + "\n"


def validate(eq):
    errors = []
    if abs(eq.preamp) > MAX_ABS_PREAMP_DB:
        errors.append(f"Preamp {eq.preamp} dB is outside reasonable range (-20 to +20 dB)")
    if not eq.bands:
        errors.append("No filter bands found")
    if len(eq.bands) > FixedBandEQ.MAX_BANDS:
        errors.append(f"Too many bands: {len(eq.bands)} (expected {FixedBandEQ.MAX_BANDS})")
    if eq.dropped_filters:
        errors.append(f"Unsupported filter lines dropped: {len(eq.dropped_filters)} (only PK filters are supported)")

    for band in eq.bands:
        if band.frequency <= 0 or band.frequency > MAX_FREQUENCY_HZ:
            errors.append(f"Invalid frequency: {band.frequency:g} Hz")
        if band.enabled and abs(band.gain) > MAX_ABS_GAIN_DB:
            errors.append(f"Gain {band.gain} dB at {band.frequency:g} Hz is outside reasonable range")

    return errors
