"""Format detection and the profile hand-off unit."""

from dataclasses import dataclass
from pathlib import Path

from eqfinder.parsers import fixed_band_eq, graphic_eq

GRAPHIC = "graphic"
FIXED_BAND = "fixed_band"

PARSERS = {
    GRAPHIC: graphic_eq,
    FIXED_BAND: fixed_band_eq,
}


@dataclass(frozen=True)
class LoadedProfile:
    kind: str
    profile: object
    errors: tuple[str, ...]

    @property
    def ok(self):
        return not self.errors


def detect_format(content):
    # A GraphicEQ line wins over a Preamp line written ahead of it.
    kind = None
    for line in content.splitlines():
        line = line.strip()
        lowered = line.lower()
        if lowered.startswith(graphic_eq.HEADER):
            return GRAPHIC
        if lowered.startswith("preamp:") or fixed_band_eq.FILTER_RE.match(line):
            kind = FIXED_BAND
    return kind


def load_text(content, kind=None):
    kind = kind or detect_format(content)
    if kind not in PARSERS:
        raise ValueError("unrecognised EQ profile format")
    parser = PARSERS[kind]
    profile = parser.parse_text(content)
    return LoadedProfile(kind=kind, profile=profile, errors=tuple(parser.validate(profile)))


def load_profile(path, kind=None):
    p = Path(path).expanduser()
    if not p.is_file():
        raise FileNotFoundError(f"profile not found: {p}")
    return load_text(p.read_text(encoding="utf-8"), kind=kind)
