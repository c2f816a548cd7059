"""Shared data models."""

from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np

from eqfinder.constants import UNKNOWN


@dataclass(frozen=True)
class NameRecord:
    """One device name as published by one measurement source."""

    name: str
    form: str = UNKNOWN
    rig: str = UNKNOWN
    manufacturer: str | None = None
    true_model: str | None = None
    false_name: str | None = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("name record requires a non-blank name")

    def merge(self, other):
        """Return a new record with ``other`` layered over this one.

        The incoming name always wins. Form and rig only replace the current
        value when the incoming one is known; optional fields only when set.
        """
        return NameRecord(
            name=other.name,
            form=other.form if other.form != UNKNOWN else self.form,
            rig=other.rig if other.rig != UNKNOWN else self.rig,
            manufacturer=other.manufacturer if other.manufacturer is not None else self.manufacturer,
            true_model=other.true_model if other.true_model is not None else self.true_model,
            false_name=other.false_name if other.false_name is not None else self.false_name,
        )

    @classmethod
    def from_tsv_row(cls, row):
        def cell(i):
            if i < len(row) and row[i] is not None and row[i].strip():
                return row[i].strip()
            return None

        name = cell(0)
        if name is None:
            return None
        return cls(
            name=name,
            form=cell(1) or UNKNOWN,
            rig=cell(2) or UNKNOWN,
            manufacturer=cell(3),
            true_model=cell(4),
            false_name=cell(5),
        )


@dataclass(frozen=True)
class Entry:
    """Searchable (device, source, rig) projection."""

    label: str
    source: str
    rig: str = UNKNOWN
    form: str = UNKNOWN
    form_directory: str = ""

    def secondary_text(self):
        parts = []
        if self.source != UNKNOWN:
            parts.append(f"by {self.source}")
        if self.rig != UNKNOWN:
            parts.append(f"on {self.rig}")
        return " ".join(parts)

    def display_string(self):
        secondary = self.secondary_text()
        return f"{self.label} {secondary}" if secondary else self.label

    def to_dict(self):
        return {
            "label": self.label,
            "form": self.form,
            "rig": self.rig,
            "source": self.source,
            "form_directory": self.form_directory or self.form,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            label=data["label"],
            source=data.get("source", UNKNOWN),
            rig=data.get("rig", UNKNOWN),
            form=data.get("form", UNKNOWN),
            form_directory=data.get("form_directory", ""),
        )


@dataclass(frozen=True)
class GraphicEQBand:
    frequency: float
    gain: float


@dataclass(frozen=True)
class GraphicEQ:
    bands: tuple[GraphicEQBand, ...] = ()
    metadata: MappingProxyType = field(default_factory=lambda: MappingProxyType({}), hash=False)
    diagnostics: tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self):
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def frequencies(self):
        return [b.frequency for b in self.bands]

    def gain_for_frequency(self, frequency):
        for band in self.bands:
            if band.frequency == frequency:
                return band.gain
        return None

    def interpolate_gain(self, frequency):
        """Linear interpolation between neighbouring bands, clamped at the edges."""
        if not self.bands:
            return 0.0
        exact = self.gain_for_frequency(frequency)
        if exact is not None:
            return exact
        ordered = sorted(self.bands, key=lambda b: b.frequency)
        freqs = np.array([b.frequency for b in ordered], dtype=float)
        gains = np.array([b.gain for b in ordered], dtype=float)
        return float(np.interp(frequency, freqs, gains))

    def adapt_to_bands(self, frequencies):
        """Re-sample the curve onto a device's own band centres."""
        bands = tuple(GraphicEQBand(float(f), self.interpolate_gain(f)) for f in frequencies)
        return GraphicEQ(bands=bands, metadata=self.metadata)


@dataclass(frozen=True)
class FixedBandEQBand:
    frequency: float
    gain: float
    enabled: bool = True


@dataclass(frozen=True)
class FixedBandEQ:
    preamp: float = 0.0
    bands: tuple[FixedBandEQBand, ...] = ()
    diagnostics: tuple[str, ...] = field(default=(), compare=False)
    dropped_filters: tuple[str, ...] = field(default=(), compare=False)

    STANDARD_FREQUENCIES = (31.0, 62.0, 125.0, 250.0, 500.0, 1000.0, 2000.0, 4000.0, 8000.0, 16000.0)
    MAX_BANDS = 10

    def enabled_bands(self):
        return [b for b in self.bands if b.enabled]
