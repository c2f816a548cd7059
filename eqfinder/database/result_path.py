"""Result tree layout.

    results/<source>/<rig form>/<name>/README.md

e.g. ``results/crinacle/711 in-ear/64 Audio Nio/README.md``. The middle
directory carries the form keyword and, optionally, the rig in front of it.
"""

from dataclasses import dataclass
import logging
from pathlib import Path

from eqfinder.constants import FORM_KEYWORDS, RESULT_README, UNKNOWN

logger = logging.getLogger(__name__)

PARAMETRIC_EQ = "ParametricEQ"
FIXED_BAND_EQ = "FixedBandEQ"
GRAPHIC_EQ = "GraphicEQ"
PROFILE_KINDS = (PARAMETRIC_EQ, FIXED_BAND_EQ, GRAPHIC_EQ)


def parse_form_rig(form_rig):
    """Split ``"Bruel & Kjaer 5128 in-ear"`` into ``("Bruel & Kjaer 5128", "in-ear")``.

    Without a form keyword the rig is empty and the form is unknown.
    """
    lowered = form_rig.lower()
    for form in FORM_KEYWORDS:
        pos = lowered.find(form)
        if pos != -1:
            rig = (form_rig[:pos] + form_rig[pos + len(form):]).strip()
            return rig, form
    return "", UNKNOWN


def profile_filename(name, kind):
    if kind not in PROFILE_KINDS:
        raise ValueError(f"unknown profile kind: {kind}")
    return f"{name} {kind}.txt"


@dataclass(frozen=True)
class ResultPath:
    source_name: str
    form_rig: str
    headphone_name: str
    result_dir: Path

    @classmethod
    def from_readme(cls, readme_path, results_root):
        parts = Path(readme_path).relative_to(results_root).parts
        if len(parts) != 4:
            raise ValueError(
                f"invalid result path {'/'.join(parts)}; "
                "expected <source>/<rig form>/<name>/README.md"
            )
        source, form_rig, name, _ = parts
        return cls(
            source_name=source,
            form_rig=form_rig,
            headphone_name=name,
            result_dir=Path(results_root) / source / form_rig / name,
        )

    @property
    def rig(self):
        return parse_form_rig(self.form_rig)[0]

    @property
    def form(self):
        return parse_form_rig(self.form_rig)[1]

    def profile_path(self, kind):
        return self.result_dir / profile_filename(self.headphone_name, kind)

    def has_profile(self, kind):
        return self.profile_path(kind).is_file()


def scan_results(results_root):
    """Return ``(result_paths, diagnostics)`` for every README under the root."""
    root = Path(results_root)
    diagnostics = []
    if not root.is_dir():
        message = f"results directory does not exist: {root}"
        logger.warning(message)
        return [], [message]

    results = []
    for readme in sorted(root.rglob(RESULT_README)):
        # Index pages of the tree itself, not results.
        if len(readme.relative_to(root).parts) < 4:
            continue
        try:
            results.append(ResultPath.from_readme(readme, root))
        except ValueError as exc:
            logger.warning("%s", exc)
            diagnostics.append(str(exc))
    return results, diagnostics


def resolve_profile_path(results_root, entry, kind=GRAPHIC_EQ):
    form_dir = entry.form_directory or entry.form
    return Path(results_root) / entry.source / form_dir / entry.label / profile_filename(entry.label, kind)


def results_mtime(results_root):
    """Latest mtime of the results root and its ``<source>/<rig form>`` directories.

    Adding or removing a headphone touches its ``<rig form>`` directory, so this
    changes whenever the set of results does. ``None`` when the root is missing.
    """
    root = Path(results_root)
    if not root.is_dir():
        return None
    latest = root.stat().st_mtime
    for source_dir in root.iterdir():
        if not source_dir.is_dir():
            continue
        latest = max(latest, source_dir.stat().st_mtime)
        for form_dir in source_dir.iterdir():
            if form_dir.is_dir():
                latest = max(latest, form_dir.stat().st_mtime)
    return latest
