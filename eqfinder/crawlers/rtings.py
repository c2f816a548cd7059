"""Rtings crawler.

Rtings changed fixtures with test methodology 1.8:
  - 1.8 and later: Bruel & Kjaer 5128
  - 1.7 and earlier: HMS II.3

Per-file methodology lookup is not done here; the crawler applies one rig to
the whole source, either given directly or derived from a methodology version.
"""

from eqfinder.constants import RIG_BK5128, RIG_HMS
from eqfinder.crawlers.base import BaseCrawler

RIG_SWITCH_VERSION = (1, 8)


def parse_methodology_version(version):
    """Parse ``"1.10"`` into ``(1, 10)``. Missing or bad components are 0."""
    parts = str(version).strip().split(".")

    def component(i):
        try:
            return int(parts[i])
        except (IndexError, ValueError):
            return 0

    return component(0), component(1)


def compare_versions(v1, v2):
    """Return -1, 0 or 1 comparing two (major, minor) pairs."""
    if v1[0] != v2[0]:
        return -1 if v1[0] < v2[0] else 1
    if v1[1] != v2[1]:
        return -1 if v1[1] < v2[1] else 1
    return 0


def rig_for_version(version):
    if isinstance(version, str):
        version = parse_methodology_version(version)
    if compare_versions(version, RIG_SWITCH_VERSION) >= 0:
        return RIG_BK5128
    return RIG_HMS


class RtingsCrawler(BaseCrawler):
    source_name = "Rtings"

    def __init__(self, measurements_path, default_rig=RIG_BK5128, methodology_version=None):
        super().__init__(measurements_path)
        if methodology_version is not None:
            default_rig = rig_for_version(methodology_version)
        self.default_rig = default_rig

    def rig_for(self, path):
        return self.default_rig
