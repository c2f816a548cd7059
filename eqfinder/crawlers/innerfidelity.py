"""Innerfidelity crawler."""

from eqfinder.constants import RIG_HMS
from eqfinder.crawlers.base import BaseCrawler


class InnerfidelityCrawler(BaseCrawler):
    source_name = "Innerfidelity"

    def rig_for(self, path):
        return RIG_HMS
