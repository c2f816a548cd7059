"""Headphone.com Legacy crawler."""

from eqfinder.constants import RIG_HMS
from eqfinder.crawlers.base import BaseCrawler


class HeadphonecomCrawler(BaseCrawler):
    # Every legacy Headphone.com graph was taken on the same fixture.
    source_name = "Headphone.com Legacy"

    def rig_for(self, path):
        return RIG_HMS
