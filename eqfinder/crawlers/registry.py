"""Sources that are crawled instead of read from a name_index.tsv."""

from eqfinder.crawlers.headphonecom import HeadphonecomCrawler
from eqfinder.crawlers.innerfidelity import InnerfidelityCrawler
from eqfinder.crawlers.rtings import RtingsCrawler

CRAWLERS = {
    cls.source_name: cls
    for cls in (HeadphonecomCrawler, InnerfidelityCrawler, RtingsCrawler)
}

# Sources whose entries fall back to HMS II.3 when no rig is known.
LEGACY_HMS_SOURCES = (HeadphonecomCrawler.source_name, InnerfidelityCrawler.source_name)


def crawler_for(source_name, measurements_path):
    cls = CRAWLERS.get(source_name)
    if cls is None:
        return None
    return cls(measurements_path)
