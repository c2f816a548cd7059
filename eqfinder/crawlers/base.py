"""Crawler contract for measurement sources without a name index file."""

from abc import ABC, abstractmethod
import logging
from pathlib import Path

from eqfinder.constants import UNKNOWN
from eqfinder.core.models import NameRecord
from eqfinder.index.name_index import NameIndexBuilder

logger = logging.getLogger(__name__)


class BaseCrawler(ABC):
    """Walks ``<measurements_path>/data/<form>/<name>.<ext>`` into a name index.

    Subclasses set ``source_name`` and decide the rig of each measurement.
    """

    source_name = UNKNOWN
    extensions = (".csv",)

    def __init__(self, measurements_path):
        self.measurements_path = Path(measurements_path)
        self._cached_index = None

    @property
    def data_dir(self):
        return self.measurements_path / "data"

    @abstractmethod
    def rig_for(self, path):
        """Return the measurement rig for one measurement file."""

    def iter_measurement_files(self):
        for path in sorted(self.data_dir.rglob("*")):
            if path.is_file() and path.suffix.lower() in self.extensions:
                yield path

    def record_for(self, path):
        form = path.parent.name if path.parent != self.data_dir else UNKNOWN
        return NameRecord(name=path.stem, form=form or UNKNOWN, rig=self.rig_for(path))

    def read_name_index(self):
        builder = NameIndexBuilder()
        if not self.data_dir.is_dir():
            builder.add_diagnostic(f"{self.source_name}: data directory not found: {self.data_dir}")
            return builder.build()

        for path in self.iter_measurement_files():
            try:
                builder.add(self.record_for(path))
            except (OSError, ValueError) as exc:
                builder.add_diagnostic(f"{self.source_name}: failed to process {path}: {exc}")

        logger.info("%s: loaded %d measurements", type(self).__name__, builder.size())
        return builder.build()

    def get_name_index(self):
        if self._cached_index is None:
            self._cached_index = self.read_name_index()
        return self._cached_index

    def clear_cache(self):
        self._cached_index = None
