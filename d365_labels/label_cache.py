"""Path-keyed cache of parsed label files."""

import logging
import os
import threading
from collections.abc import Callable

from d365_labels.domain.models import LabelTable
from d365_labels.label_file_parser import read_label_file

logger = logging.getLogger(__name__)


class LabelFileCache:
    """Caches parsed label tables by absolute file path.

    Entries live until ``clear()``; there is no expiry. Reads take no lock.
    Concurrent misses on the same path may parse the file more than once,
    but only the first insert is kept and every caller gets that table.
    A failed read raises and leaves the cache untouched, so the next lookup
    tries the file again.

    Args:
        loader: Reads and parses one file. Defaults to ``read_label_file``.
    """

    def __init__(self, loader: Callable[[str], LabelTable] = read_label_file) -> None:
        self._loader = loader
        self._tables: dict[str, LabelTable] = {}
        self._generation = 0
        self._lock = threading.Lock()

    def get_or_parse(self, path: str) -> LabelTable:
        """Return the cached table for ``path``, parsing it on a miss.

        A table parsed across a ``clear()`` is returned to its caller but
        not stored, so content read before the clear never outlives it.

        Raises:
            LabelFileReadError: If the file cannot be read.
        """
        key = os.path.abspath(path)
        table = self._tables.get(key)
        if table is not None:
            return table

        generation = self._generation
        table = self._loader(key)
        with self._lock:
            if generation != self._generation:
                return table
            return self._tables.setdefault(key, table)

    def clear(self) -> int:
        """Drop every entry. Returns the number of tables dropped."""
        with self._lock:
            count = len(self._tables)
            self._tables = {}
            self._generation += 1
        logger.info("Label cache cleared (%d files)", count)
        return count

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and os.path.abspath(path) in self._tables

    def __len__(self) -> int:
        return len(self._tables)
