"""Parser for D365 label resource files.

Format, one entry per line, with an optional description on the line
directly below it:

    Company:Company
    ;Name of the legal entity
    CustAccount:Customer account

A blank or unrecognized line ends the current entry, so a ``;`` line
after it attaches to nothing.
"""

import logging
from collections.abc import Iterable

from d365_labels.domain.constants import DESCRIPTION_LINE_RE, LABEL_LINE_RE
from d365_labels.domain.models import LabelEntry, LabelTable

logger = logging.getLogger(__name__)

_BOM = '\ufeff'


class LabelFileReadError(Exception):
    """Error reading a label file from disk."""

    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"Failed to read label file {path}: {cause}")
        self.path = path
        self.cause = cause


def parse_label_lines(lines: Iterable[str], source: str | None = None) -> LabelTable:
    """Parse the lines of one label file into a LabelTable.

    Args:
        lines: Raw lines, with or without trailing newlines.
        source: Path recorded on the resulting table.

    Returns:
        Table of label id → entry. Duplicate ids keep the last occurrence.
    """
    entries: dict[str, LabelEntry] = {}
    current: LabelEntry | None = None

    for index, raw in enumerate(lines):
        line = raw.rstrip('\r\n')
        if index == 0 and line.startswith(_BOM):
            line = line[len(_BOM):]

        if not line.strip():
            current = None
            continue

        m = LABEL_LINE_RE.match(line)
        if m:
            current = LabelEntry(label_id=m.group(1), text=m.group(2))
            entries[current.label_id] = current
            continue

        m = DESCRIPTION_LINE_RE.match(line)
        if m and current is not None:
            current = LabelEntry(current.label_id, current.text, m.group(1))
            entries[current.label_id] = current
            continue

        current = None

    return LabelTable(entries, source=source)


def read_label_file(path: str) -> LabelTable:
    """Read and parse a label file.

    Raises:
        LabelFileReadError: If the file cannot be opened or decoded.
    """
    try:
        with open(path, encoding='utf-8') as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise LabelFileReadError(path, e) from e

    table = parse_label_lines(lines, source=path)
    logger.info("Parsed %d labels from %s", len(table), path)
    return table
