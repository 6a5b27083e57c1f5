"""Language fallback for label file lookup."""

import logging
from typing import NamedTuple

from d365_labels.locator import LabelFileLocator

logger = logging.getLogger(__name__)


class LocatedFile(NamedTuple):
    path: str
    language: str
    fallback_applied: bool


def locate_label_file(locator: LabelFileLocator, file_id: str, language: str,
                      fallback_language: str) -> LocatedFile | None:
    """Find the label file for ``language``, else for ``fallback_language``.

    Fallback is file-level only: it happens when the requested language has
    no file at all, never because a found file lacks a particular label.

    Raises:
        NotConfiguredError: If the packages root is missing.
    """
    path = locator.find(file_id, language)
    if path is not None:
        return LocatedFile(path, language, False)

    if language == fallback_language:
        return None

    logger.info("Label file %s not found for language %s, falling back to %s",
                file_id, language, fallback_language)
    path = locator.find(file_id, fallback_language)
    if path is None:
        return None
    return LocatedFile(path, fallback_language, True)
