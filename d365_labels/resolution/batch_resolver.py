"""Batch label resolution.

Groups references by label file id so that each label file is located and
parsed at most once per request, however many of its labels are asked for.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from d365_labels.domain.models import BatchResult
from d365_labels.label_cache import LabelFileCache
from d365_labels.label_file_parser import LabelFileReadError
from d365_labels.locator import LabelFileLocator, NotConfiguredError
from d365_labels.reference_parser import try_parse_reference
from d365_labels.resolution.file_lookup import locate_label_file

logger = logging.getLogger(__name__)


class BatchLabelResolver:
    """Resolves many label references against shared locator and cache.

    Args:
        locator: Finds label files in the package tree.
        cache: Parsed label tables by path.
        fallback_language: Language used when the requested one has no file.
        max_workers: Per-file groups resolved in parallel when above 1.
    """

    def __init__(self, locator: LabelFileLocator, cache: LabelFileCache,
                 fallback_language: str, max_workers: int = 1) -> None:
        self._locator = locator
        self._cache = cache
        self._fallback_language = fallback_language
        self._max_workers = max(1, max_workers)

    def resolve_batch(self, references: list[str], language: str) -> BatchResult:
        """Resolve label references to their text.

        Invalid references are logged and reported in ``invalid``; they never
        appear in ``found``. Callers derive missing labels as requested minus
        found.
        """
        result = BatchResult(language=language, requested_count=len(references))
        if not references:
            return result

        groups: dict[str, list[tuple[str, str]]] = {}
        for reference in references:
            parsed = try_parse_reference(reference)
            if parsed is None:
                result.invalid.append(reference)
                continue
            groups.setdefault(parsed.file_id, []).append((reference, parsed.label_id))

        if not groups:
            return result

        try:
            self._locator.ensure_configured()
        except NotConfiguredError as e:
            logger.error("Cannot resolve labels: %s", e)
            result.error = str(e)
            return result

        if self._max_workers > 1 and len(groups) > 1:
            with ThreadPoolExecutor(max_workers=min(self._max_workers, len(groups))) as executor:
                partials = list(executor.map(
                    lambda item: self._resolve_group(item[0], item[1], language), groups.items()
                ))
        else:
            partials = [self._resolve_group(file_id, items, language) for file_id, items in groups.items()]

        for found, error in partials:
            result.found.update(found)
            if error and not result.error:
                result.error = error
        return result

    def _resolve_group(self, file_id: str, items: list[tuple[str, str]],
                       language: str) -> tuple[dict[str, str], str | None]:
        """Resolve every label of one file id with a single lookup and parse."""
        try:
            located = locate_label_file(self._locator, file_id, language, self._fallback_language)
        except NotConfiguredError as e:
            logger.error("Cannot resolve labels for %s: %s", file_id, e)
            return {}, str(e)

        if located is None:
            logger.warning("Label file not found: %s", file_id)
            return {}, None

        try:
            table = self._cache.get_or_parse(located.path)
        except LabelFileReadError as e:
            logger.error("%s", e)
            return {}, None

        found: dict[str, str] = {}
        for reference, label_id in items:
            entry = table.get(label_id)
            if entry is not None:
                found[reference] = entry.text
            else:
                logger.warning("Label not found: %s in file %s", label_id, located.path)
        return found, None
