"""Label resolution facade.

Ties together reference parsing, label file discovery, language fallback
and the parsed-file cache. Every public method returns a result value;
configuration and I/O problems are reported through ``status``/``error``
rather than raised.
"""

import logging

from d365_labels.config import LabelConfig
from d365_labels.domain.enums import LabelStatus
from d365_labels.domain.models import BatchResult, LabelResult, ListResult
from d365_labels.label_cache import LabelFileCache
from d365_labels.label_file_parser import LabelFileReadError
from d365_labels.locator import LabelFileLocator, NotConfiguredError
from d365_labels.reference_parser import InvalidReferenceError, parse_reference
from d365_labels.resolution.batch_resolver import BatchLabelResolver
from d365_labels.resolution.file_lookup import locate_label_file

logger = logging.getLogger(__name__)


class LabelResolver:
    """Resolves ``@FileId:LabelId`` references to label text.

    The cache belongs to this resolver; pass one in to share it between
    resolvers, or to instrument it in tests.

    Args:
        config: Packages root and language settings.
        cache: Parsed label tables by path. A fresh cache by default.
        locator: Label file discovery. Built from ``config`` by default.
    """

    def __init__(self, config: LabelConfig, cache: LabelFileCache | None = None,
                 locator: LabelFileLocator | None = None) -> None:
        self._config = config
        self._cache = cache if cache is not None else LabelFileCache()
        self._locator = locator if locator is not None else LabelFileLocator(config.packages_dir)
        self._batch = BatchLabelResolver(
            self._locator, self._cache, config.fallback_language, config.batch_workers,
        )

    @property
    def config(self) -> LabelConfig:
        return self._config

    @property
    def cache(self) -> LabelFileCache:
        return self._cache

    def resolve_one(self, reference: str, language: str | None = None) -> LabelResult:
        """Resolve a single label reference.

        Args:
            reference: Label reference, e.g. ``@SYS:Company``.
            language: Requested language; defaults to the configured one.

        Returns:
            LabelResult; ``found`` is True only when the label exists in the
            located file.
        """
        language = language or self._config.default_language
        result = LabelResult(reference=reference, language=language, status=LabelStatus.NOT_FOUND)

        try:
            parsed = parse_reference(reference)
        except InvalidReferenceError as e:
            logger.warning("%s", e)
            result.status = LabelStatus.INVALID_REFERENCE
            result.error = str(e)
            return result

        result.file_id = parsed.file_id
        result.label_id = parsed.label_id

        try:
            located = locate_label_file(
                self._locator, parsed.file_id, language, self._config.fallback_language,
            )
        except NotConfiguredError as e:
            logger.error("Cannot resolve %s: %s", reference, e)
            result.status = LabelStatus.NOT_CONFIGURED
            result.error = str(e)
            return result

        if located is None:
            logger.warning("Label file not found: %s for language %s", parsed.file_id, language)
            return result

        result.label_file = located.path
        result.resolved_language = located.language
        result.fallback_applied = located.fallback_applied

        try:
            table = self._cache.get_or_parse(located.path)
        except LabelFileReadError as e:
            logger.error("%s", e)
            result.status = LabelStatus.READ_ERROR
            result.error = str(e)
            return result

        entry = table.get(parsed.label_id)
        if entry is None:
            logger.warning("Label not found: %s in file %s", parsed.label_id, located.path)
            return result

        result.status = LabelStatus.FOUND
        result.text = entry.text
        result.description = entry.description
        return result

    def resolve_batch(self, references: list[str], language: str | None = None) -> BatchResult:
        """Resolve many label references, parsing each label file once."""
        return self._batch.resolve_batch(references, language or self._config.default_language)

    def list_available_languages(self, package: str, model: str, file_id: str) -> ListResult:
        """Languages in which ``package/model`` ships label file ``file_id``."""
        try:
            return ListResult(self._locator.list_languages(package, model, file_id))
        except NotConfiguredError as e:
            logger.error("Cannot list languages for %s: %s", file_id, e)
            return ListResult(error=str(e))

    def list_available_label_files(self, package: str, model: str, language: str | None = None) -> ListResult:
        """Label file ids that ``package/model`` ships for ``language``."""
        try:
            return ListResult(self._locator.list_label_files(
                package, model, language or self._config.default_language,
            ))
        except NotConfiguredError as e:
            logger.error("Cannot list label files: %s", e)
            return ListResult(error=str(e))

    def clear_cache(self) -> int:
        """Drop all parsed label files; the next lookups re-read from disk."""
        return self._cache.clear()
