"""Label file discovery across the package/model tree.

Layout:
    {root}/{package}/{model}/AxLabelFile/LabelResources/{language}/{fileId}.{language}.label.txt

Several models may ship the same label file. Packages and models are
visited in sorted name order and the last match wins, so a customization
layer overrides the standard one it sorts after.
"""

import logging
from pathlib import Path

from d365_labels.domain.constants import LABEL_FILE_SUFFIX, LABEL_RESOURCES_SEGMENTS, label_file_name

logger = logging.getLogger(__name__)


class NotConfiguredError(Exception):
    """Packages directory is unset or does not exist."""
    pass


def _is_plain_name(name: str) -> bool:
    return bool(name) and name not in ('.', '..') and '/' not in name and '\\' not in name


def _is_file(path: Path) -> bool:
    # is_file() still raises for ENAMETOOLONG, EACCES and the like
    try:
        return path.is_file()
    except OSError as e:
        logger.error("Error checking file %s: %s", path, e)
        return False


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError as e:
        logger.error("Error checking directory %s: %s", path, e)
        return False


def _subdirectories(path: Path) -> list[Path]:
    try:
        return sorted((e for e in path.iterdir() if e.is_dir()), key=lambda e: e.name)
    except OSError as e:
        logger.error("Error listing directory %s: %s", path, e)
        return []


class LabelFileLocator:
    """Finds label files under a packages root. The tree is never cached."""

    def __init__(self, packages_dir: str | None) -> None:
        self._root = Path(packages_dir) if packages_dir else None

    @property
    def root(self) -> Path | None:
        return self._root

    def ensure_configured(self) -> Path:
        """Return the packages root.

        Raises:
            NotConfiguredError: If the root is unset or missing on disk.
        """
        if self._root is None:
            raise NotConfiguredError("Packages directory is not configured")
        if not _is_dir(self._root):
            raise NotConfiguredError(f"Packages directory not found: {self._root}")
        return self._root

    def find(self, file_id: str, language: str) -> str | None:
        """Locate the winning label file for a file id and language.

        Returns:
            Path of the last match in package/model order, or None.
        """
        root = self.ensure_configured()
        if not (_is_plain_name(file_id) and _is_plain_name(language)):
            logger.warning("Rejected label file lookup: %r / %r", file_id, language)
            return None
        name = label_file_name(file_id, language)
        found: list[Path] = []

        for package in _subdirectories(root):
            for model in _subdirectories(package):
                candidate = model.joinpath(*LABEL_RESOURCES_SEGMENTS, language, name)
                if _is_file(candidate):
                    found.append(candidate)

        if not found:
            return None
        selected = str(found[-1])
        logger.debug("Found label file: %s (%d candidates)", selected, len(found))
        return selected

    def list_languages(self, package: str, model: str, file_id: str) -> list[str]:
        """Languages for which ``model`` ships the label file ``file_id``."""
        resources = self._resources_dir(package, model)
        if resources is None or not _is_plain_name(file_id) or not _is_dir(resources):
            return []
        return [
            lang_dir.name for lang_dir in _subdirectories(resources)
            if _is_file(lang_dir / label_file_name(file_id, lang_dir.name))
        ]

    def list_label_files(self, package: str, model: str, language: str) -> list[str]:
        """Label file ids that ``model`` ships for ``language``."""
        resources = self._resources_dir(package, model)
        if resources is None or not _is_plain_name(language):
            return []
        lang_dir = resources / language
        if not _is_dir(lang_dir):
            return []
        suffix = f'.{language}{LABEL_FILE_SUFFIX}'
        try:
            names = [e.name for e in lang_dir.iterdir() if e.is_file()]
        except OSError as e:
            logger.error("Error listing label files in %s: %s", lang_dir, e)
            return []
        return sorted(n[:-len(suffix)] for n in names if n.endswith(suffix) and len(n) > len(suffix))

    def _resources_dir(self, package: str, model: str) -> Path | None:
        root = self.ensure_configured()
        if not (_is_plain_name(package) and _is_plain_name(model)):
            logger.warning("Rejected package/model name: %r / %r", package, model)
            return None
        return root.joinpath(package, model, *LABEL_RESOURCES_SEGMENTS)
