"""Shared data models used across label modules."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from d365_labels.domain.enums import LabelStatus


@dataclass(frozen=True)
class LabelReference:
    """A parsed ``@FileId:LabelId`` reference."""

    file_id: str
    label_id: str

    def __str__(self) -> str:
        return f'@{self.file_id}:{self.label_id}'


@dataclass(frozen=True)
class LabelEntry:
    """One label line of a label file, with its optional ``;`` description."""

    label_id: str
    text: str
    description: str | None = None


class LabelTable(Mapping):
    """Read-only mapping of label id → LabelEntry for one label file.

    Equality follows the Mapping protocol, so two tables parsed from the
    same bytes compare equal regardless of where they were read from.
    """

    def __init__(self, entries: dict[str, LabelEntry] | None = None, source: str | None = None) -> None:
        self._entries: dict[str, LabelEntry] = dict(entries or {})
        self.source = source

    def __getitem__(self, label_id: str) -> LabelEntry:
        return self._entries[label_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f'LabelTable({len(self._entries)} labels, source={self.source!r})'


@dataclass
class LabelResult:
    """Result of resolving a single label reference."""

    reference: str
    language: str
    status: LabelStatus
    file_id: str | None = None
    label_id: str | None = None
    text: str | None = None
    description: str | None = None
    label_file: str | None = None
    resolved_language: str | None = None
    fallback_applied: bool = False
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.status is LabelStatus.FOUND

    def to_dict(self, include_description: bool = True) -> dict[str, Any]:
        """Serialize for JSON responses (camelCase keys)."""
        data: dict[str, Any] = {
            'labelId': self.reference,
            'labelFileId': self.file_id,
            'actualLabelId': self.label_id,
            'language': self.language,
            'labelText': self.text,
            'description': self.description if include_description else None,
            'found': self.found,
            'fallbackApplied': self.fallback_applied,
            'resolvedLanguage': self.resolved_language,
            'labelFile': self.label_file,
            'status': self.status.value,
        }
        if self.error:
            data['error'] = self.error
        return data


@dataclass
class BatchResult:
    """Result of resolving many label references in one call."""

    language: str
    requested_count: int
    found: dict[str, str] = field(default_factory=dict)
    invalid: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def found_count(self) -> int:
        return len(self.found)

    def missing(self, requested: list[str]) -> list[str]:
        """Valid requested references that were not found, in request order."""
        invalid = set(self.invalid)
        return [ref for ref in requested if ref not in self.found and ref not in invalid]

    def to_dict(self, requested: list[str]) -> dict[str, Any]:
        data: dict[str, Any] = {
            'language': self.language,
            'totalRequested': self.requested_count,
            'totalFound': self.found_count,
            'labels': self.found,
            'missingLabels': self.missing(requested),
            'invalidLabels': self.invalid,
        }
        if self.error:
            data['error'] = self.error
        return data


@dataclass
class ListResult:
    """Result of a label tree listing (languages or label files)."""

    items: list[str] = field(default_factory=list)
    error: str | None = None
