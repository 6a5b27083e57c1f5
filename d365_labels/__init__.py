"""Label text resolution for Dynamics 365 F&O metadata."""

from d365_labels.config import LabelConfig
from d365_labels.domain.enums import LabelStatus
from d365_labels.domain.models import BatchResult, LabelEntry, LabelReference, LabelResult, LabelTable, ListResult
from d365_labels.resolution.label_resolver import LabelResolver

__all__ = [
    'BatchResult',
    'LabelConfig',
    'LabelEntry',
    'LabelReference',
    'LabelResolver',
    'LabelResult',
    'LabelStatus',
    'LabelTable',
    'ListResult',
]
