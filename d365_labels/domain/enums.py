"""Domain enums for label resolution."""
from enum import Enum


class LabelStatus(Enum):
    """Outcome of resolving a single label reference."""
    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    INVALID_REFERENCE = "INVALID_REFERENCE"
    READ_ERROR = "READ_ERROR"
    NOT_CONFIGURED = "NOT_CONFIGURED"
