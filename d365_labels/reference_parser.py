"""Label reference parsing.

Only the canonical ``@FileId:LabelId`` form is accepted. Legacy bare
tokens such as ``@SYS13342`` carry no explicit file id and are rejected.
"""

import logging

from d365_labels.domain.constants import LABEL_REFERENCE_RE
from d365_labels.domain.models import LabelReference

logger = logging.getLogger(__name__)


class InvalidReferenceError(ValueError):
    """Label reference does not match ``@FileId:LabelId``."""
    pass


def parse_reference(value: str | None) -> LabelReference:
    """Parse a label reference string.

    Raises:
        InvalidReferenceError: If ``value`` is not a canonical reference.
    """
    if not isinstance(value, str):
        raise InvalidReferenceError(f"Label reference must be a string, got {type(value).__name__}")
    match = LABEL_REFERENCE_RE.fullmatch(value)
    if not match:
        raise InvalidReferenceError(
            f"Invalid label reference format: {value!r}. Expected format: @LabelFileID:LabelID"
        )
    return LabelReference(file_id=match.group(1), label_id=match.group(2))


def try_parse_reference(value: str | None) -> LabelReference | None:
    """Parse a label reference, logging and returning None on rejection."""
    try:
        return parse_reference(value)
    except InvalidReferenceError as e:
        logger.warning("%s", e)
        return None
