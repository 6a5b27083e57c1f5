"""Shared constants, regex patterns, and label tree layout.

Centralizes the grammar of label references and label files and the
directory segments that make up the package/model tree.
"""

import re

# ── Label Reference Patterns ─────────────────────────────────────────────

# Canonical reference: @FileId:LabelId
LABEL_REFERENCE_RE = re.compile(r'^@([A-Za-z0-9_]+):([A-Za-z0-9_]+)$')

# ── Label File Grammar ───────────────────────────────────────────────────

# Entry line: LabelId:Text (text may be empty)
LABEL_LINE_RE = re.compile(r'^([A-Za-z0-9_]+):(.*)$')

# Description line, attaches to the entry directly above it
DESCRIPTION_LINE_RE = re.compile(r'^;(.*)$')

# ── Tree Layout ──────────────────────────────────────────────────────────

# {root}/{package}/{model}/AxLabelFile/LabelResources/{language}/{fileId}.{language}.label.txt
LABEL_RESOURCES_SEGMENTS = ('AxLabelFile', 'LabelResources')
LABEL_FILE_SUFFIX = '.label.txt'

DEFAULT_LANGUAGE = 'en-US'
FALLBACK_LANGUAGE = 'en-US'


def label_file_name(file_id: str, language: str) -> str:
    """Build the on-disk name of a label file, e.g. ``SYS.en-US.label.txt``."""
    return f'{file_id}.{language}{LABEL_FILE_SUFFIX}'
