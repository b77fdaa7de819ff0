"""
Centralized configuration and constants for the stacked PDF generator.

External tool names, pdfjam tokens and coercion tables live here so the
services share one definition of each value.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet


# External executables (overridable per call through ToolPaths)
PDFJAM_EXECUTABLE = 'pdfjam'
PODOFOCROP_EXECUTABLE = 'podofocrop'
PDFINFO_EXECUTABLE = 'pdfinfo'

# pdfjam paper options keyed by normalized paper size name
PAPER_OPTIONS: Dict[str, str] = {
    'A4': 'a4paper',
    'A3': 'a3paper',
}

DEFAULT_PAPER_SIZE = 'A4'
DEFAULT_AUTOSCALE = 'pdfjam'

# Empty-page token in pdfjam's page selection syntax
BLANK_PAGE_TOKEN = '{}'

# Page count line emitted by pdfinfo
PAGE_COUNT_PATTERN = r'Pages:\s+(\d+)'

# Temp files: <output dir>/stacked_tmp_<12 hex chars>.pdf
TEMP_FILE_PREFIX = 'stacked_tmp_'
TEMP_FILE_SUFFIX = '.pdf'
TEMP_SUFFIX_BYTES = 6

# Number of values expected in a sheet margin string (top right bottom left)
MARGIN_VALUE_COUNT = 4

# Boolean coercion tables (compared after strip + lower)
TRUTHY_TOKENS: FrozenSet[str] = frozenset({'true', 't', '1', 'yes', 'y'})
FALSY_TOKENS: FrozenSet[str] = frozenset({'false', 'f', '0', 'no', 'n'})

UNKNOWN_ERROR = 'Unknown error'


@dataclass(frozen=True)
class ToolPaths:
    """
    Executables used for imposition, cropping and page counting.

    Override a field when a tool lives outside PATH, e.g.
    ToolPaths(pdfjam='/opt/texlive/bin/pdfjam').
    """
    pdfjam: str = PDFJAM_EXECUTABLE
    podofocrop: str = PODOFOCROP_EXECUTABLE
    pdfinfo: str = PDFINFO_EXECUTABLE

    def __post_init__(self):
        """Validate executable names."""
        for field_name in ['pdfjam', 'podofocrop', 'pdfinfo']:
            value = getattr(self, field_name)
            if not value or not str(value).strip():
                raise ValueError(f"{field_name} executable cannot be empty")
