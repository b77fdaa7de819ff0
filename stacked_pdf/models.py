"""
Data models for the stacked PDF generator.

This module defines the typed, immutable values passed between the
normalizer, the command builders and the generator.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .config import PAPER_OPTIONS

logger = logging.getLogger(__name__)


class PaperSize(Enum):
    """Output sheet size."""
    A4 = "A4"
    A3 = "A3"

    @classmethod
    def from_value(cls, value) -> 'PaperSize':
        """Map any input to a paper size; only "A3" (any case) selects A3."""
        return cls.A3 if str(value).upper() == cls.A3.value else cls.A4

    @property
    def pdfjam_option(self) -> str:
        return PAPER_OPTIONS[self.value]


class AutoscaleMode(Enum):
    """How pdfjam scales pages into cells and whether a crop pass follows."""
    PDFJAM = "pdfjam"  # pdfjam autoscales, no crop
    NONE = "none"      # autoscale disabled, no crop
    PODOFO = "podofo"  # autoscale disabled, podofocrop afterwards

    @classmethod
    def from_value(cls, value) -> 'AutoscaleMode':
        """
        Map any input to an autoscale mode.

        Unrecognised values fall back to PDFJAM (autoscale enabled, no crop).
        """
        if isinstance(value, cls):
            return value
        text = str(value)
        for mode in cls:
            if mode.value == text:
                return mode
        logger.warning("Unrecognised autoscale mode %r, using pdfjam autoscaling", text)
        return cls.PDFJAM

    @property
    def disables_autoscale(self) -> bool:
        return self in (AutoscaleMode.NONE, AutoscaleMode.PODOFO)

    @property
    def crops_output(self) -> bool:
        return self is AutoscaleMode.PODOFO


@dataclass(frozen=True)
class GridShape:
    """
    Grid of cells on one output sheet.

    After printing, the stack is cut along this grid; each cell becomes
    one pile of the final booklet.
    """
    rows: int
    columns: int

    @property
    def pages_per_sheet(self) -> int:
        return self.rows * self.columns

    @property
    def nup_option(self) -> str:
        """pdfjam --nup value, columns first."""
        return f"{self.columns}x{self.rows}"


@dataclass(frozen=True)
class SheetMargins:
    """Trim margins in millimetres, in pdfjam --trim order."""
    top: float
    right: float
    bottom: float
    left: float

    def as_tuple(self) -> tuple:
        return (self.top, self.right, self.bottom, self.left)

    @property
    def trim_option(self) -> str:
        """Space-joined values, e.g. "10mm 5mm 10mm 5mm"."""
        return ' '.join(f"{value:g}mm" for value in self.as_tuple())


@dataclass(frozen=True)
class GeneratorOptions:
    """
    Canonical configuration for one generator invocation.

    Built by ArgumentNormalizer and never modified afterwards. A
    sheet_margins of None means no trimming is applied.
    """
    input_path: Path
    output_path: Path
    grid: GridShape
    paper_size: PaperSize = PaperSize.A4
    autoscale: AutoscaleMode = AutoscaleMode.PDFJAM
    portrait: bool = False
    sheet_margins: Optional[SheetMargins] = None

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def columns(self) -> int:
        return self.grid.columns

    @property
    def pages_per_sheet(self) -> int:
        return self.grid.pages_per_sheet


@dataclass(frozen=True)
class Result:
    """Outcome of a generator call; message is empty on success."""
    success: bool
    message: str = ""

    def __bool__(self):
        return self.success

    def __repr__(self):
        if self.success:
            return "Result(success=True)"
        return f"Result(success=False, message={self.message!r})"


@dataclass
class GeneratorDefaults:
    """
    User defaults persisted between runs.

    Values are stored raw and pass through the normalizer like any other
    input, so a hand-edited config file gets the same coercion as the CLI.
    """
    paper_size: str = "A4"
    autoscale: str = "pdfjam"
    portrait: bool = False
    sheet_margins: str = ""
    rows: Optional[int] = None
    columns: Optional[int] = None
    pages_per_sheet: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            'paper_size': self.paper_size,
            'autoscale': self.autoscale,
            'portrait': self.portrait,
            'sheet_margins': self.sheet_margins,
            'rows': self.rows,
            'columns': self.columns,
            'pages_per_sheet': self.pages_per_sheet
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'GeneratorDefaults':
        """Create from dictionary; missing keys keep their defaults."""
        defaults = cls()
        return cls(
            paper_size=data.get('paper_size', defaults.paper_size),
            autoscale=data.get('autoscale', defaults.autoscale),
            portrait=data.get('portrait', defaults.portrait),
            sheet_margins=data.get('sheet_margins', defaults.sheet_margins),
            rows=data.get('rows'),
            columns=data.get('columns'),
            pages_per_sheet=data.get('pages_per_sheet')
        )
