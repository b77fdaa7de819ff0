"""
Argument normalization for stacked PDF generation.

This module turns loosely typed keyword arguments (strings from a CLI or a
JSON file, numbers, booleans) into a canonical GeneratorOptions value. It
performs no I/O beyond checking that the input file exists, and raises
InvalidInput for anything the generator cannot work with.
"""

import logging
import math
from pathlib import Path, PurePath
from typing import Optional, Sequence, Union

from .config import DEFAULT_AUTOSCALE, FALSY_TOKENS, MARGIN_VALUE_COUNT, TRUTHY_TOKENS
from .exceptions import InvalidInput
from .models import AutoscaleMode, GeneratorOptions, GridShape, PaperSize, SheetMargins

logger = logging.getLogger(__name__)


def coerce_bool(value) -> bool:
    """
    Coerce a loosely typed flag to a boolean.

    Args:
        value: bool, number, string or any other object

    Returns:
        True/False according to the token tables in config; values matching
        no table fall back to Python truthiness.

    Example:
        >>> coerce_bool("Yes"), coerce_bool("0"), coerce_bool(2)
        (True, False, True)
        >>> coerce_bool("landscape")
        True
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0

    if isinstance(value, str):
        token = value.strip().lower()
        if token in TRUTHY_TOKENS:
            return True
        if token in FALSY_TOKENS:
            return False

    return bool(value)


def coerce_int(value, name: str) -> Optional[int]:
    """
    Parse an optional integer grid dimension.

    Args:
        value: None, int, integral float or numeric string
        name: Field name used in the error message

    Returns:
        The integer, or None when the value was not supplied

    Raises:
        InvalidInput: If the value is present but not an integer
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidInput(f"{name} must be an integer, got {value!r}")


def parse_sheet_margins(raw: Union[str, Sequence, None]) -> Optional[SheetMargins]:
    """
    Parse "top right bottom left" millimetre margins.

    Margins are optional: anything other than exactly four finite numbers
    yields None instead of an error, so a bad value never fails the run.

    Args:
        raw: Whitespace-separated string, or a sequence of four values

    Returns:
        SheetMargins, or None when absent or malformed

    Example:
        >>> parse_sheet_margins("10 5 10 5").trim_option
        '10mm 5mm 10mm 5mm'
        >>> parse_sheet_margins("10 10 10") is None
        True
    """
    if raw is None:
        return None

    if isinstance(raw, str):
        tokens = raw.split()
    elif isinstance(raw, (list, tuple)):
        tokens = list(raw)
    else:
        logger.warning("Ignoring sheet margins %r: expected a string or a list", raw)
        return None
    if not tokens:
        return None

    values = []
    for token in tokens:
        try:
            number = float(token)
        except (TypeError, ValueError):
            break
        if not math.isfinite(number):
            break
        values.append(number)

    if len(tokens) != MARGIN_VALUE_COUNT or len(values) != MARGIN_VALUE_COUNT:
        logger.warning("Ignoring sheet margins %r: expected %d numbers", raw, MARGIN_VALUE_COUNT)
        return None

    return SheetMargins(*values)


def resolve_grid(rows: Optional[int], columns: Optional[int],
                 pages_per_sheet: Optional[int]) -> GridShape:
    """
    Resolve the grid from either rows and columns or pages_per_sheet.

    Rows and columns win when both are given; otherwise pages_per_sheet
    becomes a single column of that many rows.

    Raises:
        InvalidInput: If neither form is supplied or a dimension is not positive
    """
    if rows is not None and columns is not None:
        grid = GridShape(rows, columns)
    elif pages_per_sheet is not None:
        grid = GridShape(pages_per_sheet, 1)
    else:
        raise InvalidInput('Provide either pages_per_sheet or both rows and columns')

    if grid.rows <= 0:
        raise InvalidInput('rows must be positive')
    if grid.columns <= 0:
        raise InvalidInput('columns must be positive')

    return grid


def _is_blank(value) -> bool:
    # Path("") renders as "."
    if isinstance(value, PurePath):
        return not value.parts
    return value is None or not str(value).strip()


class ArgumentNormalizer:
    """Builds GeneratorOptions from raw keyword configuration."""

    @staticmethod
    def normalize(
        input_path=None,
        output_path=None,
        paper_size=None,
        autoscale=None,
        portrait=False,
        rows=None,
        columns=None,
        pages_per_sheet=None,
        sheet_margins=None
    ) -> GeneratorOptions:
        """
        Validate and coerce raw generator arguments.

        Args:
            input_path: Source PDF (must exist)
            output_path: Destination PDF (parent is created later, not here)
            paper_size: "A4" or "A3"; anything else means A4
            autoscale: "pdfjam", "none" or "podofo"
            portrait: Loosely typed flag; False produces landscape sheets
            rows: Grid rows (needs columns)
            columns: Grid columns (needs rows)
            pages_per_sheet: Single-column alternative to rows/columns
            sheet_margins: "top right bottom left" in millimetres

        Returns:
            GeneratorOptions

        Raises:
            InvalidInput: On missing paths, a directory output or an unusable grid
        """
        grid = resolve_grid(
            coerce_int(rows, 'rows'),
            coerce_int(columns, 'columns'),
            coerce_int(pages_per_sheet, 'pages_per_sheet')
        )

        if _is_blank(input_path) or not Path(input_path).exists():
            raise InvalidInput('Missing input PDF')
        if _is_blank(output_path):
            raise InvalidInput('Missing output path')
        if Path(output_path).is_dir():
            raise InvalidInput('Output path is a directory')
        if grid.pages_per_sheet <= 0:
            raise InvalidInput('pages_per_sheet must be positive')

        return GeneratorOptions(
            input_path=Path(input_path),
            output_path=Path(output_path),
            grid=grid,
            paper_size=PaperSize.from_value(paper_size),
            autoscale=AutoscaleMode.from_value(DEFAULT_AUTOSCALE if autoscale is None else autoscale),
            portrait=coerce_bool(portrait),
            sheet_margins=parse_sheet_margins(sheet_margins)
        )
