"""
Sequence Service - Computes the page emission order for stack-cut printing.

The order in which pages are placed on sheets is delegated to an ordering
function so alternative stacking schemes can be swapped in. The service pads
the order to whole sheets and renders it in pdfjam's page selection syntax.
"""

from typing import Callable, List, Optional, Sequence

from ..config import BLANK_PAGE_TOKEN
from ..models import GridShape

# order(entries, rows, columns) -> page numbers (1-based) or None for blanks
OrderFunction = Callable[[int, int, int], Sequence[Optional[int]]]


def stack_order(entries: int, rows: int, columns: int) -> List[Optional[int]]:
    """
    Default stack-cut order.

    With S sheets, cell c (row-major) of sheet s holds page c * S + s + 1.
    Once the printed stack is cut, the pile from cell 0 holds pages 1..S,
    the pile from cell 1 holds S+1..2S, and so on, so placing the piles on
    top of each other yields reading order.

    Args:
        entries: Number of source pages
        rows: Grid rows
        columns: Grid columns

    Returns:
        One entry per cell per sheet; None where the cell stays empty

    Example:
        >>> stack_order(5, 2, 1)
        [1, 4, 2, 5, 3, None]
    """
    cells = rows * columns
    if entries <= 0 or cells <= 0:
        return []

    sheets = -(-entries // cells)
    order: List[Optional[int]] = []
    for sheet in range(sheets):
        for cell in range(cells):
            page = cell * sheets + sheet + 1
            order.append(page if page <= entries else None)
    return order


def pad_sequence(order: Sequence[Optional[int]], cells_per_sheet: int) -> List[Optional[int]]:
    """Right-pad with blanks so every sheet is fully populated."""
    padded = list(order)
    remainder = len(padded) % cells_per_sheet
    if remainder:
        padded.extend([None] * (cells_per_sheet - remainder))
    return padded


def serialize_sequence(sequence: Sequence[Optional[int]]) -> str:
    """Render a sequence as pdfjam's comma-separated page list ("1,{},2")."""
    return ','.join(BLANK_PAGE_TOKEN if page is None else str(page) for page in sequence)


class SequenceService:
    """Builds the pdfjam page list for a document and grid."""

    def __init__(self, order_func: OrderFunction = stack_order):
        self.order_func = order_func

    def build_sequence(self, page_count: int, grid: GridShape) -> List[Optional[int]]:
        order = self.order_func(page_count, grid.rows, grid.columns)
        return pad_sequence(order, grid.pages_per_sheet)

    def build_page_list(self, page_count: int, grid: GridShape) -> str:
        """
        Compute the serialized page list passed to pdfjam.

        Args:
            page_count: Total pages in the source PDF
            grid: Output grid

        Returns:
            Comma-separated page list whose token count is a multiple of
            grid.pages_per_sheet
        """
        return serialize_sequence(self.build_sequence(page_count, grid))
