"""
Page Count Service - Reads the page count of a PDF through pdfinfo.
"""

import re
from pathlib import Path
from typing import Optional

from ..config import PAGE_COUNT_PATTERN, PDFINFO_EXECUTABLE
from ..exceptions import UnparsablePageCount
from .process_service import ProcessRunner

_PAGE_COUNT_RE = re.compile(PAGE_COUNT_PATTERN)


def parse_page_count(pdfinfo_output: str) -> int:
    """
    Extract the page count from pdfinfo's report.

    Raises:
        UnparsablePageCount: If no "Pages: <N>" line is present
    """
    match = _PAGE_COUNT_RE.search(pdfinfo_output or '')
    if not match:
        raise UnparsablePageCount()
    return int(match.group(1))


class PageCountService:
    """Counts source pages with the pdfinfo tool."""

    def __init__(self, runner: Optional[ProcessRunner] = None,
                 executable: str = PDFINFO_EXECUTABLE):
        self.runner = runner or ProcessRunner()
        self.executable = executable

    def count_pages(self, pdf_path: Path) -> int:
        """
        Count pages in a PDF.

        Args:
            pdf_path: Existing PDF file

        Returns:
            Number of pages reported by pdfinfo

        Raises:
            ToolFailure: If pdfinfo exits non-zero
            UnparsablePageCount: If pdfinfo's output has no page count
        """
        run = self.runner.run('pdfinfo', [self.executable, str(pdf_path)])
        return parse_page_count(run.stdout)
