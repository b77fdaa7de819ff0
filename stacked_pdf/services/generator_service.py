"""
Generator Service - End-to-end stacked PDF generation.

This service validates the arguments, counts pages, computes the stack-cut
page order, runs pdfjam and finalizes the output. It owns the temporary
output file and removes it on every exit path, and it converts every
ProcessingError into a failed Result so callers never see an exception.
"""

import logging
import secrets
from pathlib import Path
from typing import Optional

from ..config import TEMP_FILE_PREFIX, TEMP_FILE_SUFFIX, TEMP_SUFFIX_BYTES, ToolPaths
from ..exceptions import OutputFailure, ProcessingError
from ..models import Result
from ..validators import ArgumentNormalizer
from .output_service import OutputService
from .page_count_service import PageCountService
from .pdfjam_service import PdfjamService
from .process_service import ProcessRunner
from .sequence_service import OrderFunction, SequenceService, stack_order

logger = logging.getLogger(__name__)


class TempOutput:
    """
    Lazily allocated temp file beside the final output.

    Nothing is created until acquire() is called. Leaving the context
    removes the file if it still exists, including when acquire() was
    never reached.
    """

    def __init__(self):
        self.path: Optional[Path] = None

    def acquire(self, output_path: Path) -> Path:
        """
        Return the temp path, creating the output directory on first use.

        Raises:
            OutputFailure: If the output directory cannot be created

        Example:
            >>> TempOutput().acquire(Path('out/booklet.pdf')).name
            'stacked_tmp_3f2a9c81d04e.pdf'
        """
        if self.path is None:
            directory = Path(output_path).parent
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise OutputFailure(f"Unable to create output directory {directory}: {e}") from e
            name = f"{TEMP_FILE_PREFIX}{secrets.token_hex(TEMP_SUFFIX_BYTES)}{TEMP_FILE_SUFFIX}"
            self.path = directory / name
        return self.path

    def cleanup(self):
        """Remove the temp file if it was acquired and still exists."""
        if self.path is None or not self.path.exists():
            return
        try:
            self.path.unlink()
        except OSError as e:
            logger.warning("Failed to delete temp file %s: %s", self.path, e)

    def __enter__(self) -> 'TempOutput':
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.cleanup()
        return False


class StackedPdfGenerator:
    """
    Coordinates the stacked PDF pipeline.

    The ordering function, process runner and tool paths are injectable so
    each collaborator can be replaced in tests.
    """

    def __init__(
        self,
        order_func: OrderFunction = stack_order,
        runner: Optional[ProcessRunner] = None,
        tools: Optional[ToolPaths] = None
    ):
        self.tools = tools or ToolPaths()
        self.runner = runner or ProcessRunner()
        self.sequence_service = SequenceService(order_func)
        self.page_counter = PageCountService(self.runner, self.tools.pdfinfo)
        self.pdfjam = PdfjamService(self.runner, self.tools.pdfjam)
        self.output = OutputService(self.runner, self.tools.podofocrop)

    def generate(
        self,
        input_path=None,
        output_path=None,
        paper_size=None,
        autoscale=None,
        portrait=False,
        rows=None,
        columns=None,
        pages_per_sheet=None,
        sheet_margins=None
    ) -> Result:
        """
        Generate a stack-cut friendly PDF.

        Arguments are raw values; see ArgumentNormalizer.normalize for how
        each one is coerced.

        Returns:
            Result(success=True) on success, otherwise a failed Result whose
            message describes the problem

        Example:
            >>> result = StackedPdfGenerator().generate(
            ...     input_path='comic.pdf', output_path='out/comic_stacked.pdf',
            ...     rows=2, columns=2, paper_size='a3', autoscale='podofo')
            >>> result.success
            True
        """
        with TempOutput() as temp:
            try:
                options = ArgumentNormalizer.normalize(
                    input_path=input_path,
                    output_path=output_path,
                    paper_size=paper_size,
                    autoscale=autoscale,
                    portrait=portrait,
                    rows=rows,
                    columns=columns,
                    pages_per_sheet=pages_per_sheet,
                    sheet_margins=sheet_margins
                )

                page_count = self.page_counter.count_pages(options.input_path)
                logger.info("Source has %d page(s), grid %s", page_count, options.grid.nup_option)
                page_list = self.sequence_service.build_page_list(page_count, options.grid)

                temp_path = temp.acquire(options.output_path)
                self.pdfjam.impose(options, page_list, temp_path)
                self.output.finalize(temp_path, options.output_path, options.autoscale)
            except ProcessingError as e:
                logger.error("Stacked PDF generation failed: %s", e.message)
                return Result(success=False, message=e.message)

        logger.info("Wrote %s", options.output_path)
        return Result(success=True)
