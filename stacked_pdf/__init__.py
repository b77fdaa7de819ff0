"""
Stack-cut friendly PDF generation.

Imposes a PDF N-up with pdfjam in an order that, once the printed stack is
cut along the grid, collates into reading order.

Example:
    >>> import stacked_pdf
    >>> result = stacked_pdf.generate(input_path='zine.pdf', output_path='zine_stacked.pdf',
    ...                               rows=2, columns=2, paper_size='a4', autoscale='pdfjam')
    >>> result.success, result.message
    (True, '')
"""

from .exceptions import InvalidInput, OutputFailure, ProcessingError, ToolFailure, UnparsablePageCount
from .models import Result
from .services.generator_service import StackedPdfGenerator

__version__ = "1.0.0"

__all__ = [
    'InvalidInput', 'OutputFailure', 'ProcessingError', 'Result', 'StackedPdfGenerator',
    'ToolFailure', 'UnparsablePageCount', 'generate'
]


def generate(**kwargs) -> Result:
    """Run the generator with default collaborators; never raises ProcessingError."""
    return StackedPdfGenerator().generate(**kwargs)
