"""
Service layer for the stacked PDF generator.

Services wrap the external tools (pdfinfo, pdfjam, podofocrop), compute the
page order and coordinate them into a single generation call.
"""

from .config_service import ConfigService
from .generator_service import StackedPdfGenerator, TempOutput
from .output_service import OutputService
from .page_count_service import PageCountService
from .pdfjam_service import PdfjamService
from .process_service import ProcessRunner
from .sequence_service import SequenceService, stack_order

__all__ = [
    'ConfigService', 'OutputService', 'PageCountService', 'PdfjamService',
    'ProcessRunner', 'SequenceService', 'StackedPdfGenerator', 'TempOutput',
    'stack_order'
]
