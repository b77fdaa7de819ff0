"""
Pdfjam Service - Builds and runs the pdfjam imposition command.

pdfjam is sensitive to argument order, so the command is always assembled
in the same sequence: positional input and page list, output, grid, paper,
scaling, orientation, quiet, then trimming.
"""

from pathlib import Path
from typing import List, Optional

from ..config import PDFJAM_EXECUTABLE
from ..models import GeneratorOptions
from .process_service import CompletedRun, ProcessRunner


def build_pdfjam_command(
    options: GeneratorOptions,
    page_list: str,
    output_path: Path,
    executable: str = PDFJAM_EXECUTABLE
) -> List[str]:
    """
    Assemble the pdfjam argument vector.

    Args:
        options: Normalized generator options
        page_list: Serialized page selection ("1,4,{},2")
        output_path: File pdfjam writes to (the temp output)
        executable: pdfjam program name or path

    Returns:
        Argument list ready for subprocess

    Example:
        >>> build_pdfjam_command(options, '1,2', Path('out.pdf'))[:5]
        ['pdfjam', 'in.pdf', '1,2', '-o', 'out.pdf']
    """
    command = [
        executable, str(options.input_path), page_list,
        '-o', str(output_path),
        '--nup', options.grid.nup_option,
        '--paper', options.paper_size.pdfjam_option
    ]

    if options.autoscale.disables_autoscale:
        command.extend(['--noautoscale', 'true'])
    if not options.portrait:
        command.append('--landscape')
    command.append('--quiet')

    if options.sheet_margins is not None:
        command.extend(['--trim', options.sheet_margins.trim_option, '--clip', 'true'])

    return command


class PdfjamService:
    """Runs pdfjam to impose the page list onto N-up sheets."""

    def __init__(self, runner: Optional[ProcessRunner] = None,
                 executable: str = PDFJAM_EXECUTABLE):
        self.runner = runner or ProcessRunner()
        self.executable = executable

    def impose(self, options: GeneratorOptions, page_list: str, output_path: Path) -> CompletedRun:
        """
        Write the imposed PDF to output_path.

        Raises:
            ToolFailure: If pdfjam exits non-zero
        """
        command = build_pdfjam_command(options, page_list, output_path, self.executable)
        return self.runner.run('pdfjam', command)
