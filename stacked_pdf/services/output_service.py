"""
Output Service - Moves the imposed temp file into its final location.

In podofo mode the temp file is cropped into the destination with
podofocrop; otherwise it is moved there unchanged.
"""

import logging
import shutil
from pathlib import Path
from typing import List, Optional

from ..config import PODOFOCROP_EXECUTABLE
from ..exceptions import OutputFailure
from ..models import AutoscaleMode
from .process_service import ProcessRunner

logger = logging.getLogger(__name__)


def build_crop_command(source: Path, destination: Path,
                       executable: str = PODOFOCROP_EXECUTABLE) -> List[str]:
    return [executable, str(source), str(destination)]


class OutputService:
    """
    Finalizes generator output.

    podofocrop writes a new file rather than editing in place, so after a
    successful crop the temp file is redundant and removed here. On failure
    the temp file is left for the generator's cleanup.
    """

    def __init__(self, runner: Optional[ProcessRunner] = None,
                 crop_executable: str = PODOFOCROP_EXECUTABLE):
        self.runner = runner or ProcessRunner()
        self.crop_executable = crop_executable

    def finalize(self, temp_path: Path, output_path: Path, autoscale: AutoscaleMode) -> Path:
        """
        Produce the final output file from the imposed temp file.

        Args:
            temp_path: PDF written by pdfjam
            output_path: Final destination
            autoscale: Mode selecting crop or plain move

        Returns:
            The final output path

        Raises:
            ToolFailure: If podofocrop exits non-zero
            OutputFailure: If the temp file cannot be moved or removed
        """
        try:
            if autoscale.crops_output:
                self.crop(temp_path, output_path)
                temp_path.unlink(missing_ok=True)
            else:
                logger.debug("Moving %s to %s", temp_path, output_path)
                shutil.move(str(temp_path), str(output_path))
        except OSError as e:
            raise OutputFailure(f"Unable to write {output_path}: {e}") from e

        return output_path

    def crop(self, source: Path, destination: Path):
        """Run podofocrop from source into destination."""
        command = build_crop_command(source, destination, self.crop_executable)
        return self.runner.run('podofocrop', command)
