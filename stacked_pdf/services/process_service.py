"""
Process Service - Runs external PDF tools.

Each call executes the tool exactly once, blocks until it exits and turns a
non-zero exit status into a ToolFailure carrying the tool's own diagnostics.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from ..config import UNKNOWN_ERROR
from ..exceptions import ToolFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletedRun:
    """Captured streams and exit status of one tool run."""
    stdout: str
    stderr: str
    returncode: int

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


def format_failure_details(stdout: Optional[str], stderr: Optional[str]) -> str:
    """
    Pick the most useful diagnostic text from a failed run.

    Returns:
        Stripped stderr if non-empty, else stripped stdout if non-empty,
        else "Unknown error"
    """
    for stream in (stderr, stdout):
        if stream and stream.strip():
            return stream.strip()
    return UNKNOWN_ERROR


class ProcessRunner:
    """
    Runs external commands and reports failures as ToolFailure.

    There are no retries and no timeout: a failing tool ends the whole
    generation, and a hung tool blocks the caller.
    """

    def run(self, tool_name: str, command: List[str]) -> CompletedRun:
        """
        Execute a command and capture its output.

        Args:
            tool_name: Name used in failure messages (e.g. "pdfjam")
            command: Full argument vector, program first

        Returns:
            CompletedRun for a zero exit status

        Raises:
            ToolFailure: If the tool cannot be started or exits non-zero
        """
        logger.info("Running %s", tool_name)
        logger.debug("Command: %s", command)

        try:
            completed = subprocess.run(
                [str(arg) for arg in command],
                capture_output=True,
                text=True,
                check=False
            )
        except OSError as e:
            raise ToolFailure(tool_name, str(e)) from e

        run = CompletedRun(
            stdout=completed.stdout or '',
            stderr=completed.stderr or '',
            returncode=completed.returncode
        )

        if not run.succeeded:
            logger.debug("%s exited with status %d", tool_name, run.returncode)
            raise ToolFailure(tool_name, format_failure_details(run.stdout, run.stderr))

        return run
