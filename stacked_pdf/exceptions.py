"""
Custom exceptions for the stacked PDF generator.

Every failure the pipeline knows how to report derives from ProcessingError,
which the generator converts into a failed Result.
"""


class ProcessingError(Exception):
    """Base exception for all stacked PDF generation errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "Stacked PDF generation failed."


class InvalidInput(ProcessingError):
    """Raised when paths or grid dimensions are missing or invalid."""

    @property
    def default_message(self) -> str:
        return "Invalid input."


class ToolFailure(ProcessingError):
    """Raised when an external tool exits with a non-zero status."""

    def __init__(self, tool: str, details: str) -> None:
        self.tool = tool
        self.details = details
        super().__init__(f"{tool} failed: {details}")


class UnparsablePageCount(ProcessingError):
    """Raised when pdfinfo succeeds but reports no page count."""

    @property
    def default_message(self) -> str:
        return "Unable to determine page count"


class OutputFailure(ProcessingError):
    """Raised when the output location cannot be created or written."""

    @property
    def default_message(self) -> str:
        return "Unable to write output PDF"
