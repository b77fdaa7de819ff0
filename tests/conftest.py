"""
Pytest configuration and fixtures.
"""

import pytest
from pathlib import Path
from pypdf import PdfWriter

from stacked_pdf.exceptions import ToolFailure
from stacked_pdf.services.process_service import CompletedRun, ProcessRunner


def write_blank_pdf(path: Path, pages: int) -> Path:
    """Write a PDF with the given number of blank A4 pages."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=595, height=842)
    with open(path, 'wb') as f:
        writer.write(f)
    return path


class FakeRunner(ProcessRunner):
    """
    Stands in for the external tools.

    pdfinfo reports page_count; pdfjam and podofocrop write a small file to
    their output argument. Tools listed in failures raise ToolFailure with
    the given details instead.
    """

    def __init__(self, page_count: int = 8, failures: dict = None):
        self.page_count = page_count
        self.failures = failures or {}
        self.calls = []

    def run(self, tool_name, command):
        self.calls.append((tool_name, list(command)))

        if tool_name in self.failures:
            raise ToolFailure(tool_name, self.failures[tool_name])

        if tool_name == 'pdfinfo':
            return CompletedRun(stdout=f"Producer: test\nPages:          {self.page_count}\n",
                                stderr='', returncode=0)
        if tool_name == 'pdfjam':
            Path(command[command.index('-o') + 1]).write_bytes(b'%PDF-1.4 imposed')
        elif tool_name == 'podofocrop':
            Path(command[2]).write_bytes(b'%PDF-1.4 cropped')
        return CompletedRun(stdout='', stderr='', returncode=0)

    def tools_called(self):
        return [tool for tool, _ in self.calls]

    def command_for(self, tool_name):
        for tool, command in self.calls:
            if tool == tool_name:
                return command
        return None


@pytest.fixture
def sample_pdf(tmp_path):
    """An 8-page PDF on disk."""
    return write_blank_pdf(tmp_path / "source.pdf", 8)


@pytest.fixture
def output_pdf(tmp_path):
    """Output path inside a directory that does not exist yet."""
    return tmp_path / "out" / "stacked.pdf"


@pytest.fixture
def fake_runner():
    return FakeRunner()
