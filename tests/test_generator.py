"""
Tests for the generator service and the package entry point.
"""

from types import SimpleNamespace

import pytest

import stacked_pdf
from conftest import FakeRunner
from stacked_pdf.config import ToolPaths
from stacked_pdf.services import output_service, process_service
from stacked_pdf.services.generator_service import StackedPdfGenerator, TempOutput


def temp_files(directory):
    if not directory.exists():
        return []
    return sorted(directory.glob("stacked_tmp_*.pdf"))


class TestTempOutput:
    """Tests for TempOutput."""

    def test_acquire_is_lazy_and_stable(self, tmp_path):
        output_path = tmp_path / "new" / "final.pdf"
        temp = TempOutput()

        assert temp.path is None
        assert not output_path.parent.exists()

        path = temp.acquire(output_path)

        assert output_path.parent.is_dir()
        assert path.parent == output_path.parent
        assert temp.acquire(output_path) == path

    def test_name_has_twelve_hex_characters(self, tmp_path):
        name = TempOutput().acquire(tmp_path / "final.pdf").name
        suffix = name[len("stacked_tmp_"):-len(".pdf")]

        assert name.startswith("stacked_tmp_") and name.endswith(".pdf")
        assert len(suffix) == 12
        int(suffix, 16)

    def test_context_removes_file(self, tmp_path):
        with TempOutput() as temp:
            temp.acquire(tmp_path / "final.pdf").write_bytes(b"x")

        assert not temp.path.exists()

    def test_context_without_acquire(self):
        """Test that cleanup is a no-op when no path was acquired."""
        with TempOutput() as temp:
            pass

        assert temp.path is None

    def test_context_removes_file_on_exception(self, tmp_path):
        with pytest.raises(RuntimeError):
            with TempOutput() as temp:
                temp.acquire(tmp_path / "final.pdf").write_bytes(b"x")
                raise RuntimeError("boom")

        assert temp_files(tmp_path) == []


class TestStackedPdfGenerator:
    """End-to-end tests with the external tools replaced."""

    def test_pdfjam_mode_success(self, sample_pdf, output_pdf):
        """Test the landscape single-column scenario."""
        runner = FakeRunner(page_count=8)

        result = StackedPdfGenerator(runner=runner).generate(
            input_path=sample_pdf, output_path=output_pdf,
            rows=7, columns=1, paper_size="a4", autoscale="pdfjam", portrait=False
        )

        assert result.success
        assert result.message == ""
        assert runner.tools_called() == ['pdfinfo', 'pdfjam']

        command = runner.command_for('pdfjam')
        assert command[command.index('--nup') + 1] == '1x7'
        assert command[command.index('--paper') + 1] == 'a4paper'
        assert '--landscape' in command
        assert '--noautoscale' not in command

        assert output_pdf.read_bytes() == b'%PDF-1.4 imposed'
        assert temp_files(output_pdf.parent) == []

    def test_page_list_is_padded_to_full_sheets(self, sample_pdf, output_pdf):
        runner = FakeRunner(page_count=8)

        StackedPdfGenerator(runner=runner).generate(
            input_path=sample_pdf, output_path=output_pdf, pages_per_sheet=3
        )

        page_list = runner.command_for('pdfjam')[2]
        assert page_list == "1,4,7,2,5,8,3,6,{}"

    def test_injected_order_function(self, sample_pdf, output_pdf):
        runner = FakeRunner(page_count=3)

        StackedPdfGenerator(order_func=lambda entries, rows, columns: [1, 2, 3], runner=runner).generate(
            input_path=sample_pdf, output_path=output_pdf, rows=2, columns=2
        )

        assert runner.command_for('pdfjam')[2] == "1,2,3,{}"

    def test_missing_input(self, tmp_path, output_pdf):
        """Test that a missing input fails before any tool runs."""
        runner = FakeRunner()

        result = StackedPdfGenerator(runner=runner).generate(
            input_path=tmp_path / "missing.pdf", output_path=output_pdf, pages_per_sheet=2
        )

        assert not result.success
        assert result.message == "Missing input PDF"
        assert runner.calls == []
        assert not output_pdf.parent.exists()

    def test_invalid_grid_is_a_result(self, sample_pdf, output_pdf):
        result = StackedPdfGenerator(runner=FakeRunner()).generate(
            input_path=sample_pdf, output_path=output_pdf, rows="x", columns=2
        )

        assert not result.success
        assert "rows must be an integer" in result.message

    def test_pdfjam_failure_removes_temp(self, sample_pdf, output_pdf, monkeypatch):
        """Test the pdfjam failure scenario through the real process runner."""
        def fake_run(command, **kwargs):
            if command[0] == 'pdfinfo':
                return SimpleNamespace(stdout="Pages: 4\n", stderr="", returncode=0)
            output = command[command.index('-o') + 1]
            with open(output, 'wb') as f:
                f.write(b'partial')
            return SimpleNamespace(stdout="", stderr="bad paper size\n", returncode=1)

        monkeypatch.setattr(process_service.subprocess, 'run', fake_run)

        result = stacked_pdf.generate(
            input_path=sample_pdf, output_path=output_pdf, rows=2, columns=2
        )

        assert not result.success
        assert result.message == "pdfjam failed: bad paper size"
        assert temp_files(output_pdf.parent) == []
        assert not output_pdf.exists()

    def test_pdfinfo_failure(self, sample_pdf, output_pdf):
        runner = FakeRunner(failures={'pdfinfo': 'May not be a PDF file'})

        result = StackedPdfGenerator(runner=runner).generate(
            input_path=sample_pdf, output_path=output_pdf, pages_per_sheet=2
        )

        assert result.message == "pdfinfo failed: May not be a PDF file"
        assert runner.tools_called() == ['pdfinfo']

    def test_podofo_mode_success(self, sample_pdf, output_pdf):
        """Test that the final output is the cropped file."""
        runner = FakeRunner(page_count=8)

        result = StackedPdfGenerator(runner=runner).generate(
            input_path=sample_pdf, output_path=output_pdf, rows=2, columns=2,
            autoscale="podofo", portrait="yes", sheet_margins="10 10 10 10"
        )

        assert result.success
        assert runner.tools_called() == ['pdfinfo', 'pdfjam', 'podofocrop']

        pdfjam_command = runner.command_for('pdfjam')
        assert '--noautoscale' in pdfjam_command
        assert '--landscape' not in pdfjam_command
        assert pdfjam_command[-4:] == ['--trim', '10mm 10mm 10mm 10mm', '--clip', 'true']

        crop_command = runner.command_for('podofocrop')
        assert crop_command[2] == str(output_pdf)
        assert output_pdf.read_bytes() == b'%PDF-1.4 cropped'
        assert temp_files(output_pdf.parent) == []

    def test_podofo_failure_removes_temp(self, sample_pdf, output_pdf):
        runner = FakeRunner(failures={'podofocrop': 'crop failed'})

        result = StackedPdfGenerator(runner=runner).generate(
            input_path=sample_pdf, output_path=output_pdf, pages_per_sheet=4, autoscale="podofo"
        )

        assert result.message == "podofocrop failed: crop failed"
        assert temp_files(output_pdf.parent) == []
        assert not output_pdf.exists()

    def test_tool_paths_are_used(self, sample_pdf, output_pdf):
        runner = FakeRunner()
        tools = ToolPaths(pdfjam='/opt/bin/pdfjam', pdfinfo='/opt/bin/pdfinfo')

        StackedPdfGenerator(runner=runner, tools=tools).generate(
            input_path=sample_pdf, output_path=output_pdf, pages_per_sheet=2
        )

        assert runner.command_for('pdfinfo')[0] == '/opt/bin/pdfinfo'
        assert runner.command_for('pdfjam')[0] == '/opt/bin/pdfjam'

    def test_existing_output_is_replaced(self, sample_pdf, output_pdf):
        output_pdf.parent.mkdir(parents=True)
        output_pdf.write_bytes(b'old')

        result = StackedPdfGenerator(runner=FakeRunner()).generate(
            input_path=sample_pdf, output_path=output_pdf, pages_per_sheet=2
        )

        assert result.success
        assert output_pdf.read_bytes() == b'%PDF-1.4 imposed'

    def test_output_parent_is_a_file(self, sample_pdf, tmp_path):
        """Test that an unusable output directory is a failed Result."""
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"not a directory")
        runner = FakeRunner()

        result = StackedPdfGenerator(runner=runner).generate(
            input_path=sample_pdf, output_path=blocker / "out.pdf", pages_per_sheet=2
        )

        assert not result.success
        assert result.message.startswith("Unable to create output directory")
        assert 'pdfjam' not in runner.tools_called()

    def test_output_path_is_a_directory(self, sample_pdf, tmp_path):
        """Test that a directory output is rejected and leaves no temp file."""
        outdir = tmp_path / "outdir"
        outdir.mkdir()
        runner = FakeRunner()

        result = StackedPdfGenerator(runner=runner).generate(
            input_path=sample_pdf, output_path=outdir, pages_per_sheet=2
        )

        assert result.message == "Output path is a directory"
        assert runner.calls == []
        assert list(outdir.iterdir()) == []

    def test_move_failure_is_a_result(self, sample_pdf, output_pdf, monkeypatch):
        def failing_move(src, dst):
            raise PermissionError(13, 'Permission denied', dst)

        monkeypatch.setattr(output_service.shutil, 'move', failing_move)

        result = StackedPdfGenerator(runner=FakeRunner()).generate(
            input_path=sample_pdf, output_path=output_pdf, pages_per_sheet=2
        )

        assert not result.success
        assert result.message.startswith(f"Unable to write {output_pdf}")
        assert temp_files(output_pdf.parent) == []

    def test_scalar_margins_are_ignored(self, sample_pdf, output_pdf):
        runner = FakeRunner()

        result = StackedPdfGenerator(runner=runner).generate(
            input_path=sample_pdf, output_path=output_pdf, pages_per_sheet=2, sheet_margins=10
        )

        assert result.success
        assert '--trim' not in runner.command_for('pdfjam')
