#!/usr/bin/env python3
"""
Stacked PDF Generator

Imposes a PDF N-up so that the printed stack can be cut along the grid and
the resulting piles collate into reading order. Uses pdfjam for imposition,
pdfinfo for the page count and optionally podofocrop to trim the result.
"""

import argparse
import logging
import sys
from pathlib import Path

from stacked_pdf import __version__
from stacked_pdf.config import PAPER_OPTIONS
from stacked_pdf.models import AutoscaleMode, GeneratorDefaults
from stacked_pdf.services import ConfigService, StackedPdfGenerator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a PDF into a stack-cut friendly N-up layout.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s zine.pdf zine_stacked.pdf --rows 2 --columns 2
  %(prog)s zine.pdf out/zine.pdf --pages-per-sheet 4 --paper-size a3
  %(prog)s zine.pdf out/zine.pdf --rows 3 --columns 1 --autoscale podofo
  %(prog)s zine.pdf out/zine.pdf --rows 2 --columns 2 --sheet-margins "10 5 10 5"
  %(prog)s --rows 2 --columns 2 --paper-size a3 --save-config   # Remember defaults
        """
    )

    parser.add_argument('input', nargs='?', help='Input PDF file')
    parser.add_argument('output', nargs='?', help='Output PDF file')
    parser.add_argument('--rows', type=int, help='Grid rows (use with --columns)')
    parser.add_argument('--columns', type=int, help='Grid columns (use with --rows)')
    parser.add_argument('--pages-per-sheet', type=int,
                        help='Pages per sheet in a single column (alternative to --rows/--columns)')
    parser.add_argument('--paper-size', type=str.upper, choices=list(PAPER_OPTIONS.keys()),
                        help='Output paper size (default: A4)')
    parser.add_argument('--autoscale', choices=[mode.value for mode in AutoscaleMode],
                        help='pdfjam: autoscale pages; none: no autoscale; '
                             'podofo: no autoscale, then crop with podofocrop')
    orientation = parser.add_mutually_exclusive_group()
    orientation.add_argument('--portrait', dest='portrait', action='store_true', default=None,
                             help='Portrait sheets')
    orientation.add_argument('--landscape', dest='portrait', action='store_false',
                             help='Landscape sheets (default)')
    parser.add_argument('--sheet-margins', metavar='"T R B L"',
                        help='Trim margins in millimetres: top right bottom left')
    parser.add_argument('--config', type=Path, help='Defaults file (default: ~/.stacked_pdf.json)')
    parser.add_argument('--save-config', action='store_true',
                        help='Store the given options as defaults')
    parser.add_argument('--verbose', '-v', action='store_true', help='Show tool invocations')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser


def merge_defaults(args: argparse.Namespace, defaults: GeneratorDefaults) -> GeneratorDefaults:
    """
    Overlay command-line options on stored defaults.

    A grid given on the command line replaces the stored grid entirely so
    the two seed forms never mix.
    """
    grid_given = any(value is not None for value in (args.rows, args.columns, args.pages_per_sheet))
    return GeneratorDefaults(
        paper_size=args.paper_size or defaults.paper_size,
        autoscale=args.autoscale or defaults.autoscale,
        portrait=defaults.portrait if args.portrait is None else args.portrait,
        sheet_margins=defaults.sheet_margins if args.sheet_margins is None else args.sheet_margins,
        rows=args.rows if grid_given else defaults.rows,
        columns=args.columns if grid_given else defaults.columns,
        pages_per_sheet=args.pages_per_sheet if grid_given else defaults.pages_per_sheet
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s: %(message)s'
    )

    config_service = ConfigService(args.config)
    settings = merge_defaults(args, config_service.load())

    if args.save_config:
        if config_service.save(settings):
            print(f"Saved defaults to {config_service.config_path}")
        if args.input is None:
            return

    if args.input is None or args.output is None:
        parser.error('input and output PDF paths are required')

    result = StackedPdfGenerator().generate(
        input_path=args.input,
        output_path=args.output,
        **settings.to_dict()
    )

    if not result.success:
        print(f"\nError: {result.message}")
        sys.exit(1)

    print(f"Stacked PDF written to {args.output}")


if __name__ == "__main__":
    main()
