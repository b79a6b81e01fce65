#!/usr/bin/env python3
"""
PartSpec - CLI Entry Point

Extracts standardized fields (product type, size, flange type, pressure
rating, bore schedule, material) from comma-delimited part descriptions.

Usage:
    # Lines as arguments
    python main.py 'FLG, RFSO, CL 150, SCH STD, FCS A105, ASME B16.5, 20"'

    # One line per row of a text file (or - for stdin)
    python main.py --input ./bom_lines.txt --format csv

    # Built-in sample lines, reports saved to a folder
    python main.py --sample --output ./out
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from version import __version__, APP_NAME
from dotenv import load_dotenv

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

SAMPLE_LINES = [
    'PIPE, SCH STD, CS A-106B/A-53B/API 5L-B SMLS, P/D CODE PSA01 BBE, 3"',
    'FLG, RFSO, CL 150, SCH STD, FCS A105, ASME B16.5, P/D CODE FSA01, 20"',
    'FLG BLIND, RF,CL 150, FCS A105 ASME B16.5, 20"',
    'FLG, RFWN, CL 150, SCH STD, FCS A105 ASME B16.5, P/D CODE FWA01, 24"',
]


def read_lines(input_path: str) -> List[str]:
    """Read non-blank lines from a file, or from stdin when path is '-'."""
    if input_path == "-":
        raw = sys.stdin.read().splitlines()
    else:
        path = Path(input_path)
        if not path.exists():
            raise FileNotFoundError(f"Input file does not exist: {path}")
        raw = path.read_text(encoding='utf-8').splitlines()
    return [line.strip() for line in raw if line.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"{APP_NAME} - Extract standardized fields from part description lines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s 'PIPE, SCH STD, CS, 3"'
  %(prog)s --input ./lines.txt --format json
  %(prog)s --sample --output ./out --split-unrecognized
        """
    )

    parser.add_argument(
        "lines",
        nargs="*",
        help="Part description lines to parse"
    )

    parser.add_argument(
        "--input", "-i",
        default=None,
        help="Text file with one line per row ('-' reads stdin)"
    )

    parser.add_argument(
        "--sample",
        action="store_true",
        help="Parse the built-in sample lines"
    )

    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Directory for JSON and CSV reports"
    )

    parser.add_argument(
        "--format", "-f",
        choices=["table", "json", "csv"],
        default=None,
        help="Console output format (default: table, or the config value)"
    )

    parser.add_argument(
        "--split-unrecognized",
        action="store_true",
        help="Split unrecognized tokens on whitespace and match the pieces"
    )

    parser.add_argument(
        "--legacy-pair-merge",
        action="store_true",
        help="Reproduce the original 2-token merge behavior exactly"
    )

    parser.add_argument(
        "--config", "-c",
        default=None,
        help="YAML config file (default: $PARTSPEC_CONFIG or ./partspec.yaml)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose/debug logging"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    # Set logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.lines and not args.input and not args.sample:
        parser.error("provide lines, --input, or --sample")

    try:
        from partspec.config import load_config
        from partspec.line_parser import LineParser
        from partspec.report import render, write_reports

        config = load_config(args.config)

        # Command line flags override the config file
        if args.split_unrecognized:
            config.tokenizer.split_unrecognized = True
        if args.legacy_pair_merge:
            config.tokenizer.legacy_pair_merge = True
        output_format = args.format or config.output.format
        output_dir = args.output or config.output.directory

        lines = list(args.lines)
        if args.input:
            lines.extend(read_lines(args.input))
        if args.sample:
            lines.extend(SAMPLE_LINES)

        line_parser = LineParser.from_config(config)
        parsed_lines = line_parser.parse_lines(lines)
        logger.info(f"Parsed {len(parsed_lines)} lines")

        print(render(parsed_lines, output_format), end="")

        if output_dir:
            for path in write_reports(parsed_lines, Path(output_dir).resolve()):
                logger.info(f"Wrote {path}")

        return 0

    except (FileNotFoundError, ValueError, OSError) as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.exception(f"Parsing failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
