"""
Scanner Report Loader

This module parses scanner reports into unplaced Scanner values. A report
is a sequence of blocks separated by blank lines:

--- scanner 0 ---
404,-588,-901
528,-643,409
...

Scanners are identified by their position in the report; the ordinal in
the header line is not otherwise used.
"""

import re
from pathlib import Path
from typing import List

from ..geometry.coordinate import Coordinate
from ..geometry.scanner import Scanner
from ..utils.logging import setup_logger

logger = setup_logger(__name__)

HEADER_PATTERN = re.compile(r"^---\s*scanner\s+(\d+)\s*---$")
_BLOCK_SEPARATOR = re.compile(r"\n\s*\n")


class ReportParseError(ValueError):
    """Raised when a scanner report is malformed."""


def parse_scanner_block(block: str, index: int) -> Scanner:
    """
    Parse one ``--- scanner N ---`` block.

    Args:
        block: Block text, header line first
        index: Position of the block in the report

    Returns:
        Unplaced Scanner

    Raises:
        ReportParseError: On a missing header, a malformed beacon line or no beacons
    """
    lines = [line.strip() for line in block.strip().splitlines()]
    if not lines or not lines[0].startswith("--- scanner"):
        raise ReportParseError("Missing scanner header line")

    header = HEADER_PATTERN.match(lines[0])
    if header is None:
        raise ReportParseError(f"Invalid scanner header '{lines[0]}'")
    if int(header.group(1)) != index:
        logger.debug(f"Scanner header '{lines[0]}' found at position {index}")

    beacons = set()
    for line in lines[1:]:
        if not line:
            continue
        try:
            beacons.add(Coordinate.parse(line))
        except ValueError as e:
            raise ReportParseError(f"Scanner {index}: {e}") from e

    if not beacons:
        raise ReportParseError(f"Scanner {index} reports no beacons")

    return Scanner.from_beacons(index, beacons)


def parse_scanner_report(text: str) -> List[Scanner]:
    """Parse a whole report into scanners, in report order."""
    text = text.replace("\r\n", "\n").strip()
    if not text:
        return []
    blocks = _BLOCK_SEPARATOR.split(text)
    return [parse_scanner_block(block, index) for index, block in enumerate(blocks)]


class ScannerReportLoader:
    """
    Load scanner reports from text files.

    Features:
    - Blank-line separated scanner blocks
    - Set semantics for repeated beacon lines
    - Validation of headers and coordinate triples
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def load(self, file_path: str) -> List[Scanner]:
        """
        Load a scanner report.

        Args:
            file_path: Path to the report file

        Returns:
            List of unplaced scanners in report order

        Raises:
            FileNotFoundError: If the file does not exist
            ReportParseError: If the report is malformed
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        logger.info(f"Loading scanner report from {file_path}")
        scanners = parse_scanner_report(file_path.read_text(encoding=self.encoding))
        total_beacons = sum(len(s) for s in scanners)
        logger.info(f"Loaded {len(scanners)} scanners reporting {total_beacons} beacons in total")
        return scanners
