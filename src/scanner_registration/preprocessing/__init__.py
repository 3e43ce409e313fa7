"""
Data Preprocessing Module

This module reads scanner reports and turns them into unplaced Scanner values.
"""

from .loader import (
    ReportParseError,
    ScannerReportLoader,
    parse_scanner_block,
    parse_scanner_report,
)

__all__ = [
    "ReportParseError",
    "ScannerReportLoader",
    "parse_scanner_block",
    "parse_scanner_report",
]
