"""
Utility Functions Module

This module provides common utility functions used across the scanner registration project.
- Logging setup
- Configuration loading
- Export of beacon maps and scanner transforms
"""

from .logging import setup_logger, set_package_log_level
from .config import AppConfig, load_config
from .export import (
    export_beacons_to_laz,
    save_scanner_transforms,
    load_scanner_transforms,
)

__all__ = [
    "setup_logger",
    "set_package_log_level",
    "AppConfig",
    "load_config",
    "export_beacons_to_laz",
    "save_scanner_transforms",
    "load_scanner_transforms",
]
