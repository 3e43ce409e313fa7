"""
Command-line entry point for scanner registration.

Reads a scanner report, registers all scanners into the frame of the first
one and prints the number of unique beacons (part 1) and the largest
Manhattan distance between two scanners (part 2).
"""

import argparse
import logging
from typing import List, Optional

from pydantic import ValidationError

from .alignment.registration import RegistrationEngine
from .preprocessing.loader import ReportParseError, ScannerReportLoader
from .utils.config import AppConfig, load_config
from .utils.export import export_beacons_to_laz, save_scanner_transforms
from .utils.logging import set_package_log_level

TITLE = "Beacon Scanner Registration"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=TITLE)
    parser.add_argument("input", metavar="INPUT", help="File with the scanner report")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file (defaults to config/default.yaml)",
    )
    parser.add_argument(
        "--min-overlap",
        type=int,
        default=None,
        help="Override registration.min_overlap (beacons that must coincide).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Run alignment attempts in parallel with this many worker processes.",
    )
    parser.add_argument("--export-beacons", type=str, default=None, help="Write the beacon map to this LAS/LAZ file.")
    parser.add_argument("--export-transforms", type=str, default=None, help="Write scanner transforms to this text file.")
    parser.add_argument("--plot", action="store_true", help="Show the registered scanners in a plotly figure.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging.level.",
    )
    return parser


def _apply_overrides(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    if args.min_overlap is not None:
        cfg.registration.min_overlap = args.min_overlap
    if args.workers is not None:
        cfg.parallel.enabled = args.workers > 1
        cfg.parallel.n_workers = args.workers
    if args.export_beacons:
        cfg.export.beacons_file = args.export_beacons
    if args.export_transforms:
        cfg.export.transforms_file = args.export_transforms
    if args.plot:
        cfg.visualization.enabled = True
    if args.log_level:
        cfg.logging.level = args.log_level
    # Assignment skips field validation; re-check the merged result
    try:
        return AppConfig.model_validate(cfg.model_dump())
    except ValidationError as e:
        raise ValueError(f"Invalid command-line override: {e}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = _apply_overrides(load_config(args.config), args)
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        return 2

    set_package_log_level(getattr(logging, cfg.logging.level.upper(), logging.INFO), cfg.logging.file)

    print(TITLE)

    try:
        scanners = ScannerReportLoader().load(args.input)
    except (OSError, ReportParseError) as e:
        print(f"Failed to read input: {e}")
        return 2

    engine = RegistrationEngine(
        min_overlap=cfg.registration.min_overlap,
        parallel=cfg.parallel.enabled,
        n_workers=cfg.parallel.n_workers,
    )
    result = engine.register(scanners)

    if result is None:
        print("Part 1: Not found\nPart 2: Not found")
        return 0

    print(f"Part 1: {result.unique_beacon_count}\nPart 2: {result.max_scanner_distance}")

    if cfg.export.beacons_file:
        export_beacons_to_laz(result, cfg.export.beacons_file)
    if cfg.export.transforms_file:
        save_scanner_transforms(result.scanners, cfg.export.transforms_file)
    if cfg.visualization.enabled:
        from .visualization.point_cloud import RegistrationVisualizer
        RegistrationVisualizer(renderer=cfg.visualization.renderer).show(result)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
