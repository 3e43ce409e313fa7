"""
Export utilities for registration results.

Provides functions to export:
- The global beacon map as a point cloud (LAS/LAZ) with the number of
  scanners that observed each beacon as an extra dimension
- The local-to-global transform of every placed scanner as plain text
"""

from pathlib import Path
from typing import Dict, Sequence, TYPE_CHECKING

import numpy as np

from .logging import setup_logger

if TYPE_CHECKING:
    from ..alignment.registration import RegistrationResult
    from ..geometry.scanner import Scanner

logger = setup_logger(__name__)


def export_beacons_to_laz(result: "RegistrationResult", output_path: str) -> str:
    """
    Export the registered beacon map to a LAZ/LAS file.

    Coordinates are integers, so the file uses a unit scale. The number of
    placed scanners that saw each beacon is stored as an extra dimension
    named "observations".

    Args:
        result: Successful registration result
        output_path: Path for output file (extension determines format)

    Returns:
        Path to created file
    """
    import laspy

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    observations = result.beacon_observations()
    ordered = sorted(observations, key=lambda b: b.as_tuple())
    points = np.array([b.as_tuple() for b in ordered], dtype=np.int64).reshape(-1, 3)
    counts = np.array([observations[b] for b in ordered], dtype=np.uint16)

    # LAS 1.4 point format 6 supports extra bytes
    header = laspy.LasHeader(point_format=6, version="1.4")
    header.add_extra_dim(laspy.ExtraBytesParams(name="observations", type=np.uint16))
    header.scales = np.array([1.0, 1.0, 1.0])
    header.offsets = points.min(axis=0).astype(np.float64) if len(points) else np.zeros(3)

    las = laspy.LasData(header)
    las.x = points[:, 0]
    las.y = points[:, 1]
    las.z = points[:, 2]
    las.observations = counts

    las.write(str(output_path))
    logger.info(f"Exported {len(points):,} beacons to {output_path}")

    return str(output_path)


def save_scanner_transforms(scanners: Sequence["Scanner"], output_file: str) -> None:
    """
    Save one row per scanner: its index followed by its flattened 4x4
    local-to-global transform.

    Args:
        scanners: Placed scanners
        output_file: Path to output text file
    """
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    rows = [
        np.concatenate([[scanner.index], scanner.transform_matrix().ravel()])
        for scanner in scanners
    ]
    table = np.array(rows, dtype=np.int64).reshape(-1, 17)
    np.savetxt(
        output_path,
        table,
        fmt="%d",
        header="scanner_index followed by row-major 4x4 local-to-global transform",
    )
    logger.info(f"Saved {len(table)} scanner transforms to {output_path}")


def load_scanner_transforms(input_file: str) -> Dict[int, np.ndarray]:
    """
    Load transforms written by ``save_scanner_transforms``.

    Returns:
        Mapping of scanner index to 4x4 integer transform matrix
    """
    table = np.loadtxt(input_file, dtype=np.int64, ndmin=2)
    if table.size and table.shape[1] != 17:
        raise ValueError(f"Expected 17 columns per row in {input_file}, got {table.shape[1]}")
    return {int(row[0]): row[1:].reshape(4, 4) for row in table}
