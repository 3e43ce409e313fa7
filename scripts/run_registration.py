"""
Example script for the complete scanner registration workflow

Reads a scanner report, registers every scanner into the frame of the first
one and prints the unique beacon count and the largest scanner distance.

Usage:
    python scripts/run_registration.py data/scanners.txt --export-beacons output/beacons.las
"""

import sys
from pathlib import Path

# Add the src to the path to import modules
sys.path.append(str(Path(__file__).parent.parent / "src"))

from scanner_registration.cli import main


if __name__ == "__main__":
    sys.exit(main())
