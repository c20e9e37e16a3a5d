"""Pytest configuration for the Pando test suite."""

import sys
from pathlib import Path

# Repository root for pando imports, tests dir for the shared case reader
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))
