"""Pytest configuration for node-api-diff tests."""
import sys
from pathlib import Path

# Add the repository root to path so tests can import api_diff and apidiff_lib
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))
