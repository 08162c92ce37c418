"""Shared library for the Node.js API diff tool.

This package contains the pieces used by the `api_diff.py` runner:
- fetch.py: Network fetching helpers
- parse.py: HTML parsing helpers (module list from synopsis.html)
- cache.py: On-disk JSON cache per version/module
- normalize.py: Module tree flattening
- diff.py: New-method detection and report formatting
"""

# No exports needed - import directly from submodules
__all__ = []
