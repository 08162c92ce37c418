"""On-disk cache of raw module documents.

Layout is `<root>/<version>/<module>.json`. Entries are written once and read
forever after; there is no expiry and no locking between concurrent runs.
"""
import json
import logging
from pathlib import Path
from typing import Any, Optional


class ModuleCache:
    """Read/write raw module JSON keyed by (version, module name)."""

    def __init__(self, root, logger: Optional[logging.Logger] = None):
        self.root = Path(root)
        self.logger = logger

    def ensure_version_dir(self, version: str) -> Path:
        """Create the directory for `version` if it does not exist yet."""
        version_dir = self.root / str(version)
        version_dir.mkdir(parents=True, exist_ok=True)
        return version_dir

    def path_for(self, version: str, module_name: str) -> Path:
        return self.root / str(version) / f"{module_name}.json"

    def load(self, version: str, module_name: str) -> Optional[Any]:
        """Return the cached document, or None on a miss."""
        path = self.path_for(version, module_name)
        if not path.exists():
            return None
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
        if self.logger:
            self.logger.debug(f"cache hit for {version}/{module_name}")
        return document

    def store(self, version: str, module_name: str, document: Any) -> Path:
        """Write `document` to the cache, replacing any previous entry."""
        self.ensure_version_dir(version)
        path = self.path_for(version, module_name)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(document, f, ensure_ascii=False)
        if self.logger:
            self.logger.debug(f"cached {version}/{module_name} -> {path}")
        return path
