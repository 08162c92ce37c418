#!/usr/bin/env python3
"""
Node.js API diff (canonical runner)

Compares the published API documentation of two Node.js major versions and
lists the methods that exist in the newer version but not in the older one.

Usage notes:
- Run as `python api_diff.py 10 12` (or `api-diff 10 12` when installed).
- Module documents are cached under `cache/<version>/<module>.json` and are
  never refreshed; delete the folder to force a new download.

Configuration note:
- The runner reads an optional `api_diff_config.json` from the project root
  (the folder holding this script, or `--src`) to obtain defaults for the docs
  base URL, request timeout, cache directory and report column width. Explicit
  CLI flags take precedence over the config file.
"""

import argparse
import json
import logging
import math
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from apidiff_lib.cache import ModuleCache
from apidiff_lib.diff import diff
from apidiff_lib.fetch import fetch_json, fetch_text, module_url, synopsis_url
from apidiff_lib.normalize import normalize_document
from apidiff_lib.parse import parse_module_list
from utils.constants import DOCS_BASE

CONFIG_FILENAME = 'api_diff_config.json'
LOG_FILENAME = 'api_diff.log'

DEFAULT_CACHE_DIR = 'cache'
DEFAULT_TIMEOUT = 30
DEFAULT_NAME_WIDTH = 24

USAGE_HINT = 'Sample use: api-diff 10 12'


class ApiDiffer:
    """Builds normalized module sets per version and diffs them."""

    def __init__(self, project_root: Optional[str] = None, cache_dir: Optional[str] = None,
                 base_url: Optional[str] = None, timeout: Optional[float] = None,
                 name_width: Optional[int] = None, session: Optional[requests.Session] = None,
                 verbose: bool = False):
        """
        Initialize the differ

        Args:
            project_root: Folder holding `api_diff_config.json` (defaults to this script's folder)
            cache_dir: Where module documents are cached (config `cache.dir`, then `cache`)
            base_url: Docs root, e.g. https://nodejs.org/docs
            timeout: Per-request timeout in seconds
            name_width: Column width of module names in the report
            session: Optional requests Session (tests pass a fake)
            verbose: Also echo log records to stderr
        """
        self.project_root = Path(project_root).resolve() if project_root else Path(__file__).parent
        cfg = self._load_config(self.project_root / CONFIG_FILENAME)

        # Priority: explicit argument > config file > default
        net = self._section(cfg, 'network')
        self.base_url = base_url or net.get('base_url') or DOCS_BASE
        if timeout is not None:
            self.timeout = timeout
        else:
            cfg_timeout = net.get('timeout', DEFAULT_TIMEOUT)
            valid = isinstance(cfg_timeout, (int, float)) and not isinstance(cfg_timeout, bool) and cfg_timeout > 0
            self.timeout = cfg_timeout if valid else DEFAULT_TIMEOUT

        cache_cfg = self._section(cfg, 'cache')
        self.cache_dir = Path(cache_dir or cache_cfg.get('dir') or DEFAULT_CACHE_DIR)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        if name_width is not None:
            self.name_width = int(name_width)
        else:
            try:
                self.name_width = int(self._section(cfg, 'report').get('name_width', DEFAULT_NAME_WIDTH))
            except (TypeError, ValueError):
                self.name_width = DEFAULT_NAME_WIDTH

        self.session = session or requests.Session()
        self.logger = self._setup_logger(verbose)
        self.cache = ModuleCache(self.cache_dir, logger=self.logger)

    @staticmethod
    def _section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
        """Return a config section, or {} when it is missing or not an object."""
        section = cfg.get(key)
        return section if isinstance(section, dict) else {}

    @staticmethod
    def _load_config(cfg_path: Path) -> Dict[str, Any]:
        """Load the optional config file; a missing or broken file means defaults."""
        if not cfg_path.exists():
            return {}
        try:
            with open(cfg_path, 'r', encoding='utf-8') as f:
                cfg = json.load(f)
        except (OSError, ValueError):
            return {}
        return cfg if isinstance(cfg, dict) else {}

    def _setup_logger(self, verbose: bool) -> Optional[logging.Logger]:
        # Logging should never block a run
        try:
            logger = logging.getLogger(f'ApiDiffer:{self.cache_dir}')
            # Avoid adding duplicate handlers when reusing the same logger
            if not logger.handlers:
                handler = RotatingFileHandler(str(self.cache_dir / LOG_FILENAME), maxBytes=5 * 1024 * 1024,
                                              backupCount=3, encoding='utf-8')
                handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(message)s'))
                handler.setLevel(logging.INFO)
                logger.addHandler(handler)
                logger.setLevel(logging.INFO)
            if verbose:
                console = logging.StreamHandler(sys.stderr)
                console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
                console.setLevel(logging.DEBUG)
                logger.addHandler(console)
                # The file handler keeps its own INFO threshold
                logger.setLevel(logging.DEBUG)
            return logger
        except OSError:
            return None

    def close(self):
        """Close log handlers so the cache folder can be removed (important for tests)."""
        if self.logger:
            for h in list(self.logger.handlers):
                h.close()
                self.logger.removeHandler(h)

    def get_module_list(self, version: str) -> List[str]:
        """Fetch the synopsis page for `version` and return its module identifiers."""
        url = synopsis_url(version, self.base_url)
        if self.logger:
            self.logger.info(f"Fetching module list for v{version} from {url}")
        modules = parse_module_list(fetch_text(self.session, url, timeout=self.timeout))
        if self.logger:
            self.logger.info(f"Found {len(modules)} modules for v{version}")
        return modules

    def get_module_definition(self, version: str, module_name: str) -> Any:
        """Return the raw module document, downloading and caching it on a miss."""
        cached = self.cache.load(version, module_name)
        if cached is not None:
            return cached

        url = module_url(version, module_name, self.base_url)
        if self.logger:
            self.logger.info(f"Downloading {module_name} for v{version} from {url}")
        document = fetch_json(self.session, url, timeout=self.timeout)
        self.cache.store(version, module_name, document)
        return document

    def build_module_set(self, version: str) -> List[Dict[str, Any]]:
        """Normalize every module listed for `version`, dropping unsupported ones."""
        self.cache.ensure_version_dir(version)
        normalized = (
            normalize_document(name, self.get_module_definition(version, name), logger=self.logger)
            for name in self.get_module_list(version)
        )
        return [m for m in normalized if m is not None]

    def compare(self, older_version: str, newer_version: str) -> List[str]:
        """Return report lines for methods new in `newer_version`."""
        older = self.build_module_set(older_version)
        newer = self.build_module_set(newer_version)
        if self.logger:
            self.logger.info(f"Comparing {len(older)} modules (v{older_version}) against {len(newer)} modules (v{newer_version})")
        return diff(older, newer, logger=self.logger, name_width=self.name_width)


def is_version_number(value: str) -> bool:
    """True when `value` parses as a finite, non-zero number."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number != 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(description="List Node.js API methods added between two major versions")
    parser.add_argument('versions', nargs='*', metavar='VERSION', help='Older then newer major version, e.g. 10 12')
    parser.add_argument('--cache-dir', help='Folder for cached module documents (default: cache)')
    parser.add_argument('--base-url', help=f'Docs root URL (default: {DOCS_BASE})')
    parser.add_argument('--src', help=f'Path to the project root where `{CONFIG_FILENAME}` lives')
    parser.add_argument('--verbose', '-v', action='store_true', help='Echo log messages to stderr')
    # Options may sit between the versions; extra positional values are ignored
    args, unknown = parser.parse_known_intermixed_args(argv)

    if unknown:
        parser.print_usage(sys.stderr)
        print(f"Unrecognized arguments: {' '.join(unknown)}. {USAGE_HINT}", file=sys.stderr)
        return 1

    if len(args.versions) < 2 or not all(v.strip() for v in args.versions[:2]):
        print(f"Missing version arguments. {USAGE_HINT}", file=sys.stderr)
        return 1

    older, newer = (v.strip() for v in args.versions[:2])
    if not (is_version_number(older) and is_version_number(newer)):
        print(f"Must use numbers as arguments. {USAGE_HINT}", file=sys.stderr)
        return 1

    differ = None
    try:
        differ = ApiDiffer(
            project_root=args.src,
            cache_dir=args.cache_dir,
            base_url=args.base_url,
            verbose=args.verbose,
        )
        for line in differ.compare(older, newer):
            print(line)
    except KeyboardInterrupt:
        print("\n⏸️  Interrupted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if differ is not None and differ.logger:
            differ.logger.exception(f"Run failed comparing v{older} to v{newer}")
        print(f"❌ {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    finally:
        if differ is not None:
            differ.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
