"""Detect methods introduced between two versions of the module set."""
import logging
from typing import Any, Dict, List, Optional, Tuple

from utils.text import pad


def find_new_methods(older: List[Dict[str, Any]], newer: List[Dict[str, Any]],
                     logger: Optional[logging.Logger] = None) -> List[Tuple[str, List[Dict[str, Any]]]]:
    """Return `(module_name, new_methods)` for each older module that gained methods.

    Modules are matched by name (first match in `newer`). Older modules with no
    counterpart are skipped with a warning; modules that exist only in `newer`
    are ignored. Removed methods are not reported.
    """
    changes = []
    for old_module in older:
        new_module = next((m for m in newer if m['name'] == old_module['name']), None)
        if new_module is None:
            if logger:
                logger.warning(f"Module {old_module['name']} not found in newer version; skipping")
            continue

        old_names = {m['name'] for m in old_module['methods']}
        new_methods = [m for m in new_module['methods'] if m['name'] not in old_names]
        if new_methods:
            changes.append((new_module['name'], new_methods))
    return changes


def format_report(changes: List[Tuple[str, List[Dict[str, Any]]]], name_width: int = 24) -> List[str]:
    """Render changes as a header line per module and one line per new method."""
    lines = []
    for module_name, methods in changes:
        lines.append(f"{pad(module_name, name_width)} {len(methods)} new")
        for m in methods:
            return_type = m['return_type'] if m['return_type'] is not None else 'null'
            lines.append(f"- {m['name']}: {return_type}")
    return lines


def diff(older: List[Dict[str, Any]], newer: List[Dict[str, Any]],
         logger: Optional[logging.Logger] = None, name_width: int = 24) -> List[str]:
    return format_report(find_new_methods(older, newer, logger=logger), name_width=name_width)
