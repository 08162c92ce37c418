"""Flatten raw Node.js module documentation into methods and classes.

A raw module document (as served at `api/<module>.json`) wraps exactly one
module. Each module may declare `methods`, `classes` and nested `modules`.
Normalizing a module folds the nested modules into it, so the result is a flat
record:

    {'name': 'fs',
     'methods': [{'name': ..., 'signature': ..., 'return_type': ...}, ...],
     'classes': [{'name': ..., 'methods': [...]}, ...]}

Own members come first, followed by each nested module's members in document
order (each nested module itself own-then-nested).
"""
import json
import logging
from typing import Any, Dict, List, Optional


class SchemaError(ValueError):
    """Upstream data no longer has the shape the normalizer relies on."""


def create_method(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize one raw method descriptor.

    Exactly one entry in `signatures` is required; picking one of several would
    produce misleading diffs, so anything else raises SchemaError.
    """
    signatures = raw.get('signatures') or []
    if len(signatures) != 1:
        raise SchemaError(
            f"Found {len(signatures)} signatures, expected 1, for {raw.get('textRaw')}: {json.dumps(raw)}"
        )

    returns = signatures[0].get('return')
    return_type = returns.get('type') if returns else None

    return {
        'name': raw['name'],
        'signature': raw.get('textRaw'),
        'return_type': return_type or None,
    }


def create_class(raw: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Normalize a raw class. Classes without methods yield None."""
    raw_methods = raw.get('methods')
    if not raw_methods:
        return None
    return {
        'name': raw.get('name'),
        'methods': [create_method(m) for m in raw_methods],
    }


def _expand_child(child: Dict[str, Any], logger: Optional[logging.Logger] = None) -> Optional[Dict[str, Any]]:
    """Normalize a nested module, returning None if it cannot be expanded.

    SchemaError is never swallowed here: a broken signature anywhere aborts the run.
    """
    try:
        return normalize_module(child, logger=logger)
    except SchemaError:
        raise
    except Exception:
        if logger:
            logger.exception(f"Recursive module expansion failed for {child.get('name') if isinstance(child, dict) else child!r}")
        return None


def normalize_module(node: Dict[str, Any], logger: Optional[logging.Logger] = None) -> Dict[str, Any]:
    """Normalize `node` and fold in all of its nested modules."""
    methods: List[Dict[str, Any]] = [create_method(m) for m in node.get('methods') or []]
    classes: List[Dict[str, Any]] = []
    for raw_class in node.get('classes') or []:
        cls = create_class(raw_class)
        if cls is not None:
            classes.append(cls)

    for child in node.get('modules') or []:
        expanded = _expand_child(child, logger=logger)
        if expanded is None:
            continue
        methods.extend(expanded['methods'])
        classes.extend(expanded['classes'])

    return {
        'name': node.get('name'),
        'methods': methods,
        'classes': classes,
    }


def normalize_document(module_name: str, document: Any, logger: Optional[logging.Logger] = None) -> Optional[Dict[str, Any]]:
    """Normalize a top-level module document.

    Returns None when the document has no `modules` field (e.g. the C++ addons
    page), which callers treat as "skip this module". The document must wrap
    exactly one module; anything else raises SchemaError.
    """
    if not isinstance(document, dict) or document.get('modules') is None:
        if logger:
            logger.info(f"Skipping {module_name}: no modules in document")
        return None

    top_level = document['modules']
    if len(top_level) != 1:
        raise SchemaError(f"{module_name} should have one top level module, found {len(top_level)}")

    return normalize_module(top_level[0], logger=logger)
