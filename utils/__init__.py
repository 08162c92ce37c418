# Utilities package for node-api-diff
from .text import pad
from .constants import DOCS_BASE, USER_AGENTS

__all__ = ["pad", "DOCS_BASE", "USER_AGENTS"]
