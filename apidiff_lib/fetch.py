"""Network fetch helpers for the Node.js API docs."""
import random
from typing import Any, Optional

import requests

from utils.constants import DOCS_BASE, MODULE_PATH, SYNOPSIS_PATH, USER_AGENTS


def _get_random_user_agent() -> str:
    """Return a random user agent."""
    return random.choice(USER_AGENTS)


def synopsis_url(version: str, base_url: str = DOCS_BASE) -> str:
    """URL of the synopsis page that lists every documented module."""
    return f"{base_url.rstrip('/')}/" + SYNOPSIS_PATH.format(version=version)


def module_url(version: str, module_name: str, base_url: str = DOCS_BASE) -> str:
    """URL of the JSON description of a single module."""
    return f"{base_url.rstrip('/')}/" + MODULE_PATH.format(version=version, module=module_name)


def fetch_text(session: requests.Session, url: str, timeout: Optional[float] = None) -> str:
    """GET `url` and return the body. Raises requests.HTTPError on a non-2xx status."""
    headers = {
        'User-Agent': _get_random_user_agent(),
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    }
    response = session.get(url, headers=headers, timeout=timeout)
    response.raise_for_status()
    return response.text


def fetch_json(session: requests.Session, url: str, timeout: Optional[float] = None) -> Any:
    """GET `url` and decode the body as JSON."""
    headers = {
        'User-Agent': _get_random_user_agent(),
        'Accept': 'application/json,*/*;q=0.8',
    }
    response = session.get(url, headers=headers, timeout=timeout)
    response.raise_for_status()
    return response.json()
