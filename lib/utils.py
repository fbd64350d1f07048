"""
Common utilities for Clinic Locator.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def jsonDumps(data: Any, compact: Optional[bool] = None, **kwargs) -> str:
    """Dump JSON with sorted keys and unescaped unicode.

    Output is compact unless `indent` is given or `compact` is False.
    """
    if compact is None:
        compact = "indent" not in kwargs
    kwargs.setdefault("ensure_ascii", False)
    kwargs.setdefault("sort_keys", True)
    if compact:
        kwargs.setdefault("separators", (",", ":"))
    return json.dumps(data, **kwargs)


def load_dotenv(path: str = ".env", populateEnv: bool = True) -> Dict[str, str]:
    """
    Simple dotenv file loader.
    Reads KEY=VALUE lines, skipping blank lines and comments.

    Args:
        path: Path to .env file (default ".env")
        populateEnv: Whether to populate environment variables (default True)

    Returns:
        Dictionary of key-value pairs from .env file, empty if there is no such file
    """
    ret: Dict[str, str] = {}
    envPath = Path(path)
    if not envPath.is_file():
        logger.debug(f"No dotenv file at {path}, skipping")
        return ret

    with open(envPath, "rt") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            ret[key.strip()] = value.strip().strip('"')

    if populateEnv:
        for k, v in ret.items():
            # Real environment wins over .env
            os.environ.setdefault(k, v)
    return ret
