"""
Translation utility functions for JSON flattening and key location.
"""

import json
import re
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional
from urllib.parse import unquote, urlsplit

# Path segments: a key between dots, or an [index]
_PATH_SEGMENT = re.compile(r"\[(\d+)\]|([^.\[\]]+)")


def uri_suffix(uri: str) -> str:
    """
    Return the lower-cased file suffix of a URI or plain path.

    Example:
        >>> uri_suffix("file:///app/src/locale/messages.fr.XLF")
        '.xlf'
    """
    path = unquote(urlsplit(uri).path) or uri
    return PurePosixPath(path).suffix.lower()


def flatten_json(data: Any) -> Dict[str, Any]:
    """
    Flatten nested JSON into a mapping of path strings to leaf values.

    Mapping keys are joined with ``.``, sequence indexes with ``[i]``.
    Empty mappings and sequences are kept as ``{}`` / ``[]`` leaves instead
    of disappearing, including at the root.

    Example:
        >>> flatten_json({"a": {"b": 1, "c": [2, {}]}})
        {'a.b': 1, 'a.c[0]': 2, 'a.c[1]': {}}
        >>> flatten_json({})
        {'': {}}
    """
    result: Dict[str, Any] = {}
    _flatten_into(data, "", result)
    return result


def _flatten_into(value: Any, path: str, result: Dict[str, Any]) -> None:
    if isinstance(value, dict):
        if not value:
            # Empty mapping sentinel
            result[path] = {}
            return
        for key, child in value.items():
            _flatten_into(child, f"{path}.{key}" if path else str(key), result)
    elif isinstance(value, list):
        if not value:
            # Empty sequence sentinel
            result[path] = []
            return
        for index, child in enumerate(value):
            _flatten_into(child, f"{path}[{index}]", result)
    else:
        result[path] = value


def split_key_path(path: str) -> List[str]:
    """Return the mapping keys of a flattened path, dropping sequence indexes."""
    return [key for index, key in _PATH_SEGMENT.findall(path) if key]


def locate_json_key(text: str, path: str) -> Optional[int]:
    """
    Best-effort offset of the last key of ``path`` inside raw JSON text.

    Walks the key segments in order, each search starting after the previous
    hit. Returns the offset of the first character inside the quotes, or None
    when a segment cannot be found.
    """
    keys = split_key_path(path)
    if not keys:
        return None

    position = 0
    found = -1
    for key in keys:
        needle = json.dumps(key, ensure_ascii=False)
        found = text.find(needle, position)
        if found < 0:
            return None
        position = found + len(needle)
    return found + 1


def leaf_to_text(value: Any) -> str:
    """Render a flattened leaf value as display text."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def is_blank_value(value: Any) -> bool:
    """True for leaves that carry no translation (null, false, 0, empty string)."""
    if isinstance(value, (dict, list)):
        # Empty container sentinels are values, not gaps
        return False
    return not value
