"""
Translation module - Translation file parsing

This module provides:
- TranslationParser: suffix-based facade over the parse strategies
- XliffUnitParser / JsonUnitParser: the strategies themselves
- flatten_json and key location helpers
"""

from transcheck.translation.parser import (
    JSON,
    XLIFF,
    JsonUnitParser,
    TranslationParser,
    XliffUnitParser,
)
from transcheck.translation.utils import (
    flatten_json,
    locate_json_key,
    split_key_path,
    uri_suffix,
)
