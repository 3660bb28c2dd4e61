"""
Translation file parsing.

TranslationParser picks a strategy per file suffix and never raises:
malformed input is logged and yields no units.

Strategies:
- XliffUnitParser: regex extraction of ``<trans-unit>`` blocks
- JsonUnitParser: flattened key/value JSON resources
"""

import json
import re
from typing import Dict, List, Optional

from transcheck.config import DEFAULT_CONFIG, NO_TRANSLATION
from transcheck.core.documents import TextDocument
from transcheck.core.models import Range, TransUnit
from transcheck.logger import get_logger
from transcheck.translation.utils import (
    flatten_json,
    is_blank_value,
    leaf_to_text,
    locate_json_key,
    split_key_path,
    uri_suffix,
)

logger = get_logger(__name__)

XLIFF = "xliff"
JSON = "json"


def _range(document: TextDocument, start: int, end: int) -> Range:
    return Range(document.position_at(start), document.position_at(end))


class XliffUnitParser:
    """Extract units from ``<trans-unit>`` blocks with regular expressions."""

    unit_pattern = re.compile(r"<trans-unit.*?</trans-unit>", re.DOTALL)
    id_pattern = re.compile(r"\bid=([\"'])(.+?)\1")
    source_pattern = re.compile(r"<source(?:\s[^>]*)?>(.*?)</source>", re.DOTALL)
    target_pattern = re.compile(r"<target(?:\s[^>]*)?>(.*?)</target>", re.DOTALL)

    def parse(self, document: TextDocument) -> List[TransUnit]:
        units = []
        for block in self.unit_pattern.finditer(document.get_text()):
            unit = self._parse_block(document, block)
            if unit is not None:
                units.append(unit)
        return units

    def _parse_block(self, document: TextDocument, block: re.Match) -> Optional[TransUnit]:
        text = block.group(0)
        base = block.start()

        id_match = self.id_pattern.search(text)
        if not id_match:
            # Units without an id cannot be referenced
            return None

        source_match = self.source_pattern.search(text)
        target_match = self.target_pattern.search(text)

        return TransUnit(
            id=id_match.group(2),
            source=source_match.group(1) if source_match else None,
            target=target_match.group(1) if target_match else None,
            id_range=_range(document, base + id_match.start(2), base + id_match.end(2)),
            source_range=(
                _range(document, base + source_match.start(1), base + source_match.end(1))
                if source_match else None
            ),
            target_range=(
                _range(document, base + target_match.start(1), base + target_match.end(1))
                if target_match else None
            ),
        )


class JsonUnitParser:
    """Turn every flattened JSON path into a unit; there is no source text."""

    def parse(self, document: TextDocument) -> List[TransUnit]:
        text = document.get_text()
        flat = flatten_json(json.loads(text))

        units = []
        for key_path, value in flat.items():
            if not key_path:
                # Root sentinel of an empty object or array; unit ids are never empty
                continue
            offset = locate_json_key(text, key_path)
            id_range = None
            if offset is not None:
                # Quoted key length minus the two quotes
                key_length = len(json.dumps(split_key_path(key_path)[-1], ensure_ascii=False)) - 2
                id_range = _range(document, offset, offset + key_length)
            target = NO_TRANSLATION if is_blank_value(value) else leaf_to_text(value)
            units.append(TransUnit(id=key_path, target=target, id_range=id_range))
        return units


class TranslationParser:
    """
    Facade choosing a parse strategy from the document's file suffix.

    Args:
        formats: Mapping of file suffix (".xlf") to format kind ("xliff" | "json")
    """

    def __init__(self, formats: Optional[Dict[str, str]] = None):
        self._formats = dict(formats or DEFAULT_CONFIG["translation_formats"])
        self._strategies = {
            XLIFF: XliffUnitParser(),
            JSON: JsonUnitParser(),
        }

    def format_for(self, uri: str) -> Optional[str]:
        """Format kind configured for the URI's suffix, or None."""
        kind = self._formats.get(uri_suffix(uri))
        if kind in self._strategies:
            return kind
        return None

    def get_trans_units(self, document: TextDocument) -> List[TransUnit]:
        kind = self.format_for(document.uri)
        if kind is None:
            logger.warning(f"No translation format configured for {document.uri}")
            return []

        try:
            units = self._strategies[kind].parse(document)
        except Exception as e:
            logger.error(f"Failed to parse {kind} translation file {document.uri}: {e}")
            return []

        logger.debug(f"Parsed {len(units)} units from {document.uri}")
        return units
