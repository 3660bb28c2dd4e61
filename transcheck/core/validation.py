"""
Missing-translation validation for markup documents.

Every ``i18n...="@@id"`` annotation is checked against the translations of the
projects the document belongs to. A missing id is a warning, never an error:
the list of warnings is the product of this module.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from transcheck.core.documents import TextDocument
from transcheck.core.models import Diagnostic, DiagnosticSeverity, IdRange, Range, Translation
from transcheck.logger import get_logger

logger = get_logger(__name__)

# i18n, i18n-title, i18n-placeholder ... with an optional "meaning|description" before @@;
# only the quote that opened the attribute ends it
ANNOTATION_PATTERN = re.compile(
    r"""i18n[\w-]*\s*=\s*(?P<quote>["'])(?:(?!(?P=quote))[^\n])*?"""
    r"""(?P<ref>@@(?P<id>(?:(?!(?P=quote))[^\n])+?))(?P=quote)"""
)

MISSED_TRANSLATION_MESSAGE = "Missed translation in '{projects}' project(-s)"


@dataclass
class ValidationResult:
    diagnostics: List[Diagnostic] = field(default_factory=list)
    identifiers: List[IdRange] = field(default_factory=list)


class ValidationEngine:

    def __init__(self, source: Optional[str] = None):
        self.source = source

    def extract_identifiers(self, document: TextDocument) -> List[IdRange]:
        """All ``@@id`` references, left to right, spanning ``@@`` through the id."""
        identifiers = []
        for match in ANNOTATION_PATTERN.finditer(document.get_text()):
            start, end = match.span('ref')
            identifiers.append(IdRange(
                id=match.group('id'),
                start=start,
                end=end,
                range=Range(document.position_at(start), document.position_at(end)),
            ))
        return identifiers

    def validate(self, document: TextDocument, supported: List[Translation]) -> ValidationResult:
        """
        Check every reference in ``document`` against ``supported``.

        Args:
            document: Markup document to scan
            supported: Translations of the projects the document belongs to

        Returns:
            ValidationResult with one warning per reference missing from any
            supported translation, plus the reference index. Empty when there
            is nothing to validate against.
        """
        if not supported:
            return ValidationResult()

        known = [(translation, translation.unit_ids()) for translation in supported]
        result = ValidationResult(identifiers=self.extract_identifiers(document))

        for reference in result.identifiers:
            missing = [translation.label for translation, ids in known if reference.id not in ids]
            if not missing:
                continue
            result.diagnostics.append(Diagnostic(
                range=reference.range,
                message=MISSED_TRANSLATION_MESSAGE.format(projects=', '.join(missing)),
                severity=DiagnosticSeverity.WARNING,
                source=self.source,
            ))

        logger.debug(
            f"Validated {document.uri}: {len(result.identifiers)} references, "
            f"{len(result.diagnostics)} missing"
        )
        return result
