"""
Core module - Data model and consistency engine

This module provides:
- models: Projects, translation units, ranges and diagnostics
- documents: Text documents and the open-document collection
- store: Parsed translation files per URI
- validation: Missing-translation diagnostics for markup documents
- provider: The orchestrator tying everything together
- publisher: Outbound diagnostics delivery
"""

from transcheck.core.models import (
    DOCUMENT_START,
    Diagnostic,
    DiagnosticSeverity,
    Hover,
    IdRange,
    Location,
    Position,
    Project,
    Range,
    TransUnit,
    Translation,
)

from transcheck.core.documents import (
    TextDocument,
    TextDocuments,
)
