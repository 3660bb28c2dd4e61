"""
TranslationProvider - the engine's single entry point.

Owns the project list, the translation store, the open documents and the
per-document identifier index. Every notification runs to completion before
the next one, so a query always sees the state left by the last event.
"""

from typing import Dict, Iterable, List, Optional, Set

from transcheck.config import NO_TRANSLATION, Settings
from transcheck.core.documents import TextDocument, TextDocuments
from transcheck.core.models import (
    DOCUMENT_START,
    Diagnostic,
    Hover,
    IdRange,
    Location,
    Position,
    Project,
)
from transcheck.core.publisher import DiagnosticsPublisher
from transcheck.core.store import TranslationStore
from transcheck.core.validation import ValidationEngine
from transcheck.logger import get_logger
from transcheck.project.index import ProjectIndex
from transcheck.translation.parser import JSON, XLIFF, TranslationParser

logger = get_logger(__name__)


class TranslationProvider:

    def __init__(
        self,
        publisher: DiagnosticsPublisher,
        settings: Optional[Settings] = None,
        documents: Optional[TextDocuments] = None,
    ):
        self.settings = settings or Settings()
        self.publisher = publisher
        self.documents = documents if documents is not None else TextDocuments()
        self.projects = ProjectIndex()
        self.translations = TranslationStore(TranslationParser(self.settings.translation_formats))
        self.engine = ValidationEngine(source=self.settings.diagnostic_source)
        self._identifiers: Dict[str, List[IdRange]] = {}
        # URIs whose last published set was non-empty
        self._flagged: Set[str] = set()

    # Notifications

    def projects_updated(self, projects: Iterable[Project]) -> None:
        self.projects.replace(projects)
        self._adopt_open_translations()
        self.translations.reassign_all(self.projects)
        self.validate_markup_documents()

    def translations_loaded(self) -> None:
        self._adopt_open_translations()
        logger.info(f"Translations loaded: {len(self.translations)} file(s)")
        self.translations.reassign_all(self.projects)
        self.validate_markup_documents()

    def document_changed(self, document: TextDocument) -> None:
        self.documents.set(document)
        if self.is_translation_file(document):
            self.process_translation_file(document)
        elif self.is_markup_file(document):
            self.process_markup_file(document)

    def document_closed(self, uri: str) -> None:
        self.documents.remove(uri)
        self._clear(uri)

    # Classification

    def is_translation_file(self, document: TextDocument) -> bool:
        kind = self.translations.parser.format_for(document.uri)
        if kind == XLIFF:
            return document.language_id in self.settings.xliff_languages
        if kind == JSON:
            if document.language_id not in self.settings.json_languages:
                return False
            # Any .json could be a translation resource; only project-claimed ones count
            return (
                document.uri in self.translations
                or self.projects.project_for_translation_file(document.uri) is not None
            )
        return False

    def is_markup_file(self, document: TextDocument) -> bool:
        return document.language_id in self.settings.markup_languages

    # Processing

    def process_translation_file(self, document: TextDocument) -> None:
        project = None
        if document.uri not in self.translations:
            project = self.projects.project_for_translation_file(document.uri)
        self.translations.upsert(document, project)
        # One translation file can affect markup in any project
        self.validate_markup_documents()

    def process_markup_file(self, document: TextDocument) -> None:
        if len(self.projects) == 0 or len(self.translations) == 0:
            self._clear(document.uri)
            return
        self._validate(document)

    def _adopt_open_translations(self) -> None:
        """Store open documents that only now qualify as translation files."""
        for document in self.documents.all():
            if document.uri in self.translations or not self.is_translation_file(document):
                continue
            logger.debug(f"Adopting open translation file {document.uri}")
            self.translations.upsert(document, self.projects.project_for_translation_file(document.uri))

    def validate_markup_documents(self) -> None:
        markup = [document for document in self.documents.all() if self.is_markup_file(document)]
        logger.debug(f"Re-validating {len(markup)} markup document(s)")
        for document in markup:
            self.process_markup_file(document)

    def _validate(self, document: TextDocument) -> None:
        supported = self.translations.supported_translations(document.uri, self.projects)
        if not supported:
            self._clear(document.uri)
            return
        result = self.engine.validate(document, supported)
        self._identifiers[document.uri] = result.identifiers
        self._publish(document.uri, result.diagnostics)

    def _publish(self, uri: str, diagnostics: List[Diagnostic]) -> None:
        if diagnostics:
            self._flagged.add(uri)
        else:
            self._flagged.discard(uri)
        self.publisher.publish_diagnostics(uri, diagnostics)

    def _clear(self, uri: str) -> None:
        self._identifiers.pop(uri, None)
        if uri in self._flagged:
            self._publish(uri, [])

    # Queries

    def identifiers(self, uri: str) -> List[IdRange]:
        return list(self._identifiers.get(uri, []))

    def find_reference(self, uri: str, position: Position) -> Optional[IdRange]:
        """The identifier reference under ``position``, if any."""
        document = self.documents.get(uri)
        if document is None:
            return None
        references = self._identifiers.get(uri)
        if not references:
            return None
        offset = document.offset_at(position)
        for reference in references:
            if reference.contains(offset):
                return reference
        return None

    def hover(self, uri: str, position: Position) -> Optional[Hover]:
        """Translated values of the identifier under the cursor, one per supporting project."""
        reference = self.find_reference(uri, position)
        if reference is None:
            return None
        supported = self.translations.supported_translations(uri, self.projects)
        if not supported:
            return None

        values = []
        for translation in supported:
            unit = translation.find_unit(reference.id)
            if unit is None or unit.target is None:
                values.append(NO_TRANSLATION)
            else:
                values.append(unit.target)
        return Hover(range=reference.range, contents=self.settings.hover_separator.join(values))

    def locations(self, uri: str, position: Position) -> List[Location]:
        """Where the identifier under the cursor is defined in each supporting translation file."""
        reference = self.find_reference(uri, position)
        if reference is None:
            return []

        locations = []
        for translation in self.translations.supported_translations(uri, self.projects):
            unit = translation.find_unit(reference.id)
            if unit is None:
                continue
            target = unit.target_range or unit.id_range or DOCUMENT_START
            locations.append(Location(uri=translation.uri, range=target))
        return locations
