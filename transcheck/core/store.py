"""
In-memory store of parsed translation files, keyed by URI.
"""

from typing import Dict, Iterator, List, Optional

from transcheck.core.documents import TextDocument
from transcheck.core.models import Project, Translation
from transcheck.logger import get_logger
from transcheck.project.index import ProjectIndex
from transcheck.translation.parser import TranslationParser

logger = get_logger(__name__)


class TranslationStore:

    def __init__(self, parser: Optional[TranslationParser] = None):
        self.parser = parser or TranslationParser()
        self._translations: Dict[str, Translation] = {}

    def __len__(self) -> int:
        return len(self._translations)

    def __iter__(self) -> Iterator[Translation]:
        return iter(list(self._translations.values()))

    def __contains__(self, uri: str) -> bool:
        return uri in self._translations

    def get(self, uri: str) -> Optional[Translation]:
        return self._translations.get(uri)

    def upsert(self, document: TextDocument, project: Optional[Project]) -> Translation:
        """
        Parse ``document`` and store its units.

        A new URI is stored with ``project``; for a known URI only the units
        are replaced and the existing project association is kept.
        """
        units = self.parser.get_trans_units(document)
        existing = self._translations.get(document.uri)
        if existing is None:
            translation = Translation(uri=document.uri, units=units, project=project)
            self._translations[document.uri] = translation
            logger.info(
                f"Translation file added: {document.uri} "
                f"({len(units)} units, project={project.label if project else None})"
            )
            return translation

        existing.units = units
        logger.debug(f"Translation file updated: {document.uri} ({len(units)} units)")
        return existing

    def remove(self, uri: str) -> Optional[Translation]:
        return self._translations.pop(uri, None)

    def reassign_all(self, project_index: ProjectIndex) -> None:
        """Re-derive the project of every stored file from the current project list."""
        if not self._translations:
            return
        if len(project_index) == 0:
            for translation in self._translations.values():
                translation.project = None
            logger.info("No projects known; cleared all translation project associations")
            return

        for translation in self._translations.values():
            translation.project = project_index.project_for_translation_file(translation.uri)
            if translation.project is None:
                logger.debug(f"No project claims translation file {translation.uri}")

    def supported_translations(self, markup_uri: str, project_index: ProjectIndex) -> List[Translation]:
        """Translations of every project the markup document belongs to, in project order."""
        supported = []
        for project in project_index.projects_for_markup_document(markup_uri):
            match = self._find_for_project(project)
            if match is not None:
                supported.append(match)
        return supported

    def _find_for_project(self, project: Project) -> Optional[Translation]:
        for translation in self._translations.values():
            if translation.project is not None and translation.project.label == project.label:
                return translation
        return None
