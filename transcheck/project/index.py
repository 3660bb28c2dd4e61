"""
Project membership rules.

A markup document belongs to a project when its URI contains the project root
and matches none of the project's exclusion globs. A translation file belongs
to the first project whose i18n file fragment appears in its URI.
"""

import re
from functools import lru_cache
from typing import Iterable, Iterator, List, Optional, Tuple

from transcheck.core.models import Project
from transcheck.logger import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=256)
def _compile_glob(pattern: str) -> re.Pattern:
    # Only '*' is special; it spans path separators
    parts = (re.escape(part) for part in pattern.split('*'))
    return re.compile('^' + '.*'.join(parts) + '$', re.IGNORECASE | re.DOTALL)


def glob_match(value: str, pattern: str) -> bool:
    """
    Case-insensitive wildcard match; a leading ``!`` negates the pattern.

    Example:
        >>> glob_match("file:///app/src/legacy/a.html", "file:///app/src/legacy*")
        True
    """
    negated = pattern.startswith('!')
    if negated:
        pattern = pattern[1:]
    matched = bool(_compile_glob(pattern).match(value))
    return not matched if negated else matched


def is_excluded(project: Project, uri: str) -> bool:
    """Exclusion patterns match as path prefixes, so a trailing wildcard is appended."""
    return any(glob_match(uri, pattern + '*') for pattern in project.exclude)


def belongs(project: Project, uri: str) -> bool:
    if project.root not in uri:
        return False
    return not is_excluded(project, uri)


class ProjectIndex:
    """The current project list; replaced wholesale on every update."""

    def __init__(self, projects: Optional[Iterable[Project]] = None):
        self._projects: Tuple[Project, ...] = ()
        if projects is not None:
            self.replace(projects)

    def replace(self, projects: Iterable[Project]) -> None:
        projects = tuple(projects)
        labels = [project.label for project in projects]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            logger.warning(f"Duplicate project labels: {', '.join(duplicates)}")
        self._projects = projects
        logger.info(f"Project list replaced: {len(projects)} project(s)")

    @property
    def projects(self) -> Tuple[Project, ...]:
        return self._projects

    @property
    def labels(self) -> List[str]:
        return [project.label for project in self._projects]

    def __len__(self) -> int:
        return len(self._projects)

    def __iter__(self) -> Iterator[Project]:
        return iter(self._projects)

    def belongs(self, project: Project, uri: str) -> bool:
        return belongs(project, uri)

    def projects_for_markup_document(self, uri: str) -> List[Project]:
        return [project for project in self._projects if belongs(project, uri)]

    def project_for_translation_file(self, uri: str) -> Optional[Project]:
        for project in self._projects:
            # An empty fragment would claim every file
            if project.i18n_file and project.i18n_file in uri:
                return project
        return None
