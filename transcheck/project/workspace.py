"""
Workspace loading for Angular projects.

This module provides utilities to:
- Read projects and their translation files from angular.json
- Discover translation and markup files under a workspace root
- Feed everything into a TranslationProvider in the editor's order
  (projects, translation files, "translations loaded", markup files)
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from transcheck.config import Settings
from transcheck.core.documents import TextDocument
from transcheck.core.models import Project
from transcheck.exceptions import ProjectLoadError
from transcheck.logger import get_logger

logger = get_logger(__name__)

WORKSPACE_FILE = "angular.json"
SKIPPED_DIRECTORIES = {"node_modules", ".git", "dist", ".angular"}
MARKUP_SUFFIXES = (".html", ".htm")


def read_angular_workspace(path: Path) -> Dict[str, Any]:
    """
    Load an angular.json file.

    Raises:
        ProjectLoadError: If the file is missing, unreadable or not a JSON object
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ProjectLoadError(f"Workspace file not found: {path}", code="workspace_not_found") from e
    except json.JSONDecodeError as e:
        raise ProjectLoadError(f"Invalid JSON in {path}: {e}", code="workspace_invalid_json") from e
    except OSError as e:
        raise ProjectLoadError(f"Cannot read {path}: {e}", code="workspace_unreadable") from e

    if not isinstance(data, dict) or not isinstance(data.get("projects"), dict):
        raise ProjectLoadError(f"{path} has no 'projects' section", code="workspace_no_projects")
    return data


def _normalize_fragment(value: str) -> str:
    fragment = value.replace('\\', '/')
    while fragment.startswith('./'):
        fragment = fragment[2:]
    return fragment


def _collect_i18n_files(definition: Dict[str, Any]) -> Dict[str, str]:
    """Map locale/configuration name to translation file for one angular project."""
    files: Dict[str, str] = {}

    # Angular >= 9: "i18n": {"locales": {"fr": "src/locale/messages.fr.xlf"}}
    locales = (definition.get("i18n") or {}).get("locales") or {}
    for locale, entry in locales.items():
        if isinstance(entry, dict):
            entry = entry.get("translation")
        if isinstance(entry, list):
            entry = entry[0] if entry else None
        if isinstance(entry, str) and entry:
            files[locale] = entry

    # Older workspaces: architect.build.configurations.<name>.i18nFile
    build = ((definition.get("architect") or {}).get("build") or {})
    for name, configuration in (build.get("configurations") or {}).items():
        i18n_file = (configuration or {}).get("i18nFile")
        if isinstance(i18n_file, str) and i18n_file and name not in files:
            files[name] = i18n_file

    return files


def _lint_excludes(definition: Dict[str, Any]) -> List[str]:
    lint = ((definition.get("architect") or {}).get("lint") or {})
    exclude = (lint.get("options") or {}).get("exclude") or []
    if isinstance(exclude, str):
        exclude = [exclude]
    return [str(pattern) for pattern in exclude]


def load_angular_projects(path: Path) -> List[Project]:
    """
    Build one Project per translation file declared in angular.json.

    The project label is the locale/configuration name, prefixed with the
    angular project name when another project already uses that label.
    Missing or invalid workspace files are logged and yield no projects.
    """
    try:
        workspace = read_angular_workspace(path)
    except ProjectLoadError as e:
        logger.error(f"Failed to load projects: {e}")
        return []

    base_dir = path.resolve().parent
    projects: List[Project] = []
    used_labels = set()

    for name, definition in workspace["projects"].items():
        if not isinstance(definition, dict):
            continue
        source_root = definition.get("sourceRoot") or definition.get("root") or ""
        root = (base_dir / source_root).resolve().as_uri()
        exclude = tuple(_lint_excludes(definition))

        for locale, i18n_file in _collect_i18n_files(definition).items():
            label = locale if locale not in used_labels else f"{name}:{locale}"
            used_labels.add(label)
            projects.append(Project(
                label=label,
                root=root,
                exclude=exclude,
                i18n_file=_normalize_fragment(i18n_file),
            ))

    logger.info(f"Loaded {len(projects)} project(s) from {path}")
    return projects


def find_workspace_file(root: Path) -> Optional[Path]:
    """angular.json at ``root``, else the first one found below it."""
    candidate = root / WORKSPACE_FILE
    if candidate.is_file():
        return candidate
    found = find_files(root, (WORKSPACE_FILE,))
    return found[0] if found else None


def find_files(root: Path, suffixes: Iterable[str]) -> List[Path]:
    """
    Files under ``root`` whose name ends with one of ``suffixes``.

    Dependency and build directories are skipped.
    """
    suffixes = tuple(suffix.lower() for suffix in suffixes)
    matches = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRECTORIES)
        for filename in sorted(filenames):
            if filename.lower().endswith(suffixes):
                matches.append(Path(dirpath) / filename)
    return matches


def language_id_for(path: Path, settings: Settings) -> Optional[str]:
    suffix = path.suffix.lower()
    if suffix in MARKUP_SUFFIXES:
        return settings.markup_languages[0] if settings.markup_languages else None
    kind = settings.translation_formats.get(suffix)
    if kind == "xliff":
        return settings.xliff_languages[0] if settings.xliff_languages else None
    if kind == "json":
        return settings.json_languages[0] if settings.json_languages else None
    return None


def load_document(path: Path, language_id: str) -> Optional[TextDocument]:
    """Read a file into a TextDocument; unreadable files are logged and skipped."""
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Skipping unreadable file {path}: {e}")
        return None
    return TextDocument(uri=path.resolve().as_uri(), language_id=language_id, text=text)


def load_workspace(provider, root: Path) -> List[Project]:
    """
    Deliver a whole workspace to ``provider`` in editor order.

    Args:
        provider: TranslationProvider receiving the notifications
        root: Workspace directory

    Returns:
        The projects that were delivered
    """
    settings = provider.settings
    workspace_file = find_workspace_file(root)
    if workspace_file is None:
        logger.warning(f"No {WORKSPACE_FILE} found under {root}")
        projects: List[Project] = []
    else:
        projects = load_angular_projects(workspace_file)
    provider.projects_updated(projects)

    translation_suffixes = settings.suffixes_for("xliff") + settings.suffixes_for("json")
    translation_count = 0
    for path in find_files(root, translation_suffixes):
        uri = path.resolve().as_uri()
        # Only JSON files claimed by a project are translation resources
        if settings.translation_formats.get(path.suffix.lower()) == "json" and not any(
            project.i18n_file in uri for project in projects if project.i18n_file
        ):
            continue
        language_id = language_id_for(path, settings)
        document = load_document(path, language_id) if language_id else None
        if document is not None:
            provider.document_changed(document)
            translation_count += 1
    provider.translations_loaded()

    markup_count = 0
    for path in find_files(root, MARKUP_SUFFIXES):
        language_id = language_id_for(path, settings)
        document = load_document(path, language_id) if language_id else None
        if document is not None:
            provider.document_changed(document)
            markup_count += 1

    logger.info(
        f"Workspace {root} loaded: {len(projects)} project(s), "
        f"{translation_count} translation file(s), {markup_count} markup file(s)"
    )
    return projects
