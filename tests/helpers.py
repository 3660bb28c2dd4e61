"""Shared builders for transcheck tests."""

from __future__ import annotations

from typing import List, Optional, Tuple

from transcheck.core.documents import TextDocument
from transcheck.core.models import Diagnostic, Project

APP_ROOT = "file:///work/app/src"
FR_FILE = f"{APP_ROOT}/locale/messages.fr.xlf"
DE_FILE = f"{APP_ROOT}/locale/messages.de.xlf"
HOME_URI = f"{APP_ROOT}/app/home.component.html"


def make_project(label: str, root: str = "/work/app/src", exclude: Tuple[str, ...] = (), i18n_file: Optional[str] = None) -> Project:
    return Project(
        label=label,
        root=root,
        exclude=exclude,
        i18n_file=i18n_file if i18n_file is not None else f"locale/messages.{label}.xlf",
    )


def trans_unit(unit_id: Optional[str], source: str = "", target: Optional[str] = None, quote: str = '"') -> str:
    id_attr = f" id={quote}{unit_id}{quote}" if unit_id is not None else ""
    target_xml = f"\n        <target>{target}</target>" if target is not None else ""
    return (
        f"      <trans-unit{id_attr} datatype=\"html\">\n"
        f"        <source>{source}</source>{target_xml}\n"
        f"      </trans-unit>\n"
    )


def xliff(*units: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" ?>\n'
        '<xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">\n'
        '  <file source-language="en" datatype="plaintext" original="ng2.template">\n'
        '    <body>\n'
        + "".join(units)
        + '    </body>\n'
        '  </file>\n'
        '</xliff>\n'
    )


def xliff_document(uri: str, *units: str, version: int = 0) -> TextDocument:
    return TextDocument(uri=uri, language_id="xml", text=xliff(*units), version=version)


def html_document(uri: str, text: str, version: int = 0) -> TextDocument:
    return TextDocument(uri=uri, language_id="html", text=text, version=version)


class RecordingPublisher:
    """Publisher remembering every call in order."""

    def __init__(self):
        self.calls: List[Tuple[str, List[Diagnostic]]] = []

    def publish_diagnostics(self, uri: str, diagnostics: List[Diagnostic]) -> None:
        self.calls.append((uri, list(diagnostics)))

    def for_uri(self, uri: str) -> List[List[Diagnostic]]:
        return [diagnostics for called_uri, diagnostics in self.calls if called_uri == uri]

    def latest(self, uri: str) -> Optional[List[Diagnostic]]:
        published = self.for_uri(uri)
        return published[-1] if published else None
