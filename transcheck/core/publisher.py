"""
Outbound diagnostics delivery.

The provider hands every validation result to a publisher as a full
replacement set for the document URI; an empty list clears earlier warnings.
"""

from typing import Dict, List, Protocol

from transcheck.core.models import Diagnostic


class DiagnosticsPublisher(Protocol):
    def publish_diagnostics(self, uri: str, diagnostics: List[Diagnostic]) -> None:
        ...


class DiagnosticsCollector:
    """Publisher keeping the latest diagnostics per URI in memory."""

    def __init__(self):
        self._diagnostics: Dict[str, List[Diagnostic]] = {}
        self.publish_count = 0

    def publish_diagnostics(self, uri: str, diagnostics: List[Diagnostic]) -> None:
        self._diagnostics[uri] = list(diagnostics)
        self.publish_count += 1

    def get(self, uri: str) -> List[Diagnostic]:
        return list(self._diagnostics.get(uri, []))

    def all(self) -> Dict[str, List[Diagnostic]]:
        """Every URI with a non-empty published set."""
        return {uri: list(items) for uri, items in self._diagnostics.items() if items}

    def forget(self, uri: str) -> None:
        self._diagnostics.pop(uri, None)
