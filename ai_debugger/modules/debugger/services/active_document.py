from __future__ import annotations

from typing import Optional


class ActiveDocumentTracker:
    """Remembers which document currently has the user's focus."""

    def __init__(self) -> None:
        self._uri: Optional[str] = None

    @property
    def uri(self) -> Optional[str]:
        return self._uri

    def activate(self, uri: Optional[str]) -> None:
        self._uri = uri or None

    def forget(self, uri: str) -> None:
        if self._uri == uri:
            self._uri = None
