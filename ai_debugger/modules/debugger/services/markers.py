from __future__ import annotations

from typing import Dict, Sequence

from ..domain.interfaces import MarkerPublisher
from ..domain.models import AdvisoryMarker


class MarkerCollection:
    """Per-document advisory markers; every update replaces the previous set."""

    def __init__(self, publisher: MarkerPublisher) -> None:
        self._publisher = publisher
        self._markers: Dict[str, tuple[AdvisoryMarker, ...]] = {}

    def set(self, uri: str, markers: Sequence[AdvisoryMarker]) -> None:
        snapshot = tuple(markers)
        self._markers[uri] = snapshot
        self._publisher.publish(uri, snapshot)

    def get(self, uri: str) -> tuple[AdvisoryMarker, ...]:
        return self._markers.get(uri, ())

    def delete(self, uri: str) -> None:
        if self._markers.pop(uri, None) is not None:
            self._publisher.publish(uri, ())

    def clear(self) -> None:
        for uri in list(self._markers):
            self.delete(uri)
