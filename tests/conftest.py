from __future__ import annotations

import pytest

from ai_debugger.modules.debugger.services.bridge import InferenceBridge
from ai_debugger.modules.debugger.services.markers import MarkerCollection

from .fakes import FakeFixClient, FakeSurface, RecordingPublisher


@pytest.fixture
def client() -> FakeFixClient:
    return FakeFixClient()


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def bridge(client: FakeFixClient, surface: FakeSurface, publisher: RecordingPublisher) -> InferenceBridge:
    return InferenceBridge(client, surface, MarkerCollection(publisher))
