from __future__ import annotations

import pytest

from ai_debugger.modules.debugger.services.bridge import (
    APPLIED_MESSAGE,
    COMMUNICATION_ERROR_MESSAGE,
    CUSTOM_APPLIED_MESSAGE,
    CUSTOM_PROMPT_PLACEHOLDER,
    CUSTOM_PROMPT_TITLE,
    IN_PROGRESS_MESSAGE,
    NO_EDITOR_MESSAGE,
    NO_SELECTION_MESSAGE,
    STALE_EDIT_MESSAGE,
    InferenceBridge,
)
from ai_debugger.modules.debugger.services.markers import MarkerCollection

from .fakes import FakeFixClient, FakeSurface, RecordingPublisher, make_editor, remote_failure


@pytest.mark.asyncio
async def test_selection_is_sent_once_and_replaced_verbatim(
    bridge: InferenceBridge, client: FakeFixClient, surface: FakeSurface
) -> None:
    client.fixed_code = "const total = items.length;\n"
    editor = make_editor("const total = items.lenght;")

    assert await bridge.apply_selection_fix(editor) is True

    assert [request.code for request in client.requests] == ["const total = items.lenght;"]
    assert client.requests[0].prompt is None
    assert surface.replacements == [(editor.selection, "const total = items.length;\n")]
    assert surface.infos == [IN_PROGRESS_MESSAGE, APPLIED_MESSAGE]
    assert surface.errors == []


@pytest.mark.asyncio
async def test_empty_selection_reports_error_without_request(
    bridge: InferenceBridge, client: FakeFixClient, surface: FakeSurface
) -> None:
    assert await bridge.apply_selection_fix(make_editor("")) is False
    assert client.requests == []
    assert surface.errors == [NO_SELECTION_MESSAGE]
    assert surface.infos == []


@pytest.mark.asyncio
async def test_missing_editor_reports_error_without_request(
    bridge: InferenceBridge, client: FakeFixClient, surface: FakeSurface
) -> None:
    assert await bridge.apply_selection_fix(None) is False
    assert client.requests == []
    assert surface.errors == [NO_EDITOR_MESSAGE]


@pytest.mark.asyncio
async def test_remote_failure_leaves_document_untouched(
    bridge: InferenceBridge, client: FakeFixClient, surface: FakeSurface
) -> None:
    client.error = remote_failure()

    assert await bridge.apply_selection_fix(make_editor("foo(")) is False

    assert len(client.requests) == 1
    assert surface.replacements == []
    assert surface.errors == [COMMUNICATION_ERROR_MESSAGE]


@pytest.mark.asyncio
async def test_rejected_edit_is_reported(client: FakeFixClient, publisher: RecordingPublisher) -> None:
    surface = FakeSurface(accept_edits=False)
    bridge = InferenceBridge(client, surface, MarkerCollection(publisher))

    assert await bridge.apply_selection_fix(make_editor("foo(")) is False
    assert surface.errors == [STALE_EDIT_MESSAGE]
    assert APPLIED_MESSAGE not in surface.infos


@pytest.mark.asyncio
async def test_cancelled_custom_prompt_aborts_silently(client: FakeFixClient, publisher: RecordingPublisher) -> None:
    surface = FakeSurface(input_value=None)
    bridge = InferenceBridge(client, surface, MarkerCollection(publisher))

    assert await bridge.apply_custom_prompt_fix(make_editor("foo(")) is False

    assert surface.prompts == [(CUSTOM_PROMPT_TITLE, CUSTOM_PROMPT_PLACEHOLDER)]
    assert client.requests == []
    assert surface.errors == []
    assert surface.infos == []


@pytest.mark.asyncio
async def test_empty_custom_prompt_aborts_silently(client: FakeFixClient, publisher: RecordingPublisher) -> None:
    surface = FakeSurface(input_value="")
    bridge = InferenceBridge(client, surface, MarkerCollection(publisher))

    assert await bridge.apply_custom_prompt_fix(make_editor("foo(")) is False
    assert client.requests == []
    assert surface.errors == []


@pytest.mark.asyncio
async def test_custom_prompt_is_sent_with_code(client: FakeFixClient, publisher: RecordingPublisher) -> None:
    surface = FakeSurface(input_value="Optimize this loop")
    bridge = InferenceBridge(client, surface, MarkerCollection(publisher))
    editor = make_editor("for (i in xs) {}")

    assert await bridge.apply_custom_prompt_fix(editor) is True

    assert [(r.code, r.prompt) for r in client.requests] == [("for (i in xs) {}", "Optimize this loop")]
    assert surface.infos[-1] == CUSTOM_APPLIED_MESSAGE
    assert surface.replacements == [(editor.selection, "fixed();")]


@pytest.mark.asyncio
async def test_prompt_asked_before_editor_is_checked(client: FakeFixClient, publisher: RecordingPublisher) -> None:
    surface = FakeSurface(input_value="explain")
    bridge = InferenceBridge(client, surface, MarkerCollection(publisher))

    assert await bridge.apply_custom_prompt_fix(None) is False
    assert len(surface.prompts) == 1
    assert surface.errors == [NO_EDITOR_MESSAGE]
    assert client.requests == []


@pytest.mark.asyncio
async def test_supplied_prompt_skips_input_box(client: FakeFixClient, publisher: RecordingPublisher) -> None:
    surface = FakeSurface(input_value="never used")
    bridge = InferenceBridge(client, surface, MarkerCollection(publisher))

    assert await bridge.apply_custom_prompt_fix(make_editor("x = 1"), prompt="add types") is True
    assert surface.prompts == []
    assert client.requests[0].prompt == "add types"
