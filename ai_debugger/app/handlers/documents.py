from __future__ import annotations

import logging
from typing import Any

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
)
from pygls.lsp.server import LanguageServer

from ...modules.debugger.infrastructure.lsp_surface import document_snapshot
from ...modules.debugger.services.active_document import ActiveDocumentTracker
from ...modules.debugger.services.bridge import InferenceBridge

logger = logging.getLogger(__name__)

ACTIVE_EDITOR_NOTIFICATION = "aiDebugger/didChangeActiveEditor"


def _notification_uri(params: Any) -> str | None:
    if params is None:
        return None
    if isinstance(params, dict):
        uri = params.get("uri")
    else:
        uri = getattr(params, "uri", None)
    return uri if isinstance(uri, str) else None


def register_document_handlers(
    server: LanguageServer, bridge: InferenceBridge, tracker: ActiveDocumentTracker
) -> None:
    @server.feature(TEXT_DOCUMENT_DID_OPEN)
    async def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
        tracker.activate(params.text_document.uri)

    @server.feature(TEXT_DOCUMENT_DID_CHANGE)
    async def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
        document = ls.workspace.get_text_document(params.text_document.uri)
        bridge.on_document_changed(document_snapshot(document), tracker.uri)

    @server.feature(TEXT_DOCUMENT_DID_CLOSE)
    async def did_close(ls: LanguageServer, params: DidCloseTextDocumentParams) -> None:
        uri = params.text_document.uri
        tracker.forget(uri)
        bridge.on_document_closed(uri)

    @server.feature(ACTIVE_EDITOR_NOTIFICATION)
    async def did_change_active_editor(ls: LanguageServer, params: Any) -> None:
        uri = _notification_uri(params)
        logger.debug("Active editor is now %s", uri)
        tracker.activate(uri)
