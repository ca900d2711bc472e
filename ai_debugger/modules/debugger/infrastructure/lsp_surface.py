from __future__ import annotations

import logging
from typing import Optional, Sequence

from lsprotocol.types import (
    ApplyWorkspaceEditParams,
    Diagnostic,
    DiagnosticSeverity,
    MessageType,
    OptionalVersionedTextDocumentIdentifier,
    Position,
    PublishDiagnosticsParams,
    Range,
    ShowMessageParams,
    TextDocumentEdit,
    TextEdit,
    WorkspaceEdit,
)
from pygls.exceptions import JsonRpcException
from pygls.lsp.server import LanguageServer
from pygls.workspace import TextDocument

from ..domain.interfaces import EditingSurface, MarkerPublisher
from ..domain.models import MARKER_SOURCE, AdvisoryMarker, CodeSpan, DocumentSnapshot, TextPosition

logger = logging.getLogger(__name__)

INPUT_BOX_REQUEST = "aiDebugger/showInputBox"
EDIT_LABEL = "AI Debug"


def to_lsp_range(span: CodeSpan) -> Range:
    return Range(
        start=Position(line=span.start.line, character=span.start.character),
        end=Position(line=span.end.line, character=span.end.character),
    )


def marker_to_diagnostic(marker: AdvisoryMarker) -> Diagnostic:
    return Diagnostic(
        range=Range(
            start=Position(line=marker.line, character=0),
            end=Position(line=marker.line, character=marker.end_character),
        ),
        message=marker.message,
        severity=DiagnosticSeverity(int(marker.severity)),
        source=MARKER_SOURCE,
    )


def selection_span(document: TextDocument, start: TextPosition, end: TextPosition) -> CodeSpan:
    """Build the span covered by ``start``..``end``; reversed selections are normalized."""
    if (end.line, end.character) < (start.line, start.character):
        start, end = end, start
    source = document.source
    begin = document.offset_at_position(Position(line=start.line, character=start.character))
    finish = document.offset_at_position(Position(line=end.line, character=end.character))
    return CodeSpan(
        uri=document.uri,
        version=document.version,
        start=start,
        end=end,
        text=source[begin:finish],
    )


def document_snapshot(document: TextDocument) -> DocumentSnapshot:
    return DocumentSnapshot(uri=document.uri, version=document.version, text=document.source)


class LspEditingSurface(EditingSurface):
    def __init__(self, server: LanguageServer) -> None:
        self._server = server

    async def show_info(self, message: str) -> None:
        self._server.window_show_message(ShowMessageParams(type=MessageType.Info, message=message))

    async def show_error(self, message: str) -> None:
        self._server.window_show_message(ShowMessageParams(type=MessageType.Error, message=message))

    async def ask_input(self, prompt: str, placeholder: str) -> Optional[str]:
        try:
            result = await self._server.protocol.send_request_async(
                INPUT_BOX_REQUEST, {"prompt": prompt, "placeHolder": placeholder}
            )
        except JsonRpcException:
            logger.warning("Client does not answer %s; treating input as cancelled", INPUT_BOX_REQUEST, exc_info=True)
            return None
        return result if isinstance(result, str) else None

    async def replace_span(self, span: CodeSpan, new_text: str) -> bool:
        current = self._server.workspace.text_documents.get(span.uri)
        if current is None:
            return False
        if span.version is not None and current.version is not None and current.version != span.version:
            return False

        edit = WorkspaceEdit(
            document_changes=[
                TextDocumentEdit(
                    text_document=OptionalVersionedTextDocumentIdentifier(uri=span.uri, version=span.version),
                    edits=[TextEdit(range=to_lsp_range(span), new_text=new_text)],
                )
            ]
        )
        result = await self._server.workspace_apply_edit_async(ApplyWorkspaceEditParams(edit=edit, label=EDIT_LABEL))
        if not result.applied:
            logger.info("Client rejected edit for %s: %s", span.uri, result.failure_reason)
        return bool(result.applied)


class LspMarkerPublisher(MarkerPublisher):
    def __init__(self, server: LanguageServer) -> None:
        self._server = server

    def publish(self, uri: str, markers: Sequence[AdvisoryMarker]) -> None:
        self._server.text_document_publish_diagnostics(
            PublishDiagnosticsParams(uri=uri, diagnostics=[marker_to_diagnostic(marker) for marker in markers])
        )
