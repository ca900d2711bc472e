from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pygls.lsp.server import LanguageServer

from ...modules.debugger.domain.models import ActiveEditor, TextPosition
from ...modules.debugger.infrastructure.lsp_surface import selection_span
from ...modules.debugger.services.active_document import ActiveDocumentTracker
from ...modules.debugger.services.bridge import InferenceBridge

logger = logging.getLogger(__name__)

DEBUG_CODE_COMMAND = "extension.debugCode"
CUSTOM_PROMPT_COMMAND = "extension.customDebugPrompt"


class _PositionArg(BaseModel):
    line: int = Field(ge=0)
    character: int = Field(ge=0)

    def to_position(self) -> TextPosition:
        return TextPosition(line=self.line, character=self.character)


class _RangeArg(BaseModel):
    start: _PositionArg
    end: _PositionArg


class DebugCommandArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uri: Optional[str] = None
    range: Optional[_RangeArg] = None
    prompt: Optional[str] = None


def _parse_command_args(arguments: Sequence[Any]) -> DebugCommandArgs:
    payload = arguments[0] if arguments else None
    if payload is None:
        return DebugCommandArgs()
    try:
        return DebugCommandArgs.model_validate(payload)
    except ValidationError:
        logger.warning("Ignoring malformed command arguments: %r", payload)
        return DebugCommandArgs()


def _resolve_editor(ls: LanguageServer, args: DebugCommandArgs) -> Optional[ActiveEditor]:
    if not args.uri:
        return None
    document = ls.workspace.text_documents.get(args.uri)
    if document is None:
        return None
    if args.range is None:
        start = end = TextPosition(line=0, character=0)
    else:
        start, end = args.range.start.to_position(), args.range.end.to_position()
    return ActiveEditor(
        uri=document.uri,
        version=document.version,
        selection=selection_span(document, start, end),
    )


def register_commands(server: LanguageServer, bridge: InferenceBridge, tracker: ActiveDocumentTracker) -> None:
    @server.command(DEBUG_CODE_COMMAND)
    async def debug_code(ls: LanguageServer, *arguments: Any) -> bool:
        args = _parse_command_args(arguments)
        editor = _resolve_editor(ls, args)
        if editor is not None:
            tracker.activate(editor.uri)
        return await bridge.apply_selection_fix(editor)

    @server.command(CUSTOM_PROMPT_COMMAND)
    async def custom_debug_prompt(ls: LanguageServer, *arguments: Any) -> bool:
        args = _parse_command_args(arguments)
        editor = _resolve_editor(ls, args)
        if editor is not None:
            tracker.activate(editor.uri)
        return await bridge.apply_custom_prompt_fix(editor, prompt=args.prompt)
