from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..domain.errors import FixServiceError
from ..domain.interfaces import EditingSurface, FixClient
from ..domain.models import ActiveEditor, DocumentSnapshot, FixRequest
from ..utils.markers import scan_markers
from .markers import MarkerCollection
from .scheduler import ScanScheduler

logger = logging.getLogger(__name__)

NO_EDITOR_MESSAGE = "No active editor found."
NO_SELECTION_MESSAGE = "No code selected."
IN_PROGRESS_MESSAGE = "AI Debugging in progress..."
APPLIED_MESSAGE = "AI Debug: Suggestion applied!"
CUSTOM_APPLIED_MESSAGE = "AI Debug: Custom Suggestion applied!"
COMMUNICATION_ERROR_MESSAGE = "Error communicating with AI Debugger."
STALE_EDIT_MESSAGE = "AI Debug: document changed, suggestion discarded."

CUSTOM_PROMPT_TITLE = "Enter your custom AI debugging prompt"
CUSTOM_PROMPT_PLACEHOLDER = "Example: Optimize this code for performance"


class InferenceBridge:
    """Sends editor text to the inference endpoint and applies what comes back.

    Every operation receives the editor state it works on; the bridge keeps no
    reference to documents between calls. Background scans are serialized per
    document through ``ScanScheduler`` so a late response cannot overwrite
    markers computed for a newer snapshot.
    """

    def __init__(
        self,
        client: FixClient,
        surface: EditingSurface,
        markers: MarkerCollection,
        *,
        scheduler: Optional[ScanScheduler] = None,
        scan_on_change: bool = True,
    ) -> None:
        self._client = client
        self._surface = surface
        self._markers = markers
        self._scheduler = scheduler or ScanScheduler()
        self._scan_on_change = scan_on_change

    @property
    def markers(self) -> MarkerCollection:
        return self._markers

    async def apply_selection_fix(self, editor: Optional[ActiveEditor]) -> bool:
        return await self._apply_fix(editor, prompt=None, success_message=APPLIED_MESSAGE)

    async def apply_custom_prompt_fix(
        self, editor: Optional[ActiveEditor], prompt: Optional[str] = None
    ) -> bool:
        if prompt is None:
            prompt = await self._surface.ask_input(CUSTOM_PROMPT_TITLE, CUSTOM_PROMPT_PLACEHOLDER)
        if not prompt:
            logger.debug("Custom prompt cancelled")
            return False
        return await self._apply_fix(editor, prompt=prompt, success_message=CUSTOM_APPLIED_MESSAGE)

    async def scan_and_annotate(self, document: DocumentSnapshot) -> bool:
        """Run one scan cycle for ``document`` and publish its markers.

        Returns False when the remote round trip failed; the markers published
        by the previous cycle are left untouched in that case.
        """
        try:
            # The suggestion is not used for markers yet, only the round trip.
            await self._client.request_fix(FixRequest(code=document.text))
        except FixServiceError:
            logger.exception("AI Debugger scan failed for %s", document.uri)
            return False
        self._markers.set(document.uri, scan_markers(document.text))
        return True

    def on_document_changed(
        self, document: DocumentSnapshot, active_uri: Optional[str]
    ) -> Optional[asyncio.Task[None]]:
        if not self._scan_on_change:
            return None
        if active_uri is None or document.uri != active_uri:
            return None

        async def job() -> None:
            await self.scan_and_annotate(document)

        return self._scheduler.schedule(document.uri, job)

    def on_document_closed(self, uri: str) -> None:
        self._scheduler.cancel(uri)
        self._markers.delete(uri)

    async def wait_for_scans(self) -> None:
        await self._scheduler.join()

    async def aclose(self) -> None:
        await self._scheduler.stop()

    async def _apply_fix(
        self, editor: Optional[ActiveEditor], *, prompt: Optional[str], success_message: str
    ) -> bool:
        if editor is None:
            await self._surface.show_error(NO_EDITOR_MESSAGE)
            return False
        span = editor.selection
        if span.is_empty:
            await self._surface.show_error(NO_SELECTION_MESSAGE)
            return False

        await self._surface.show_info(IN_PROGRESS_MESSAGE)
        try:
            response = await self._client.request_fix(FixRequest(code=span.text, prompt=prompt))
        except FixServiceError:
            logger.warning("AI Debugger request failed for %s", span.uri, exc_info=True)
            await self._surface.show_error(COMMUNICATION_ERROR_MESSAGE)
            return False

        if not await self._surface.replace_span(span, response.fixed_code):
            logger.info("Edit for %s rejected at version %s", span.uri, span.version)
            await self._surface.show_error(STALE_EDIT_MESSAGE)
            return False
        await self._surface.show_info(success_message)
        return True
