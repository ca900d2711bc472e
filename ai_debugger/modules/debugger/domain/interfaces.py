from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .models import AdvisoryMarker, CodeSpan, FixRequest, FixResponse


class FixClient(Protocol):
    async def request_fix(self, request: FixRequest) -> FixResponse:
        """Send code to the inference endpoint and return its suggestion.

        Raises FixServiceError on any transport or payload failure.
        """


class EditingSurface(Protocol):
    async def show_info(self, message: str) -> None:
        """Show an informational message to the user."""

    async def show_error(self, message: str) -> None:
        """Show an error message to the user."""

    async def ask_input(self, prompt: str, placeholder: str) -> Optional[str]:
        """Ask the user for free text; None when the input was cancelled."""

    async def replace_span(self, span: CodeSpan, new_text: str) -> bool:
        """Replace the span in its document; False when the editor rejected it."""


class MarkerPublisher(Protocol):
    def publish(self, uri: str, markers: Sequence[AdvisoryMarker]) -> None:
        """Replace the markers shown for a document."""
