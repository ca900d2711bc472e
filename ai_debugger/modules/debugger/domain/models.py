from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict

MARKER_MESSAGE = "Possible error detected: AI suggests a fix."
MARKER_SOURCE = "aiDebugger"


class MarkerSeverity(IntEnum):
    # Same numbering as LSP DiagnosticSeverity
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


@dataclass(frozen=True)
class TextPosition:
    line: int
    character: int


@dataclass(frozen=True)
class CodeSpan:
    uri: str
    version: Optional[int]
    start: TextPosition
    end: TextPosition
    text: str

    @property
    def is_empty(self) -> bool:
        return not self.text


@dataclass(frozen=True)
class ActiveEditor:
    """Snapshot of the focused document and its selection for one operation."""

    uri: str
    version: Optional[int]
    selection: CodeSpan


@dataclass(frozen=True)
class DocumentSnapshot:
    uri: str
    version: Optional[int]
    text: str


@dataclass(frozen=True)
class AdvisoryMarker:
    line: int
    end_character: int
    message: str = MARKER_MESSAGE
    severity: MarkerSeverity = MarkerSeverity.WARNING


class FixRequest(BaseModel):
    code: str
    prompt: Optional[str] = None

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


class FixResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    fixed_code: str
