from __future__ import annotations

from typing import Iterable

from ..domain.models import AdvisoryMarker

SUSPICIOUS_TOKENS: tuple[str, ...] = ("error", "undefined")


def _line_end(line: str) -> int:
    # LSP characters are UTF-16 code units
    if line.endswith("\r"):
        line = line[:-1]
    return len(line.encode("utf-16-le")) // 2


def scan_markers(text: str, tokens: Iterable[str] = SUSPICIOUS_TOKENS) -> list[AdvisoryMarker]:
    """Return one warning marker per line containing any of ``tokens``."""
    needles = tuple(tokens)
    markers: list[AdvisoryMarker] = []
    for index, line in enumerate(text.split("\n")):
        if any(needle in line for needle in needles):
            markers.append(AdvisoryMarker(line=index, end_character=_line_end(line)))
    return markers
