"""Output sinks shared by the encoder and decoder.

A sink is anything with a ``write(str)`` method: ``StringSink`` below,
``io.StringIO``, or an open text file. Exceptions raised by ``write`` (e.g.
``OSError`` from a closed pipe) propagate to the caller untouched.
"""

from __future__ import annotations

from typing import Protocol


class Sink(Protocol):
    def write(self, text: str, /) -> object: ...


class StringSink:
    """In-memory sink accumulating fragments until ``getvalue()``."""

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, text: str) -> int:
        if text:
            self._parts.append(text)
        return len(text)

    def getvalue(self) -> str:
        parts = self._parts
        if len(parts) > 1:
            # Collapse so repeated calls stay cheap.
            self._parts = parts = ["".join(parts)]
        return parts[0] if parts else ""

    def __len__(self) -> int:
        return sum(len(part) for part in self._parts)
