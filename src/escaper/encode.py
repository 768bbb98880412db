"""HTML entity encoding.

Two policies are provided:

- ``MINIMAL`` escapes ``&``, ``<`` and ``>``; safe for HTML text content.
- ``ATTRIBUTE`` additionally escapes both quote characters and the C0 control
  characters other than tab and line feed; safe inside a quoted attribute
  value.

Every replacement is a complete, ``;``-terminated reference, so the output
always decodes back to the input with ``decode_html``. Encoding is not
idempotent: a second pass escapes the ``&`` of every reference written by
the first.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .sink import Sink, StringSink


@dataclass(frozen=True, slots=True)
class EncodingPolicy:
    """A fixed set of characters to escape and how each one is rendered.

    Characters in ``entities`` are written as the given named reference;
    characters in ``numeric`` as a decimal reference (``&#13;``).
    """

    name: str
    # Read-only view; excluded from the hash, which covers name and numeric.
    entities: Mapping[str, str] = field(hash=False)
    numeric: Collection[str] = field(default_factory=frozenset)
    pattern: re.Pattern[str] | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entities", MappingProxyType(dict(self.entities)))
        if not isinstance(self.numeric, frozenset):
            object.__setattr__(self, "numeric", frozenset(self.numeric))

        chars = set(self.entities) | set(self.numeric)
        for ch in chars:
            if len(ch) != 1:
                raise ValueError(f"EncodingPolicy keys must be single characters, got {ch!r}")
        pattern = re.compile("[" + "".join(re.escape(ch) for ch in sorted(chars)) + "]") if chars else None
        object.__setattr__(self, "pattern", pattern)

    def needs_escape(self, ch: str) -> bool:
        return ch in self.entities or ch in self.numeric

    def render(self, ch: str) -> str:
        entity = self.entities.get(ch)
        if entity is not None:
            return entity
        return f"&#{ord(ch)};"


_MINIMAL_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
}

MINIMAL: EncodingPolicy = EncodingPolicy("minimal", _MINIMAL_ENTITIES)

ATTRIBUTE: EncodingPolicy = EncodingPolicy(
    "attribute",
    {**_MINIMAL_ENTITIES, '"': "&quot;", "'": "&#39;"},
    # Tab and line feed survive attribute value normalization unchanged.
    numeric=frozenset(chr(code) for code in range(0x20) if chr(code) not in "\t\n"),
)


def encode_into(text: str, sink: Sink, policy: EncodingPolicy) -> None:
    """Write ``text`` to ``sink``, escaping every character ``policy`` selects."""
    pattern = policy.pattern
    if pattern is None:
        if text:
            sink.write(text)
        return

    pos = 0
    for match in pattern.finditer(text):
        start = match.start()
        if start > pos:
            sink.write(text[pos:start])
        sink.write(policy.render(match.group()))
        pos = start + 1
    if pos < len(text):
        sink.write(text[pos:])


def _encode(text: str, policy: EncodingPolicy) -> str:
    if policy.pattern is None or policy.pattern.search(text) is None:
        return text
    sink = StringSink()
    encode_into(text, sink, policy)
    return sink.getvalue()


def encode_minimal(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for use in HTML text content.

    >>> encode_minimal("<em>Hej!</em>")
    '&lt;em&gt;Hej!&lt;/em&gt;'

    Not suitable for attribute values: an unquoted or single-quoted attribute
    can still be broken out of. Use ``encode_attribute`` there.
    """
    return _encode(text, MINIMAL)


def encode_attribute(text: str) -> str:
    """Escape ``text`` for use inside a quoted HTML attribute value.

    >>> encode_attribute('"No", he said.')
    '&quot;No&quot;, he said.'
    """
    return _encode(text, ATTRIBUTE)


def encode_minimal_into(text: str, sink: Sink) -> None:
    encode_into(text, sink, MINIMAL)


def encode_attribute_into(text: str, sink: Sink) -> None:
    encode_into(text, sink, ATTRIBUTE)
