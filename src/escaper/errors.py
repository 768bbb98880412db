"""Decode error taxonomy and messages."""

from __future__ import annotations

import enum


class DecodeErrorKind(enum.Enum):
    # A reference started (``&#``) but its digits are missing or the value is
    # not a Unicode scalar value.
    MALFORMED_ENTITY = "malformed-entity"
    # Well-formed named reference syntax with no match in the entity table.
    UNKNOWN_ENTITY = "unknown-entity"


_MESSAGES = {
    DecodeErrorKind.MALFORMED_ENTITY: "Numeric character reference is missing digits or names an invalid code point",
    DecodeErrorKind.UNKNOWN_ENTITY: "Named character reference does not match any known entity",
}


def error_message(kind: DecodeErrorKind) -> str:
    """Human-readable message for an error kind."""
    return _MESSAGES.get(kind, kind.value)


class DecodeError(ValueError):
    """Raised when decoding meets the first invalid character reference.

    ``position`` is the offset (in characters of the input ``str``) of the
    ``&`` that opened the faulty reference. It counts code points, not bytes;
    ``byte_offset(source)`` gives the UTF-8 byte offset of the same ``&``.
    Output already written to a sink before the error is not retracted.
    """

    kind: DecodeErrorKind
    position: int
    reference: str

    def __init__(self, kind: DecodeErrorKind, position: int, reference: str = "") -> None:
        self.kind = kind
        self.position = position
        self.reference = reference
        super().__init__(str(self))

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def message(self) -> str:
        return error_message(self.kind)

    def byte_offset(self, source: str) -> int:
        """UTF-8 byte offset of the faulty reference within ``source``."""
        return len(source[: self.position].encode("utf-8", "surrogatepass"))

    def __reduce__(self):
        return (type(self), (self.kind, self.position, self.reference))

    def __repr__(self) -> str:
        return f"DecodeError({self.code!r}, position={self.position}, reference={self.reference!r})"

    def __str__(self) -> str:
        if self.reference:
            return f"({self.position}): {self.code} - {self.message}: {self.reference!r}"
        return f"({self.position}): {self.code} - {self.message}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecodeError):
            return NotImplemented
        return self.kind == other.kind and self.position == other.position

    def __hash__(self) -> int:
        return hash((self.kind, self.position))
