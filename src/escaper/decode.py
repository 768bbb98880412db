"""HTML character reference decoding.

Decodes named (``&amp;``, ``&notin;``, legacy ``&copy``), decimal (``&#60;``)
and hexadecimal (``&#x3C;``) references. The scan is a single pass over the
input driven by ``DecodeState``; output is written to a sink as soon as it is
resolved and never revisited.

Strict mode (the default) raises ``DecodeError`` for the first reference that
cannot be resolved. Lenient mode writes such references back verbatim and
substitutes U+FFFD for numeric references outside the Unicode scalar range.
"""

from __future__ import annotations

import enum
import logging

from .entities import ENTITY_TABLE, LONGEST_NAME
from .errors import DecodeError, DecodeErrorKind
from .sink import Sink, StringSink

logger = logging.getLogger(__name__)

_ASCII_ALNUM = frozenset("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")
_DEC_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Longest digit run (leading zeros stripped) that can still be <= 0x10FFFF.
_MAX_DIGITS = {10: 7, 16: 6}

REPLACEMENT_CHARACTER = "\ufffd"


class DecodeState(enum.IntEnum):
    LITERAL = 0
    ENTITY = 1
    NUMERIC = 2
    DIGITS = 3
    NAMED = 4


class DecodeOpts:
    __slots__ = ("strict",)

    def __init__(self, strict=True):
        self.strict = bool(strict)

    def __repr__(self):
        return f"DecodeOpts(strict={self.strict})"


_DEFAULT_OPTS = DecodeOpts()


def decode_numeric(digits, base):
    """Parse a numeric reference body into a character.

    Returns:
        The character, or ``None`` if the value is above U+10FFFF or is a
        surrogate code point.
    """
    digits = digits.lstrip("0")
    if not digits:
        return "\x00"
    if len(digits) > _MAX_DIGITS[base]:
        return None
    codepoint = int(digits, base)
    if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
        return None
    return chr(codepoint)


def _scan(text, pos, allowed):
    length = len(text)
    while pos < length and text[pos] in allowed:
        pos += 1
    return pos


class EntityDecoder:
    """Incremental reference decoder writing into a sink.

    ``feed`` may be called any number of times. The current state and the
    partial reference are carried over between chunks, so every input
    character is scanned once and at most ``LONGEST_NAME + 1`` characters of a
    name (or ``_MAX_DIGITS[base] + 1`` significant digits) are held back.
    Error positions are offsets into the concatenation of every chunk.
    """

    __slots__ = (
        "_base",
        "_closed",
        "_digits",
        "_has_digits",
        "_name",
        "_offset",
        "_prefix",
        "_start",
        "_state",
        "opts",
        "sink",
    )

    def __init__(self, sink: Sink, opts: DecodeOpts | None = None) -> None:
        self.sink = sink
        self.opts = opts or _DEFAULT_OPTS
        self._state = DecodeState.LITERAL
        self._offset = 0  # input offset of the next chunk's first character
        self._start = 0  # input offset of the "&" opening the current reference
        self._prefix = ""  # "&#", "&#x" or "&#X"
        self._base = 10
        self._digits = ""  # significant digits, capped at _MAX_DIGITS[base] + 1
        self._has_digits = False
        self._name = ""  # name run, capped at LONGEST_NAME + 1
        self._closed = False

    def feed(self, chunk: str) -> None:
        if self._closed:
            raise ValueError("feed() called on a closed EntityDecoder")
        self._run(chunk)
        self._offset += len(chunk)

    def close(self) -> None:
        """Resolve a reference left open by the end of input."""
        if self._closed:
            return
        self._closed = True
        state = self._state
        self._state = DecodeState.LITERAL
        if state == DecodeState.ENTITY:
            self.sink.write("&")
        elif state == DecodeState.NUMERIC:
            self._prefix = "&#"
            self._finish_numeric(False)
        elif state == DecodeState.DIGITS:
            self._finish_numeric(False)
        elif state == DecodeState.NAMED:
            self._finish_named(self._name)

    def _fail(self, kind, reference):
        position = self._start
        if self.opts.strict:
            logger.debug("%s at %d: %r", kind.value, position, reference)
            raise DecodeError(kind, position, reference)
        logger.debug("passing through %s at %d: %r", kind.value, position, reference)

    def _finish_numeric(self, semicolon):
        terminator = ";" if semicolon else ""
        if not self._has_digits:
            reference = self._prefix + terminator
            self._fail(DecodeErrorKind.MALFORMED_ENTITY, reference)
            self.sink.write(reference)
            return
        char = decode_numeric(self._digits, self._base)
        if char is None:
            self._fail(DecodeErrorKind.MALFORMED_ENTITY, self._prefix + self._digits + terminator)
            char = REPLACEMENT_CHARACTER
        self.sink.write(char)

    def _finish_named(self, candidate):
        """Resolve ``candidate``; return True if its trailing ";" was consumed."""
        match = ENTITY_TABLE.lookup(candidate)
        if match is None:
            self._fail(DecodeErrorKind.UNKNOWN_ENTITY, "&" + candidate)
            # Lenient: keep the "&" and let the name flow through as text.
            self.sink.write("&" + self._name)
            return False
        name, value = match
        self.sink.write(value)
        if len(name) > len(self._name):
            return True
        if len(name) < len(self._name):
            self.sink.write(self._name[len(name) :])
        return False

    def _run(self, text):
        sink = self.sink
        length = len(text)
        state = self._state
        pos = 0

        while True:
            if state == DecodeState.LITERAL:
                amp = text.find("&", pos)
                if amp == -1:
                    if pos < length:
                        sink.write(text[pos:])
                    break
                if amp > pos:
                    sink.write(text[pos:amp])
                self._start = self._offset + amp
                pos = amp + 1
                state = DecodeState.ENTITY

            elif state == DecodeState.ENTITY:
                if pos >= length:
                    break
                char = text[pos]
                if char == "#":
                    pos += 1
                    state = DecodeState.NUMERIC
                elif char in _ASCII_ALNUM:
                    self._name = ""
                    state = DecodeState.NAMED
                else:
                    # Bare "&" with no reference syntax.
                    sink.write("&")
                    state = DecodeState.LITERAL

            elif state == DecodeState.NUMERIC:
                if pos >= length:
                    break
                if text[pos] in "xX":
                    self._prefix = "&#" + text[pos]
                    self._base = 16
                    pos += 1
                else:
                    self._prefix = "&#"
                    self._base = 10
                self._digits = ""
                self._has_digits = False
                state = DecodeState.DIGITS

            elif state == DecodeState.DIGITS:
                base = self._base
                end = _scan(text, pos, _HEX_DIGITS if base == 16 else _DEC_DIGITS)
                if end > pos:
                    self._has_digits = True
                    run = text[pos:end]
                    if not self._digits:
                        run = run.lstrip("0")
                    if run:
                        self._digits = (self._digits + run)[: _MAX_DIGITS[base] + 1]
                        if len(self._digits) > _MAX_DIGITS[base] and self.opts.strict:
                            self._fail(DecodeErrorKind.MALFORMED_ENTITY, self._prefix + self._digits)
                    pos = end
                if pos >= length:
                    break
                semicolon = text[pos] == ";"
                if semicolon:
                    pos += 1
                self._finish_numeric(semicolon)
                state = DecodeState.LITERAL

            else:  # DecodeState.NAMED
                room = LONGEST_NAME + 1 - len(self._name)
                end = _scan(text, pos, _ASCII_ALNUM)
                self._name += text[pos : min(end, pos + room)]
                pos = min(end, pos + room)
                if len(self._name) > LONGEST_NAME:
                    # Too long for any "name;" entry: only a legacy prefix can match,
                    # and the rest of the run is plain text.
                    self._finish_named(self._name)
                    state = DecodeState.LITERAL
                    continue
                if pos >= length:
                    break
                candidate = self._name + ";" if text[pos] == ";" else self._name
                if self._finish_named(candidate):
                    pos += 1
                state = DecodeState.LITERAL

        self._state = state


def decode_html_into(text: str, sink: Sink, opts: DecodeOpts | None = None) -> None:
    """Decode ``text`` into ``sink``.

    Raises:
        DecodeError: in strict mode, on the first malformed or unknown
            reference. Output written before the error stays in ``sink``.
    """
    decoder = EntityDecoder(sink, opts)
    decoder.feed(text)
    decoder.close()


def decode_html(text: str, opts: DecodeOpts | None = None) -> str:
    """Decode every character reference in ``text``.

    >>> decode_html("Cats&#x20;&amp;&#32;dogs")
    'Cats & dogs'

    Named references are case-sensitive (``&Amp;`` is unknown); the ``x`` of
    a hexadecimal reference and its digits are not.

    Raises:
        DecodeError: in strict mode, on the first malformed or unknown
            reference.
    """
    if "&" not in text:
        return text
    sink = StringSink()
    decode_html_into(text, sink, opts)
    return sink.getvalue()


def decode_html_stream(reader, writer: Sink, opts: DecodeOpts | None = None, chunk_size: int = 8192) -> None:
    """Decode everything ``reader.read(chunk_size)`` yields into ``writer``.

    Read and write errors propagate unchanged.
    """
    decoder = EntityDecoder(writer, opts)
    while True:
        chunk = reader.read(chunk_size)
        if not chunk:
            break
        decoder.feed(chunk)
    decoder.close()
