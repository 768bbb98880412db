from .decode import DecodeOpts, DecodeState, EntityDecoder, decode_html, decode_html_into, decode_html_stream
from .encode import (
    ATTRIBUTE,
    MINIMAL,
    EncodingPolicy,
    encode_attribute,
    encode_attribute_into,
    encode_into,
    encode_minimal,
    encode_minimal_into,
)
from .entities import ENTITY_TABLE, LEGACY_ENTITIES, EntityTable
from .errors import DecodeError, DecodeErrorKind
from .sink import Sink, StringSink

__all__ = [
    "ATTRIBUTE",
    "ENTITY_TABLE",
    "LEGACY_ENTITIES",
    "MINIMAL",
    "DecodeError",
    "DecodeErrorKind",
    "DecodeOpts",
    "DecodeState",
    "EncodingPolicy",
    "EntityDecoder",
    "EntityTable",
    "Sink",
    "StringSink",
    "decode_html",
    "decode_html_into",
    "decode_html_stream",
    "encode_attribute",
    "encode_attribute_into",
    "encode_into",
    "encode_minimal",
    "encode_minimal_into",
]
