"""Cursor token encoding and decoding.

A cursor is a BSON document holding the paginated field value (and the
``_id`` tie-breaker when the paginated field is not ``_id``), encoded as
unpadded URL-safe base64. Values are positional: the key order written by
``encode_cursor`` is the order ``parse_cursor`` hands back.
"""

import base64
import string
import struct
from datetime import timezone
from typing import Any, Iterable, List, Tuple, Union

import bson
from bson.binary import UuidRepresentation
from bson.codec_options import CodecOptions
from bson.errors import BSONError
from bson.son import SON

from ..errors.pagination import CursorDecodeError, CursorEncodeError, MalformedCursorError
from .fields import get_field_value


ID_FIELD = "_id"

CURSOR_CODEC_OPTIONS = CodecOptions(
    document_class=SON,
    tz_aware=True,
    tzinfo=timezone.utc,
    uuid_representation=UuidRepresentation.STANDARD
)

# Top-level documents get _id written first, embedded ones keep their order
_ENVELOPE_KEY = "c"
_ENVELOPE_OFFSET = 4 + 1 + len(_ENVELOPE_KEY) + 1

_URLSAFE_ALPHABET = frozenset(string.ascii_letters + string.digits + "-_")

CursorData = Union[SON, Iterable[Tuple[str, Any]]]


def _b64decode(cursor: str) -> bytes:
    """Decode unpadded URL-safe base64, reporting the first bad input byte."""
    for offset, char in enumerate(cursor):
        if char not in _URLSAFE_ALPHABET:
            raise CursorDecodeError(f"illegal base64 data at input byte {offset}")

    # A single trailing character can never carry a full byte
    if len(cursor) % 4 == 1:
        raise CursorDecodeError(f"illegal base64 data at input byte {len(cursor) - 1}")

    return base64.urlsafe_b64decode(cursor + "=" * (-len(cursor) % 4))


def encode_cursor(cursor_data: CursorData) -> str:
    """Encode ordered cursor data into an opaque token.

    Args:
        cursor_data: Ordered key/value pairs, as a SON document or pairs

    Returns:
        Unpadded URL-safe base64 of the BSON encoded data

    Raises:
        CursorEncodeError: If a value cannot be BSON encoded
    """
    document = cursor_data if isinstance(cursor_data, SON) else SON(list(cursor_data))

    try:
        envelope = bson.encode({_ENVELOPE_KEY: document}, codec_options=CURSOR_CODEC_OPTIONS)
    except (BSONError, OverflowError, TypeError, ValueError) as e:
        raise CursorEncodeError(f"failed to encode cursor using {list(document.items())}: {e}")

    (length,) = struct.unpack_from("<i", envelope, _ENVELOPE_OFFSET)
    data = envelope[_ENVELOPE_OFFSET:_ENVELOPE_OFFSET + length]

    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def decode_cursor(cursor: str) -> SON:
    """Decode a token produced by ``encode_cursor``.

    Raises:
        CursorDecodeError: If the token is not valid base64 or not a BSON document
    """
    data = _b64decode(cursor)

    try:
        return bson.decode(data, codec_options=CURSOR_CODEC_OPTIONS)
    except (BSONError, ValueError) as e:
        raise CursorDecodeError(f"invalid cursor document: {e}")


def parse_cursor(cursor: str, should_secondary_sort_on_id: bool) -> List[Any]:
    """Decode a cursor and return its values after checking their count.

    A cursor generated with the ``_id`` tie-breaker holds two values and one
    generated without it holds one, so a token replayed under another
    paginated field configuration is rejected here.

    Raises:
        CursorDecodeError: If the token cannot be decoded
        MalformedCursorError: If the number of values does not match
    """
    cursor_data = decode_cursor(cursor)
    cursor_values = list(cursor_data.values())

    if should_secondary_sort_on_id:
        if len(cursor_values) != 2:
            raise MalformedCursorError("expecting a cursor with two elements")
    elif len(cursor_values) != 1:
        raise MalformedCursorError("expecting a cursor with a single element")

    return cursor_values


def generate_cursor(result: Any, paginated_field: str, should_secondary_sort_on_id: bool) -> str:
    """Build the cursor pointing at ``result``.

    Args:
        result: A raw document or a pydantic model instance
        paginated_field: External name of the field being paginated on
        should_secondary_sort_on_id: Whether ``_id`` is appended as tie-breaker

    Returns:
        Encoded cursor token

    Raises:
        CursorEncodeError: If result is None, lacks a field, or cannot be encoded
    """
    if result is None:
        raise CursorEncodeError("the specified result must be a non None value")

    fields = [paginated_field]
    if should_secondary_sort_on_id:
        fields.append(ID_FIELD)

    try:
        cursor_data = SON([(field, get_field_value(result, field)) for field in fields])
    except KeyError as e:
        raise CursorEncodeError(
            f"unable to find field {e} on result of type {type(result).__name__}"
        )

    return encode_cursor(cursor_data)
