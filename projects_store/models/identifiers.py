"""Identifier types and the string <-> ObjectId codec shared across models."""

from __future__ import annotations

from typing import Annotated, Any

from bson import ObjectId
from pydantic.functional_serializers import PlainSerializer
from pydantic.functional_validators import BeforeValidator

from ..exceptions import WrongIdError
from ..result import Result, err, ok

_OBJECT_ID_HEX_LENGTH = 24


def decode_id(raw: Any) -> Result[ObjectId, WrongIdError]:
    """Convert an external identifier string into a native ObjectId.

    Only canonical 24-character lowercase hex strings are accepted, so every
    accepted string survives ``encode_id(decode_id(raw))`` unchanged. Anything
    else, including non-string input, yields ``WrongIdError`` without touching
    the store.
    """

    if isinstance(raw, ObjectId):
        return ok(raw)
    if (
        not isinstance(raw, str)
        or len(raw) != _OBJECT_ID_HEX_LENGTH
        or raw != raw.lower()
        or not ObjectId.is_valid(raw)
    ):
        return err(WrongIdError(raw))
    return ok(ObjectId(raw))


def encode_id(native: ObjectId) -> str:
    """Render an ObjectId in its canonical lowercase hex form."""

    return str(native)


def generate_id() -> str:
    """Return a fresh, well-formed identifier string that was never stored."""

    return encode_id(ObjectId())


def _validate_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("ObjectId string must not be empty")
        decoded = decode_id(text)
        if decoded.is_err():
            raise ValueError("Invalid ObjectId hex string")
        return decoded.value
    raise TypeError("ObjectId value must be str or ObjectId instance")


def _object_id_to_str(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return encode_id(value)
    return value


# Models declaring a PyObjectId field need arbitrary_types_allowed=True in model_config
PyObjectId = Annotated[
    ObjectId,
    BeforeValidator(_validate_object_id),
    PlainSerializer(lambda value: str(value), return_type=str),
]

# Stored as an ObjectId, handed to callers as its string form
ObjectIdStr = Annotated[str, BeforeValidator(_object_id_to_str)]

__all__ = ["ObjectIdStr", "PyObjectId", "decode_id", "encode_id", "generate_id"]
