"""Session attribute values: text, boolean or number.

Attributes are checked at the store boundary in both directions, so the rest
of the package only ever sees ``str``, ``bool`` or ``Decimal``.
"""

from __future__ import annotations

from decimal import Decimal, DecimalException
from enum import Enum
from typing import Any, Mapping, Union

from boto3.dynamodb.types import DYNAMODB_CONTEXT

from .errors import UnsupportedValueError

AttributeValue = Union[str, bool, Decimal]
Attributes = dict[str, AttributeValue]


class ValueType(str, Enum):
    """DynamoDB type tags for the supported attribute values."""

    TEXT = "S"
    BOOLEAN = "BOOL"
    NUMBER = "N"


def type_of(value: Any) -> ValueType:
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, str):
        return ValueType.TEXT
    if isinstance(value, (int, float, Decimal)):
        return ValueType.NUMBER
    raise UnsupportedValueError(f"Unsupported session value type: {type(value).__name__}")


def normalize(value: Any) -> AttributeValue:
    """Coerce a Python value into a supported attribute value.

    ``int`` and ``float`` become ``Decimal`` (boto3 refuses floats). Numbers
    must be finite and fit DynamoDB's 38 digits of precision.
    """
    if type_of(value) is not ValueType.NUMBER:
        return value
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    if not number.is_finite():
        raise UnsupportedValueError(f"Session numbers must be finite, got {number}")
    try:
        return DYNAMODB_CONTEXT.create_decimal(number)
    except DecimalException as e:
        raise UnsupportedValueError(f"Session number out of DynamoDB range: {number}") from e


def encode_attributes(attributes: Mapping[str, Any]) -> Attributes:
    """Validate and normalise a mapping before it is written to the store."""
    encoded: Attributes = {}
    for key, value in attributes.items():
        if not isinstance(key, str):
            raise UnsupportedValueError(f"Session attribute names must be strings, got {type(key).__name__}")
        encoded[key] = normalize(value)
    return encoded


def decode_attributes(raw: Mapping[str, Any]) -> Attributes:
    """Validate a ``data`` map read from the store."""
    return encode_attributes(raw)


def matches(value: AttributeValue | None, value_type: ValueType) -> bool:
    if value is None:
        return False
    try:
        return type_of(value) is value_type
    except UnsupportedValueError:
        return False
