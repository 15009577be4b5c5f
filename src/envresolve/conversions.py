"""
Typed conversions for environment variable values.

Each converter takes the raw string value and returns the converted value, or None
when the string does not follow the conversion rule.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import List, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from .constants import DEFAULT_ARRAY_SEPARATOR

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})
_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def to_int(value: str) -> Optional[int]:
    """
    Convert a signed decimal integer literal.

    :param value: Raw value.
    :type value: str
    :return: Integer or None.
    :rtype: int or None
    """
    if _INT_RE.fullmatch(value) is None:
        return None
    return int(value)


def to_float(value: str) -> Optional[float]:
    """
    Convert a decimal floating point literal such as ``1.5``, ``-.5`` or ``2e10``.

    :param value: Raw value.
    :type value: str
    :return: Float or None.
    :rtype: float or None
    """
    if _FLOAT_RE.fullmatch(value) is None:
        return None
    return float(value)


def to_bool(value: str) -> Optional[bool]:
    """
    Convert ``true/1/yes/on`` and ``false/0/no/off``, ignoring case.

    :param value: Raw value.
    :type value: str
    :return: Boolean or None.
    :rtype: bool or None
    """
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


def to_url(value: str) -> Optional[AnyUrl]:
    """
    Convert an absolute uniform resource locator.

    :param value: Raw value.
    :type value: str
    :return: Validated uniform resource locator or None.
    :rtype: pydantic.AnyUrl or None
    """
    if not value:
        return None
    try:
        return _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return None


def to_list(value: str, separator: str = DEFAULT_ARRAY_SEPARATOR) -> List[str]:
    """
    Split a value into a list of trimmed, non-empty pieces.

    :param value: Raw value.
    :type value: str
    :param separator: Piece separator.
    :type separator: str
    :return: Pieces in order.
    :rtype: list[str]
    :raises ValueError: If the separator is empty.
    """
    if not separator:
        raise ValueError("List separator must be non-empty")
    return [piece.strip() for piece in value.split(separator) if piece.strip()]


def to_bytes(value: str) -> bytes:
    """
    Encode a value as Unicode Transformation Format 8 bytes.
    """
    return value.encode("utf-8")


def to_base64(value: str) -> Optional[bytes]:
    """
    Decode a standard base64 value.

    Characters outside the base64 alphabet and incorrect padding are rejected.

    :param value: Raw value.
    :type value: str
    :return: Decoded bytes or None.
    :rtype: bytes or None
    """
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return None
