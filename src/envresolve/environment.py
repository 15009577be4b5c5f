"""
Immutable environment container with typed access.
"""

from __future__ import annotations

import os
from typing import Callable, Dict, Iterator, List, Mapping, Optional, TypeVar, Union

from pydantic import AnyUrl

from .constants import DEFAULT_ARRAY_SEPARATOR
from .conversions import to_base64, to_bool, to_bytes, to_float, to_int, to_list, to_url
from .errors import InvalidTypeError, MissingRequiredError

T = TypeVar("T")


class Environment(Mapping[str, str]):
    """
    Read-only snapshot of environment variables.

    An environment copies the mapping it is built from, so later changes to the source
    never show through, and it offers no way to change its own contents. Merging
    returns a new instance.

    Example::

        env = Environment({"PORT": "8080", "DEBUG": "yes"})
        env.get_int("PORT")          # 8080
        env.get_bool("DEBUG")        # True
        env.require("SECRET_KEY")    # raises MissingRequiredError

    :param mapping: Initial variables (copied). Positional only, so a variable named
        ``mapping`` can be given as a keyword entry.
    :type mapping: Mapping[str, str] or None
    :param entries: Additional variables given as keyword arguments.
    :type entries: str
    """

    def __init__(self, mapping: Optional[Mapping[str, str]] = None, /, **entries: str) -> None:
        values: Dict[str, str] = dict(mapping) if mapping is not None else {}
        values.update(entries)
        self._values = values

    @classmethod
    def from_process(cls, environ: Optional[Mapping[str, str]] = None) -> "Environment":
        """
        Snapshot the process environment.

        :param environ: Mapping to snapshot instead of :data:`os.environ`.
        :type environ: Mapping[str, str] or None
        :return: Environment holding a copy of the variables.
        :rtype: Environment
        """
        return cls(os.environ if environ is None else environ)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __repr__(self) -> str:
        return f"Environment({len(self._values)} variables)"

    def __or__(self, other: Union["Environment", Mapping[str, str]]) -> "Environment":
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.merging(other)

    def has(self, key: str) -> bool:
        """
        Return True when the variable is set.
        """
        return key in self._values

    @property
    def is_empty(self) -> bool:
        """
        Whether the environment holds no variables.

        :rtype: bool
        """
        return not self._values

    def as_dict(self) -> Dict[str, str]:
        """
        Return a mutable copy of the variables.

        :return: Copy of the variables.
        :rtype: dict[str, str]
        """
        return dict(self._values)

    def merging(self, other: Union["Environment", Mapping[str, str]]) -> "Environment":
        """
        Return a new environment with ``other`` layered on top of this one.

        Keys present in both take the value from ``other``.

        :param other: Environment or mapping to merge in.
        :type other: Environment or Mapping[str, str]
        :return: Merged environment.
        :rtype: Environment
        """
        merged = dict(self._values)
        merged.update(other)
        return Environment(merged)

    # Typed getters

    def _convert(
        self, key: str, converter: Callable[[str], Optional[T]], default: Optional[T]
    ) -> Optional[T]:
        raw = self._values.get(key)
        if raw is None:
            return default
        converted = converter(raw)
        return default if converted is None else converted

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """
        Return the value as an integer, or ``default`` when missing or invalid.
        """
        return self._convert(key, to_int, default)

    def get_float(self, key: str, default: Optional[float] = None) -> Optional[float]:
        """
        Return the value as a float, or ``default`` when missing or invalid.
        """
        return self._convert(key, to_float, default)

    def get_bool(self, key: str, default: Optional[bool] = None) -> Optional[bool]:
        """
        Return the value as a boolean, or ``default`` when missing or invalid.

        Recognizes ``true``, ``false``, ``1``, ``0``, ``yes``, ``no``, ``on`` and ``off``
        in any case.
        """
        return self._convert(key, to_bool, default)

    def get_url(self, key: str, default: Optional[AnyUrl] = None) -> Optional[AnyUrl]:
        """
        Return the value as a uniform resource locator, or ``default`` when missing or invalid.
        """
        return self._convert(key, to_url, default)

    def get_list(
        self,
        key: str,
        separator: str = DEFAULT_ARRAY_SEPARATOR,
        default: Optional[List[str]] = None,
    ) -> Optional[List[str]]:
        """
        Split the value on ``separator`` into trimmed, non-empty pieces.

        :param key: Variable name.
        :type key: str
        :param separator: Piece separator.
        :type separator: str
        :param default: Value returned when the variable is missing.
        :type default: list[str] or None
        :return: Pieces or ``default``.
        :rtype: list[str] or None
        """
        raw = self._values.get(key)
        if raw is None:
            return default
        return to_list(raw, separator)

    def get_bytes(self, key: str) -> Optional[bytes]:
        """
        Return the value encoded as Unicode Transformation Format 8 bytes.
        """
        raw = self._values.get(key)
        return None if raw is None else to_bytes(raw)

    def get_base64(self, key: str) -> Optional[bytes]:
        """
        Return the base64-decoded value, or None when missing or not valid base64.
        """
        return self._convert(key, to_base64, None)

    # Required getters

    def require(self, key: str) -> str:
        """
        Return the value of a variable that must be set.

        :param key: Variable name.
        :type key: str
        :return: Raw value.
        :rtype: str
        :raises MissingRequiredError: If the variable is not set.
        """
        try:
            return self._values[key]
        except KeyError:
            raise MissingRequiredError(key) from None

    def _require_converted(
        self, key: str, converter: Callable[[str], Optional[T]], expected: str
    ) -> T:
        raw = self.require(key)
        converted = converter(raw)
        if converted is None:
            raise InvalidTypeError(key=key, expected=expected, actual=raw)
        return converted

    def require_int(self, key: str) -> int:
        """
        Return a required integer.

        :raises MissingRequiredError: If the variable is not set.
        :raises InvalidTypeError: If the value is not an integer literal.
        """
        return self._require_converted(key, to_int, "int")

    def require_float(self, key: str) -> float:
        """
        Return a required float.

        :raises MissingRequiredError: If the variable is not set.
        :raises InvalidTypeError: If the value is not a decimal literal.
        """
        return self._require_converted(key, to_float, "float")

    def require_bool(self, key: str) -> bool:
        """
        Return a required boolean.

        :raises MissingRequiredError: If the variable is not set.
        :raises InvalidTypeError: If the value is not a recognized boolean word.
        """
        return self._require_converted(key, to_bool, "bool")

    def require_url(self, key: str) -> AnyUrl:
        """
        Return a required uniform resource locator.

        :raises MissingRequiredError: If the variable is not set.
        :raises InvalidTypeError: If the value is not an absolute uniform resource locator.
        """
        return self._require_converted(key, to_url, "url")

    def require_list(self, key: str, separator: str = DEFAULT_ARRAY_SEPARATOR) -> List[str]:
        """
        Return a required list; only a missing variable is an error.

        :raises MissingRequiredError: If the variable is not set.
        """
        return to_list(self.require(key), separator)

    def require_base64(self, key: str) -> bytes:
        """
        Return required base64-decoded bytes.

        :raises MissingRequiredError: If the variable is not set.
        :raises InvalidTypeError: If the value is not valid base64.
        """
        return self._require_converted(key, to_base64, "base64")
