"""
Error types for envresolve.

Every error compares equal to another instance of the same class carrying the same
fields, so callers and tests can assert on the exact failure.
"""

from __future__ import annotations

from typing import Tuple


class EnvError(RuntimeError):
    """
    Base class for every error raised while loading or reading an environment.
    """

    def _fields(self) -> Tuple[object, ...]:
        return tuple(self.args)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._fields()))


class EnvFileNotFoundError(EnvError):
    """
    The requested environment file does not exist.

    :param path: Path as supplied by the caller.
    :type path: str
    """

    def __init__(self, path: str) -> None:
        self.path = str(path)
        super().__init__(f"Environment file not found: {self.path}")

    def _fields(self) -> Tuple[object, ...]:
        return (self.path,)


class EnvReadError(EnvError):
    """
    An existing environment file could not be read or decoded.

    :param path: Path of the file that failed to read.
    :type path: str
    :param cause: Underlying input/output or decoding error.
    :type cause: BaseException
    """

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to read environment file '{self.path}': {cause}")

    def _fields(self) -> Tuple[object, ...]:
        return (self.path, type(self.cause), self.cause.args)


class MissingRequiredError(EnvError):
    """
    A required variable is not set.

    :param key: Variable name that was requested.
    :type key: str
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Required environment variable '{key}' is not set")

    def _fields(self) -> Tuple[object, ...]:
        return (self.key,)


class InvalidTypeError(EnvError):
    """
    A required variable is set but its value does not convert to the requested type.

    :param key: Variable name.
    :type key: str
    :param expected: Name of the expected type.
    :type expected: str
    :param actual: Raw value that failed to convert.
    :type actual: str
    """

    def __init__(self, *, key: str, expected: str, actual: str) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Environment variable '{key}' has invalid type: expected {expected}, got '{actual}'"
        )

    def _fields(self) -> Tuple[object, ...]:
        return (self.key, self.expected, self.actual)


class EnvParseError(EnvError):
    """
    The dotenv parser rejected a line.

    :param line: One-based line number of the offending line.
    :type line: int
    :param message: Description of the problem.
    :type message: str
    """

    def __init__(self, *, line: int, message: str) -> None:
        self.line = line
        self.message = message
        super().__init__(f"Parse error on line {line}: {message}")

    def _fields(self) -> Tuple[object, ...]:
        return (self.line, self.message)


class InvalidKeyError(EnvParseError):
    """
    A line names a key that is not a valid variable name.

    :param line: One-based line number of the offending line.
    :type line: int
    :param key: Key text as it appeared before the equals sign.
    :type key: str
    """

    def __init__(self, *, line: int, key: str) -> None:
        self.key = key
        super().__init__(line=line, message=f"Invalid key: '{key}'")
