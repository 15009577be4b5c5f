"""
Dotenv text parsing.

The parser turns dotenv text into a key to value mapping. It performs no input/output
and knows nothing about variable references; expansion is the job of
:mod:`envresolve.interpolation`.
"""

from __future__ import annotations

import re
from typing import Dict, Optional, Tuple

from .constants import KEY_PATTERN
from .errors import InvalidKeyError

_KEY_RE = re.compile(KEY_PATTERN)
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_EXPORT_PREFIX_RE = re.compile(r"export\s+")
_ESCAPE_RE = re.compile(r"\\([ntr\"'\\])")
_ESCAPE_REPLACEMENTS = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "'": "'",
    "\\": "\\",
}
_QUOTE_CHARACTERS = ('"', "'")


def is_valid_key(key: str) -> bool:
    """
    Check whether a string is a valid variable name.

    Valid names start with an American Standard Code for Information Interchange letter
    or underscore, followed by letters, digits, or underscores.

    :param key: Candidate key.
    :type key: str
    :return: True when the key is valid.
    :rtype: bool
    """
    return _KEY_RE.fullmatch(key) is not None


def parse(contents: str) -> Dict[str, str]:
    """
    Parse dotenv text into a dictionary.

    Supports ``KEY=value``, ``export KEY=value``, full-line ``#`` comments, inline
    comments after unquoted values, single- or double-quoted values, and blank lines.
    Lines end only at a line feed, a carriage return, or the pair of them; other control
    characters stay in the value. Lines without an equals sign are skipped. A later
    assignment to the same key replaces the earlier one.

    :param contents: Dotenv text.
    :type contents: str
    :return: Parsed key to value mapping.
    :rtype: dict[str, str]
    :raises InvalidKeyError: On the first line whose key is not a valid name.
    """
    result: Dict[str, str] = {}
    for line_number, line in enumerate(_LINE_BREAK_RE.split(contents), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        parsed = _parse_line(stripped, line_number=line_number)
        if parsed is None:
            continue
        key, value = parsed
        result[key] = value
    return result


def _parse_line(line: str, *, line_number: int) -> Optional[Tuple[str, str]]:
    prefix = _EXPORT_PREFIX_RE.match(line)
    if prefix is not None:
        line = line[prefix.end() :]
    if "=" not in line:
        return None
    raw_key, raw_value = line.split("=", 1)
    key = raw_key.strip()
    if not is_valid_key(key):
        raise InvalidKeyError(line=line_number, key=key)
    return key, _parse_value(raw_value)


def _parse_value(raw: str) -> str:
    value = raw.strip()
    if len(value) >= 2 and value[0] in _QUOTE_CHARACTERS and value[-1] == value[0]:
        value = value[1:-1]
    else:
        value = _strip_inline_comment(value)
    return _replace_escapes(value)


def _strip_inline_comment(value: str) -> str:
    backslashes = 0
    for index, character in enumerate(value):
        if character == "#" and backslashes % 2 == 0:
            return value[:index].rstrip()
        backslashes = backslashes + 1 if character == "\\" else 0
    return value


def _replace_escapes(value: str) -> str:
    # Single pass: substituted text is never scanned again.
    return _ESCAPE_RE.sub(lambda match: _ESCAPE_REPLACEMENTS[match.group(1)], value)
