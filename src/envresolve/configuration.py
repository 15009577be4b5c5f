"""
Configuration loading utilities for envresolve.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import yaml

from .models import LoadOptions
from .parsing import is_valid_key


def load_load_options(path: Union[str, Path]) -> LoadOptions:
    """
    Load dotenv load options from a YAML file.

    An empty file yields the default options.

    Example file::

        files:
          - .env
          - .env.local
        interpolate: true
        merge_with_process: false

    :param path: YAML file path.
    :type path: str or Path
    :return: Validated load options.
    :rtype: LoadOptions
    :raises FileNotFoundError: If the file is missing.
    :raises ValueError: If the file is not a YAML mapping.
    :raises pydantic.ValidationError: If the mapping does not match the schema.
    """
    candidate = Path(path)
    if not candidate.is_file():
        raise FileNotFoundError(f"Load options file not found: {candidate}")
    data = yaml.safe_load(candidate.read_text(encoding="utf-8"))
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Load options file must be a mapping/object: {candidate}")
    return LoadOptions.model_validate(data)


def parse_override_pairs(pairs: Optional[Iterable[str]]) -> Dict[str, str]:
    """
    Parse repeated ``KEY=VALUE`` pairs into an override mapping.

    Values are taken literally; no quoting, escapes or references are processed.

    :param pairs: Repeated command-line pairs.
    :type pairs: Iterable[str] or None
    :return: Override mapping; later pairs replace earlier ones.
    :rtype: dict[str, str]
    :raises ValueError: If a pair is not key=value or names an invalid key.
    """
    overrides: Dict[str, str] = {}
    for item in pairs or []:
        if "=" not in item:
            raise ValueError(f"Overrides must be key=value (got {item!r})")
        key, value = item.split("=", 1)
        key = key.strip()
        if not is_valid_key(key):
            raise ValueError(f"Invalid override key: {key!r}")
        overrides[key] = value
    return overrides
