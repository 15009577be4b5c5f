"""
envresolve public package interface.
"""

from .environment import Environment
from .errors import (
    EnvError,
    EnvFileNotFoundError,
    EnvParseError,
    EnvReadError,
    InvalidKeyError,
    InvalidTypeError,
    MissingRequiredError,
)
from .interpolation import expand_references, interpolate
from .loading import (
    load,
    load_contents,
    load_files,
    load_for_configuration,
    load_or_process,
    load_with_options,
)
from .models import LoadOptions
from .parsing import is_valid_key, parse

__all__ = [
    "__version__",
    "Environment",
    "EnvError",
    "EnvFileNotFoundError",
    "EnvParseError",
    "EnvReadError",
    "InvalidKeyError",
    "InvalidTypeError",
    "MissingRequiredError",
    "LoadOptions",
    "expand_references",
    "interpolate",
    "is_valid_key",
    "load",
    "load_contents",
    "load_files",
    "load_for_configuration",
    "load_or_process",
    "load_with_options",
    "parse",
]

__version__ = "0.1.0"
