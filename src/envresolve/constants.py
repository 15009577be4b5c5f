"""
Shared constants for envresolve.
"""

KEY_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"
MAX_INTERPOLATION_PASSES = 10
DEFAULT_ENV_FILE = ".env"
DEFAULT_ARRAY_SEPARATOR = ","
