"""
Loading environments from dotenv files.

Loaders are the only part of envresolve that touches the filesystem or the process
environment. They read text, hand it to :func:`envresolve.parsing.parse`, optionally
expand references with :func:`envresolve.interpolation.interpolate`, and wrap the result
in an :class:`envresolve.environment.Environment`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Union

from .constants import DEFAULT_ENV_FILE
from .environment import Environment
from .errors import EnvError, EnvFileNotFoundError, EnvReadError
from .interpolation import interpolate as interpolate_values
from .models import LoadOptions
from .parsing import parse

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _process_snapshot(environ: Optional[Mapping[str, str]]) -> Dict[str, str]:
    return dict(os.environ if environ is None else environ)


def resolve_env_path(path: PathLike, *, base_dir: Optional[PathLike] = None) -> Path:
    """
    Resolve a dotenv path.

    A leading ``~`` is expanded to the home directory. Relative paths are resolved
    against ``base_dir``, or the current working directory when omitted.

    :param path: Path as supplied by the caller.
    :type path: str or Path
    :param base_dir: Directory for relative paths.
    :type base_dir: str or Path or None
    :return: Absolute path.
    :rtype: Path
    """
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    return base / candidate


def _read_text(path: PathLike, resolved: Path) -> str:
    try:
        return resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise EnvReadError(str(path), exc) from exc


def load_contents(
    contents: str,
    *,
    interpolate: bool = True,
    merge_with_process: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> Environment:
    """
    Load an environment from dotenv text.

    :param contents: Dotenv text.
    :type contents: str
    :param interpolate: Whether to expand variable references.
    :type interpolate: bool
    :param merge_with_process: Whether to include the process environment underneath the
        parsed values.
    :type merge_with_process: bool
    :param environ: Process environment to use instead of :data:`os.environ`.
    :type environ: Mapping[str, str] or None
    :return: Loaded environment.
    :rtype: Environment
    :raises EnvParseError: If the text contains an invalid key.
    """
    process = _process_snapshot(environ)
    values = parse(contents)
    if interpolate:
        values = interpolate_values(values, process)
    if merge_with_process:
        merged = dict(process)
        merged.update(values)
        values = merged
    return Environment(values)


def load(
    path: PathLike = DEFAULT_ENV_FILE,
    *,
    interpolate: bool = True,
    merge_with_process: bool = False,
    environ: Optional[Mapping[str, str]] = None,
    base_dir: Optional[PathLike] = None,
) -> Environment:
    """
    Load an environment from a dotenv file.

    :param path: Dotenv file path.
    :type path: str or Path
    :param interpolate: Whether to expand variable references.
    :type interpolate: bool
    :param merge_with_process: Whether to include the process environment underneath the
        file values.
    :type merge_with_process: bool
    :param environ: Process environment to use instead of :data:`os.environ`.
    :type environ: Mapping[str, str] or None
    :param base_dir: Directory for relative paths.
    :type base_dir: str or Path or None
    :return: Loaded environment.
    :rtype: Environment
    :raises EnvFileNotFoundError: If the file does not exist.
    :raises EnvReadError: If the path is a directory or cannot be read as Unicode
        Transformation Format 8 text.
    :raises EnvParseError: If the file contains an invalid key.
    """
    resolved = resolve_env_path(path, base_dir=base_dir)
    if not resolved.exists():
        raise EnvFileNotFoundError(str(path))
    contents = _read_text(path, resolved)
    logger.debug("Loaded environment file %s", resolved)
    return load_contents(
        contents,
        interpolate=interpolate,
        merge_with_process=merge_with_process,
        environ=environ,
    )


def load_files(
    paths: Iterable[PathLike],
    *,
    interpolate: bool = True,
    merge_with_process: bool = False,
    required: bool = False,
    environ: Optional[Mapping[str, str]] = None,
    base_dir: Optional[PathLike] = None,
) -> Environment:
    """
    Load and merge several dotenv files.

    Files are applied in order, so later files override earlier ones. Missing files
    are skipped unless ``required`` is set. Interpolation runs once on the merged
    values.

    Example::

        env = load_files([".env", ".env.local", ".env.production"])

    :param paths: Dotenv file paths in precedence order.
    :type paths: Iterable[str or Path]
    :param interpolate: Whether to expand variable references.
    :type interpolate: bool
    :param merge_with_process: Whether to start from the process environment.
    :type merge_with_process: bool
    :param required: Whether a missing file is an error.
    :type required: bool
    :param environ: Process environment to use instead of :data:`os.environ`.
    :type environ: Mapping[str, str] or None
    :param base_dir: Directory for relative paths.
    :type base_dir: str or Path or None
    :return: Merged environment.
    :rtype: Environment
    :raises EnvFileNotFoundError: If ``required`` is set and a file does not exist.
    :raises EnvReadError: If a path exists but cannot be read.
    :raises EnvParseError: If a file contains an invalid key.
    """
    process = _process_snapshot(environ)
    merged: Dict[str, str] = dict(process) if merge_with_process else {}
    for path in paths:
        resolved = resolve_env_path(path, base_dir=base_dir)
        if not resolved.exists():
            if required:
                raise EnvFileNotFoundError(str(path))
            logger.debug("Skipping missing environment file %s", resolved)
            continue
        merged.update(parse(_read_text(path, resolved)))
        logger.debug("Merged environment file %s", resolved)
    if interpolate:
        merged = interpolate_values(merged, process)
    return Environment(merged)


def load_with_options(
    options: LoadOptions,
    *,
    environ: Optional[Mapping[str, str]] = None,
    base_dir: Optional[PathLike] = None,
) -> Environment:
    """
    Load an environment described by validated load options.

    :param options: Load options.
    :type options: LoadOptions
    :param environ: Process environment to use instead of :data:`os.environ`.
    :type environ: Mapping[str, str] or None
    :param base_dir: Directory for relative paths.
    :type base_dir: str or Path or None
    :return: Loaded environment.
    :rtype: Environment
    """
    return load_files(
        options.files,
        interpolate=options.interpolate,
        merge_with_process=options.merge_with_process,
        required=options.required_files,
        environ=environ,
        base_dir=base_dir,
    )


def load_or_process(
    path: PathLike = DEFAULT_ENV_FILE,
    *,
    environ: Optional[Mapping[str, str]] = None,
    base_dir: Optional[PathLike] = None,
) -> Environment:
    """
    Load a dotenv file on top of the process environment, or fall back to the process
    environment alone when the file cannot be loaded.

    Only errors raised while loading the file trigger the fallback.

    :param path: Dotenv file path.
    :type path: str or Path
    :param environ: Process environment to use instead of :data:`os.environ`.
    :type environ: Mapping[str, str] or None
    :param base_dir: Directory for relative paths.
    :type base_dir: str or Path or None
    :return: Loaded environment.
    :rtype: Environment
    """
    try:
        return load(path, merge_with_process=True, environ=environ, base_dir=base_dir)
    except EnvError as exc:
        logger.warning("Falling back to the process environment: %s", exc)
        return Environment.from_process(environ)


def load_for_configuration(
    configuration: str,
    *,
    environ: Optional[Mapping[str, str]] = None,
    base_dir: Optional[PathLike] = None,
) -> Environment:
    """
    Load the dotenv files for a named build or deployment configuration.

    Looks for ``.env``, ``.env.local``, ``.env.<configuration>`` and
    ``.env.<configuration>.local`` in that order, with the configuration name lowercased,
    layered over the process environment.

    :param configuration: Configuration name, for example ``Debug`` or ``production``.
    :type configuration: str
    :param environ: Process environment to use instead of :data:`os.environ`.
    :type environ: Mapping[str, str] or None
    :param base_dir: Directory containing the files.
    :type base_dir: str or Path or None
    :return: Merged environment.
    :rtype: Environment
    """
    name = configuration.lower()
    paths = [
        DEFAULT_ENV_FILE,
        f"{DEFAULT_ENV_FILE}.local",
        f"{DEFAULT_ENV_FILE}.{name}",
        f"{DEFAULT_ENV_FILE}.{name}.local",
    ]
    return load_files(paths, merge_with_process=True, environ=environ, base_dir=base_dir)
