from __future__ import annotations

import tempfile
from pathlib import Path


def _repo_root() -> Path:
    """
    Resolve the repository root directory.

    :return: Repository root path.
    :rtype: Path
    """
    return Path(__file__).resolve().parent.parent


def before_scenario(context, scenario) -> None:
    """
    Behave hook executed before each scenario.

    :param context: Behave context object.
    :type context: object
    :param scenario: Behave scenario.
    :type scenario: object
    :return: None.
    :rtype: None
    """
    context._tmp = tempfile.TemporaryDirectory(prefix="envresolve-bdd-")
    context.workdir = Path(context._tmp.name)
    context.repo_root = _repo_root()
    context.process_env = {}
    context.parsed = None
    context.resolved = None
    context.loaded = None
    context.last_error = None
    context.last_result = None


def after_scenario(context, scenario) -> None:
    """
    Behave hook executed after each scenario.

    :param context: Behave context object.
    :type context: object
    :param scenario: Behave scenario.
    :type scenario: object
    :return: None.
    :rtype: None
    """
    tmp = getattr(context, "_tmp", None)
    if tmp is not None:
        tmp.cleanup()
        context._tmp = None
