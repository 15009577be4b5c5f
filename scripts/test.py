"""
Behavior-driven development, unit test and coverage runner for envresolve.
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path


def _repo_root() -> Path:
    """
    Resolve the repository root directory.

    :return: Repository root path.
    :rtype: Path
    """

    return Path(__file__).resolve().parent.parent


def _env_with_src() -> dict[str, str]:
    """
    Build an environment with src/ on PYTHONPATH.

    :return: Environment mapping.
    :rtype: dict[str, str]
    """

    repo_root = _repo_root()
    env = dict(os.environ)
    src = str(repo_root / "src")
    env["PYTHONPATH"] = src + (os.pathsep + env["PYTHONPATH"] if env.get("PYTHONPATH") else "")
    return env


def _run(command: list[str], *, env: dict[str, str]) -> int:
    """
    Run a subprocess command with the provided environment.

    :param command: Command arguments.
    :type command: list[str]
    :param env: Environment mapping.
    :type env: dict[str, str]
    :return: Process exit code.
    :rtype: int
    """

    return subprocess.call(command, env=env, cwd=_repo_root())


def main() -> int:
    """
    Execute Behave and pytest under coverage and emit Hypertext Markup Language reports.

    :return: Exit code.
    :rtype: int
    """

    parser = argparse.ArgumentParser(description="Run envresolve specs and tests under coverage.")
    parser.add_argument(
        "--skip-behave",
        action="store_true",
        help="Run only the pytest unit tests.",
    )
    args = parser.parse_args()

    repo_root = _repo_root()
    env = _env_with_src()
    htmlcov_dir = repo_root / "reports" / "htmlcov"

    _run([sys.executable, "-m", "coverage", "erase"], env=env)

    rc = 0
    if not args.skip_behave:
        rc = _run([sys.executable, "-m", "coverage", "run", "-m", "behave"], env=env)
    pytest_rc = _run(
        [sys.executable, "-m", "coverage", "run", "--append", "-m", "pytest"], env=env
    )
    _run([sys.executable, "-m", "coverage", "report", "-m"], env=env)
    _run([sys.executable, "-m", "coverage", "html", "-d", str(htmlcov_dir)], env=env)

    print(f"Coverage report in Hypertext Markup Language: {htmlcov_dir / 'index.html'}")
    return int(rc or pytest_rc)


if __name__ == "__main__":
    raise SystemExit(main())
