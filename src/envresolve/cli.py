"""
Command-line interface for envresolve.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .configuration import load_load_options, parse_override_pairs
from .environment import Environment
from .errors import EnvError
from .loading import load_with_options
from .models import LoadOptions

_DOTENV_ESCAPES = str.maketrans(
    {
        "\\": "\\\\",
        '"': '\\"',
        "\n": "\\n",
        "\t": "\\t",
        "\r": "\\r",
    }
)


def _load_environment(arguments: argparse.Namespace) -> Environment:
    """
    Load the environment described by the global command-line options.

    Files named with ``--file`` must exist. Overrides from ``--set`` are applied last,
    after interpolation.

    :param arguments: Parsed command-line interface arguments.
    :type arguments: argparse.Namespace
    :return: Loaded environment.
    :rtype: Environment
    """
    if arguments.config:
        options = load_load_options(arguments.config)
    else:
        options = LoadOptions(required_files=True)
    updates: Dict[str, object] = {}
    if arguments.files:
        updates["files"] = list(arguments.files)
        updates["required_files"] = True
    if arguments.no_interpolate:
        updates["interpolate"] = False
    if arguments.merge_process:
        updates["merge_with_process"] = True
    if updates:
        options = LoadOptions.model_validate({**options.model_dump(), **updates})
    environment = load_with_options(options)
    overrides = parse_override_pairs(arguments.overrides)
    if overrides:
        environment = environment.merging(overrides)
    return environment


def format_dotenv(environment: Environment) -> str:
    """
    Render an environment as dotenv text that the parser reads back unchanged.

    :param environment: Environment to render.
    :type environment: Environment
    :return: Dotenv text, one double-quoted assignment per line, sorted by key.
    :rtype: str
    """
    lines = [
        f'{key}="{environment[key].translate(_DOTENV_ESCAPES)}"' for key in sorted(environment)
    ]
    return "\n".join(lines)


def cmd_show(arguments: argparse.Namespace) -> int:
    """
    Print the resolved environment.

    :param arguments: Parsed command-line interface arguments.
    :type arguments: argparse.Namespace
    :return: Exit code.
    :rtype: int
    """
    environment = _load_environment(arguments)
    ordered = {key: environment[key] for key in sorted(environment)}
    if arguments.format == "json":
        print(json.dumps(ordered, indent=2))
    elif arguments.format == "yaml":
        print(yaml.safe_dump(ordered, sort_keys=True, allow_unicode=True), end="")
    else:
        text = format_dotenv(environment)
        if text:
            print(text)
    return 0


def cmd_get(arguments: argparse.Namespace) -> int:
    """
    Print a single value.

    :param arguments: Parsed command-line interface arguments.
    :type arguments: argparse.Namespace
    :return: Exit code.
    :rtype: int
    """
    environment = _load_environment(arguments)
    if arguments.default is not None:
        print(environment.get(arguments.key, arguments.default))
    else:
        print(environment.require(arguments.key))
    return 0


def _required_getters(environment: Environment) -> Dict[str, Callable[[str], object]]:
    return {
        "str": environment.require,
        "int": environment.require_int,
        "float": environment.require_float,
        "bool": environment.require_bool,
        "url": environment.require_url,
        "list": environment.require_list,
        "base64": environment.require_base64,
    }


def cmd_check(arguments: argparse.Namespace) -> int:
    """
    Verify that required variables are set and convert to the requested type.

    :param arguments: Parsed command-line interface arguments.
    :type arguments: argparse.Namespace
    :return: Exit code.
    :rtype: int
    """
    environment = _load_environment(arguments)
    getter = _required_getters(environment)[arguments.type]
    for key in arguments.keys:
        getter(key)
    print("ok")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line interface argument parser.

    :return: Argument parser instance.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="envresolve",
        description="Load dotenv files and expand variable references.",
    )
    parser.add_argument(
        "--file",
        action="append",
        dest="files",
        default=None,
        help="Dotenv file to load (repeatable; later files override earlier ones).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML file with load options (files, interpolate, merge_with_process).",
    )
    parser.add_argument(
        "--no-interpolate",
        action="store_true",
        help="Keep ${VAR} and $VAR references as literal text.",
    )
    parser.add_argument(
        "--merge-process",
        action="store_true",
        help="Layer the files on top of the process environment.",
    )
    parser.add_argument(
        "--set",
        action="append",
        dest="overrides",
        default=None,
        help="Override a variable after loading (repeatable key=value).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log loading details to standard error.",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_show = sub.add_parser("show", help="Print the resolved environment.")
    p_show.add_argument(
        "--format",
        choices=["dotenv", "json", "yaml"],
        default="dotenv",
        help="Output format (default: dotenv).",
    )
    p_show.set_defaults(func=cmd_show)

    p_get = sub.add_parser("get", help="Print the value of KEY.")
    p_get.add_argument("key", help="Variable name.")
    p_get.add_argument(
        "--default",
        default=None,
        help="Value to print when KEY is not set (otherwise a missing key is an error).",
    )
    p_get.set_defaults(func=cmd_get)

    p_check = sub.add_parser("check", help="Require that each KEY is set and converts to TYPE.")
    p_check.add_argument("keys", nargs="+", metavar="KEY", help="Variable names.")
    p_check.add_argument(
        "--type",
        choices=["str", "int", "float", "bool", "url", "list", "base64"],
        default="str",
        help="Conversion each value must satisfy (default: str).",
    )
    p_check.set_defaults(func=cmd_check)

    return parser


def main(argument_list: Optional[List[str]] = None) -> int:
    """
    Entry point for the envresolve command-line interface.

    :param argument_list: Optional command-line interface arguments.
    :type argument_list: list[str] or None
    :return: Exit code.
    :rtype: int
    """
    parser = build_parser()
    arguments = parser.parse_args(argument_list)
    logging.basicConfig(
        level=logging.DEBUG if arguments.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return int(arguments.func(arguments))
    except (EnvError, FileNotFoundError, ValueError, ValidationError) as exception:
        message = exception.args[0] if getattr(exception, "args", None) else str(exception)
        print(str(message), file=sys.stderr)
        return 2
