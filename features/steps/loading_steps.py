from __future__ import annotations

from behave import given, then, when

from envresolve.errors import EnvError, InvalidTypeError
from envresolve.loading import load_files, load_or_process


@given('a file "{name}" containing:')
def step_file_containing(context, name: str) -> None:
    (context.workdir / name).write_text(context.text, encoding="utf-8")


@given('the process environment has "{key}" set to "{value}"')
def step_process_environment_has(context, key: str, value: str) -> None:
    context.process_env[key] = value


@when('I load the files "{names}"')
def step_load_files(context, names: str) -> None:
    paths = [name.strip() for name in names.split(",") if name.strip()]
    context.loaded = load_files(
        paths, base_dir=context.workdir, environ=context.process_env, required=True
    )


@when('I load the file "{name}" or fall back to the process environment')
def step_load_or_process(context, name: str) -> None:
    context.loaded = load_or_process(name, base_dir=context.workdir, environ=context.process_env)


@when('I require the boolean "{key}"')
def step_require_boolean(context, key: str) -> None:
    try:
        context.last_result = context.loaded.require_bool(key)
    except EnvError as exc:
        context.last_error = exc


@then('the loaded value of "{key}" is "{expected}"')
def step_loaded_value_is(context, key: str, expected: str) -> None:
    assert context.loaded[key] == expected, dict(context.loaded)


@then('the loaded integer "{key}" is {expected:d}')
def step_loaded_integer_is(context, key: str, expected: int) -> None:
    assert context.loaded.require_int(key) == expected


@then('an invalid type error names "{key}" expecting "{expected}"')
def step_invalid_type_error(context, key: str, expected: str) -> None:
    error = context.last_error
    assert isinstance(error, InvalidTypeError)
    assert error.key == key
    assert error.expected == expected
