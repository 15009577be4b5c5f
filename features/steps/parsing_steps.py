from __future__ import annotations

from behave import then, when

from envresolve.errors import EnvParseError
from envresolve.parsing import parse


@when("I parse the dotenv text:")
def step_parse_dotenv_text(context) -> None:
    context.parsed = parse(context.text)


@when("I attempt to parse the dotenv text:")
def step_attempt_parse_dotenv_text(context) -> None:
    try:
        context.parsed = parse(context.text)
    except EnvParseError as exc:
        context.last_error = exc


@then('the parsed value of "{key}" is "{expected}"')
def step_parsed_value_is(context, key: str, expected: str) -> None:
    assert context.parsed is not None
    assert context.parsed[key] == expected, context.parsed


@then('the parsed value of "{key}" contains a newline')
def step_parsed_value_contains_newline(context, key: str) -> None:
    assert "\n" in context.parsed[key]


@then("the parsed mapping has {count:d} entry")
def step_parsed_mapping_count(context, count: int) -> None:
    assert len(context.parsed) == count


@then("a parse error is reported on line {line:d}")
def step_parse_error_on_line(context, line: int) -> None:
    assert isinstance(context.last_error, EnvParseError)
    assert context.last_error.line == line
    assert context.parsed is None


@then('the error message mentions "{text}"')
def step_error_message_mentions(context, text: str) -> None:
    assert context.last_error is not None
    assert text in str(context.last_error)
