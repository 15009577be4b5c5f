from __future__ import annotations

from behave import given, then, when

from envresolve.interpolation import interpolate


def _table_mapping(context) -> dict:
    return {row["key"]: row["value"] for row in context.table}


@given("the values:")
def step_given_values(context) -> None:
    context.values = _table_mapping(context)


@given("the fallback values:")
def step_given_fallback_values(context) -> None:
    context.fallback = _table_mapping(context)


@when("I interpolate the values")
def step_interpolate_values(context) -> None:
    context.resolved = interpolate(context.values, getattr(context, "fallback", {}))


@then('the resolved value of "{key}" is "{expected}"')
def step_resolved_value_is(context, key: str, expected: str) -> None:
    assert context.resolved[key] == expected, context.resolved


@then("the resolved mapping has {count:d} entries")
def step_resolved_mapping_count(context, count: int) -> None:
    assert len(context.resolved) == count


@then('the resolved value of "{key}" is empty')
def step_resolved_value_is_empty(context, key: str) -> None:
    assert context.resolved[key] == "", context.resolved
