"""Identifier conversions shared by the modeling core and the emitter."""

import re

import inflection

_SNAKE_SEGMENT = re.compile(r"_([a-zA-Z])")


def to_camel_case(value: str) -> str:
    """Convert snake_case to camelCase (``post_tag`` -> ``postTag``).

    Only underscores followed by a letter are folded; everything else is kept.
    """
    return _SNAKE_SEGMENT.sub(lambda match: match.group(1).upper(), value)


def to_pascal_case(value: str) -> str:
    """Convert snake_case to PascalCase (``post_tag`` -> ``PostTag``)."""
    camel = to_camel_case(value)
    return camel[:1].upper() + camel[1:]


def lower_first(value: str) -> str:
    return value[:1].lower() + value[1:]


def model_name(table_name: str) -> str:
    """Get the model class name for a table: PascalCase, then singularized."""
    return inflection.singularize(to_pascal_case(table_name))


def plural_name(name: str) -> str:
    return inflection.pluralize(name)


def singular_name(name: str) -> str:
    return inflection.singularize(name)
