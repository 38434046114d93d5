"""Resolution of raw column default expressions.

Postgres reports defaults as SQL expression text (``'abc'::character
varying``, ``nextval('post_id_seq'::regclass)``, ``now()``...). Each resolver
below recognises one shape and returns a DefaultValue, or None to pass.
Resolvers run in order and the first match wins: sequence detection must stay
ahead of the numeric literal parser so a serial primary key never also gets a
literal default.
"""

import re
from typing import Callable, List, Optional

from .models import ColumnType, DefaultValue, ScalarKind, StorageTag

Resolver = Callable[[str, ColumnType], Optional[DefaultValue]]

_QUOTED_STRING = re.compile(r"'(.*)'(?:::character varying)?")
_QUOTED_JSONB = re.compile(r"'(.+)'::jsonb$")
_NUMERIC_PREFIX = re.compile(r"\(?'?(-?\d+)(\.\d+)?")


def _unescape(text: str) -> str:
    return text.replace("''", "'")


def resolve_string(text: str, column_type: ColumnType) -> Optional[DefaultValue]:
    match = _QUOTED_STRING.fullmatch(text)
    if match:
        return DefaultValue.literal(_unescape(match.group(1)))
    return None


def resolve_jsonb(text: str, column_type: ColumnType) -> Optional[DefaultValue]:
    match = _QUOTED_JSONB.search(text)
    if match:
        return DefaultValue.json(match.group(1))
    return None


def resolve_now(text: str, column_type: ColumnType) -> Optional[DefaultValue]:
    if text == "now()":
        return DefaultValue.current_timestamp()
    return None


def resolve_sequence(text: str, column_type: ColumnType) -> Optional[DefaultValue]:
    if text.startswith("nextval("):
        return DefaultValue.auto_increment()
    return None


def resolve_boolean(text: str, column_type: ColumnType) -> Optional[DefaultValue]:
    if column_type.scalar_kind is ScalarKind.BOOLEAN:
        return DefaultValue.literal(text != "false")
    return None


def resolve_number(text: str, column_type: ColumnType) -> Optional[DefaultValue]:
    if column_type.scalar_kind is not ScalarKind.NUMBER:
        return None
    match = _NUMERIC_PREFIX.match(text)
    if not match:
        # Not a literal (e.g. a function call); there is nothing to emit.
        return DefaultValue.none()
    whole, fraction = match.groups()
    if column_type.storage.tag is StorageTag.INTEGER:
        return DefaultValue.literal(int(whole))
    return DefaultValue.literal(float(whole + (fraction or "")))


def resolve_array(text: str, column_type: ColumnType) -> Optional[DefaultValue]:
    # Array contents are not parsed; any default becomes an empty array.
    if column_type.scalar_kind is ScalarKind.ARRAY:
        return DefaultValue.empty_array()
    return None


def resolve_enum(text: str, column_type: ColumnType) -> Optional[DefaultValue]:
    if column_type.storage.tag is not StorageTag.ENUM:
        return None
    match = re.search(rf"'(.+)'::{re.escape(column_type.type_name or '')}$", text)
    if match:
        return DefaultValue.literal(_unescape(match.group(1)))
    return None


RESOLVERS: List[Resolver] = [
    resolve_string,
    resolve_jsonb,
    resolve_now,
    resolve_sequence,
    resolve_boolean,
    resolve_number,
    resolve_array,
    resolve_enum,
]


def resolve_default(column_default: Optional[str], column_type: ColumnType) -> DefaultValue:
    """Resolve a raw default expression against the column's type.

    Unparseable expressions resolve to no default rather than an error.
    """
    if not column_default:
        return DefaultValue.none()
    for resolver in RESOLVERS:
        resolved = resolver(column_default, column_type)
        if resolved is not None:
            return resolved
    return DefaultValue.none()
