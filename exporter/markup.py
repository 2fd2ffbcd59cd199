"""
Markup Service
Renders records (and anything nested inside them) as indented XML text.

Native Python data is first converted to a small closed set of node values
(Null, Scalar, ListValue, RecordValue) so that rendering only has to deal
with those four shapes:

    <?xml version="1.0" encoding="UTF-8"?>
    <rows>
      <row>
        <id name="ID">1</id>
        <tags>
          <row>a</row>
        </tags>
      </row>
    </rows>
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Tuple, Union
from xml.sax.saxutils import escape as _sax_escape

from exporter.headers import NormalizedHeaders, normalize_headers

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
ROOT_TAG = "rows"
ROW_TAG = "row"
INDENT_STEP = 2

# & is handled first by saxutils, the quotes are added on top of < and >
_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}


@dataclass(frozen=True)
class Null:
    pass


NULL = Null()


@dataclass(frozen=True)
class Scalar:
    text: str


@dataclass(frozen=True)
class ListValue:
    items: Tuple["Value", ...] = ()


@dataclass(frozen=True)
class RecordValue:
    fields: Tuple[Tuple[str, "Value"], ...] = ()

    def keys(self):
        return [key for key, _ in self.fields]

    def get(self, key: str) -> "Value":
        """Field value by key, NULL when the key is missing."""
        found = NULL
        for field_key, field_value in self.fields:
            if field_key == key:
                found = field_value
        return found


Value = Union[Null, Scalar, ListValue, RecordValue]


def _scalar_text(data: Any) -> str:
    if isinstance(data, bool):
        return "true" if data else "false"
    if isinstance(data, (datetime, date, time)):
        return data.isoformat()
    return str(data)


def _is_non_finite(data: Any) -> bool:
    if isinstance(data, float):
        return not math.isfinite(data)
    if isinstance(data, Decimal):
        return not data.is_finite()
    return False


def to_value(data: Any) -> Value:
    """Converts native data (dicts, lists, scalars, None) into a node value."""
    if isinstance(data, (Null, Scalar, ListValue, RecordValue)):
        return data
    if data is None or _is_non_finite(data):
        return NULL
    if isinstance(data, Mapping):
        return RecordValue(tuple((str(key), to_value(item)) for key, item in data.items()))
    if isinstance(data, (list, tuple)):
        return ListValue(tuple(to_value(item) for item in data))
    return Scalar(_scalar_text(data))


def escape(text: str) -> str:
    """Replaces <, >, &, " and ' with their XML entities."""
    return _sax_escape(str(text), _QUOTE_ENTITIES)


def render_attrs(attrs: Optional[Mapping[str, Any]], escape_values: bool = False) -> str:
    """Each attribute renders as ` key="value"`, leading space included, so parts are joined with ""."""
    if not attrs:
        return ""
    parts = []
    for key, value in attrs.items():
        value = escape(value) if escape_values else value
        parts.append(f' {key}="{value}"')
    return "".join(parts)


def render_node(
    data: Any,
    tag: str,
    attrs: Optional[Mapping[str, Any]] = None,
    indent: int = 0,
    headers: Optional[NormalizedHeaders] = None,
    escape_attributes: bool = False,
) -> str:
    """
    Renders one value as a tag at the given indent.

    Scalars stay on one line. Lists and records open and close the tag on
    their own lines with the children in between. Headers only apply to the
    record fields directly below the list they were given to.
    """
    value = to_value(data)
    headers = normalize_headers(headers)

    if isinstance(value, Null):
        return f"<{tag} />"

    spaces = " " * indent
    open_tag = f"{spaces}<{tag}{render_attrs(attrs, escape_attributes)}>"

    if isinstance(value, Scalar):
        return f"{open_tag}{escape(value.text)}</{tag}>"

    child_indent = indent + INDENT_STEP
    if isinstance(value, ListValue):
        children = [
            render_node(item, ROW_TAG, None, child_indent, headers, escape_attributes)
            for item in value.items
        ]
    elif headers:
        children = [
            render_node(value.get(key), key, {"name": alias}, child_indent, None, escape_attributes)
            for key, alias in headers.pairs()
        ]
    else:
        children = [
            render_node(item, key, None, child_indent, None, escape_attributes)
            for key, item in value.fields
        ]

    return "\n".join([open_tag, "\n".join(children), f"{spaces}</{tag}>"])


def render(records: Iterable[Mapping[str, Any]], headers=None, escape_attributes: bool = False) -> str:
    """
    Renders the records under a <rows> root, one <row> per record,
    preceded by the XML declaration.
    """
    normalized = normalize_headers(headers)
    content = render_node(
        list(records),
        ROOT_TAG,
        headers=normalized or None,
        escape_attributes=escape_attributes,
    )
    return "\n".join([XML_DECLARATION, content])
