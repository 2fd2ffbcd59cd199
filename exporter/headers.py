"""
Header Service
Normalizes user header specs into parallel key / alias sequences.

A header spec is a list whose entries are either a plain column name or a
name/alias pair, e.g. ["id", {"name": "title", "alias": "Title"}].
"""

from dataclasses import dataclass
from collections.abc import Iterable, Mapping
from typing import Any, Tuple, Union

from exporter.errors import DuplicateAliasError


@dataclass(frozen=True)
class Plain:
    """Column exported under its own name."""
    name: str

    @property
    def alias(self) -> str:
        return self.name


@dataclass(frozen=True)
class Aliased:
    """Column read from `name` and labelled `alias` in the output."""
    name: str
    alias: str


HeaderEntry = Union[Plain, Aliased]


@dataclass(frozen=True)
class NormalizedHeaders:
    key_headers: Tuple[str, ...] = ()
    alias_headers: Tuple[str, ...] = ()

    def __bool__(self):
        return bool(self.key_headers)

    def __len__(self):
        return len(self.key_headers)

    def pairs(self):
        """(source key, alias) pairs in header order."""
        return zip(self.key_headers, self.alias_headers)


def header_entry(raw: Any) -> HeaderEntry:
    """Converts one raw header spec entry into a HeaderEntry."""
    if isinstance(raw, (Plain, Aliased)):
        return raw
    if isinstance(raw, str):
        return Plain(raw)
    if isinstance(raw, Mapping):
        name = raw.get("name")
        name = "" if name is None else str(name)
        alias = raw.get("alias")
        if alias is None:
            return Plain(name)
        return Aliased(name, str(alias))
    if isinstance(raw, (tuple, list)) and len(raw) == 2:
        return Aliased(str(raw[0]), str(raw[1]))
    return Plain(str(raw))


def _is_header_sequence(headers: Any) -> bool:
    return isinstance(headers, Iterable) and not isinstance(headers, (str, bytes, Mapping))


def normalize_headers(headers: Any, fail_on_duplicate_alias: bool = False) -> NormalizedHeaders:
    """
    Splits a header spec into key_headers and alias_headers.
    Anything that is not a list-like spec yields empty headers.
    """
    if isinstance(headers, NormalizedHeaders):
        normalized = headers
    elif not _is_header_sequence(headers):
        return NormalizedHeaders()
    else:
        entries = [header_entry(raw) for raw in headers]
        normalized = NormalizedHeaders(
            key_headers=tuple(entry.name for entry in entries),
            alias_headers=tuple(entry.alias for entry in entries),
        )

    if fail_on_duplicate_alias:
        seen = set()
        for alias in normalized.alias_headers:
            if alias in seen:
                raise DuplicateAliasError(alias)
            seen.add(alias)

    return normalized
