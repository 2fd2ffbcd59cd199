"""
Reshape Service
Projects records onto normalized headers, either as positional rows
(header row first) or as new records keyed by alias.
"""

from typing import Any, Dict, List, Mapping, Sequence

from exporter.headers import normalize_headers


def to_rows(records: Sequence[Mapping[str, Any]], headers) -> List[List[Any]]:
    """
    Converts a list of dicts to a list of lists.
    The first row holds the aliases; missing keys become None.
    """
    normalized = normalize_headers(headers)
    rows: List[List[Any]] = [list(normalized.alias_headers)]

    for record in records:
        rows.append([record.get(key) for key in normalized.key_headers])

    return rows


def to_keyed_records(records: Sequence[Mapping[str, Any]], headers) -> List[Dict[str, Any]]:
    """
    Re-keys every record by alias. Repeated aliases keep the last value.
    """
    normalized = normalize_headers(headers)
    keyed: List[Dict[str, Any]] = []

    for record in records:
        row = {}
        for key, alias in normalized.pairs():
            row[alias] = record.get(key)
        keyed.append(row)

    return keyed
