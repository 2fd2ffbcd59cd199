"""
Export Service
Handles exporting records to Excel (xls/xlsx), CSV, HTML, XML, JSON and
JSON-lines files and handing the result to a saver.
"""

import json
import logging
import math
from dataclasses import dataclass, fields, replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from exporter import markup, sheets
from exporter.config import get_settings
from exporter.downloads import DirectorySaver, ExportFile
from exporter.errors import UnsupportedFormatError
from exporter.headers import NormalizedHeaders, normalize_headers
from exporter.reshape import to_keyed_records, to_rows

logger = logging.getLogger(__name__)

Records = Sequence[Mapping[str, Any]]

MIME_TYPES = {
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "csv": "text/csv;charset=utf-8",
    "html": "text/html;charset=utf-8",
    "xml": "application/xml;charset=utf-8",
    "json": "application/json;charset=utf-8",
    "txt": "text/plain;charset=utf-8",
}

FORMATS = tuple(MIME_TYPES)

FORMAT_ALIASES = {"text": "txt"}


@dataclass(frozen=True)
class ExportOptions:
    headers: Any = ()
    # forwarded to the sheet builder
    skip_header: bool = False
    date_format: Optional[str] = None
    cell_dates: bool = True
    sheet_stubs: bool = False
    null_error: bool = False
    # None means "use the environment default"
    escape_attributes: Optional[bool] = None
    fail_on_duplicate_alias: Optional[bool] = None

    @classmethod
    def from_value(cls, options=None) -> "ExportOptions":
        """Accepts ExportOptions, a plain dict or None; unknown dict keys are ignored."""
        if isinstance(options, cls):
            result = options
        else:
            known = {f.name for f in fields(cls)}
            given = dict(options or {})
            ignored = sorted(set(given) - known)
            if ignored:
                logger.debug("Ignoring unknown export options: %s", ", ".join(ignored))
            result = cls(**{k: v for k, v in given.items() if k in known})

        settings = get_settings()
        if result.escape_attributes is None:
            result = replace(result, escape_attributes=settings.escape_attributes)
        if result.fail_on_duplicate_alias is None:
            result = replace(result, fail_on_duplicate_alias=settings.fail_on_duplicate_alias)
        return result

    def normalized_headers(self) -> NormalizedHeaders:
        return normalize_headers(self.headers, bool(self.fail_on_duplicate_alias))

    def sheet_options(self) -> sheets.SheetOptions:
        return sheets.SheetOptions(
            skip_header=self.skip_header,
            date_format=self.date_format,
            cell_dates=self.cell_dates,
            sheet_stubs=self.sheet_stubs,
            null_error=self.null_error,
        )


def _clean(value):
    """Replaces NaN and infinities with None, the way JSON.stringify writes null."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Decimal) and not value.is_finite():
        return None
    if isinstance(value, Mapping):
        return {key: _clean(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_clean(item) for item in value]
    return value


def _json_default(value):
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _frame(records: Records, options: ExportOptions):
    headers = options.normalized_headers()
    if headers:
        return sheets.rows_to_frame(to_rows(records, headers))
    return sheets.records_to_frame(records)


def _keyed(records: Records, options: ExportOptions) -> List[Mapping[str, Any]]:
    headers = options.normalized_headers()
    if headers:
        return to_keyed_records(records, headers)
    return list(records)


def build_xls(records: Records, options: ExportOptions) -> bytes:
    return sheets.write_xls(_frame(records, options), options.sheet_options())


def build_xlsx(records: Records, options: ExportOptions) -> bytes:
    return sheets.write_xlsx(_frame(records, options), options.sheet_options())


def build_csv(records: Records, options: ExportOptions) -> bytes:
    return sheets.write_csv(_frame(records, options), options.sheet_options())


def build_html(records: Records, options: ExportOptions) -> bytes:
    return sheets.write_html(_frame(records, options), options.sheet_options())


def build_xml(records: Records, options: ExportOptions) -> bytes:
    content = markup.render(
        records,
        options.normalized_headers(),
        escape_attributes=bool(options.escape_attributes),
    )
    return content.encode("utf-8")


def build_json(records: Records, options: ExportOptions) -> bytes:
    """Pretty JSON array, two-space indent."""
    data = _keyed(records, options)
    return json.dumps(_clean(data), indent=2, ensure_ascii=False, allow_nan=False, default=_json_default).encode("utf-8")


def build_text(records: Records, options: ExportOptions) -> bytes:
    """One compact JSON object per line, every line newline-terminated."""
    lines = [
        json.dumps(_clean(item), ensure_ascii=False, separators=(",", ":"), allow_nan=False, default=_json_default) + "\n"
        for item in _keyed(records, options)
    ]
    return "".join(lines).encode("utf-8")


BUILDERS: Dict[str, Callable[[Records, ExportOptions], bytes]] = {
    "xls": build_xls,
    "xlsx": build_xlsx,
    "csv": build_csv,
    "html": build_html,
    "xml": build_xml,
    "json": build_json,
    "txt": build_text,
}


def resolve_format(fmt: str) -> str:
    name = str(fmt).lower().strip()
    name = FORMAT_ALIASES.get(name, name)
    if name not in BUILDERS:
        raise UnsupportedFormatError(fmt)
    return name


def build_export(records: Records, filename: str, fmt: str, options=None) -> ExportFile:
    """
    Builds the payload for one format without saving it.
    Returns an ExportFile named "<filename>.<ext>".
    """
    name = resolve_format(fmt)
    opts = ExportOptions.from_value(options)
    records = list(records)

    content = BUILDERS[name](records, opts)
    export_file = ExportFile(f"{filename}.{name}", MIME_TYPES[name], content)
    logger.info("Exported %d records as %s (%d bytes)", len(records), export_file.filename, export_file.size)
    return export_file


def export_records(records: Records, filename: str, fmt: str, options=None, saver=None):
    """
    Builds the export and hands it to `saver` (a DirectorySaver by default).
    Returns whatever the saver returns.
    """
    export_file = build_export(records, filename, fmt, options)
    saver = saver or DirectorySaver()
    return saver(export_file)


def to_xls(records: Records, filename: str, options=None, saver=None):
    """Export data to .xls file."""
    return export_records(records, filename, "xls", options, saver)


def to_xlsx(records: Records, filename: str, options=None, saver=None):
    """Export data to .xlsx file."""
    return export_records(records, filename, "xlsx", options, saver)


def to_csv(records: Records, filename: str, options=None, saver=None):
    """Export data to .csv file."""
    return export_records(records, filename, "csv", options, saver)


def to_html(records: Records, filename: str, options=None, saver=None):
    """Export data to .html file."""
    return export_records(records, filename, "html", options, saver)


def to_xml(records: Records, filename: str, options=None, saver=None):
    """Export data to .xml file."""
    return export_records(records, filename, "xml", options, saver)


def to_json(records: Records, filename: str, options=None, saver=None):
    """Export data to .json file."""
    return export_records(records, filename, "json", options, saver)


def to_text(records: Records, filename: str, options=None, saver=None):
    """Export data to .txt file (JSON lines)."""
    return export_records(records, filename, "txt", options, saver)
