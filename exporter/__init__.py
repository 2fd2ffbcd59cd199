"""
Exporter
Turns lists of records into spreadsheet, delimited, markup and JSON downloads.
"""

from exporter.export import (
    FORMATS,
    ExportOptions,
    build_export,
    export_records,
    to_csv,
    to_html,
    to_json,
    to_text,
    to_xls,
    to_xlsx,
    to_xml,
)
from exporter.downloads import ExportFile, DirectorySaver

__all__ = [
    "FORMATS",
    "ExportOptions",
    "ExportFile",
    "DirectorySaver",
    "build_export",
    "export_records",
    "to_csv",
    "to_html",
    "to_json",
    "to_text",
    "to_xls",
    "to_xlsx",
    "to_xml",
]
