"""
Errors
Exceptions raised by the exporter itself. Failures coming from pandas,
openpyxl, xlwt or the file system are not wrapped.
"""


class ExportError(Exception):
    """Base class for exporter errors."""


class DuplicateAliasError(ExportError):
    """Two header entries map to the same output alias."""

    def __init__(self, alias: str):
        super().__init__(f"Duplicate header alias: {alias!r}")
        self.alias = alias


class UnsupportedFormatError(ExportError, ValueError):
    """Requested export format is not one of FORMATS."""

    def __init__(self, fmt: str):
        super().__init__(f"Unsupported export format: {fmt}")
        self.format = fmt
