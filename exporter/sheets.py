"""
Sheets Service
Builds single-sheet workbooks and tables from rows or records.

pandas holds the sheet, openpyxl writes .xlsx, xlwt writes legacy .xls
and pandas itself renders .csv and .html.
"""

import io
import html
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Iterable, Mapping, Optional, Sequence

import pandas as pd
import xlwt

SHEET_NAME = "Sheet1"
NULL_ERROR = "#NULL!"


@dataclass(frozen=True)
class SheetOptions:
    """Options forwarded untouched from the export call."""
    skip_header: bool = False
    date_format: Optional[str] = None  # Excel number format, e.g. "dd/mm/yyyy"
    cell_dates: bool = True
    sheet_stubs: bool = False
    null_error: bool = False

    @property
    def na_rep(self) -> str:
        return NULL_ERROR if self.null_error else ""


def rows_to_frame(rows: Sequence[Sequence[Any]]) -> pd.DataFrame:
    """Array of arrays -> DataFrame, the first row being the header."""
    rows = list(rows)
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame([list(row) for row in rows[1:]], columns=list(rows[0]), dtype=object)


def records_to_frame(records: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """List of dicts -> DataFrame, columns in first-seen key order."""
    records = [dict(record) for record in records]
    if not records:
        return pd.DataFrame()
    return pd.DataFrame(records, dtype=object)


def _is_missing(value: Any) -> bool:
    return pd.api.types.is_scalar(value) and pd.isna(value)


def _dates_as_text(frame: pd.DataFrame) -> pd.DataFrame:
    return frame.map(lambda v: v.isoformat() if isinstance(v, (datetime, date, time)) else v)


def _drop_stub_cells(worksheet, frame: pd.DataFrame, header: bool):
    # pandas writes na_rep into every missing cell; clear them so openpyxl skips them
    first_row = 2 if header else 1
    missing = frame.isna().itertuples(index=False, name=None)
    for row_idx, row in enumerate(missing, start=first_row):
        for col_idx, is_missing in enumerate(row, start=1):
            if is_missing:
                worksheet.cell(row=row_idx, column=col_idx).value = None


def write_xlsx(frame: pd.DataFrame, options: SheetOptions = SheetOptions()) -> bytes:
    """
    Converts a DataFrame to .xlsx bytes.
    """
    header = not options.skip_header
    if not options.cell_dates:
        frame = _dates_as_text(frame)

    output = io.BytesIO()
    with pd.ExcelWriter(
        output,
        engine="openpyxl",
        date_format=options.date_format,
        datetime_format=options.date_format,
    ) as writer:
        frame.to_excel(writer, index=False, header=header, sheet_name=SHEET_NAME, na_rep=options.na_rep)

        if not options.sheet_stubs and not options.null_error:
            _drop_stub_cells(writer.sheets[SHEET_NAME], frame, header)

    return output.getvalue()


def write_xls(frame: pd.DataFrame, options: SheetOptions = SheetOptions()) -> bytes:
    """
    Converts a DataFrame to legacy .xls (BIFF8) bytes.
    """
    if not options.cell_dates:
        frame = _dates_as_text(frame)

    workbook = xlwt.Workbook(encoding="utf-8")
    worksheet = workbook.add_sheet(SHEET_NAME)
    date_style = xlwt.easyxf(num_format_str=options.date_format or "yyyy-mm-dd")
    datetime_style = xlwt.easyxf(num_format_str=options.date_format or "yyyy-mm-dd hh:mm:ss")

    row_idx = 0
    if not options.skip_header:
        for col_idx, column in enumerate(frame.columns):
            worksheet.write(0, col_idx, str(column))
        row_idx = 1

    for values in frame.itertuples(index=False, name=None):
        for col_idx, value in enumerate(values):
            if _is_missing(value):
                if options.null_error:
                    worksheet.write(row_idx, col_idx, NULL_ERROR)
                elif options.sheet_stubs:
                    # xlwt stores an empty string as a blank cell
                    worksheet.write(row_idx, col_idx, "")
            elif isinstance(value, datetime):
                worksheet.write(row_idx, col_idx, value, datetime_style)
            elif isinstance(value, date):
                worksheet.write(row_idx, col_idx, value, date_style)
            else:
                worksheet.write(row_idx, col_idx, value)
        row_idx += 1

    output = io.BytesIO()
    workbook.save(output)
    return output.getvalue()


def write_csv(frame: pd.DataFrame, options: SheetOptions = SheetOptions()) -> bytes:
    text = _dates_as_text(frame).to_csv(
        index=False,
        header=not options.skip_header,
        na_rep=options.na_rep,
        lineterminator="\n",
    )
    return text.encode("utf-8")


def write_html(frame: pd.DataFrame, options: SheetOptions = SheetOptions(), title: str = SHEET_NAME) -> bytes:
    """
    Renders the sheet as an HTML table inside a minimal UTF-8 document.
    """
    table = _dates_as_text(frame).to_html(
        index=False,
        header=not options.skip_header,
        na_rep=options.na_rep,
        border=0,
    )
    document = "\n".join([
        "<!DOCTYPE html>",
        "<html>",
        f'<head><meta charset="utf-8"><title>{html.escape(title)}</title></head>',
        "<body>",
        table,
        "</body>",
        "</html>",
        "",
    ])
    return document.encode("utf-8")
