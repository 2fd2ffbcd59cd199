"""
Data Exporter - Streamlit application
Edit a table, rename its columns and download it in any supported format.
"""

import pandas as pd
import streamlit as st

from exporter.config import configure_logging
from exporter.downloads import streamlit_download
from exporter.export import FORMATS, build_export

configure_logging()

st.set_page_config(
    page_title="Data Exporter",
    page_icon="📤",
    layout="wide",
)


def parse_columns(text: str):
    """Turns "name" / "name=Alias" lines into a header spec."""
    headers = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if "=" in line:
            name, alias = line.split("=", 1)
            headers.append({"name": name.strip(), "alias": alias.strip()})
        else:
            headers.append(line)
    return headers


if 'table' not in st.session_state:
    st.session_state.table = pd.DataFrame([{"id": 1, "name": "Ann"}, {"id": 2, "name": "Bo"}])

# --- Sidebar ---
with st.sidebar:
    st.title("📤 Data Exporter")

    columns_text = st.text_area(
        "Columns",
        value="id=ID\nname=Name",
        help="One column per line: `name` or `name=Alias`. Leave empty to export every column.",
    )
    headers = parse_columns(columns_text)

    st.divider()
    st.subheader("Options")
    skip_header = st.checkbox("Skip header row", value=False)
    null_error = st.checkbox("Write empty cells as #NULL!", value=False)
    sheet_stubs = st.checkbox("Keep empty cells", value=False)
    escape_attributes = st.checkbox("Escape XML attributes", value=False)

# --- Main ---
st.header("Data")
edited_data = st.data_editor(st.session_state.table, num_rows="dynamic", use_container_width=True)

st.header("Export")
col1, col2 = st.columns(2)
with col1:
    filename = st.text_input("File name", value="export")
with col2:
    fmt = st.selectbox("Format", FORMATS)

records = edited_data.to_dict('records') if isinstance(edited_data, pd.DataFrame) else edited_data

if records:
    options = {
        "headers": headers,
        "skip_header": skip_header,
        "null_error": null_error,
        "sheet_stubs": sheet_stubs,
        "escape_attributes": escape_attributes,
    }
    try:
        export_file = build_export(records, filename or "export", fmt, options)
        streamlit_download(export_file)
    except Exception as e:  # pylint: disable=broad-exception-caught
        st.error(f"Export failed: {e}")
else:
    st.warning("No data to export")
