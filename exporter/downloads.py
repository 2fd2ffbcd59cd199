"""
Download Service
Save primitives that deliver a finished export to the user.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from exporter.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportFile:
    filename: str
    mime_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class DirectorySaver:
    """Writes export files into a local directory."""

    def __init__(self, directory=None):
        self.directory = Path(directory or get_settings().output_dir)

    def __call__(self, export_file: ExportFile) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        # only the base name is kept so a filename cannot leave the directory
        path = self.directory / Path(export_file.filename).name
        path.write_bytes(export_file.content)
        logger.info("Saved %s (%d bytes, %s)", path, export_file.size, export_file.mime_type)
        return path


def streamlit_download(export_file: ExportFile, label: str | None = None):
    """Renders a Streamlit download button for the export."""
    import streamlit as st

    return st.download_button(
        label or f"Download {export_file.filename}",
        export_file.content,
        export_file.filename,
        export_file.mime_type,
        key=f"download-{export_file.filename}",
    )
