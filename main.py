"""
Main API Entry Point
Serves exports as file downloads.
"""

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from exporter.config import configure_logging
from exporter.errors import ExportError, UnsupportedFormatError
from exporter.export import FORMATS, build_export

configure_logging()

app = FastAPI(title="Data Exporter API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # For development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ExportRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    filename: str = "export"
    options: Optional[Dict[str, Any]] = None


@app.get("/")
def read_root():
    """Root endpoint to check API status."""
    return {"message": "Data Exporter API is running", "formats": list(FORMATS)}


@app.post("/export/{fmt}")
def export(fmt: str, body: ExportRequest):
    """Builds the export and returns it as an attachment."""
    try:
        export_file = build_export(body.records, body.filename, fmt, body.options)
    except UnsupportedFormatError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ExportError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return Response(
        content=export_file.content,
        media_type=export_file.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{export_file.filename}"'},
    )
