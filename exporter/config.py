"""
Config Service
Reads exporter settings from the environment (and a local .env file).
"""

import os
import logging
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUTHY


@dataclass(frozen=True)
class Settings:
    output_dir: str = "exports"
    log_level: str = "INFO"
    escape_attributes: bool = False
    fail_on_duplicate_alias: bool = False


def get_settings() -> Settings:
    """Builds Settings from the current environment."""
    return Settings(
        output_dir=os.getenv("EXPORT_OUTPUT_DIR", "exports"),
        log_level=os.getenv("EXPORT_LOG_LEVEL", "INFO").upper(),
        escape_attributes=_flag("EXPORT_ESCAPE_ATTRIBUTES"),
        fail_on_duplicate_alias=_flag("EXPORT_FAIL_ON_DUPLICATE_ALIAS"),
    )


def configure_logging(level: str | None = None):
    """Sets up root logging for the API and the Streamlit app."""
    level = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
