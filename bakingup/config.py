"""Application configuration loaded from a dotenv file and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class HTTPConfig:
    """Settings for the HTTP server."""

    port: str = ""
    allowed_origins: str = ""
    receipt_scanner_url: str = ""


@dataclass(frozen=True)
class Container:
    """All configuration sections of the application."""

    http: HTTPConfig


def load_config(env_file: str | os.PathLike[str] = ".env") -> Container:
    """Load the dotenv file into the environment and build the configuration.

    Raises FileNotFoundError when the dotenv file cannot be read.
    """
    path = Path(env_file)
    if not path.is_file():
        raise FileNotFoundError(f"Error loading {path} file")
    load_dotenv(path)
    http = HTTPConfig(
        port=os.getenv("HTTP_PORT", ""),
        allowed_origins=os.getenv("HTTP_ALLOWED_ORIGINS", ""),
        receipt_scanner_url=os.getenv("RECEIPT_SCANNER_URL", ""),
    )
    return Container(http=http)