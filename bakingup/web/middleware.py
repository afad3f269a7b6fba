"""Cross-origin headers for every response."""

from __future__ import annotations

from flask import Flask, Response


def setup_cors(app: Flask, allowed_origins: str) -> None:
    """Add CORS headers to each response the application sends."""

    @app.after_request
    def _add_cors_headers(response: Response) -> Response:
        response.headers["Access-Control-Allow-Origin"] = allowed_origins
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        return response