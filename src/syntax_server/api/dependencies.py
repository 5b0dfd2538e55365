from __future__ import annotations

from fastapi import Request

from syntax_server.core.highlight import Catalogs


def get_catalogs(request: Request) -> Catalogs:
    """Return the catalogs built when the application was created."""
    catalogs: Catalogs = request.app.state.catalogs
    return catalogs
