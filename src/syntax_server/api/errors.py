from __future__ import annotations

import json

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException


async def not_found_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"error": "resource not found", "code": "resource_not_found"})
    return await http_exception_handler(request, exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    # The rejected input is echoed back and may hold lone surrogates, so escape
    # everything outside ASCII.
    content = json.dumps({"detail": jsonable_encoder(exc.errors())}, ensure_ascii=True)
    return Response(content, status_code=422, media_type="application/json")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
