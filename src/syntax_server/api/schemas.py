from __future__ import annotations

from typing import Union

from pydantic import BaseModel, field_validator


class HighlightQuery(BaseModel):
    """POST / — snippet to highlight."""

    theme: str
    code: str
    # Deprecated: kept for clients that send an extension instead of a file path.
    extension: str = ""
    filepath: str = ""
    scopify: bool = False

    @field_validator("theme", "code", "extension", "filepath")
    @classmethod
    def encodes_as_utf8(cls, value: str) -> str:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError("must be valid UTF-8 text") from exc
        return value


class HtmlResponse(BaseModel):
    data: str
    plaintext: bool
    detected_language: str


class ScopifiedRegion(BaseModel):
    offset: int
    length: int
    scopes: list[int]


class ScopifiedResponse(BaseModel):
    plaintext: bool
    detected_language: str
    scopified_scope_names: list[str]
    scopified_regions: list[ScopifiedRegion]


class ErrorResponse(BaseModel):
    error: str
    code: str | None = None


HighlightResponse = Union[HtmlResponse, ScopifiedResponse, ErrorResponse]  # noqa: UP007
