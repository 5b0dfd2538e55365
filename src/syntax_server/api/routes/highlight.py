from typing import Any

from fastapi import APIRouter, Depends

from syntax_server.api.dependencies import get_catalogs
from syntax_server.api.schemas import HighlightQuery, HighlightResponse
from syntax_server.core.highlight import Catalogs, Query, handle_query

router = APIRouter(tags=["highlight"])


# A plain ``def`` so that each request runs on its own threadpool worker.
@router.post("/", response_model=HighlightResponse, response_model_exclude_none=True)
def index(
    body: HighlightQuery,
    catalogs: Catalogs = Depends(get_catalogs),
) -> Any:
    """Highlight a snippet as HTML, or export its scopes when ``scopify`` is set.

    Failures are reported in the body as ``{"error": ..., "code": ...}``.
    """
    return handle_query(Query(**body.model_dump()), catalogs)
