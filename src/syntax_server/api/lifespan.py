from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from rich.console import Console

from syntax_server.core.features import render_features
from syntax_server.core.highlight import Catalogs

logger = logging.getLogger(__name__)
console = Console()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    catalogs: Catalogs = app.state.catalogs
    if not app.state.settings.quiet:
        listing = render_features(catalogs.grammars, catalogs.themes)
        console.print(listing, markup=False, emoji=False, highlight=False, soft_wrap=True)
    logger.info("Serving %d grammars and %d themes", len(catalogs.grammars), len(catalogs.themes))
    yield
