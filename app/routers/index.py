"""
Landing Page Router

The catalog home page shows how many records of each kind exist.
All counts are issued concurrently; if any of them fails the page is still
rendered, showing the error instead of the numbers.
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from app.dependencies import Sessions
from app.schemas import CatalogCounts
from app.services import catalog
from app.services.gather import gather
from app.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Catalog"])


@router.get("/", summary="Site root")
async def root():
    return RedirectResponse("/catalog", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/catalog", summary="Catalog home")
async def index(request: Request, sessions: Sessions):
    counts = None
    error = None
    try:
        counts = CatalogCounts(**await gather(sessions, **catalog.count_branches()))
    except Exception as exc:
        logger.error(f"Could not count catalog records: {exc}", exc_info=True)
        error = str(exc)
    return render(
        request,
        "index.html",
        {"title": "Local Library Home", "data": counts, "error": error},
    )
