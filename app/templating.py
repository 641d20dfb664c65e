"""
Template Rendering

All pages are rendered server-side with Jinja2 through FastAPI's
Jinja2Templates. Autoescaping is on for every .html template.

Usage:
    from app.templating import render

    return render(request, "author_list.html", {"title": "Author List", ...})
"""

from pathlib import Path
from collections.abc import Mapping
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import HTMLResponse

from app.config import get_settings
from app.models import BookInstanceStatus

settings = get_settings()

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.trim_blocks = True
templates.env.lstrip_blocks = True
templates.env.globals["app_name"] = settings.app_name
templates.env.globals["statuses"] = [s.value for s in BookInstanceStatus]


def render(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
    headers: Mapping[str, str] | None = None,
) -> HTMLResponse:
    """Render a template into an HTML response."""
    return templates.TemplateResponse(
        request, name, context or {}, status_code=status_code, headers=headers
    )
