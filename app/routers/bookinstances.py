"""
Book Instances Router

Pages for the physical copies of books. Nothing references a copy, so
deleting one never needs a dependency check.
"""

from functools import partial
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from app.dependencies import Sessions
from app.errors import NotFoundError
from app.models import BookInstance
from app.services import catalog
from app.services.gather import run_query
from app.templating import render
from app.validation import BOOK_INSTANCE_RULES, FieldError, form_fields, validate

router = APIRouter(
    prefix="/catalog/bookinstances",
    tags=["Book Instances"],
)

LIST_URL = "/catalog/bookinstances"


async def render_book_instance_form(
    request: Request,
    sessions: Sessions,
    title: str,
    form: dict[str, Any],
    errors: list[FieldError] | None = None,
):
    """Render the copy form with the list of books to choose from."""
    books = await run_query(sessions, catalog.list_books)
    return render(
        request,
        "bookinstance_form.html",
        {"title": title, "book_list": books, "form": form, "errors": errors or []},
    )


@router.get("", summary="List all copies")
async def bookinstance_list(request: Request, sessions: Sessions):
    instances = await run_query(sessions, catalog.list_book_instances)
    return render(
        request,
        "bookinstance_list.html",
        {"title": "Book Copy List", "bookinstance_list": instances},
    )


@router.get("/create", summary="Copy create form")
async def bookinstance_create_get(request: Request, sessions: Sessions):
    return await render_book_instance_form(request, sessions, "Create Copy", {})


@router.post("/create", summary="Create a copy")
async def bookinstance_create_post(request: Request, sessions: Sessions):
    result = validate(await form_fields(request), BOOK_INSTANCE_RULES)
    if not result.ok:
        return await render_book_instance_form(
            request, sessions, "Create Copy", result.values, result.errors
        )

    instance = await run_query(
        sessions, partial(catalog.save_book_instance, values=result.values)
    )
    return RedirectResponse(instance.url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{instance_id}", summary="Copy detail")
async def bookinstance_detail(request: Request, instance_id: str, sessions: Sessions):
    instance = await run_query(
        sessions, partial(catalog.get_book_instance, instance_id=instance_id)
    )
    if instance is None:
        raise NotFoundError("Book copy not found")
    book_title = instance.book.title if instance.book else "unknown book"
    return render(
        request,
        "bookinstance_detail.html",
        {"title": f"Copy: {book_title}", "bookinstance": instance},
    )


@router.get("/{instance_id}/delete", summary="Copy delete confirmation")
async def bookinstance_delete_get(request: Request, instance_id: str, sessions: Sessions):
    instance = await run_query(
        sessions, partial(catalog.get_book_instance, instance_id=instance_id)
    )
    if instance is None:
        return RedirectResponse(LIST_URL, status_code=status.HTTP_303_SEE_OTHER)
    return render(
        request,
        "bookinstance_delete.html",
        {"title": "Delete Copy", "bookinstance": instance},
    )


@router.post("/{instance_id}/delete", summary="Delete a copy")
async def bookinstance_delete_post(request: Request, instance_id: str, sessions: Sessions):
    await run_query(
        sessions,
        partial(catalog.delete_unless_referenced, model=BookInstance, record_id=instance_id),
    )
    return RedirectResponse(LIST_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{instance_id}/update", summary="Copy update form")
async def bookinstance_update_get(request: Request, instance_id: str, sessions: Sessions):
    instance = await run_query(
        sessions, partial(catalog.get_book_instance, instance_id=instance_id)
    )
    if instance is None:
        raise NotFoundError("Book copy not found")
    return await render_book_instance_form(
        request, sessions, "Update Copy", instance.form_values()
    )


@router.post("/{instance_id}/update", summary="Update a copy")
async def bookinstance_update_post(request: Request, instance_id: str, sessions: Sessions):
    instance = await run_query(
        sessions, partial(catalog.get_book_instance, instance_id=instance_id)
    )
    if instance is None:
        raise NotFoundError("Book copy not found")

    result = validate(await form_fields(request), BOOK_INSTANCE_RULES)
    if not result.ok:
        return await render_book_instance_form(
            request, sessions, "Update Copy", result.values, result.errors
        )

    instance = await run_query(
        sessions,
        partial(catalog.save_book_instance, values=result.values, instance_id=instance_id),
    )
    if instance is None:
        raise NotFoundError("Book copy not found")
    return RedirectResponse(instance.url, status_code=status.HTTP_303_SEE_OTHER)
