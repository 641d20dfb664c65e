"""
Books Router

List, detail, create, update and delete pages for books.

The book form always needs the full author and genre lists, whether it is
shown for the first time or re-rendered after a failed validation, so
those are fetched concurrently every time the form is rendered.

A book cannot be deleted while copies (BookInstances) of it exist.
"""

from functools import partial
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from app.dependencies import Sessions
from app.errors import NotFoundError
from app.models import Book
from app.services import catalog
from app.services.gather import gather, run_query
from app.templating import render
from app.validation import BOOK_RULES, FieldError, as_list, form_fields, validate

router = APIRouter(
    prefix="/catalog/books",
    tags=["Books"],
)

LIST_URL = "/catalog/books"


async def render_book_form(
    request: Request,
    sessions: Sessions,
    title: str,
    form: dict[str, Any],
    errors: list[FieldError] | None = None,
):
    """
    Render the book form with the author and genre choices.

    Genres listed in form["genre"] are marked as checked.
    """
    results = await gather(sessions, authors=catalog.list_authors, genres=catalog.list_genres)
    selected = set(as_list(form.get("genre")))
    genres = [g.model_copy(update={"checked": g.id in selected}) for g in results["genres"]]
    return render(
        request,
        "book_form.html",
        {
            "title": title,
            "authors": results["authors"],
            "genres": genres,
            "form": form,
            "errors": errors or [],
        },
    )


@router.get("", summary="List all books")
async def book_list(request: Request, sessions: Sessions):
    """Books sorted by title, each with its author attached."""
    books = await run_query(sessions, catalog.list_books)
    return render(request, "book_list.html", {"title": "Book List", "book_list": books})


@router.get("/create", summary="Book create form")
async def book_create_get(request: Request, sessions: Sessions):
    return await render_book_form(request, sessions, "Create Book", {})


@router.post("/create", summary="Create a book")
async def book_create_post(request: Request, sessions: Sessions):
    result = validate(await form_fields(request), BOOK_RULES)
    if not result.ok:
        return await render_book_form(
            request, sessions, "Create Book", result.values, result.errors
        )

    book = await run_query(sessions, partial(catalog.save_book, values=result.values))
    return RedirectResponse(book.url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{book_id}", summary="Book detail")
async def book_detail(request: Request, book_id: str, sessions: Sessions):
    """A book with its author and genres, plus its copies."""
    results = await gather(
        sessions,
        book=partial(catalog.get_book, book_id=book_id),
        book_instances=partial(catalog.instances_of_book, book_id=book_id),
    )
    if results["book"] is None:
        raise NotFoundError("Book not found")
    return render(request, "book_detail.html", {"title": results["book"].title, **results})


@router.get("/{book_id}/delete", summary="Book delete confirmation")
async def book_delete_get(request: Request, book_id: str, sessions: Sessions):
    results = await gather(
        sessions,
        book=partial(catalog.get_book, book_id=book_id),
        book_instances=partial(catalog.book_dependents, book_id=book_id),
    )
    if results["book"] is None:
        return RedirectResponse(LIST_URL, status_code=status.HTTP_303_SEE_OTHER)
    return render(request, "book_delete.html", {"title": "Delete Book", **results})


@router.post("/{book_id}/delete", summary="Delete a book")
async def book_delete_post(request: Request, book_id: str, sessions: Sessions):
    """Delete the book unless copies of it still exist."""
    outcome = await run_query(
        sessions,
        partial(
            catalog.delete_unless_referenced,
            model=Book,
            record_id=book_id,
            dependents=catalog.book_dependents,
        ),
    )
    if outcome.blocked:
        book = await run_query(sessions, partial(catalog.get_book, book_id=book_id))
        return render(
            request,
            "book_delete.html",
            {"title": "Delete Book", "book": book, "book_instances": outcome.dependents},
        )
    return RedirectResponse(LIST_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{book_id}/update", summary="Book update form")
async def book_update_get(request: Request, book_id: str, sessions: Sessions):
    book = await run_query(sessions, partial(catalog.get_book, book_id=book_id))
    if book is None:
        raise NotFoundError("Book not found")
    return await render_book_form(request, sessions, "Update Book", book.form_values())


@router.post("/{book_id}/update", summary="Update a book")
async def book_update_post(request: Request, book_id: str, sessions: Sessions):
    if await run_query(sessions, partial(catalog.get_book, book_id=book_id)) is None:
        raise NotFoundError("Book not found")

    result = validate(await form_fields(request), BOOK_RULES)
    if not result.ok:
        return await render_book_form(
            request, sessions, "Update Book", result.values, result.errors
        )

    book = await run_query(
        sessions,
        partial(catalog.save_book, values=result.values, book_id=book_id),
    )
    if book is None:
        raise NotFoundError("Book not found")
    return RedirectResponse(book.url, status_code=status.HTTP_303_SEE_OTHER)
