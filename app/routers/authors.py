"""
Authors Router

List, detail, create, update and delete pages for authors.

An author cannot be deleted while any book still references it; the
delete page lists those books instead.
"""

from functools import partial

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from app.dependencies import Sessions
from app.errors import NotFoundError
from app.models import Author
from app.services import catalog
from app.services.gather import gather, run_query
from app.templating import render
from app.validation import AUTHOR_RULES, form_fields, validate

router = APIRouter(
    prefix="/catalog/authors",
    tags=["Authors"],
)

LIST_URL = "/catalog/authors"


@router.get("", summary="List all authors")
async def author_list(request: Request, sessions: Sessions):
    """Authors sorted by family name."""
    authors = await run_query(sessions, catalog.list_authors)
    return render(request, "author_list.html", {"title": "Author List", "author_list": authors})


@router.get("/create", summary="Author create form")
async def author_create_get(request: Request):
    return render(request, "author_form.html", {"title": "Create Author", "form": {}})


@router.post("/create", summary="Create an author")
async def author_create_post(request: Request, sessions: Sessions):
    """
    Validate the submitted author and save it.

    Invalid submissions re-render the form with the sanitized values and
    the validation messages. Authors are not de-duplicated by name.
    """
    result = validate(await form_fields(request), AUTHOR_RULES)
    if not result.ok:
        return render(
            request,
            "author_form.html",
            {"title": "Create Author", "form": result.values, "errors": result.errors},
        )

    author = await run_query(sessions, partial(catalog.save_author, values=result.values))
    return RedirectResponse(author.url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{author_id}", summary="Author detail")
async def author_detail(request: Request, author_id: str, sessions: Sessions):
    """An author plus their books, fetched concurrently."""
    results = await gather(
        sessions,
        author=partial(catalog.get_author, author_id=author_id),
        author_books=partial(catalog.books_by_author, author_id=author_id),
    )
    if results["author"] is None:
        raise NotFoundError("Author not found")
    return render(
        request,
        "author_detail.html",
        {"title": "Author Detail", **results},
    )


@router.get("/{author_id}/delete", summary="Author delete confirmation")
async def author_delete_get(request: Request, author_id: str, sessions: Sessions):
    results = await gather(
        sessions,
        author=partial(catalog.get_author, author_id=author_id),
        author_books=partial(catalog.author_dependents, author_id=author_id),
    )
    if results["author"] is None:
        return RedirectResponse(LIST_URL, status_code=status.HTTP_303_SEE_OTHER)
    return render(request, "author_delete.html", {"title": "Delete Author", **results})


@router.post("/{author_id}/delete", summary="Delete an author")
async def author_delete_post(request: Request, author_id: str, sessions: Sessions):
    """Delete the author unless books still reference it."""
    outcome = await run_query(
        sessions,
        partial(
            catalog.delete_unless_referenced,
            model=Author,
            record_id=author_id,
            dependents=catalog.author_dependents,
        ),
    )
    if outcome.blocked:
        author = await run_query(sessions, partial(catalog.get_author, author_id=author_id))
        return render(
            request,
            "author_delete.html",
            {"title": "Delete Author", "author": author, "author_books": outcome.dependents},
        )
    return RedirectResponse(LIST_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{author_id}/update", summary="Author update form")
async def author_update_get(request: Request, author_id: str, sessions: Sessions):
    author = await run_query(sessions, partial(catalog.get_author, author_id=author_id))
    if author is None:
        raise NotFoundError("Author not found")
    return render(
        request,
        "author_form.html",
        {"title": "Update Author", "form": author.form_values()},
    )


@router.post("/{author_id}/update", summary="Update an author")
async def author_update_post(request: Request, author_id: str, sessions: Sessions):
    if await run_query(sessions, partial(catalog.get_author, author_id=author_id)) is None:
        raise NotFoundError("Author not found")

    result = validate(await form_fields(request), AUTHOR_RULES)
    if not result.ok:
        return render(
            request,
            "author_form.html",
            {"title": "Update Author", "form": result.values, "errors": result.errors},
        )

    author = await run_query(
        sessions,
        partial(catalog.save_author, values=result.values, author_id=author_id),
    )
    if author is None:
        raise NotFoundError("Author not found")
    return RedirectResponse(author.url, status_code=status.HTTP_303_SEE_OTHER)
