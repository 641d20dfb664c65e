"""
Genres Router

List, detail, create, update and delete pages for genres.
Follows the same patterns as the authors router.

Genre names are not duplicated: creating a genre whose exact name already
exists redirects to the existing genre instead.
"""

from functools import partial

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from app.dependencies import Sessions
from app.errors import NotFoundError
from app.models import Genre
from app.services import catalog
from app.services.gather import gather, run_query
from app.templating import render
from app.validation import GENRE_RULES, form_fields, validate

router = APIRouter(
    prefix="/catalog/genres",
    tags=["Genres"],
)

LIST_URL = "/catalog/genres"


@router.get("", summary="List all genres")
async def genre_list(request: Request, sessions: Sessions):
    genres = await run_query(sessions, catalog.list_genres)
    return render(request, "genre_list.html", {"title": "Genre List", "genre_list": genres})


@router.get("/create", summary="Genre create form")
async def genre_create_get(request: Request):
    return render(request, "genre_form.html", {"title": "Create Genre", "form": {}})


@router.post("/create", summary="Create a genre")
async def genre_create_post(request: Request, sessions: Sessions):
    """
    Validate the submitted genre and save it.

    Before inserting, look up a genre with exactly the same name
    (case-sensitive). If one exists, redirect to it instead.
    """
    result = validate(await form_fields(request), GENRE_RULES)
    if not result.ok:
        return render(
            request,
            "genre_form.html",
            {"title": "Create Genre", "form": result.values, "errors": result.errors},
        )

    existing = await run_query(
        sessions, partial(catalog.find_genre_by_name, name=result.values["name"])
    )
    if existing is not None:
        return RedirectResponse(existing.url, status_code=status.HTTP_303_SEE_OTHER)

    genre = await run_query(sessions, partial(catalog.save_genre, values=result.values))
    return RedirectResponse(genre.url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{genre_id}", summary="Genre detail")
async def genre_detail(request: Request, genre_id: str, sessions: Sessions):
    """A genre plus its books, fetched concurrently."""
    results = await gather(
        sessions,
        genre=partial(catalog.get_genre, genre_id=genre_id),
        genre_books=partial(catalog.books_with_genre, genre_id=genre_id),
    )
    if results["genre"] is None:
        raise NotFoundError("Genre not found")
    return render(request, "genre_detail.html", {"title": "Genre Detail", **results})


@router.get("/{genre_id}/delete", summary="Genre delete confirmation")
async def genre_delete_get(request: Request, genre_id: str, sessions: Sessions):
    results = await gather(
        sessions,
        genre=partial(catalog.get_genre, genre_id=genre_id),
        genre_books=partial(catalog.genre_dependents, genre_id=genre_id),
    )
    if results["genre"] is None:
        return RedirectResponse(LIST_URL, status_code=status.HTTP_303_SEE_OTHER)
    return render(request, "genre_delete.html", {"title": "Delete Genre", **results})


@router.post("/{genre_id}/delete", summary="Delete a genre")
async def genre_delete_post(request: Request, genre_id: str, sessions: Sessions):
    """Delete the genre unless books still reference it."""
    outcome = await run_query(
        sessions,
        partial(
            catalog.delete_unless_referenced,
            model=Genre,
            record_id=genre_id,
            dependents=catalog.genre_dependents,
        ),
    )
    if outcome.blocked:
        genre = await run_query(sessions, partial(catalog.get_genre, genre_id=genre_id))
        return render(
            request,
            "genre_delete.html",
            {"title": "Delete Genre", "genre": genre, "genre_books": outcome.dependents},
        )
    return RedirectResponse(LIST_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{genre_id}/update", summary="Genre update form")
async def genre_update_get(request: Request, genre_id: str, sessions: Sessions):
    genre = await run_query(sessions, partial(catalog.get_genre, genre_id=genre_id))
    if genre is None:
        raise NotFoundError("Genre not found")
    return render(request, "genre_form.html", {"title": "Update Genre", "form": genre.form_values()})


@router.post("/{genre_id}/update", summary="Update a genre")
async def genre_update_post(request: Request, genre_id: str, sessions: Sessions):
    """
    Rename a genre.

    Renaming to a name held by a different genre is reported on the form
    rather than creating a duplicate.
    """
    if await run_query(sessions, partial(catalog.get_genre, genre_id=genre_id)) is None:
        raise NotFoundError("Genre not found")

    result = validate(await form_fields(request), GENRE_RULES)
    if result.ok:
        existing = await run_query(
            sessions, partial(catalog.find_genre_by_name, name=result.values["name"])
        )
        if existing is not None and existing.id != genre_id:
            result.add_error("name", "Genre with this name already exists")

    if not result.ok:
        return render(
            request,
            "genre_form.html",
            {"title": "Update Genre", "form": result.values, "errors": result.errors},
        )

    genre = await run_query(
        sessions,
        partial(catalog.save_genre, values=result.values, genre_id=genre_id),
    )
    if genre is None:
        raise NotFoundError("Genre not found")
    return RedirectResponse(genre.url, status_code=status.HTTP_303_SEE_OTHER)
