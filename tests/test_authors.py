"""
Tests for Author Pages

Tests for /catalog/authors pages.
"""

from fastapi import status
from sqlalchemy import func, select

from app.models import Author


class TestListAuthors:
    """Tests for GET /catalog/authors."""

    def test_list_authors_empty(self, client):
        """Test listing authors when database is empty."""
        response = client.get("/catalog/authors")

        assert response.status_code == status.HTTP_200_OK
        assert "There are no authors." in response.text

    def test_list_authors_with_data(self, client, sample_author):
        """Test the list shows the "family, first" display name."""
        response = client.get("/catalog/authors")

        assert response.status_code == status.HTTP_200_OK
        assert "Rothfuss, Patrick" in response.text
        assert sample_author.url in response.text


class TestGetAuthor:
    """Tests for GET /catalog/authors/{author_id}."""

    def test_get_author_with_books(self, client, sample_book, sample_author):
        """Test the detail page lists the author's books."""
        response = client.get(f"/catalog/authors/{sample_author.id}")

        assert response.status_code == status.HTTP_200_OK
        assert "Author: Rothfuss, Patrick" in response.text
        assert "The Name of the Wind" in response.text
        assert "Jun 6, 1973" in response.text

    def test_get_author_not_found(self, client):
        """Test an unknown identifier renders the 404 error page."""
        response = client.get("/catalog/authors/does-not-exist")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Author not found" in response.text


class TestCreateAuthor:
    """Tests for GET/POST /catalog/authors/create."""

    def test_create_form(self, client):
        response = client.get("/catalog/authors/create")

        assert response.status_code == status.HTTP_200_OK
        assert "Create Author" in response.text

    def test_create_author_success(self, client, db_session):
        """Test a valid submission is saved trimmed and redirects to it."""
        response = client.post(
            "/catalog/authors/create",
            data={
                "first_name": "  Isaac ",
                "family_name": "Asimov",
                "date_of_birth": "1920-01-02",
                "date_of_death": "1992-04-06",
            },
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        author = db_session.execute(select(Author)).scalar_one()
        assert response.headers["location"] == f"/catalog/authors/{author.id}"
        assert author.first_name == "Isaac"
        assert author.family_name == "Asimov"
        assert author.date_of_birth.isoformat() == "1920-01-02"
        assert author.date_of_death.isoformat() == "1992-04-06"

    def test_create_author_without_dates(self, client, db_session):
        """Test empty optional dates are stored as unset."""
        response = client.post(
            "/catalog/authors/create",
            data={"first_name": "Bob", "family_name": "Billings", "date_of_birth": ""},
        )

        assert response.status_code == status.HTTP_200_OK
        author = db_session.execute(select(Author)).scalar_one()
        assert author.date_of_birth is None
        assert author.date_of_death is None

    def test_create_author_missing_first_name(self, client, db_session):
        """Test the form is re-rendered with the message and the kept values."""
        response = client.post(
            "/catalog/authors/create",
            data={"first_name": "", "family_name": "Doe"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert "First name must be specified" in response.text
        assert 'value="Doe"' in response.text
        assert db_session.execute(select(func.count()).select_from(Author)).scalar_one() == 0

    def test_create_author_invalid_date(self, client):
        response = client.post(
            "/catalog/authors/create",
            data={"first_name": "Jim", "family_name": "Jones", "date_of_birth": "1971-13-45"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert "Invalid date of birth" in response.text

    def test_create_author_non_alphanumeric(self, client):
        response = client.post(
            "/catalog/authors/create",
            data={"first_name": "Jim", "family_name": "O'Neil"},
        )

        assert "Family name has non-alphanumeric characters" in response.text


class TestUpdateAuthor:
    """Tests for GET/POST /catalog/authors/{author_id}/update."""

    def test_update_form_prefilled(self, client, sample_author):
        response = client.get(f"/catalog/authors/{sample_author.id}/update")

        assert response.status_code == status.HTTP_200_OK
        assert 'value="Patrick"' in response.text
        assert 'value="1973-06-06"' in response.text

    def test_update_author_keeps_identifier(self, client, db_session, sample_author):
        """Test an update rewrites the same record instead of adding one."""
        response = client.post(
            f"/catalog/authors/{sample_author.id}/update",
            data={"first_name": "Pat", "family_name": "Rothfuss"},
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == sample_author.url
        authors = db_session.execute(select(Author)).scalars().all()
        assert len(authors) == 1
        db_session.refresh(authors[0])
        assert authors[0].id == sample_author.id
        assert authors[0].first_name == "Pat"
        assert authors[0].date_of_birth is None

    def test_update_author_not_found(self, client):
        response = client.post(
            "/catalog/authors/does-not-exist/update",
            data={"first_name": "Pat", "family_name": "Rothfuss"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_unknown_author_with_invalid_form(self, client):
        """Test an unknown id is a 404 even when the submission is invalid."""
        response = client.post(
            "/catalog/authors/does-not-exist/update",
            data={"first_name": "", "family_name": "Doe"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Author not found" in response.text

    def test_update_form_not_found(self, client):
        response = client.get("/catalog/authors/does-not-exist/update")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteAuthor:
    """Tests for GET/POST /catalog/authors/{author_id}/delete."""

    def test_delete_author_success(self, client, sample_author):
        """Test deleting an author without books."""
        response = client.post(
            f"/catalog/authors/{sample_author.id}/delete",
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/authors"

        get_response = client.get(f"/catalog/authors/{sample_author.id}")
        assert get_response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_author_with_books_refused(self, client, db_session, sample_book, sample_author):
        """Test an author referenced by a book is kept and its books are listed."""
        confirm = client.get(f"/catalog/authors/{sample_author.id}/delete")
        response = client.post(f"/catalog/authors/{sample_author.id}/delete")

        assert response.status_code == status.HTTP_200_OK
        assert response.text == confirm.text
        assert "Delete the following books" in response.text
        assert "The Name of the Wind" in response.text
        assert db_session.execute(select(func.count()).select_from(Author)).scalar_one() == 1

    def test_delete_unknown_author_redirects(self, client):
        """Test deleting an already-missing author is a no-op."""
        response = client.post("/catalog/authors/does-not-exist/delete", follow_redirects=False)

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/authors"

    def test_delete_confirmation_unknown_redirects(self, client):
        response = client.get("/catalog/authors/does-not-exist/delete", follow_redirects=False)

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/authors"
