"""
Tests for the Landing Page and Error Pages
"""

from fastapi import status
from sqlalchemy.exc import OperationalError

from app.config import Settings
from app.services import catalog


class TestRoot:
    def test_root_redirects_to_catalog(self, client):
        response = client.get("/", follow_redirects=False)

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog"


class TestCatalogHome:
    """Tests for GET /catalog."""

    def test_counts_empty_catalog(self, client):
        response = client.get("/catalog")

        assert response.status_code == status.HTTP_200_OK
        assert "<strong>Books:</strong> 0" in response.text
        assert "<strong>Genres:</strong> 0" in response.text

    def test_counts(self, client, db_session, sample_book_instance):
        """Test every count, including copies with status Available."""
        response = client.get("/catalog")

        assert "<strong>Books:</strong> 1" in response.text
        assert "<strong>Copies:</strong> 1" in response.text
        assert "<strong>Copies available:</strong> 0" in response.text
        assert "<strong>Authors:</strong> 1" in response.text
        assert "<strong>Genres:</strong> 1" in response.text

    def test_count_failure_still_renders(self, client, monkeypatch):
        """Test a failing count shows the error instead of the numbers."""

        def broken_count(db, model, **filters):
            raise OperationalError("SELECT count(*)", {}, Exception("database is gone"))

        monkeypatch.setattr(catalog, "count", broken_count)

        response = client.get("/catalog")

        assert response.status_code == status.HTTP_200_OK
        assert "Error getting dynamic content" in response.text
        assert "database is gone" in response.text
        assert "<strong>Books:</strong>" not in response.text


class TestErrorPages:
    """Tests for the terminal error handlers."""

    def test_unknown_path_is_404(self, client):
        response = client.get("/catalog/nowhere/at/all")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Not Found" in response.text

    def test_wrong_method_keeps_allow_header(self, client):
        response = client.put("/catalog/authors")

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert "GET" in response.headers["allow"]
        assert "Method Not Allowed" in response.text

    def test_operation_failure_is_500(self, failing_client, monkeypatch):
        def broken(db):
            raise RuntimeError("storage exploded")

        monkeypatch.setattr(catalog, "list_authors", broken)

        response = failing_client.get("/catalog/authors")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert "An internal error occurred." in response.text
        assert "storage exploded" in response.text

    def test_production_hides_error_detail(self, failing_client, monkeypatch):
        def broken(db):
            raise RuntimeError("storage exploded")

        monkeypatch.setattr(catalog, "list_authors", broken)
        monkeypatch.setattr(
            "app.errors.get_settings",
            lambda: Settings(environment="production"),
        )

        response = failing_client.get("/catalog/authors")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert "An internal error occurred." in response.text
        assert "storage exploded" not in response.text
