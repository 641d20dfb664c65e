"""
Test Suite for the Local Library Catalog

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_index.py: Landing page counts and error pages
- test_authors.py, test_genres.py, test_books.py, test_bookinstances.py:
  Pages under /catalog/<resource>
- test_validation.py: Form rule tables
- test_gather.py: Concurrent reads

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
