"""
Test Suite for the Book Catalog

Test Organization:
- conftest.py: Shared fixtures (per-test SQLite database, client, sample books)
- test_models.py: Field rules on the Book entity
- test_repository.py: BookRepository against a real database
- test_handler.py: BookHandler decisions with a mocked repository
- test_notices.py: One-shot session notices
- test_books.py: Every page, end to end over HTTP
- test_database.py: Database gateway and startup
- test_config.py: Settings validation

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
