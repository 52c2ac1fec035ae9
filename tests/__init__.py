"""
Test Suite for Book Club API

Test Organization:
- conftest.py: Shared fixtures (memory store, identity, client, sample data)
- test_auth.py: /signup, /login, /protected, root and health
- test_clubs.py: /clubs endpoints
- test_threads.py: threads and comments
- test_books.py: /books/search against a mocked catalog
- test_security.py: token signing/verification and settings validation
- test_identity.py: identity providers
- test_store.py: document store backends
- test_results.py: error kinds and the response envelope

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_clubs.py

    # Run with verbose output
    pytest -v
"""
