"""
Services Package

Business logic lives here, separated from HTTP routing. Every service
returns Ok/Err results (bookclub.results) instead of raising.

- auth.py: signup and login
- clubs.py: club lifecycle, membership and current book
- threads.py: threads and comments nested under clubs
- books.py: Google Books search gateway
- identity.py: account provider (Firebase or in-memory)
- security.py: bearer token signing and verification
"""
