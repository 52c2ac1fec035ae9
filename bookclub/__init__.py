"""
Book Club API Application Package

Package Structure:
- config.py: Application configuration using Pydantic Settings
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- results.py / responses.py: Ok/Err results and the response envelope
- firebase.py: firebase-admin app initialization
- store/: Document store backends (Firestore, in-memory)
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Business logic
"""

__version__ = "1.0.0"
