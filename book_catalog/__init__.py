"""
Book Catalog Application Package

A small server-rendered web application for managing a catalog of books.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: Database gateway (engine, connection pool, sessions)
- exceptions.py: Error taxonomy shared by every layer
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM entities
- repositories/: Data access (one statement per operation)
- schemas/: Pydantic request parameter structures
- services/: Request handling and session notices
- routers/: HTTP route handlers
- views.py + templates/: HTML presentation
"""

__version__ = "0.1.0"
