"""
Local Library Application Package

A server-rendered catalog of authors, genres, books and book copies.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and declarative base
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection aliases
- errors.py: Not-found error and the terminal error handlers
- templating.py: Jinja2 template rendering
- validation.py: Form rule tables (trim, check, escape)
- models/: SQLAlchemy ORM models
- schemas/: Pydantic view models handed to templates
- routers/: Page handlers, one router per record kind
- services/: Catalog queries/writes and the concurrent read helper
- templates/: Jinja2 page templates
- utils/: Helper functions
"""

__version__ = "0.1.0"
