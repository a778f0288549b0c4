"""
Core utilities and configuration for the catalog ingestion service.

This package provides foundational components used throughout the pipeline:

Modules:
    config: Application configuration and environment variable management
    database: Async engine, connection pool and session management
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities

Usage:
    from core.config import settings
    from core.database import async_session_maker
    from core.exceptions import FetchError, ParseError, UpsertError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Get database session
    async with async_session_maker() as session:
        # Perform database operations
        pass
"""

__all__ = [
    "settings",
    "async_session_maker",
    "setup_logging",
    # Exceptions
    "IngestionException",
    "ExtractionError",
    "FetchError",
    "NetworkError",
    "AuthenticationError",
    "ResourceNotFoundError",
    "RateLimitError",
    "ParseError",
    "TransformationError",
    "NormalizationError",
    "RoutingError",
    "LoadError",
    "UpsertError",
    "DatabaseError",
]
