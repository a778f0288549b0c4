"""
Custom exceptions for the ingestion pipeline with structured error context.

Every exception carries a context dictionary (source, url, entity, batch
size, ...) so that a skipped page, record or batch can be traced from the
logs alone. None of these errors aborts an ingestion run: each one is scoped
to the unit of work that raised it.

Exception Hierarchy:
    IngestionException (base)
    ├── ExtractionError
    │   ├── FetchError
    │   │   ├── NetworkError
    │   │   ├── AuthenticationError
    │   │   ├── ResourceNotFoundError
    │   │   └── RateLimitError
    │   └── ParseError
    ├── TransformationError
    │   └── NormalizationError
    ├── RoutingError
    └── LoadError
        ├── UpsertError
        └── DatabaseError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class IngestionException(Exception):
    """
    Base exception for all ingestion-related errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (source, url, entity, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Extraction Errors
# ============================================================================

class ExtractionError(IngestionException):
    """Base exception for failures while talking to a source API."""
    pass


class FetchError(ExtractionError):
    """
    A request for one page or one ID did not produce a usable response.

    Context should include:
        - source_name: Source the request was made for
        - url: The endpoint that failed
        - status_code: HTTP status code (if a response was received)
        - response_body: Response body (truncated)
    """
    pass


class NetworkError(FetchError):
    """Transport failure or timeout before a response was received."""
    pass


class AuthenticationError(FetchError):
    """Source rejected the credentials (HTTP 401, 403)."""
    pass


class ResourceNotFoundError(FetchError):
    """Source has no such page or ID (HTTP 404)."""
    pass


class RateLimitError(FetchError):
    """
    Source answered HTTP 429.

    The pipeline does not retry; ``retry_after`` is kept for the logs.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        retry_after: Optional[int] = None
    ):
        super().__init__(message, context, original_exception)
        self.retry_after = retry_after
        if retry_after:
            self.context["retry_after"] = retry_after


class ParseError(ExtractionError):
    """
    Response body is not valid JSON or does not have the expected shape.

    Context should include:
        - source_name: Source the payload came from
        - url: The endpoint that returned it
        - response_body: Response body (truncated)
    """
    pass


# ============================================================================
# Transformation Errors
# ============================================================================

class TransformationError(IngestionException):
    """Base exception for data transformation failures."""
    pass


class NormalizationError(TransformationError):
    """
    A single root record could not be decomposed into rows.

    Context should include:
        - source_name: Source of the record
        - record_id: ID of the record (if present)
    """
    pass


# ============================================================================
# Routing Errors
# ============================================================================

class RoutingError(IngestionException):
    """A row was routed to an unknown or already closed entity queue."""
    pass


# ============================================================================
# Load Errors
# ============================================================================

class LoadError(IngestionException):
    """Base exception for data loading failures."""
    pass


class UpsertError(LoadError):
    """
    Exception raised when one batch transaction fails.

    Context should include:
        - table_name: Target table
        - conflict_policy: Policy applied to the batch
        - batch_size: Number of rows in the failed batch
    """
    pass


class DatabaseError(LoadError):
    """
    Exception raised when run bookkeeping fails.

    Context should include:
        - operation: Type of database operation (INSERT, UPDATE)
        - table_name: Name of the table
    """
    pass
