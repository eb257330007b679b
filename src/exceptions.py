"""Application exceptions surfaced through the HTTP layer.

Hierarchy:
    AppError (base)
    ├── NotFoundError (404)
    ├── ValidationError (400)
    └── PersistenceError (500)

Provider failures live in src.llm.errors and never reach the HTTP layer.
"""


class AppError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404
    error_type = "not_found"


class ValidationError(AppError):
    status_code = 400
    error_type = "validation_error"


class PersistenceError(AppError):
    """A store write or read failed; the request cannot continue."""

    status_code = 500
    error_type = "persistence_error"
