"""
Custom exception classes for the application.

This module defines a hierarchy of custom exceptions used throughout the
application. All exceptions inherit from QopikunError, allowing catch-all
exception handling while maintaining specific error types for better error
messages and debugging.

Exception hierarchy:
- QopikunError (base)
  - ValidationError (validation failures)
    - ToleranceError (tolerance specification issues)
  - UserNotFoundError (user not found in database)
  - ReportNotFoundError (inspection report not found in database)
  - DatabaseError (database operation failures)
  - MalformedDraftError (cached draft could not be parsed)
  - ImageGenerationError (GD&T image service failures)
  - SessionError (inspection session rule violations)
    - PermissionDeniedError (role may not perform the action)
    - InspectionLockedError (inspection already complete)
    - SessionClosedError (session already closed)
"""


class QopikunError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions should inherit from this class. This allows:
    - Catch-all exception handling (catch QopikunError)
    - Type checking and error categorization
    - Consistent error handling patterns

    Don't raise this directly - use more specific exceptions instead.
    """
    pass


class ValidationError(QopikunError):
    """
    Raised when validation fails.

    Base class for all validation-related errors. Used for model validation
    failures and rejected parameter updates (e.g. attempts to author a
    derived field such as utl directly).
    """
    pass


class ToleranceError(ValidationError):
    """
    Raised when a tolerance specification is invalid.

    Used for unknown tolerance types and negative tolerance magnitudes.
    Tolerance magnitudes are non-negative; the direction of the band is
    expressed by the tolerance type, never by the sign of the value.
    """
    pass


class UserNotFoundError(QopikunError):
    """
    Raised when a user is not found.

    Raised by the user repository when updating or deleting a user that
    doesn't exist. Lookups return None instead.
    """
    pass


class ReportNotFoundError(QopikunError):
    """
    Raised when an inspection report is not found.

    Raised by the inspection repository when updating or deleting a report
    that doesn't exist. Opening a session for an unknown report is not an
    error; it resolves to None.
    """
    pass


class DatabaseError(QopikunError):
    """
    Raised when a database operation fails.

    Wraps SQLite errors and provides application-specific context. Typically
    raised by repositories when database operations (insert, update, delete)
    fail due to database constraints or connection issues, or when a stored
    row can't be converted back into a model.
    """
    pass


class MalformedDraftError(QopikunError):
    """
    Raised when a cached draft can't be parsed into an inspection report.

    Recoverable: the draft service reports it and falls back to the
    canonical report, so the session continues.
    """
    pass


class ImageGenerationError(QopikunError):
    """
    Raised when the GD&T image generator fails.

    Recoverable: by the time this is raised the parameter's gdt_image has
    already been reset to absent, so the user can simply retry.
    """
    pass


class SessionError(QopikunError):
    """Base class for inspection session rule violations."""
    pass


class PermissionDeniedError(SessionError):
    """Raised when the session's role may not perform an action."""
    pass


class InspectionLockedError(SessionError):
    """Raised when a mutation is attempted on a completed inspection."""
    pass


class SessionClosedError(SessionError):
    """Raised when an operation is attempted on a closed session."""
    pass
