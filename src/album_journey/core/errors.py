"""Error taxonomy shared by the progression engine, the clock and the API."""

from fastapi import status


class JourneyError(RuntimeError):
    """Base exception for rejected journey operations.

    Every subclass carries the HTTP status the API answers with; raising one
    guarantees that nothing was written.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR


class ValidationError(JourneyError):
    """Raised for malformed input such as out-of-range stars."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(JourneyError):
    """Raised when a required album or user does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class NotYetAllowedError(JourneyError):
    """Raised when an action violates the progression rule.

    Rating today's album, or any album the clock has not released yet, ends
    up here.
    """

    status_code = status.HTTP_403_FORBIDDEN


class SystemNotInitializedError(JourneyError):
    """Raised when the global state row is missing.

    This is a deployment defect; users cannot correct it.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class CatalogGapError(JourneyError):
    """Raised when the clock finds no album at the position it must release.

    The album catalog must be densely packed from position 1; a gap means the
    catalog data is malformed and an operator has to fix it.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
