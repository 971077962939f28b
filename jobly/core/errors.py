"""
Typed request failures.

Repositories and auth dependencies raise these; FastAPI's HTTPException
handler turns each into a ``{"detail": ...}`` response with its status code.
"""

from fastapi import HTTPException, status


class BadRequestError(HTTPException):
    """Invalid input: schema violation, bad filter, empty update, duplicate."""

    def __init__(self, detail="Bad Request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NoResultsError(BadRequestError):
    """A valid job filter that matched no rows."""

    def __init__(self, detail="Query returned no results. Please try again."):
        super().__init__(detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail="Not Found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UnauthorizedError(HTTPException):
    def __init__(self, detail="Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )
