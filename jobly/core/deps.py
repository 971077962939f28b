"""
FastAPI dependencies for authentication and authorization.

get_principal runs for every request and never fails; the require_*
guards decide whether the request may proceed.
"""

import logging
from typing import Optional
from fastapi import Depends, Request

from jobly.core.errors import UnauthorizedError
from jobly.core.security import Principal, TokenAuthenticator

logger = logging.getLogger(__name__)


def get_authenticator(request: Request) -> TokenAuthenticator:
    """The authenticator built for this application (see main.create_app)."""
    return request.app.state.authenticator


def get_principal(
    request: Request,
    authenticator: TokenAuthenticator = Depends(get_authenticator),
) -> Optional[Principal]:
    """
    Decode the optional bearer token into a Principal.

    Returns None when no token was sent or it failed verification.
    """
    principal = authenticator.authenticate(request.headers.get("authorization"))
    request.state.principal = principal
    return principal


def require_logged_in(principal: Optional[Principal] = Depends(get_principal)) -> Principal:
    """
    Require any authenticated principal.

    Raises:
        UnauthorizedError 401: If the request carries no valid token
    """
    if principal is None:
        raise UnauthorizedError()
    return principal


def require_admin(principal: Optional[Principal] = Depends(get_principal)) -> Principal:
    """
    Require an authenticated admin.

    Raises:
        UnauthorizedError 401: If not logged in, or logged in without admin rights
    """
    if principal is None or not principal.is_admin:
        if principal is not None:
            logger.warning(f"Non-admin user {principal.username} rejected from admin route")
        raise UnauthorizedError()
    return principal


def require_self_or_admin(
    username: str,
    principal: Optional[Principal] = Depends(get_principal),
) -> Principal:
    """
    Require an admin, or the user named by the ``username`` path parameter.

    Raises:
        UnauthorizedError 401: Otherwise
    """
    if principal is None:
        raise UnauthorizedError()
    if principal.is_admin or principal.username == username:
        return principal
    logger.warning(f"User {principal.username} rejected from route for user {username}")
    raise UnauthorizedError()
