"""Shared dependencies for API routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import Header, HTTPException, status

_BEARER_PREFIX = "bearer "


def get_current_username(
    authorization: Annotated[
        str | None,
        Header(description="Bearer credential. The token is taken as the username."),
    ] = None,
    x_username: Annotated[
        str | None,
        Header(description="Current username, used when no bearer credential is sent."),
    ] = None,
) -> str:
    """Get the current username from request context.

    NOTE: The bearer token is treated as the username itself. Credential
    issuing and verification belong to the surrounding deployment.

    Raises:
        HTTPException: If authentication is missing (401).
    """
    if authorization and authorization.lower().startswith(_BEARER_PREFIX):
        token = authorization[len(_BEARER_PREFIX) :].strip()
        if token:
            return token
    if x_username:
        return x_username
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Missing authentication. Provide a bearer token or X-Username header.",
    )
