"""Access guard for protected routes."""
import uuid
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from .auth import auth_service
from .exceptions import UnauthorizedError
from .logging import SecurityLogger

TOKEN_HEADER = "x-auth-token"

# Security scheme
token_header = APIKeyHeader(name=TOKEN_HEADER, auto_error=False)


async def get_current_user_id(
    request: Request,
    token: Optional[str] = Depends(token_header),
) -> uuid.UUID:
    """Resolve the request's token to the id of the user it was issued for.

    Task routes take the owner id from here and never from the request body.
    """
    client_ip = request.client.host if request.client else None

    if not token:
        SecurityLogger.log_unauthorized_access(
            path=request.url.path,
            method=request.method,
            ip_address=client_ip,
            reason="missing_token"
        )
        raise UnauthorizedError("No token, authorization denied")

    try:
        return auth_service.verify_token(token)
    except UnauthorizedError as e:
        SecurityLogger.log_unauthorized_access(
            path=request.url.path,
            method=request.method,
            ip_address=client_ip,
            reason=e.error_code
        )
        raise
