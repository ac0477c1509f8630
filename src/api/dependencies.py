"""FastAPI dependencies for authentication and services."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.exceptions import MissingTokenError, TokenError, UnauthorizedError
from src.services.accounts import AccountService
from src.services.tokens import TokenService

logger = logging.getLogger(__name__)

# auto_error=False so a missing header reaches get_current_user_id as None
security = HTTPBearer(auto_error=False)


def get_token_service(settings: Annotated[Settings, Depends(get_settings)]) -> TokenService:
    """Get token service instance."""
    return TokenService(settings)


def get_account_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AccountService:
    """Get account service with dependencies."""
    return AccountService(db, settings, tokens=tokens)


def get_current_user_id(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> str:
    """Verify the bearer token and attach the user id to the request."""
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()

    try:
        user_id = tokens.verify(credentials.credentials)
    except TokenError as e:
        # Signature and expiry failures look the same to the client
        logger.info(f"Rejected bearer token on {request.url.path}: {e.kind.value}")
        raise UnauthorizedError() from e

    request.state.user_id = user_id
    return user_id
