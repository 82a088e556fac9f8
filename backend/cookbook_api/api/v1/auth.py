"""
Registration and login.

    POST /auth/register  -> 201, the new profile
    POST /auth/login     -> {"access_token", "token_type"}

Neither endpoint needs a token.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from cookbook_api.core.exceptions import ServiceError
from cookbook_api.db.session import get_db
from cookbook_api.schemas.user import LoginRequest, Token, UserCreate, UserResponse
from cookbook_api.services import user_service
from cookbook_api.services.error_logging import error_logger


auth_logger = logging.getLogger("auth")

# Mounted at /api/v1/auth
router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    responses={
        400: {"description": "Malformed email, short password or missing name"},
        409: {"description": "An account with this email already exists"},
    }
)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Create an account with the `user` role.

    The password is stored as a bcrypt hash and never echoed back.
    """
    return user_service.create_user(db, user_data)


@router.post(
    "/login",
    response_model=Token,
    summary="Login user",
    responses={
        400: {"description": "Password is not correct"},
        404: {"description": "User wasn't found"},
    }
)
def login(credentials: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """
    Exchange email and password for a bearer token.

    Every attempt is logged on the "auth" logger; failures are also
    reported to the error logger at warning severity before the
    service error is re-raised to the exception handlers.
    """
    client_ip = request.client.host if request.client else "unknown"
    auth_logger.info(f"LOGIN_ATTEMPT | email={credentials.email} | ip={client_ip}")

    try:
        token = user_service.login(db, credentials.email, credentials.password)
    except ServiceError as exc:
        auth_logger.warning(
            f"LOGIN_FAILED | email={credentials.email} | ip={client_ip} | reason={exc.message}"
        )
        error_logger.log_error(
            exc,
            request=request,
            severity="warning",
            context={"email": credentials.email, "reason": exc.message},
        )
        raise

    auth_logger.info(f"LOGIN_SUCCESS | email={credentials.email} | ip={client_ip}")
    return token
