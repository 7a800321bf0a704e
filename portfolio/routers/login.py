import hmac
import logging
import os

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from portfolio.schemas import LoginRequest, TokenResponse
from portfolio.utils.jwt import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", summary="Login", response_model=TokenResponse)
async def login(body: LoginRequest) -> TokenResponse | JSONResponse:
    """
    Authenticate the portfolio owner by password and return a JWT access token.
    """
    owner_password = os.getenv("OWNER_PASSWORD")
    if owner_password and hmac.compare_digest(
        body.password.encode(), owner_password.encode()
    ):
        return TokenResponse(access_token=create_access_token("owner"))
    logger.warning("Rejected login attempt")
    return JSONResponse(
        {"detail": "Invalid password"},
        status_code=status.HTTP_401_UNAUTHORIZED,
    )
