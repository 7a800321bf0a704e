import logging
import os
from collections.abc import Awaitable, Callable

from dotenv import find_dotenv, load_dotenv
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from portfolio.database import Base, engine
from portfolio.errors import InternalError, PortfolioError
from portfolio.routers.city_sets import router as city_sets_router
from portfolio.routers.login import router as login_router
from portfolio.routers.photos import router as photos_router

load_dotenv(find_dotenv(usecwd=True))

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper(), format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Ensure database tables exist
Base.metadata.create_all(bind=engine)


class PortfolioErrorMiddleware(BaseHTTPMiddleware):
    """Convert service errors raised by the routes into JSON error responses.
    Internal errors keep their generic message; the cause was already logged
    where it was raised."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except PortfolioError as exc:
            if isinstance(exc, InternalError):
                logger.error("%s %s failed: %s", request.method, request.url.path, exc)
            return JSONResponse(
                status_code=exc.status_code,
                content={"detail": exc.detail},
            )


app = FastAPI(title="Photography Portfolio API")

app.add_middleware(PortfolioErrorMiddleware)

app.include_router(photos_router)
app.include_router(city_sets_router)
app.include_router(login_router)

# Reminder: JWT_SECRET_KEY and OWNER_PASSWORD must be set for authenticated routes

__all__ = ["app"]
