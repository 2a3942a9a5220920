"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app import __version__
from app.api.v1 import router as v1_router
from app.core.config import settings
from app.services.errors import UserServiceError
from app.services.validation import format_error

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Userbase API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[settings.AUTH_TOKEN_HEADER],
)


@app.exception_handler(UserServiceError)
async def user_service_error_handler(request: Request, exc: UserServiceError) -> PlainTextResponse:
    """Render domain errors as plain-text bodies with their status code."""
    if exc.status_code >= 500:
        logger.error("Request failed: %s %s: %s", request.method, request.url.path, exc.message)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    """Malformed request bodies (e.g. not a JSON object) get a 400 with the first violation."""
    errors = exc.errors()
    message = format_error(_strip_location(errors[0])) if errors else "Invalid request"
    return PlainTextResponse(message, status_code=400)


def _strip_location(error: dict) -> dict:
    # Drop the leading "body"/"path"/"query" segment so messages name the field only.
    loc = tuple(error.get("loc", ()))
    if loc and loc[0] in ("body", "path", "query", "header"):
        loc = loc[1:]
    return {**error, "loc": loc}


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Userbase API"}
