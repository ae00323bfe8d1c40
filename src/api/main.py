"""FastAPI application entry point."""

import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adapter.mongodb.connection import close_client, open_client
from adapter.mongodb.indexes import ensure_all_indexes
from api.routes import auth, health
from api.settings import get_settings
from domain.model.errors import StoreUnavailableError
from utils.logging import setup_structured_logging

setup_structured_logging()

logger = logging.getLogger(__name__)

_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Account Service API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the MongoDB client at startup and close it at shutdown."""
    settings = get_settings()
    if not settings.jwt_secret_key:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )

    try:
        client = open_client(settings.mongo_url)
    except StoreUnavailableError:
        logger.warning("MongoDB unavailable, auth endpoints will answer 503")
        client = None

    if client is not None:
        if ensure_all_indexes(client[settings.database_name]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")

    app.state.mongo_client = client
    try:
        yield
    finally:
        close_client(client)
        app.state.mongo_client = None


app = FastAPI(
    title=SERVICE_NAME,
    description="Sign-up and sign-in for email/password accounts",
    version=VERSION,
    lifespan=lifespan,
)

# Browsers reject credentials with a wildcard origin
cors_origins_env = get_settings().cors_origins
if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Answer unparseable bodies in the same shape as service validation errors."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.setdefault(".".join(loc) or "body", error.get("msg", "Invalid value"))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "Invalid input", "errors": errors},
    )


app.include_router(auth.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=get_settings().port,
        access_log=False,
    )
