"""FastAPI application entrypoint. No business logic; only wiring, middleware and error translation."""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.errors import AppError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Assessment Platform API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Translate a domain error to its status code; server faults are logged as incidents."""
    log_extra = {
        "error_name": exc.name,
        "status_code": exc.status_code,
        "path": request.url.path,
    }
    if exc.is_operational:
        logger.info("Request failed: %s", exc.message, extra=log_extra)
    else:
        logger.error("Request failed: %s", exc.message, extra=log_extra, exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"name": exc.name, "detail": exc.message},
    )


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Assessment Platform API"}
