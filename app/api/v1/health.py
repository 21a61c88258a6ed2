"""Health check endpoint with database connectivity and signing-secret checks."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_token_issuer
from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.core.security import TokenIssuer
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> HealthResponse:
    """
    Return service health status, database connectivity and whether token
    signing is configured. Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    signing = "missing_secrets" if issuer.missing_secrets() else "configured"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
        token_signing=signing,
    )
