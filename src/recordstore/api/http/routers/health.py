"""Health check endpoints."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from recordstore.api.http.app_data import ApplicationDependencies
from recordstore.api.http.deps import get_app_dependencies

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health() -> dict[str, str]:
    """Liveness probe: 200 while the process is running."""
    return {"status": "healthy", "service": "recordstore"}


@router.get("/ready", response_model=None)
def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 503 when the database is unreachable."""
    db = app_deps.database_service
    db_healthy = db.health_check()
    body = {
        "status": "ready" if db_healthy else "not_ready",
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": db.config.backend,
            }
        },
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
