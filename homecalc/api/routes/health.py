"""Health Probe: liveness endpoint for container orchestration."""

from fastapi import APIRouter, status

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Returns 200 if the process is up."""
    return {"status": "healthy", "service": "homecalc-ai", "version": "1.0.0"}
