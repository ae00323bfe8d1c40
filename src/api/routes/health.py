"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from adapter.mongodb.connection import ping

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(request: Request):
    """Health check endpoint with credential store status."""
    client = getattr(request.app.state, 'mongo_client', None)
    healthy = ping(client)

    health_status = {
        "status": "healthy" if healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {
            "mongodb": {
                "status": "healthy" if healthy else "unhealthy",
                "message": "Connection successful" if healthy else "Connection failed or not configured",
            }
        },
    }

    return JSONResponse(
        content=health_status,
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
