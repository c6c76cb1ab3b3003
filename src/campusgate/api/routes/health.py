"""
Health check API endpoints.

Used by container probes and load balancers to confirm the gateway is up and
to show which backend resources it fronts.

Endpoints:
- GET /: Root endpoint with basic service info
- GET /health: Gateway status with the configured resources
"""

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/")
async def root(request: Request):
    """
    Root endpoint providing basic service information.

    Example Response:
        {
            "name": "Campus Gateway",
            "version": "0.1.0",
            "status": "operational"
        }
    """
    settings = request.app.state.settings
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "operational"
    }


@router.get("/health")
async def health_check(request: Request):
    """
    Gateway health with the resources the schema was composed from.

    Backends are not probed: the gateway stays healthy while a backend is
    down, and the failure shows up in the ``errors`` of the affected fields.
    """
    settings = request.app.state.settings
    info = request.app.state.gateway.get_health_info()
    info["version"] = settings.app_version
    info["environment"] = settings.environment
    return info
