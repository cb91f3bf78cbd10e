"""
API Router configuration.

Aggregates the auth and user endpoints plus an endpoint catalogue.
"""

from fastapi import APIRouter, Request

from jwtpizza.api.v1.endpoints import auth, users

api_router = APIRouter()

# Authentication (register/login are open; the rest need a bearer token)
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

# Current user
api_router.include_router(
    users.router,
    prefix="/user",
    tags=["users"]
)


@api_router.get("/docs", tags=["docs"])
async def endpoint_catalogue(request: Request):
    """List the service's endpoints with curl examples."""
    return {
        "version": request.app.version,
        "endpoints": [*auth.ENDPOINTS, *users.ENDPOINTS],
    }
