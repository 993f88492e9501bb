"""API v1 main router - aggregates all domain routers."""

from fastapi import APIRouter

from app.api.v1.endpoints import itinerary, share, upload, users

api_router = APIRouter()

# Include itinerary endpoints
api_router.include_router(
    itinerary.router,
    prefix="/itineraries",
    tags=["Itineraries"],
)

# Include share image endpoints
api_router.include_router(
    share.router,
    prefix="/share",
    tags=["Share"],
)

# Include cover upload endpoints
api_router.include_router(
    upload.router,
    prefix="/upload",
    tags=["Upload"],
)

# Include user profile endpoints
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
)
