# journey/routes/__init__.py
from fastapi import APIRouter
from journey.routes.trip import trip_routes, participant_routes, activity_routes, link_routes


api_router = APIRouter()

# Trip routes
api_router.include_router(trip_routes.router)
api_router.include_router(activity_routes.router)
api_router.include_router(link_routes.router)

# Participant routes
api_router.include_router(participant_routes.router)
api_router.include_router(participant_routes.trip_participants_router)
