from fastapi import APIRouter

from src.teamkick.api.v1 import auth, claims, teams

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(teams.router)
api_router.include_router(claims.router)
