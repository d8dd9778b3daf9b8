"""API Router"""

from fastapi import APIRouter

from app.api.endpoints import admissions, dashboard, users

api_router = APIRouter()

api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(admissions.router, prefix="/admissions", tags=["Admissions"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
