from fastapi import APIRouter

from app.api.routes import health, milestones, stages, uploads

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(stages.router, prefix="/stages", tags=["stages"])
api_router.include_router(milestones.router, prefix="/milestones", tags=["milestones"])
api_router.include_router(uploads.router, tags=["uploads"])
