from fastapi import APIRouter

from app.features.contact.routes import router as contact_router
from app.features.health.routes import router as health_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(contact_router, tags=["contact"])
