from fastapi import APIRouter

from .endpoints.conversation import router as conversation_router
from .endpoints.health import router as health_router

api_router = APIRouter()

api_router.include_router(conversation_router)
api_router.include_router(health_router)
