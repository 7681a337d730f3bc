from fastapi import APIRouter

from app.api.routes import health
from app.api.v1 import chat

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(chat.router, tags=["chat"])
