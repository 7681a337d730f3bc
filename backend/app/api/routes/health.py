# backend/app/api/routes/health.py
from fastapi import APIRouter

from app.core.config import settings

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Indica si las credenciales están configuradas, sin exponerlas."""
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "model": settings.LLM_MODEL,
        "llm_key_configured": bool(settings.MISTRAL_API_KEY),
        "price_key_configured": bool(settings.LOSPRECIOS_API_KEY),
    }
