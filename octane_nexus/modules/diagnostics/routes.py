from fastapi import APIRouter
from octane_nexus.config import settings

router = APIRouter(tags=["diagnostics"])


@router.get("/debug-env")
async def debug_env():
    """Whether the API keys are loaded. Never returns key material."""
    openai_key = settings.openai_api_key or ""
    return {
        "status": "Check",
        "keyLoaded": bool(openai_key),
        "keyLength": len(openai_key),
        "geminiKeyLoaded": bool(settings.gemini_api_key),
    }
