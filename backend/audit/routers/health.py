from fastapi import APIRouter

from ..settings import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
	return {
		"status": "ok",
		"llm_configured": bool(settings.llm_api_key),
		"smtp_configured": bool(settings.smtp_host),
	}
