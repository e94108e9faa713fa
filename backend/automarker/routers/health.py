from fastapi import APIRouter, Depends, Request

from ..settings import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
	return {"status": "ok"}


@router.get("/info")
def info(request: Request, settings: Settings = Depends(get_settings)):
	return {
		"status": "ok",
		"preset": request.app.state.marking_config.name,
		"strategy": settings.marking_strategy,
		"llm_configured": settings.llm_configured,
	}
