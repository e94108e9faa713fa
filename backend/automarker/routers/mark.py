from __future__ import annotations
from typing import Any
import logging

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from ..gemini_client import GeminiClient
from ..marking.engine import mark_response
from ..marking.llm import LLMMarker
from ..settings import Settings, get_settings
from .auth import clamp_text, require_session


router = APIRouter(prefix="/api", tags=["marking"])

logger = logging.getLogger(__name__)


class MarkRequest(BaseModel):
	answer: Any = None


def _llm_marker(request: Request, settings: Settings) -> LLMMarker:
	marker = getattr(request.app.state, "llm_marker", None)
	if marker is None:
		marker = LLMMarker(
			lambda: GeminiClient(settings),
			request.app.state.marking_config,
			request.app.state.content,
		)
		request.app.state.llm_marker = marker
	return marker


@router.post("/mark", dependencies=[Depends(require_session)])
async def mark(req: MarkRequest, request: Request, settings: Settings = Depends(get_settings)):
	answer_text = clamp_text(req.answer, settings.max_answer_chars)
	config = request.app.state.marking_config
	if settings.marking_strategy == "llm":
		result = await _llm_marker(request, settings).mark(answer_text)
	else:
		result = mark_response(answer_text, config, request.app.state.content)
	logger.debug(f"Marked answer: gated={result.gated} words={result.word_count} score={result.score}")
	return {"ok": True, "result": result.to_payload()}
