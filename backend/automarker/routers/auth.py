from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import hmac
import logging

from fastapi import APIRouter, Depends, Request, Response
from jose import JWTError, jwt
from pydantic import BaseModel

from ..exceptions import ApiError
from ..settings import Settings, get_settings

router = APIRouter(prefix="/api", tags=["session"])

logger = logging.getLogger(__name__)

COOKIE_NAME = "fethink_prompting_session"
MAX_CODE_CHARS = 80


class UnlockRequest(BaseModel):
	code: Any = None


def clamp_text(value: Any, max_chars: int) -> str:
	if not isinstance(value, str):
		return ""
	return value[:max_chars]


def codes_match(supplied: str, expected: str) -> bool:
	if not supplied or not expected:
		return False
	return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def _resolve_expiry(minutes: int) -> datetime:
	now = datetime.now(timezone.utc)
	try:
		return now + timedelta(minutes=minutes)
	except OverflowError:
		return datetime.max.replace(tzinfo=timezone.utc)


def create_session_token(settings: Settings) -> str:
	# The token carries only an expiry; there is no learner identity
	expire = _resolve_expiry(settings.session_minutes)
	return jwt.encode({"exp": expire}, settings.cookie_secret, algorithm=settings.jwt_algorithm)


def session_is_valid(token: Optional[str], settings: Settings) -> bool:
	if not token:
		return False
	try:
		payload = jwt.decode(token, settings.cookie_secret, algorithms=[settings.jwt_algorithm])
	except JWTError:
		return False
	exp = payload.get("exp")
	if not isinstance(exp, (int, float)):
		return False
	return datetime.now(timezone.utc).timestamp() < exp


def require_session(request: Request, settings: Settings = Depends(get_settings)) -> None:
	if not session_is_valid(request.cookies.get(COOKIE_NAME), settings):
		raise ApiError(401, "unauthorized")


@router.post("/unlock")
async def unlock(req: UnlockRequest, response: Response, settings: Settings = Depends(get_settings)):
	code = clamp_text(req.code, MAX_CODE_CHARS).strip()
	if not codes_match(code, settings.access_code):
		logger.info("Rejected unlock attempt")
		raise ApiError(401, "invalid_code")
	response.set_cookie(
		COOKIE_NAME,
		create_session_token(settings),
		max_age=settings.session_minutes * 60,
		httponly=True,
		secure=settings.cookie_secure,
		samesite="lax",
	)
	return {"ok": True}


@router.post("/lock")
async def lock(response: Response):
	response.delete_cookie(COOKIE_NAME)
	return {"ok": True}


@router.get("/session")
async def session_status(request: Request, settings: Settings = Depends(get_settings)):
	return {"ok": True, "unlocked": session_is_valid(request.cookies.get(COOKIE_NAME), settings)}
