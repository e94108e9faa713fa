from __future__ import annotations
from typing import Optional
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AutomarkerError(Exception):
	"""Base exception for automarker errors"""
	def __init__(self, message: str):
		self.message = message
		super().__init__(self.message)


class UnknownPresetError(AutomarkerError):
	"""MARKING_PRESET names no known preset"""
	pass


class MarkingUnavailableError(AutomarkerError):
	"""The external marking service failed or replied with something unusable"""
	pass


class ApiError(Exception):
	"""Error returned to the caller in the {ok: false, error: ...} envelope"""
	def __init__(self, status_code: int, error: str, message: Optional[str] = None):
		self.status_code = status_code
		self.error = error
		self.message = message
		super().__init__(error)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
	body = {"ok": False, "error": exc.error}
	if exc.message:
		body["message"] = exc.message
	return JSONResponse(status_code=exc.status_code, content=body)


async def marking_unavailable_handler(request: Request, exc: MarkingUnavailableError) -> JSONResponse:
	logger.warning(f"Marking unavailable: {exc.message}")
	return JSONResponse(
		status_code=502,
		content={
			"ok": False,
			"error": "marking_unavailable",
			"message": "We could not mark this response. Please try again.",
		},
	)
