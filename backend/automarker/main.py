from __future__ import annotations
from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import RedirectResponse

from .content import ROME_ITINERARY, ExerciseContent
from .exceptions import ApiError, MarkingUnavailableError, api_error_handler, marking_unavailable_handler
from .settings import Settings
from .routers import auth, config, health, mark

BASE_DIR = Path(__file__).resolve().parents[2]
FRONTEND_DIR = BASE_DIR / "frontend"

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, content: Optional[ExerciseContent] = None) -> FastAPI:
	settings = settings or Settings()
	app = FastAPI(title="FEthink Prompting Automarker")
	# Built once; routes read these from app.state
	app.state.settings = settings
	app.state.marking_config = settings.marking_config()
	app.state.content = content or ROME_ITINERARY

	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.cors_origin_list,
		allow_methods=["*"],
		allow_headers=["*"],
	)
	app.add_exception_handler(ApiError, api_error_handler)
	app.add_exception_handler(MarkingUnavailableError, marking_unavailable_handler)

	app.include_router(health.router)
	app.include_router(auth.router)
	app.include_router(config.router)
	app.include_router(mark.router)

	# Static frontend at /app (absolute path so cwd doesn't matter when launching)
	if FRONTEND_DIR.is_dir():
		app.mount("/app", StaticFiles(directory=FRONTEND_DIR, html=True), name="frontend")

		@app.get("/", include_in_schema=False)
		async def redirect_root_to_app():
			return RedirectResponse(url="/app")

	logger.info(
		f"Automarker configured: preset={app.state.marking_config.name} "
		f"min_words={app.state.marking_config.min_words} strategy={settings.marking_strategy}"
	)
	return app
