from __future__ import annotations
import secrets
from typing import Literal

from fastapi import Request

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field

from .marking.rules import MarkingConfig, get_preset


class Settings(BaseSettings):
	# Session gate
	access_code: str = Field(default="ROME-PROMPT-01", validation_alias="ACCESS_CODE")
	# Random per process when unset, so sessions do not survive a restart
	cookie_secret: str = Field(default_factory=lambda: secrets.token_hex(32), validation_alias="COOKIE_SECRET")
	session_minutes: int = Field(default=60, validation_alias="SESSION_MINUTES")
	cookie_secure: bool = Field(default=True, validation_alias="COOKIE_SECURE")
	jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")

	# Links shown around the exercise; BACK_URL is the older name
	course_back_url: str = Field(default="", validation_alias=AliasChoices("COURSE_BACK_URL", "BACK_URL"))
	next_lesson_url: str = Field(default="", validation_alias="NEXT_LESSON_URL")

	# Marking: preset name plus optional threshold overrides
	marking_preset: str = Field(default="lightweight", validation_alias="MARKING_PRESET")
	# "rules" (deterministic) or "llm" (external language model)
	marking_strategy: Literal["rules", "llm"] = Field(default="rules", validation_alias="MARKING_STRATEGY")
	min_words: int | None = Field(default=None, validation_alias="MIN_WORDS")
	max_words: int | None = Field(default=None, validation_alias="MAX_WORDS")
	max_answer_chars: int = Field(default=6000, validation_alias="MAX_ANSWER_CHARS")

	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	gemini_model: str = Field(default="gemini-2.5-flash-lite", validation_alias="GEMINI_MODEL")
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")

	# OpenRouter fallback configuration (optional)
	openrouter_api_key: str | None = Field(default=None, validation_alias="OPENROUTER_API_KEY")
	openrouter_model: str = Field(default="x-ai/grok-4-fast:free", validation_alias="OPENROUTER_MODEL")
	openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1/chat/completions", validation_alias="OPENROUTER_BASE_URL")
	openrouter_referer: str = Field(default="https://localhost", validation_alias="OPENROUTER_HTTP_REFERER")
	openrouter_title: str = Field(default="FEthink Prompting Automarker", validation_alias="OPENROUTER_TITLE")
	llm_timeout_seconds: float = Field(default=30.0, validation_alias="LLM_TIMEOUT_SECONDS")

	# Server
	cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	host: str = Field(default="0.0.0.0", validation_alias="HOST")
	port: int = Field(default=3000, validation_alias="PORT")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

	def marking_config(self) -> MarkingConfig:
		return get_preset(self.marking_preset).with_thresholds(self.min_words, self.max_words)

	@property
	def cors_origin_list(self) -> list[str]:
		return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

	@property
	def llm_configured(self) -> bool:
		return bool(self.gemini_api_key or self.openrouter_api_key)


def get_settings(request: Request) -> Settings:
	return request.app.state.settings
