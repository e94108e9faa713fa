"""Tests for the Gemini client's response handling and OpenRouter fallback."""
import asyncio

import httpx
import pytest

from automarker.content import ROME_ITINERARY
from automarker.exceptions import MarkingUnavailableError
from automarker.gemini_client import GeminiClient
from automarker.marking.llm import LLMMarker

from conftest import ALL_FOUR, make_settings


def _gemini_ok(request: httpx.Request) -> httpx.Response:
	assert request.url.params["key"] == "g-key"
	return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": '{"role": true}'}]}}]})


def _gemini_down(request: httpx.Request) -> httpx.Response:
	return httpx.Response(503, text="unavailable")


def _openrouter_ok(request: httpx.Request) -> httpx.Response:
	assert request.headers["authorization"] == "Bearer or-key"
	return httpx.Response(200, json={"choices": [{"message": {"content": "from fallback"}}]})


async def _run(client: GeminiClient, prompt: str = "hi") -> str:
	try:
		return await client.generate(prompt)
	finally:
		await client.aclose()


def test_requires_a_key():
	with pytest.raises(ValueError):
		GeminiClient(make_settings())


def test_reads_candidate_text():
	client = GeminiClient(make_settings(gemini_api_key="g-key"))
	client._client = httpx.AsyncClient(transport=httpx.MockTransport(_gemini_ok))
	assert asyncio.run(_run(client)) == '{"role": true}'


def test_http_error_without_fallback():
	client = GeminiClient(make_settings(gemini_api_key="g-key"))
	client._client = httpx.AsyncClient(transport=httpx.MockTransport(_gemini_down))
	with pytest.raises(httpx.HTTPStatusError):
		asyncio.run(_run(client))


def test_falls_back_to_openrouter():
	client = GeminiClient(make_settings(gemini_api_key="g-key", openrouter_api_key="or-key"))
	client._client = httpx.AsyncClient(transport=httpx.MockTransport(_gemini_down))
	client._fallback_client = httpx.AsyncClient(transport=httpx.MockTransport(_openrouter_ok))
	assert asyncio.run(_run(client)) == "from fallback"


def test_openrouter_only():
	client = GeminiClient(make_settings(openrouter_api_key="or-key"))
	client._fallback_client = httpx.AsyncClient(transport=httpx.MockTransport(_openrouter_ok))
	assert asyncio.run(_run(client)) == "from fallback"


def _openrouter_null_content(request: httpx.Request) -> httpx.Response:
	return httpx.Response(200, json={"choices": [{"message": {"content": None}}]})


def test_null_content_reply_is_reported_as_unavailable(lightweight):
	def factory():
		client = GeminiClient(make_settings(openrouter_api_key="or-key"))
		client._fallback_client = httpx.AsyncClient(transport=httpx.MockTransport(_openrouter_null_content))
		return client

	marker = LLMMarker(factory, lightweight, ROME_ITINERARY)
	with pytest.raises(MarkingUnavailableError):
		asyncio.run(marker.mark(ALL_FOUR))
