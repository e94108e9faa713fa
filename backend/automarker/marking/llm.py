from __future__ import annotations
import json
import logging
import re
from typing import Any, Callable, Dict, Optional, Protocol

from ..content import ExerciseContent
from ..exceptions import MarkingUnavailableError
from ..models import ElementPresence, FeedbackResult
from .engine import compose_feedback, gated_result, word_count
from .rules import MarkingConfig

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
	async def generate(self, prompt: str) -> str: ...

	async def aclose(self) -> None: ...


def _build_marking_prompt(text: str, content: ExerciseContent) -> str:
	return (
		"You are marking a short exercise on writing prompts for AI tools.\n"
		"A strong prompt has four stages:\n"
		"- role: tells the AI who the user is or what role it should adopt\n"
		"- task: says what the AI should do or produce\n"
		"- context: says who the content is for, when, where, or other background\n"
		"- format: says how to present the answer (structure, tone, specific information required)\n\n"
		f"Exercise given to the learner:\n{content.question_text}\n\n"
		"Decide for each stage whether the learner's prompt includes it. Be generous: partial evidence counts.\n"
		"Return ONLY a JSON object with boolean keys: role, task, context, format.\n\n"
		f"Learner's prompt:\n{text}"
	)


def _extract_json_object(text: str) -> Dict[str, Any]:
	if not isinstance(text, str):
		raise MarkingUnavailableError("Language model returned no text")
	try:
		return json.loads(text)
	except (TypeError, ValueError):
		pass
	code_block = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", text)
	if code_block:
		try:
			return json.loads(code_block.group(1))
		except ValueError:
			pass
	first = text.find("{")
	last = text.rfind("}")
	if first != -1 and last > first:
		try:
			return json.loads(text[first : last + 1])
		except ValueError:
			pass
	raise MarkingUnavailableError("Language model did not return valid JSON")


def _as_flag(value: Any) -> bool:
	if isinstance(value, bool):
		return value
	if isinstance(value, str):
		return value.strip().lower() in ("true", "yes", "present", "1")
	if isinstance(value, (int, float)):
		return value != 0
	return False


def parse_verdict(reply: str) -> ElementPresence:
	data = _extract_json_object(reply)
	if not isinstance(data, dict):
		raise MarkingUnavailableError("Language model reply is not a JSON object")
	lowered = {str(k).strip().lower(): v for k, v in data.items()}
	missing = [k for k in ("role", "task", "context", "format") if k not in lowered]
	if missing:
		raise MarkingUnavailableError(f"Language model reply is missing {', '.join(missing)}")
	return ElementPresence(
		role=_as_flag(lowered["role"]),
		task=_as_flag(lowered["task"]),
		context=_as_flag(lowered["context"]),
		format=_as_flag(lowered["format"]),
	)


class LLMMarker:
	"""Marks answers by asking a language model which stages are present.

	The word-count gate and the feedback composition are shared with the
	deterministic engine; only element detection is delegated.
	"""

	def __init__(
		self,
		client_factory: Callable[[], TextGenerator],
		config: MarkingConfig,
		content: Optional[ExerciseContent] = None,
	) -> None:
		self._client_factory = client_factory
		self.config = config
		self.content = content

	async def mark(self, answer_text: Any) -> FeedbackResult:
		words = word_count(answer_text)
		if words < self.config.min_words:
			return gated_result(words, self.config)
		try:
			client = self._client_factory()
		except ValueError as e:
			raise MarkingUnavailableError(str(e)) from e
		try:
			reply = await client.generate(_build_marking_prompt(answer_text, self.content or ExerciseContent()))
		except Exception as e:
			logger.warning("LLM marking call failed", exc_info=True)
			raise MarkingUnavailableError(f"Language model call failed: {e}") from e
		finally:
			await client.aclose()
		if not isinstance(reply, str) or not reply.strip():
			raise MarkingUnavailableError("Language model returned no text")
		presence = parse_verdict(reply)
		logger.info(f"LLM marking found {presence.present_count} of 4 stages")
		return compose_feedback(presence, self.config, words=words, content=self.content)

