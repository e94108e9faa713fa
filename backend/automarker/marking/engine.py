"""Deterministic prompt-structure marker.

``mark_response`` is total: any input (``None``, non-strings, huge strings)
yields exactly one ``FeedbackResult``. Nothing here does I/O or reads
process-wide state; configuration and content arrive as arguments.
"""
from __future__ import annotations
import re
from typing import Any, Iterable, List, Optional

from ..content import ExerciseContent
from ..models import ELEMENTS, ElementPresence, FeedbackResult, GridRow, Tag
from .rules import ElementRule, MarkingConfig, DEFAULT_RULES


def _as_text(value: Any) -> str:
	return value if isinstance(value, str) else ""


# Whitespace that separates words; unlike str.split() this excludes the \x1c-\x1f and \x85 separators
_WHITESPACE = re.compile(r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+")


def word_count(text: Any) -> int:
	return sum(1 for token in _WHITESPACE.split(_as_text(text)) if token)


def detect_elements(text: Any, rules: Iterable[ElementRule] = DEFAULT_RULES) -> ElementPresence:
	lowered = _as_text(text).lower()
	found = {rule.element: rule.matches(lowered) for rule in rules}
	return ElementPresence(
		role=found.get("Role", False),
		task=found.get("Task", False),
		context=found.get("Context", False),
		format=found.get("Format", False),
	)


def _clarity_status(present_count: int) -> str:
	if present_count == len(ELEMENTS):
		return "ok"
	if present_count >= 2:
		return "developing"
	return "bad"


def _strengths(presence: ElementPresence, config: MarkingConfig) -> List[str]:
	flags = presence.as_dict()
	out = [rule.strength for rule in config.rules if flags.get(rule.element)]
	if len(out) < 2:
		out.append(config.fallback_strength)
	return out[: config.max_strengths]


def compose_feedback(
	presence: ElementPresence,
	config: MarkingConfig,
	*,
	words: int,
	content: Optional[ExerciseContent] = None,
) -> FeedbackResult:
	"""Score an ungated answer from its element flags."""
	present = presence.present_count
	flags = presence.as_dict()

	tags: List[Tag] = []
	grid: List[GridRow] = []
	for rule in config.rules:
		ok = flags.get(rule.element, False)
		tags.append(Tag(label=rule.element, status="ok" if ok else "bad"))
		grid.append(GridRow(
			label=rule.element,
			status=config.secure_status if ok else config.missing_status,
			detail=rule.present_detail if ok else rule.missing_detail,
		))
	if config.clarity:
		status = _clarity_status(present)
		tags.append(Tag(label="Clarity", status=status))
		grid.append(GridRow(
			label="Clarity",
			status={"ok": config.secure_status, "developing": "~ Developing", "bad": config.missing_status}[status],
			detail=config.clarity_details[status],
		))

	return FeedbackResult(
		gated=False,
		word_count=words,
		message=config.rubric.for_count(present, len(ELEMENTS)),
		score=config.scores.score_for(present),
		present_count=present,
		strengths=_strengths(presence, config),
		tags=tags,
		grid=grid,
		learn_more_text=content.learn_more_text if content else None,
		model_answer=content.model_answer if content else None,
	)


def gated_result(words: int, config: MarkingConfig) -> FeedbackResult:
	return FeedbackResult(gated=True, word_count=words, message=config.gate_message())


def mark_response(answer_text: Any, config: MarkingConfig, content: Optional[ExerciseContent] = None) -> FeedbackResult:
	words = word_count(answer_text)
	# Hard gate: short answers get no rubric data at all
	if words < config.min_words:
		return gated_result(words, config)
	presence = detect_elements(answer_text, config.rules)
	return compose_feedback(presence, config, words=words, content=content)
