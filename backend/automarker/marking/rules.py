"""Marking configuration: trigger tables, score tables and the named presets.

Everything the engine decides on lives here as data. The engine itself only
walks these tables, so a new exercise or a stricter deployment is a new
preset rather than a code change.
"""
from __future__ import annotations
import re
from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import UnknownPresetError


TRIGGER_TABLE_VERSION = "2024.1"


class ElementRule(BaseModel):
	"""Evidence for one structural element: an explicit label or any trigger phrase."""

	element: Literal["Role", "Task", "Context", "Format"]
	label: str
	triggers: Tuple[str, ...]
	strength: str
	present_detail: str
	missing_detail: str

	model_config = ConfigDict(frozen=True)

	def matches(self, lowered: str) -> bool:
		if re.search(rf"\b{re.escape(self.label)}\s*:", lowered):
			return True
		return any(t in lowered for t in self.triggers)


DEFAULT_RULES: Tuple[ElementRule, ...] = (
	ElementRule(
		element="Role",
		label="role",
		triggers=("you are a", "act as", "as a "),
		strength="You clearly set a role for the AI.",
		present_detail="Role is present.",
		missing_detail="Add a role (e.g., tour guide / travel planner).",
	),
	ElementRule(
		element="Task",
		label="task",
		triggers=("give me", "create", "produce", "generate", "write", "build", "plan"),
		strength="You specify what you want the AI to do.",
		present_detail="Task is present.",
		missing_detail="State what you want AI to produce.",
	),
	ElementRule(
		element="Context",
		label="context",
		triggers=(
			"i am", "we are", "for me", "for a", "audience", "visitor",
			"first time", "rome", "june", "hotel",
		),
		strength="You include context about who/what the plan is for.",
		present_detail="Context is present.",
		missing_detail="Add who it’s for / when / where / constraints.",
	),
	ElementRule(
		element="Format",
		label="format",
		triggers=(
			"bullet", "table", "include", "ensure", "constraints", "tone",
			"structure", "distance", "fees", "costs", "how long",
		),
		strength="You set useful formatting constraints for the output.",
		present_detail="Format constraints are present.",
		missing_detail="Add format details (bullets, costs, distances, timing, tone).",
	),
)


class ScoreTable(BaseModel):
	# (min_present, score) checked top-down; the first band reached wins
	bands: Tuple[Tuple[int, int], ...]
	floor: int

	model_config = ConfigDict(frozen=True)

	def score_for(self, present_count: int) -> int:
		for min_present, score in self.bands:
			if present_count >= min_present:
				return score
		return self.floor


STEPPED_SCORES = ScoreTable(bands=((4, 10), (3, 8), (2, 6)), floor=4)
BANDED_SCORES = ScoreTable(bands=((4, 10), (2, 7)), floor=3)


class RubricMessages(BaseModel):
	excellent: str = "Excellent – you’ve followed the prompt formula."
	good: str = "Good – try adding audience or tone to strengthen further."
	needs_improvement: str = "Needs improvement – use the formula: role, task, context, format."

	model_config = ConfigDict(frozen=True)

	def for_count(self, present_count: int, total: int) -> str:
		if present_count == total:
			return self.excellent
		if present_count >= 2:
			return self.good
		return self.needs_improvement


class MarkingConfig(BaseModel):
	name: str
	min_words: int = 20
	max_words: int = 200
	rules: Tuple[ElementRule, ...] = DEFAULT_RULES
	scores: ScoreTable = STEPPED_SCORES
	rubric: RubricMessages = Field(default_factory=RubricMessages)
	max_strengths: int = 3
	fallback_strength: str = "You’ve started shaping the prompt — add the missing stages for more control."
	secure_status: str = "✓ Secure"
	missing_status: str = "✗ Missing"
	# Adds an auxiliary "Clarity" tag/grid row with an ok/developing/bad status
	clarity: bool = False
	clarity_details: Dict[str, str] = Field(
		default_factory=lambda: {
			"ok": "All four stages are clear.",
			"developing": "Some stages are clear; add the missing ones.",
			"bad": "The prompt structure is not yet clear.",
		}
	)

	model_config = ConfigDict(frozen=True)

	@property
	def target_words(self) -> str:
		return f"{self.min_words}–{self.max_words}"

	def gate_message(self) -> str:
		return (
			"Please add to your answer.\n"
			"This response is too short to demonstrate the full prompt structure.\n"
			f"Aim for at least {self.min_words} words and include: role, task, context, and format."
		)

	def with_thresholds(self, min_words: int | None = None, max_words: int | None = None) -> "MarkingConfig":
		update = {}
		if min_words is not None:
			update["min_words"] = min_words
		if max_words is not None:
			update["max_words"] = max_words
		return self.model_copy(update=update) if update else self


PRESETS: Dict[str, MarkingConfig] = {
	"lightweight": MarkingConfig(name="lightweight", min_words=20, scores=STEPPED_SCORES),
	"standard": MarkingConfig(name="standard", min_words=50, scores=STEPPED_SCORES, clarity=True),
	"strict": MarkingConfig(name="strict", min_words=50, scores=BANDED_SCORES, clarity=True),
}


def get_preset(name: str) -> MarkingConfig:
	key = (name or "").strip().lower()
	try:
		return PRESETS[key]
	except KeyError:
		raise UnknownPresetError(f"Unknown marking preset '{name}'. Expected one of {sorted(PRESETS)}") from None


def preset_names() -> List[str]:
	return sorted(PRESETS)
