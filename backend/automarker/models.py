from __future__ import annotations
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


ELEMENTS = ("Role", "Task", "Context", "Format")

TagStatus = Literal["ok", "developing", "bad"]


class _CamelModel(BaseModel):
	# JSON keys are camelCase (wordCount, modelAnswer, ...) to match the front end
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())


class ElementPresence(BaseModel):
	role: bool = False
	task: bool = False
	context: bool = False
	format: bool = False

	model_config = ConfigDict(frozen=True)

	def as_dict(self) -> dict[str, bool]:
		return {"Role": self.role, "Task": self.task, "Context": self.context, "Format": self.format}

	@property
	def present_count(self) -> int:
		return sum(1 for v in self.as_dict().values() if v)


class Tag(_CamelModel):
	label: str
	status: TagStatus


class GridRow(_CamelModel):
	label: str
	status: str
	detail: str


class FeedbackResult(_CamelModel):
	gated: bool
	word_count: int
	message: str
	score: Optional[int] = None
	present_count: Optional[int] = None
	strengths: Optional[List[str]] = None
	tags: Optional[List[Tag]] = None
	grid: Optional[List[GridRow]] = None
	learn_more_text: Optional[str] = None
	model_answer: Optional[str] = None

	def to_payload(self) -> dict:
		return self.model_dump(by_alias=True)
