from __future__ import annotations
from typing import List, Literal, Tuple

from pydantic import BaseModel, ConfigDict

from .scoring import OPTION_POINTS


class Question(BaseModel):
	model_config = ConfigDict(frozen=True)

	key: str
	label: str
	kind: Literal["text", "select", "textarea"] = "text"
	options: Tuple[str, ...] = ()


class Step(BaseModel):
	model_config = ConfigDict(frozen=True)

	title: str
	questions: Tuple[Question, ...]


FREQUENCY = ("never", "occasionally", "weekly", "daily")

STEPS: Tuple[Step, ...] = (
	Step(title="Business profile", questions=(
		Question(key="email", label="Your Email"),
		Question(key="business_type", label="Business Type"),
		Question(key="stage", label="Business Stage"),
		Question(key="revenue", label="Monthly Revenue"),
	)),
	Step(title="Content system", questions=(
		Question(key="consistency", label="How consistent is your content?", kind="select", options=FREQUENCY),
		Question(key="score_content", label="Rate your content system 0-10"),
	)),
	Step(title="Sales system", questions=(
		Question(key="followups", label="How often do you follow up?", kind="select", options=FREQUENCY),
		Question(key="score_sales", label="Rate your sales system 0-10"),
	)),
	Step(title="Ops system", questions=(
		Question(key="taskmgmt", label="How do you manage tasks?", kind="select", options=("head", "notes", "some", "rare")),
		Question(key="missdeadlines", label="How often do you miss deadlines?", kind="select", options=("never", "sometimes", "freq")),
		Question(key="score_ops", label="Rate your operations 0-10"),
	)),
	Step(title="Pain points", questions=(
		Question(key="frustrations", label="What frustrates you the most?", kind="textarea"),
		Question(key="primary_offer", label="Describe your main offer", kind="textarea"),
		Question(key="ideal_state", label="What do you want automated?", kind="textarea"),
	)),
)


def all_questions() -> List[Question]:
	return [q for step in STEPS for q in step.questions]


def unscored_options() -> List[str]:
	"""Select options offered to users that the scoring table does not know."""
	return [opt for q in all_questions() for opt in q.options if opt not in OPTION_POINTS]

