"""Questionnaire scoring.

Maps raw answers to four 0-100 scores. Numeric self-ratings (0-10) and
categorical answers are both converted to a 0-15 point scale first so they
can be summed together.
"""

from __future__ import annotations

import logging
import math
import re
from fractions import Fraction
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

MAX_POINTS = 15
MAX_RATING = 10

# ASCII decimal, optional sign and fraction; read like a browser parseInt
RATING_PATTERN = re.compile(r"\s*[+-]?[0-9]+(\.[0-9]*)?\s*", re.ASCII)

# Flat on purpose: no two questions share a vocabulary, so a token's value does
# not depend on which question it answered.
OPTION_POINTS: dict[str, int] = {
	"never": 0,
	"occasionally": 5,
	"weekly": 10,
	"daily": 15,
	"head": 0,
	"notes": 5,
	"some": 10,
	"rare": 15,
	"freq": 0,
	"sometimes": 5,
}

# category -> answer keys contributing to it
CATEGORY_FIELDS: dict[str, tuple[str, ...]] = {
	"content": ("consistency", "score_content"),
	"sales": ("followups", "score_sales"),
	"ops": ("taskmgmt", "missdeadlines", "score_ops"),
}


class ScoreVector(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	content_score: int = Field(ge=0, le=100, alias="contentScore")
	sales_score: int = Field(ge=0, le=100, alias="salesScore")
	ops_score: int = Field(ge=0, le=100, alias="opsScore")
	overall: int = Field(ge=0, le=100)

	def by_category(self) -> dict[str, int]:
		return {"content": self.content_score, "sales": self.sales_score, "ops": self.ops_score}


def round_half_up(value: Fraction) -> int:
	return math.floor(value + Fraction(1, 2))


def _clamp(value: int, low: int, high: int) -> int:
	return max(low, min(high, value))


def _truncate(number: float) -> Optional[int]:
	if math.isnan(number):
		return None
	if math.isinf(number):
		return MAX_RATING if number > 0 else 0
	return math.trunc(number)


def _parse_rating(value: Any) -> Optional[int]:
	# bool is an int subclass but never a rating
	if isinstance(value, bool):
		return None
	if isinstance(value, int):
		return value
	if isinstance(value, float):
		return _truncate(value)
	if isinstance(value, str):
		if RATING_PATTERN.fullmatch(value) is None:
			return None
		return _truncate(float(value))
	return None


def points_of(value: Any) -> int:
	"""Convert one answer to points in ``[0, 15]``.

	Empty answers score 0. Numeric ratings (ASCII decimals, fractions
	truncated) are clamped to 0-10 and scaled linearly onto 0-15. Anything
	else is looked up in ``OPTION_POINTS``; unknown tokens score 0 rather
	than failing the submission.
	"""
	if value is None:
		return 0
	if isinstance(value, str) and not value.strip():
		return 0

	rating = _parse_rating(value)
	if rating is not None:
		rating = _clamp(rating, 0, MAX_RATING)
		return _clamp(round_half_up(Fraction(rating * MAX_POINTS, MAX_RATING)), 0, MAX_POINTS)

	if isinstance(value, str) and value in OPTION_POINTS:
		return OPTION_POINTS[value]

	logger.debug("Unknown answer token %r scored as 0", value)
	return 0


def _category_percent(answers: Mapping[str, Any], fields: tuple[str, ...]) -> int:
	raw = sum(points_of(answers.get(key)) for key in fields)
	return round_half_up(Fraction(raw * 100, len(fields) * MAX_POINTS))


def calculate_scores(answers: Mapping[str, Any]) -> ScoreVector:
	"""Score a full answer record. Missing keys count as empty answers."""
	content = _category_percent(answers, CATEGORY_FIELDS["content"])
	sales = _category_percent(answers, CATEGORY_FIELDS["sales"])
	ops = _category_percent(answers, CATEGORY_FIELDS["ops"])
	overall = round_half_up(Fraction(content + sales + ops, 3))
	return ScoreVector(content_score=content, sales_score=sales, ops_score=ops, overall=overall)
