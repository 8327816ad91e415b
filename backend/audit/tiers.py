"""Product tier selection from a score vector."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .scoring import ScoreVector

# A category scoring strictly below this counts as failed
FAIL_THRESHOLD = 40


class Tier(str, Enum):
	STARTER = "starter"
	PRO = "pro"
	BUILD_CONTENT = "build-content"
	BUILD_SALES = "build-sales"
	BUILD_OPS = "build-ops"
	ENTERPRISE = "enterprise"


class TierDecision(BaseModel):
	model_config = ConfigDict(frozen=True)

	tier: Tier
	route: str
	failed_categories: tuple[str, ...] = ()


def result_path(tier: Tier) -> str:
	return f"/results/{tier.value}.html"


def failed_categories(scores: ScoreVector) -> list[str]:
	return [name for name, score in scores.by_category().items() if score < FAIL_THRESHOLD]


def choose_product(scores: ScoreVector) -> TierDecision:
	"""Pick the recommended tier. Rules are checked in order, first match wins:

	- two or more failed categories -> enterprise
	- exactly one -> the build package for that category
	- none -> starter when overall is below the threshold, pro otherwise
	"""
	fails = failed_categories(scores)
	if len(fails) >= 2:
		tier = Tier.ENTERPRISE
	elif len(fails) == 1:
		tier = Tier(f"build-{fails[0]}")
	elif scores.overall < FAIL_THRESHOLD:
		tier = Tier.STARTER
	else:
		tier = Tier.PRO
	return TierDecision(tier=tier, route=result_path(tier), failed_categories=tuple(fails))
