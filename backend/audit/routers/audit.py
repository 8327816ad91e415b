from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from .. import llm_client, mailer, report
from ..questionnaire import STEPS, Step
from ..scoring import ScoreVector, calculate_scores
from ..tiers import Tier, TierDecision, choose_product

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/audit", tags=["audit"])

AnswerValue = Optional[Union[str, int, float, bool]]


class SubmitRequest(BaseModel):
	answers: Dict[str, AnswerValue]


class SubmitResponse(BaseModel):
	success: bool = True
	redirect: str


class ScoreResponse(BaseModel):
	scores: ScoreVector
	tier: Tier
	redirect: str
	failed: List[str] = Field(default_factory=list)


def _score(answers: Dict[str, Any]) -> tuple[ScoreVector, TierDecision]:
	scores = calculate_scores(answers)
	return scores, choose_product(scores)


async def _generate_diagnosis(answers: Dict[str, Any], scores: ScoreVector) -> str:
	client = llm_client.LLMClient()
	try:
		return await client.generate(llm_client.build_diagnosis_prompt(answers, scores))
	finally:
		await client.aclose()


@router.get("/questions", response_model=List[Step])
def get_questions():
	return list(STEPS)


@router.post("/score", response_model=ScoreResponse, response_model_by_alias=True)
def score(req: SubmitRequest):
	scores, choice = _score(req.answers)
	return ScoreResponse(
		scores=scores,
		tier=choice.tier,
		redirect=choice.route,
		failed=list(choice.failed_categories),
	)


@router.post("/submit", response_model=SubmitResponse)
async def submit(req: SubmitRequest):
	answers = req.answers
	try:
		scores, choice = _score(answers)
		diagnosis = await _generate_diagnosis(answers, scores)
		pdf_html = report.build_report_html(answers, diagnosis, scores)
		pdf = await report.render_pdf(pdf_html)
		await run_in_threadpool(mailer.send_report, answers.get("email"), pdf, choice.route)
	except Exception:
		logger.exception("Audit submission failed")
		return JSONResponse(status_code=500, content={"error": "Server error"})
	logger.info(
		"Audit submitted: tier=%s scores=%s",
		choice.tier.value,
		scores.model_dump(by_alias=True),
	)
	return SubmitResponse(redirect=choice.route)
