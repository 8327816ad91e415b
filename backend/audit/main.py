from pathlib import Path
import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .settings import settings
from .routers import health, audit

BASE_DIR = Path(__file__).resolve().parents[2]
FRONTEND_DIR = BASE_DIR / "frontend"
WIZARD_DIR = FRONTEND_DIR / "audit-wizard"
RESULTS_DIR = FRONTEND_DIR / "results"

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
for noisy in ("httpx", "httpcore"):
	logging.getLogger(noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

app = FastAPI(title="PromptProfit Audit API")
app.include_router(health.router)
app.include_router(audit.router)

# Static frontend (absolute paths so cwd doesn't matter when launching).
# Mounted last: "/" would otherwise shadow the API routes.
app.mount("/results", StaticFiles(directory=RESULTS_DIR, html=True), name="results")
app.mount("/", StaticFiles(directory=WIZARD_DIR, html=True), name="wizard")


@app.on_event("startup")
async def startup_event():
	if not settings.llm_api_key:
		logger.warning("No API key configured for LLM provider '%s'; submissions will fail", settings.llm_provider)
	if not settings.smtp_host:
		logger.warning("EMAIL_SMTP_HOST is not set; report delivery will fail")
	logger.info("PromptProfit backend running on port %s", settings.port)


def run() -> None:
	import uvicorn

	uvicorn.run("audit.main:app", host="0.0.0.0", port=settings.port)
