from __future__ import annotations
import html
import logging
from typing import Any, Mapping

from playwright.async_api import Error as PlaywrightError, async_playwright

from .errors import ReportRenderError
from .scoring import ScoreVector

logger = logging.getLogger(__name__)

REPORT_STYLE = """
	body { font-family: Arial, sans-serif; padding: 20px; }
	h1 { margin-bottom: 10px; }
	.box { padding: 10px; background:#f4f7fb; border-radius:8px; margin-bottom:20px; }
	.score-box { display:inline-block; padding:10px; margin-right:10px; background:#e7ecf5; border-radius:8px; }
"""

PROFILE_FIELDS = (
	("Type", "business_type"),
	("Stage", "stage"),
	("Revenue", "revenue"),
	("Offer", "primary_offer"),
)


def _text(value: Any) -> str:
	if value is None:
		return ""
	return html.escape(str(value))


def build_report_html(answers: Mapping[str, Any], diagnosis: str, scores: ScoreVector) -> str:
	profile = "\n".join(
		f"\t\t<p><strong>{label}:</strong> {_text(answers.get(key))}</p>" for label, key in PROFILE_FIELDS
	)
	diagnosis_html = _text(diagnosis).replace("\r\n", "\n").replace("\n", "<br>")
	return f"""<html>
<head>
	<meta charset="utf-8">
	<style>{REPORT_STYLE}</style>
</head>
<body>

	<h1>PromptProfit Audit Report</h1>

	<div class="box">
		<h3>Business Profile</h3>
{profile}
	</div>

	<div class="box">
		<h3>Scores</h3>
		<div class="score-box">Content: {scores.content_score}</div>
		<div class="score-box">Sales: {scores.sales_score}</div>
		<div class="score-box">Ops: {scores.ops_score}</div>
		<div class="score-box">Overall: {scores.overall}</div>
	</div>

	<div class="box">
		<h3>Diagnosis</h3>
		<p>{diagnosis_html}</p>
	</div>

</body>
</html>
"""


async def render_pdf(report_html: str) -> bytes:
	"""Print the report to an A4 PDF with headless Chromium."""
	try:
		async with async_playwright() as p:
			browser = await p.chromium.launch(args=["--no-sandbox", "--disable-setuid-sandbox"])
			try:
				page = await browser.new_page()
				await page.set_content(report_html, wait_until="networkidle")
				pdf = await page.pdf(
					format="A4",
					print_background=True,
					margin={"top": "20px", "bottom": "20px", "left": "20px", "right": "20px"},
				)
			finally:
				await browser.close()
	except PlaywrightError as err:
		raise ReportRenderError(f"Failed to render PDF: {err}") from err
	logger.debug("Rendered report PDF (%d bytes)", len(pdf))
	return pdf
