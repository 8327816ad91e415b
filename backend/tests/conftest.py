"""Shared fixtures: the app with every external collaborator stubbed out."""

import pytest
from fastapi.testclient import TestClient

from audit import llm_client, mailer, report
from audit.main import app


class FakeLLMClient:
	prompts = []
	reply = "Weakness: no follow-up system.\nNext step: automate reminders."
	error = None

	def __init__(self, *args, **kwargs):
		self.closed = False

	async def generate(self, prompt):
		FakeLLMClient.prompts.append(prompt)
		if FakeLLMClient.error is not None:
			raise FakeLLMClient.error
		return FakeLLMClient.reply

	async def aclose(self):
		self.closed = True


@pytest.fixture
def fake_llm(monkeypatch):
	FakeLLMClient.prompts = []
	FakeLLMClient.error = None
	monkeypatch.setattr(llm_client, "LLMClient", FakeLLMClient)
	return FakeLLMClient


@pytest.fixture
def sent_mail(monkeypatch):
	sent = []

	def fake_send_report(recipient, pdf, route, config=None):
		sent.append({"recipient": recipient, "pdf": pdf, "route": route})

	monkeypatch.setattr(mailer, "send_report", fake_send_report)
	return sent


@pytest.fixture
def rendered(monkeypatch):
	pages = []

	async def fake_render_pdf(report_html):
		pages.append(report_html)
		return b"%PDF-1.4 fake"

	monkeypatch.setattr(report, "render_pdf", fake_render_pdf)
	return pages


@pytest.fixture
def client():
	return TestClient(app)
