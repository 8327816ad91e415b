from __future__ import annotations
import json
import httpx
from typing import Any, Dict, Mapping, Optional
from .errors import NarrativeError
from .scoring import ScoreVector
from .settings import settings

SYSTEM_PROMPT = "You are an expert AI systems architect."


def build_diagnosis_prompt(answers: Mapping[str, Any], scores: ScoreVector) -> str:
	return (
		"A user completed an AI business audit.\n\n"
		"Return a structured diagnosis including:\n"
		"- System weaknesses\n"
		"- Bottlenecks\n"
		"- Ideal automation improvements\n"
		"- Recommended PromptProfit tier\n"
		"- Next steps\n\n"
		f"Answers:\n{json.dumps(dict(answers), indent=2)}\n\n"
		f"Scores:\n{json.dumps(scores.model_dump(by_alias=True), indent=2)}\n"
	)


class LLMClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		provider: Optional[str] = None,
		model: Optional[str] = None,
		base_url: Optional[str] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.provider = provider or settings.llm_provider
		if self.provider not in ("openai", "gemini"):
			raise ValueError(f"Unsupported LLM_PROVIDER: {self.provider}")
		if self.provider == "gemini":
			self.api_key = api_key or settings.gemini_api_key
			self.model = model or settings.gemini_model
			# Google AI Studio (Generative Language API), key passed in the query string
			self.base_url = base_url or f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
		else:
			self.api_key = api_key or settings.openai_api_key
			self.model = model or settings.openai_model
			self.base_url = base_url or settings.openai_base_url
		if not self.api_key:
			raise ValueError(f"API key for LLM provider '{self.provider}' is not configured")
		self.temperature = settings.llm_temperature
		self.max_tokens = settings.llm_max_tokens
		self._client = httpx.AsyncClient(timeout=settings.llm_timeout_seconds, transport=transport)

	async def generate(self, prompt: str) -> str:
		if self.provider == "gemini":
			params: Dict[str, Any] = {"key": self.api_key}
			headers: Dict[str, str] = {}
			payload: Dict[str, Any] = {
				"systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
				"contents": [{"role": "user", "parts": [{"text": prompt}]}],
				"generationConfig": {"temperature": self.temperature, "maxOutputTokens": self.max_tokens},
			}
		else:
			params = {}
			headers = {"Authorization": f"Bearer {self.api_key}"}
			payload = {
				"model": self.model,
				"messages": [
					{"role": "system", "content": SYSTEM_PROMPT},
					{"role": "user", "content": prompt},
				],
				"temperature": self.temperature,
				"max_tokens": self.max_tokens,
			}
		try:
			r = await self._client.post(self.base_url, params=params, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			raise NarrativeError(f"{self.provider} returned HTTP {http_err.response.status_code}") from http_err
		except httpx.RequestError as net_err:
			raise NarrativeError(f"{self.provider} request failed: {net_err}") from net_err
		try:
			data = r.json()
			if self.provider == "gemini":
				text = data["candidates"][0]["content"]["parts"][0]["text"]
			else:
				text = data["choices"][0]["message"]["content"]
		except (ValueError, KeyError, IndexError, TypeError) as err:
			raise NarrativeError(f"Unexpected {self.provider} response: {r.text[:500]}") from err
		if not isinstance(text, str) or not text.strip():
			raise NarrativeError(f"{self.provider} returned an empty diagnosis")
		return text

	async def aclose(self) -> None:
		await self._client.aclose()
