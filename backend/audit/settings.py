from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	port: int = Field(default=4242, validation_alias="PORT")
	# Public origin used in the report email link
	base_url: str = Field(default="http://localhost:4242", validation_alias="BASE_URL")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# Provider can be "openai" (chat completions) or "gemini" (Generative Language API)
	llm_provider: str = Field(default="openai", validation_alias="LLM_PROVIDER")
	llm_timeout_seconds: float = Field(default=60, validation_alias="LLM_TIMEOUT_SECONDS")
	llm_temperature: float = Field(default=0.2, validation_alias="LLM_TEMPERATURE")
	llm_max_tokens: int = Field(default=900, validation_alias="LLM_MAX_TOKENS")

	openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
	openai_model: str = Field(default="gpt-4o-mini", validation_alias="OPENAI_MODEL")
	openai_base_url: str = Field(default="https://api.openai.com/v1/chat/completions", validation_alias="OPENAI_BASE_URL")

	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")

	# SMTP delivery of the PDF report
	smtp_host: str | None = Field(default=None, validation_alias="EMAIL_SMTP_HOST")
	smtp_port: int = Field(default=587, validation_alias="EMAIL_SMTP_PORT")
	# true -> implicit TLS (SMTP_SSL), false -> plain connection upgraded with STARTTLS when offered
	smtp_secure: bool = Field(default=False, validation_alias="EMAIL_SMTP_SECURE")
	smtp_user: str | None = Field(default=None, validation_alias="EMAIL_SMTP_USER")
	smtp_password: str | None = Field(default=None, validation_alias="EMAIL_SMTP_PASS")
	email_from: str = Field(default="no-reply@promptprofit.local", validation_alias="EMAIL_FROM")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	@property
	def llm_api_key(self) -> str | None:
		if self.llm_provider == "gemini":
			return self.gemini_api_key
		return self.openai_api_key

settings = Settings()
