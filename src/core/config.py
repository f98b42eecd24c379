from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Telegram
    telegram_bot_token: str
    telegram_chat_id: str = ""  # default destination for mailbox notifications
    telegram_secret_token: str = ""  # setWebhook `secret_token`
    telegram_webhook_url: str = ""

    # LLM API Keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    draft_model: str = "gpt-4o-mini"

    # Microsoft Graph (Outlook)
    graph_tenant_id: str = ""
    graph_client_id: str = ""
    graph_client_secret: str = ""
    graph_user_id: str = ""  # mailbox owner: user id or email

    @property
    def draft_api_key(self) -> str:
        """Return the API key for the provider behind ``draft_model``."""
        if self.draft_model.startswith("claude-"):
            return self.anthropic_api_key
        return self.openai_api_key

    # Langfuse
    langfuse_secret_key: str = ""
    langfuse_public_key: str = ""
    langfuse_host: str = "http://localhost:3000"

    # App
    app_env: str = "development"
    log_level: str = "INFO"


settings = Settings()
