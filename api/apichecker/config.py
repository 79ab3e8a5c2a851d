from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "api-checker"

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # Slack: notification is skipped unless both are set
    slack_channel: str = ""
    slack_token: str = ""
    slack_api_url: str = "https://slack.com/api/"

    # Outbound timeouts (seconds)
    fetch_timeout: float = 10
    notify_timeout: float = 10

    # Inbound request body limit (bytes)
    max_body_size: int = 2 * 1024 * 1024

    model_config = {"env_file": ".env", "extra": "ignore", "frozen": True}

    @property
    def notification_enabled(self) -> bool:
        return bool(self.slack_channel and self.slack_token)


settings = Settings()
