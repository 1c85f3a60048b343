from dataclasses import dataclass

from pydantic_settings import BaseSettings

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)


@dataclass(frozen=True)
class FetchConfig:
    """HTTP client configuration handed to ``URLFetcher`` explicitly."""
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    max_attempts: int = 3
    backoff_step: float = 1.0
    retry_on_short_content: bool = True


class Settings(BaseSettings):
    # URL fetching
    fetch_timeout: float = 30.0
    fetch_user_agent: str = DEFAULT_USER_AGENT
    fetch_max_attempts: int = 3
    fetch_backoff_seconds: float = 1.0
    # Re-fetch when the page fetched fine but the article text was too short
    fetch_retry_on_short_content: bool = True

    # Upload limits for the HTTP surface
    max_upload_bytes: int = 10 * 1024 * 1024

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"

    class Config:
        env_prefix = 'INGEST_'
        env_file = '.env'
        env_file_encoding = 'utf-8'

    def fetch_config(self) -> FetchConfig:
        return FetchConfig(
            timeout=self.fetch_timeout,
            user_agent=self.fetch_user_agent,
            max_attempts=self.fetch_max_attempts,
            backoff_step=self.fetch_backoff_seconds,
            retry_on_short_content=self.fetch_retry_on_short_content,
        )
