from news_input.config import DEFAULT_USER_AGENT, FetchConfig, Settings


def test_defaults():
    s = Settings()
    assert s.fetch_timeout == 30.0
    assert s.fetch_max_attempts == 3
    assert s.max_upload_bytes == 10 * 1024 * 1024
    assert s.fetch_config() == FetchConfig()
    assert "Mozilla/5.0" in DEFAULT_USER_AGENT


def test_env_overrides_build_fetch_config(monkeypatch):
    monkeypatch.setenv("INGEST_FETCH_TIMEOUT", "5")
    monkeypatch.setenv("INGEST_FETCH_USER_AGENT", "TestAgent/2.0")
    monkeypatch.setenv("INGEST_FETCH_RETRY_ON_SHORT_CONTENT", "false")
    config = Settings().fetch_config()
    assert config.timeout == 5.0
    assert config.user_agent == "TestAgent/2.0"
    assert config.retry_on_short_content is False
    assert config.max_attempts == 3
