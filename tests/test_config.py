from eccang_client.config import Settings


def test_settings_read_prefixed_env(monkeypatch):
    monkeypatch.setenv("ECCANG_BASE_URL", "https://eccang.test/default/svc/web-service")
    monkeypatch.setenv("ECCANG_APP_TOKEN", "tok")
    monkeypatch.setenv("ECCANG_APP_KEY", "key")
    monkeypatch.setenv("ECCANG_AUDIT_LOG_ENABLED", "true")

    settings = Settings()

    assert settings.base_url == "https://eccang.test/default/svc/web-service"
    assert settings.app_token.get_secret_value() == "tok"
    assert settings.app_key.get_secret_value() == "key"
    assert settings.audit_log_enabled is True
    assert settings.timeout_seconds == 60.0


def test_settings_hide_credentials_in_repr():
    settings = Settings(app_token="tok-123456", app_key="key-123456")
    assert "tok-123456" not in repr(settings)
