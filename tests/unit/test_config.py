import pytest

from dashboard_server.config import ConfigurationError, Settings


def test_from_env_reads_variables(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("API_PORT", "9001")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("INVOICES_TABLE", raising=False)

    settings = Settings.from_env()

    assert settings.supabase_url == "https://example.supabase.co"
    assert settings.api_port == 9001
    assert settings.log_level == "DEBUG"
    assert settings.invoices_table == "invoices"


def test_require_names_missing_variables():
    settings = Settings(supabase_url="https://example.supabase.co", supabase_service_role_key=None, supabase_anon_key="")

    settings.require("supabase_url")
    with pytest.raises(ConfigurationError) as excinfo:
        settings.require("supabase_url", "supabase_service_role_key", "supabase_anon_key")

    assert str(excinfo.value) == "Missing required environment variables: SUPABASE_SERVICE_ROLE_KEY, SUPABASE_KEY"
