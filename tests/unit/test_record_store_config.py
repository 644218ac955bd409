from result_lookup.config import Settings
from result_lookup.config.record_store import RecordStoreConfig, check_environment


def test_config_from_settings_normalizes_endpoint():
    settings = Settings(
        _env_file=None,
        SUPABASE_URL=" https://example.supabase.co/ ",
        SUPABASE_ANON_KEY=" key ",
        RECORD_STORE_TIMEOUT_SECONDS=5,
    )
    config = RecordStoreConfig.from_settings(settings)
    assert config.endpoint == "https://example.supabase.co"
    assert config.credential == "key"
    assert config.timeout_seconds == 5
    assert config.is_complete


def test_missing_values_make_incomplete_config():
    config = RecordStoreConfig.from_settings(Settings(_env_file=None, SUPABASE_URL=None, SUPABASE_ANON_KEY=None))
    assert not config.is_complete


def test_environment_check_all_configured(settings):
    status = check_environment(settings)
    assert status.variables == {"SUPABASE_URL": "Configured", "SUPABASE_ANON_KEY": "Configured"}
    assert status.all_configured
    assert status.message == "All required environment variables are configured correctly."


def test_environment_check_reports_missing():
    status = check_environment(
        Settings(_env_file=None, SUPABASE_URL="https://example.supabase.co", SUPABASE_ANON_KEY="  ")
    )
    assert status.variables["SUPABASE_ANON_KEY"] == "Missing"
    assert status.missing() == ["SUPABASE_ANON_KEY"]
    assert not status.all_configured
    assert status.message == "Some environment variables are missing. Please check your configuration."
