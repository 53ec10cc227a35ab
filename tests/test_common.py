from libs.common import TrackerSettings, get_settings


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("MATOMO_URL_BASE", "https://stats.example.org/")
    monkeypatch.setenv("MATOMO_SITE_ID", "12")
    monkeypatch.setenv("MATOMO_LOG", "1")
    monkeypatch.setenv("MATOMO_TIMEOUT", "2.5")

    settings = get_settings()

    assert settings.matomo_url_base == "https://stats.example.org/"
    assert settings.matomo_site_id == 12
    assert settings.matomo_log is True
    assert settings.matomo_disabled is False
    assert settings.matomo_timeout == 2.5
    assert get_settings() is settings


def test_blank_values_are_unset(monkeypatch):
    monkeypatch.setenv("MATOMO_URL_BASE", "  ")
    monkeypatch.setenv("MATOMO_SITE_ID", "")

    settings = TrackerSettings(_env_file=None)

    assert settings.matomo_url_base is None
    assert settings.matomo_site_id is None
