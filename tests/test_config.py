from agrizone.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.default_average_speed_kmh == 40.0
    assert settings.coordinate_precision == 6
    assert settings.max_stops_per_route == 250


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("AGZ_DEFAULT_AVERAGE_SPEED_KMH", "25")
    monkeypatch.setenv("AGZ_LOG_LEVEL", "debug")
    monkeypatch.setenv("AGZ_FRONTEND_ALLOWED_ORIGINS", '["https://field.example.com"]')

    settings = Settings(_env_file=None)

    assert settings.default_average_speed_kmh == 25.0
    assert settings.log_level == "DEBUG"
    assert settings.frontend_allowed_origins == ("https://field.example.com",)


def test_origins_accept_comma_separated_values():
    settings = Settings(_env_file=None, frontend_allowed_origins="https://a.example.com, https://b.example.com")

    assert settings.frontend_allowed_origins == ("https://a.example.com", "https://b.example.com")
