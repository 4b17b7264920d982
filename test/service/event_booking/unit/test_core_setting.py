from pathlib import Path

import pytest

from src.platform.config.core_setting import Settings


ENV_EXAMPLE = Path(__file__).resolve().parents[4] / '.env.example'


@pytest.fixture(autouse=True)
def _no_cors_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)


@pytest.mark.unit
class TestCoreSetting:
    def test_env_example_loads_comma_separated_origins(self) -> None:
        settings = Settings(_env_file=ENV_EXAMPLE)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == [
            'http://localhost:3000',
            'http://localhost:8081',
        ]
        assert settings.MAX_SEATS_PER_BOOKING == 10
        assert settings.CANCELLATION_CUTOFF_HOURS == 24

    def test_json_list_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', '["https://a.example", "https://b.example"]')

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['https://a.example', 'https://b.example']

    def test_comma_list_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', 'https://a.example, https://b.example,')

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['https://a.example', 'https://b.example']

    def test_unset_origins_default_to_empty(self) -> None:
        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == []
