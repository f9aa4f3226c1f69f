from fastapi import FastAPI
import pytest

from finsynth.core.config import GeneratorSettings, get_settings
from finsynth.main import create_app


def test_create_app_registers_generation_routes() -> None:
    app = create_app()
    assert isinstance(app, FastAPI)
    paths = {route.path for route in app.routes}
    assert {"/reference", "/generate", "/generate/csv"} <= paths


def test_get_settings_uses_default_configuration(monkeypatch) -> None:
    for name in (
        "FINSYNTH_CURRENCY",
        "FINSYNTH_HISTORY_DAYS",
        "FINSYNTH_PENDING_RATE",
        "FINSYNTH_MODIFIED_RATE",
        "FINSYNTH_REMOVED_RATE",
        "FINSYNTH_SEED",
        "LOG_LEVEL",
        "LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.generator.currency == "USD"
    assert settings.generator.history_days == 730
    assert settings.generator.pending_rate == 0.10
    assert settings.generator.modified_rate == 0.05
    assert settings.generator.removed_rate == 0.02
    assert settings.generator.seed is None
    assert settings.logging.level == "INFO"
    assert settings.logging.log_dir is None
    get_settings.cache_clear()


def test_generator_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("FINSYNTH_CURRENCY", "eur")
    monkeypatch.setenv("FINSYNTH_PENDING_RATE", "0.25")
    monkeypatch.setenv("FINSYNTH_SEED", "42")

    settings = GeneratorSettings.from_env()

    assert settings.currency == "EUR"
    assert settings.pending_rate == 0.25
    assert settings.seed == 42


@pytest.mark.parametrize("overrides", [{"pending_rate": 1.5}, {"removed_rate": -0.1}, {"history_days": 0}])
def test_generator_settings_reject_out_of_range_values(overrides) -> None:
    with pytest.raises(ValueError):
        GeneratorSettings(**overrides)
