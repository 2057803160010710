import pytest
from pydantic import ValidationError

from memstore import MemoryStore, Settings, StoreConfig
from memstore.core import config


def test_settings_read_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("SESSION_STORE_TIMEOUT_TICKS", "4")
    monkeypatch.setenv("SESSION_STORE_SWEEP_INTERVAL", "2.5")

    settings = Settings(_env_file=None)

    assert settings.timeout_ticks == 4
    assert settings.sweep_interval == 2.5


def test_blank_timeout_means_disabled(monkeypatch) -> None:
    monkeypatch.setenv("SESSION_STORE_TIMEOUT_TICKS", "")

    assert Settings(_env_file=None).timeout_ticks == -1


def test_get_settings_is_cached(monkeypatch) -> None:
    config.get_settings.cache_clear()
    monkeypatch.setenv("SESSION_STORE_TIMEOUT_TICKS", "7")

    first = config.get_settings()
    monkeypatch.setenv("SESSION_STORE_TIMEOUT_TICKS", "8")

    assert config.get_settings() is first
    assert first.timeout_ticks == 7
    config.get_settings.cache_clear()


def test_store_built_from_settings() -> None:
    settings = Settings(_env_file=None, timeout_ticks=3, sweep_interval=5)

    store = MemoryStore.from_settings(settings)

    assert store.config == StoreConfig(timeout_ticks=3, sweep_interval=5.0)
    assert store.sweeper is not None
    assert store.sweeper.interval == 5.0


def test_store_config_is_frozen_and_validated() -> None:
    store_config = StoreConfig(timeout_ticks=1)

    with pytest.raises(ValidationError):
        store_config.timeout_ticks = 2  # type: ignore[misc]
    with pytest.raises(ValidationError):
        StoreConfig(sweep_interval=0)
    with pytest.raises(ValidationError):
        MemoryStore(timeout_ticks=1.5)  # type: ignore[arg-type]
