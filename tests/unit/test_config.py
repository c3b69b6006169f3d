"""Unit tests for environment-driven settings."""

from __future__ import annotations

import pytest

from config import DEFAULT_EXPORT_URL, DEFAULT_PRIMARY_SHEET_ID, Settings
from services.data_service import DataService

CONFIG_VARS = [
    "PORT",
    "CORS_ORIGINS",
    "ENVIRONMENT",
    "PRIMARY_SHEET_ID",
    "ADS_SHEET_ID",
    "SHEET_EXPORT_URL",
    "FETCH_TIMEOUT_SECONDS",
    "CACHE_TTL_SECONDS",
    "CACHE_SINGLE_FLIGHT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings()

    assert settings.port == 5000
    assert settings.cors_origins == ["*"]
    assert settings.primary_sheet_id == DEFAULT_PRIMARY_SHEET_ID
    assert settings.ads_sheet_id is None
    assert settings.export_url_template == DEFAULT_EXPORT_URL
    assert settings.cache_ttl_seconds == 300
    assert settings.fetch_timeout_seconds == 30
    assert settings.cache_single_flight is True
    assert settings.is_production is False


def test_overrides(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example.test,https://b.example.test")
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("PRIMARY_SHEET_ID", "main-sheet")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "60")
    monkeypatch.setenv("FETCH_TIMEOUT_SECONDS", "2.5")

    settings = Settings()

    assert settings.port == 8080
    assert settings.cors_origins == ["https://a.example.test", "https://b.example.test"]
    assert settings.is_production is True
    assert settings.primary_sheet_id == "main-sheet"
    assert settings.cache_ttl_seconds == 60
    assert settings.fetch_timeout_seconds == 2.5


@pytest.mark.parametrize("raw", ["false", "0", "off", "no", "FALSE"])
def test_single_flight_can_be_switched_off(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("CACHE_SINGLE_FLIGHT", raw)

    assert Settings().cache_single_flight is False


@pytest.mark.parametrize("raw", ["true", "1", "on", "Yes"])
def test_single_flight_truthy_values(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("CACHE_SINGLE_FLIGHT", raw)

    assert Settings().cache_single_flight is True


def test_ads_dataset_only_when_configured(monkeypatch) -> None:
    settings = Settings()

    assert settings.dataset_sources == {"primary": DEFAULT_PRIMARY_SHEET_ID}
    assert settings.validate() == ["ADS_SHEET_ID"]

    monkeypatch.setenv("ADS_SHEET_ID", "ads-sheet")
    settings = Settings()

    assert settings.dataset_sources == {"primary": DEFAULT_PRIMARY_SHEET_ID, "ads": "ads-sheet"}
    assert settings.validate() == []


def test_service_built_from_settings(monkeypatch) -> None:
    monkeypatch.setenv("CACHE_TTL_SECONDS", "45")
    monkeypatch.setenv("CACHE_SINGLE_FLIGHT", "false")
    monkeypatch.setenv("FETCH_TIMEOUT_SECONDS", "7")
    monkeypatch.setenv("SHEET_EXPORT_URL", "https://sheets.example.test/{sheet_id}.xlsx")

    service = DataService.from_settings(Settings())

    assert service.cache.ttl_seconds == 45
    assert service.cache.single_flight is False
    assert service.fetcher.timeout == 7
    assert service.fetcher.export_url("abc") == "https://sheets.example.test/abc.xlsx"
    assert service.sources == {"primary": DEFAULT_PRIMARY_SHEET_ID}
