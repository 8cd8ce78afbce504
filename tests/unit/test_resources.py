"""open_coordinator wiring: startup and shutdown order with mocked collaborators."""

from unittest.mock import AsyncMock, MagicMock, sentinel

import pytest

from catalog.core import resources
from catalog.core.config import Settings
from catalog.domain.exceptions import SqlNotConfiguredException
from catalog.infrastructure.persistence import database


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def cache(monkeypatch: pytest.MonkeyPatch, events: list[str]) -> MagicMock:
    cache = MagicMock()
    cache.connect = AsyncMock(side_effect=lambda: events.append("cache.connect"))
    cache.disconnect = AsyncMock(side_effect=lambda: events.append("cache.disconnect"))
    monkeypatch.setattr(resources, "CacheService", MagicMock(return_value=cache))
    return cache


@pytest.fixture
def store_wiring(monkeypatch: pytest.MonkeyPatch, events: list[str]) -> MagicMock:
    """Replace the session factory lookup and engine disposal on the database module."""
    factory = MagicMock()

    def get_session_factory() -> MagicMock:
        events.append("session_factory")
        return factory

    monkeypatch.setattr(database, "get_session_factory", get_session_factory)
    monkeypatch.setattr(
        database,
        "dispose_engine",
        AsyncMock(side_effect=lambda: events.append("dispose_engine")),
    )
    monkeypatch.setattr(database, "engine", sentinel.engine)
    return factory


@pytest.mark.asyncio
async def test_yields_coordinator_and_tears_down_in_order(
    cache: MagicMock, store_wiring: MagicMock, events: list[str]
) -> None:
    settings = Settings(cache_ttl_records=120, telemetry_enabled=False)

    async with resources.open_coordinator(settings) as coordinator:
        assert coordinator.cache is cache
        assert coordinator.store.session_factory is store_wiring
        assert coordinator.ttl == 120
        events.append("body")

    assert events == [
        "cache.connect",
        "session_factory",
        "body",
        "cache.disconnect",
        "dispose_engine",
    ]


@pytest.mark.asyncio
async def test_teardown_runs_when_body_raises(
    cache: MagicMock, store_wiring: MagicMock, events: list[str]
) -> None:
    with pytest.raises(RuntimeError):
        async with resources.open_coordinator(Settings(telemetry_enabled=False)):
            raise RuntimeError("boom")

    assert events[-2:] == ["cache.disconnect", "dispose_engine"]


@pytest.mark.asyncio
async def test_unconfigured_store_still_releases_cache(
    monkeypatch: pytest.MonkeyPatch, cache: MagicMock, store_wiring: MagicMock, events: list[str]
) -> None:
    def not_configured() -> None:
        raise SqlNotConfiguredException()

    monkeypatch.setattr(database, "get_session_factory", not_configured)

    with pytest.raises(SqlNotConfiguredException):
        async with resources.open_coordinator(Settings(telemetry_enabled=False)):
            pytest.fail("body must not run without a store")

    assert events == ["cache.connect", "cache.disconnect", "dispose_engine"]


@pytest.mark.asyncio
async def test_telemetry_wraps_the_whole_lifetime(
    monkeypatch: pytest.MonkeyPatch, cache: MagicMock, store_wiring: MagicMock, events: list[str]
) -> None:
    telemetry = MagicMock()
    telemetry.setup_telemetry.side_effect = lambda **_: events.append("telemetry.setup")
    telemetry.instrument_clients.side_effect = lambda: events.append("telemetry.clients")
    telemetry.instrument_sqlalchemy.side_effect = lambda engine: events.append(
        "telemetry.sqlalchemy"
    )
    telemetry.shutdown.side_effect = lambda: events.append("telemetry.shutdown")
    telemetry_cls = MagicMock()
    telemetry_cls.from_settings.return_value = telemetry
    monkeypatch.setattr(resources, "TelemetryConfig", telemetry_cls)
    settings = Settings(
        telemetry_enabled=True,
        telemetry_exporter="none",
        telemetry_sample_rate=0.25,
    )

    async with resources.open_coordinator(settings):
        events.append("body")

    telemetry_cls.from_settings.assert_called_once_with(settings)
    telemetry.setup_telemetry.assert_called_once_with(
        exporter_type="none", otlp_endpoint=None, sample_rate=0.25
    )
    telemetry.instrument_sqlalchemy.assert_called_once_with(sentinel.engine)
    assert events == [
        "telemetry.setup",
        "telemetry.clients",
        "cache.connect",
        "session_factory",
        "telemetry.sqlalchemy",
        "body",
        "cache.disconnect",
        "telemetry.shutdown",
        "dispose_engine",
    ]
