"""Tests for the ECB provider facades -- loader wiring and resolution."""

from collections.abc import Iterator
from datetime import date
from decimal import ROUND_HALF_EVEN, Context, Decimal

import pytest

from fxrates.config import ProviderSettings
from fxrates.exceptions import NoRateForDate, UnknownResourceError
from fxrates.loader import LoaderService
from fxrates.models import ConversionQuery
from fxrates.providers import (
    ECBHistoric90RateProvider,
    ECBHistoricRateProvider,
    ECBRateProvider,
)

MANUAL = ProviderSettings(autoload=False)
DECIMAL64 = Context(prec=16, rounding=ROUND_HALF_EVEN)


@pytest.fixture
def loader(ecb_document: str) -> Iterator[LoaderService]:
    service = LoaderService(max_workers=2)
    service.register_resource("ECB-HIST90", lambda: ecb_document.encode("utf-8"))
    yield service
    service.shutdown()


class TestWiring:
    @pytest.mark.parametrize(
        ("provider_cls", "data_id"),
        [
            (ECBRateProvider, "ECB"),
            (ECBHistoric90RateProvider, "ECB-HIST90"),
            (ECBHistoricRateProvider, "ECB-HIST"),
        ],
    )
    def test_data_ids(self, provider_cls: type, data_id: str) -> None:
        assert provider_cls.DATA_ID == data_id
        assert provider_cls.BASE_CURRENCY == "EUR"

    def test_autoload_fills_store(self, loader: LoaderService) -> None:
        provider = ECBHistoric90RateProvider(loader)
        assert provider.pending_load is not None
        assert provider.pending_load.result(timeout=5) == 1

        assert provider.store.dates() == (date(2020, 1, 2), date(2020, 1, 3))

    def test_autoload_disabled(self, loader: LoaderService) -> None:
        provider = ECBHistoric90RateProvider(loader, MANUAL)
        assert provider.pending_load is None
        assert provider.store.is_empty()
        assert provider.get_exchange_rate("EUR", "USD") is None

    def test_later_loads_reach_provider(self, loader: LoaderService) -> None:
        provider = ECBHistoric90RateProvider(loader, MANUAL)
        loader.load_data("ECB-HIST90")
        assert len(provider.store) == 2

    def test_closed_provider_stops_listening(self, loader: LoaderService) -> None:
        provider = ECBHistoric90RateProvider(loader, MANUAL)
        provider.close()
        loader.load_data("ECB-HIST90")
        assert provider.store.is_empty()

    def test_missing_resource_does_not_break_construction(self, loader: LoaderService) -> None:
        provider = ECBHistoricRateProvider(loader)
        assert provider.pending_load is not None
        with pytest.raises(UnknownResourceError):
            provider.pending_load.result(timeout=5)
        assert provider.resolve(ConversionQuery.of("EUR", "USD")) is None

    def test_providers_do_not_share_stores(self, loader: LoaderService, ecb_document: str) -> None:
        daily = ECBRateProvider(loader, MANUAL)
        hist = ECBHistoric90RateProvider(loader, MANUAL)
        hist.on_data_loaded("ECB-HIST90", ecb_document)

        assert daily.store.is_empty()
        assert len(hist.store) == 2


class TestResolution:
    @pytest.fixture
    def provider(self, loader: LoaderService, ecb_document: str) -> ECBHistoric90RateProvider:
        provider = ECBHistoric90RateProvider(loader, MANUAL)
        provider.on_data_loaded("ECB-HIST90", ecb_document)
        return provider

    def test_latest_cross_rate(self, provider: ECBHistoric90RateProvider) -> None:
        rate = provider.get_exchange_rate("USD", "JPY")
        assert rate is not None
        assert rate.rate_date == date(2020, 1, 3)
        assert rate.context.provider == "ECB-HIST90"
        leg1, leg2 = rate.rate_chain
        assert leg1.factor == DECIMAL64.divide(Decimal(1), Decimal("1.1147"))
        assert leg2.factor == Decimal("120.31")
        assert rate.factor == leg1.factor * leg2.factor

    def test_historic_rate(self, provider: ECBHistoric90RateProvider) -> None:
        rate = provider.resolve(ConversionQuery.of("EUR", "GBP", date(2020, 1, 2)))
        assert rate is not None
        assert rate.factor == Decimal("0.84828")

    def test_unknown_date(self, provider: ECBHistoric90RateProvider) -> None:
        with pytest.raises(NoRateForDate):
            provider.resolve(ConversionQuery.of("EUR", "GBP", date(2020, 1, 4)))

    def test_is_available_and_reversed(self, provider: ECBHistoric90RateProvider) -> None:
        query = ConversionQuery.of("GBP", "USD")
        assert provider.is_available(query)

        rate = provider.resolve(query)
        assert rate is not None
        reversed_ = provider.get_reversed(rate)
        assert reversed_ is not None
        assert (reversed_.base, reversed_.term) == ("USD", "GBP")
