"""Shared test fixtures for fxrates."""

from datetime import date
from decimal import Decimal

import pytest

from fxrates.models import ConversionContext, ExchangeRate, ProviderContext
from fxrates.resolver import RateResolver
from fxrates.store import RateStore

DAY = date(2020, 1, 1)

ECB_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<gesmes:Envelope xmlns:gesmes="http://www.gesmes.org/xml/2002-08-01" xmlns="http://www.ecb.int/vocabulary/2002-08-01/eurofxref">
    <gesmes:subject>Reference rates</gesmes:subject>
    <gesmes:Sender>
        <gesmes:name>European Central Bank</gesmes:name>
    </gesmes:Sender>
    <Cube>
        <Cube time="2020-01-03">
            <Cube currency="USD" rate="1.1147"/>
            <Cube currency="JPY" rate="120.31"/>
            <Cube currency="GBP" rate="0.85215"/>
        </Cube>
        <Cube time="2020-01-02">
            <Cube currency="USD" rate="1.1193"/>
            <Cube currency="JPY" rate="121.75"/>
            <Cube currency="GBP" rate="0.84828"/>
        </Cube>
    </Cube>
</gesmes:Envelope>
"""


def _make_rate(
    term: str,
    factor: str,
    rate_date: date = DAY,
    provider: str = "TEST",
) -> ExchangeRate:
    """Build a stored-style EUR -> term rate."""
    return ExchangeRate(
        base="EUR",
        term=term,
        factor=Decimal(factor),
        context=ConversionContext.historic(ProviderContext(provider=provider), rate_date),
    )


@pytest.fixture
def provider_context() -> ProviderContext:
    return ProviderContext(provider="TEST")


@pytest.fixture
def store() -> RateStore:
    """Empty rate store."""
    return RateStore()


@pytest.fixture
def loaded_store(store: RateStore) -> RateStore:
    """Store holding EUR -> USD 1.10 and EUR -> JPY 120.00 on 2020-01-01."""
    store.put_all(DAY, {"USD": _make_rate("USD", "1.10"), "JPY": _make_rate("JPY", "120.00")})
    return store


@pytest.fixture
def resolver(loaded_store: RateStore, provider_context: ProviderContext) -> RateResolver:
    return RateResolver(loaded_store, provider_context)


@pytest.fixture
def ecb_document() -> str:
    """Two-day ECB eurofxref document (2020-01-02 and 2020-01-03)."""
    return ECB_DOCUMENT
