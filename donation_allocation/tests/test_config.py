"""Tests for platform configuration, subscriptions and currency formatting."""

import logging

import pytest

from donation_allocation.config import DEFAULT_CONFIG, PlatformConfig, PlatformConfigProvider
from donation_allocation.currency import CurrencyFormat, format_currency
from donation_allocation.errors import ConfigError
from donation_allocation.models import MinimumDonationPolicy

CONFIG_DATA = {
    "currency": {
        "code": "INR",
        "symbol": "₹",
        "position": "before",
        "decimalPlaces": 2,
        "thousandsSeparator": ",",
        "decimalSeparator": ".",
    },
    "minimumDonation": {"amount": 10, "enabled": True},
}


class StaticSource:
    def __init__(self, config=None, error=None):
        self.config = config
        self.error = error
        self.calls = 0

    async def fetch_config(self):
        self.calls += 1
        if self.error:
            raise ConfigError(self.error)
        return self.config


class TestCurrencyFormat:
    def test_default_dollars(self):
        assert format_currency(1234.5) == "$1,234.50"

    def test_symbol_after_and_custom_separators(self):
        fmt = CurrencyFormat(code="EUR", symbol="€", position="after", thousands_separator=".", decimal_separator=",")
        assert format_currency(1234567.891, fmt) == "1.234.567,89€"

    def test_zero_decimal_places_rounds_half_up(self):
        assert format_currency(1234.5, CurrencyFormat(decimal_places=0)) == "$1,235"

    def test_small_amount(self):
        assert format_currency(0.5) == "$0.50"

    def test_invalid_position(self):
        with pytest.raises(ValueError, match="before"):
            CurrencyFormat(position="middle")


class TestPlatformConfig:
    def test_from_dict(self):
        config = PlatformConfig.from_dict(CONFIG_DATA)
        assert config.currency.symbol == "₹"
        assert config.minimum_donation == MinimumDonationPolicy(amount=10, enabled=True)

    def test_missing_sections_use_defaults(self):
        assert PlatformConfig.from_dict({}) == DEFAULT_CONFIG

    def test_default_minimum(self):
        assert DEFAULT_CONFIG.minimum_donation == MinimumDonationPolicy(amount=1, enabled=True)

    def test_negative_minimum_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            MinimumDonationPolicy(amount=-1)


class TestPlatformConfigProvider:
    def test_serves_defaults_until_loaded(self):
        provider = PlatformConfigProvider()
        assert provider.config == DEFAULT_CONFIG
        assert not provider.loaded

    def test_update_notifies_subscribers(self):
        provider = PlatformConfigProvider()
        seen = []
        provider.subscribe(seen.append)
        new = PlatformConfig.from_dict(CONFIG_DATA)
        provider.update(new)
        assert seen == [new]
        assert provider.minimum_donation().amount == 10

    def test_subscribe_replays_loaded_config(self):
        initial = PlatformConfig.from_dict(CONFIG_DATA)
        provider = PlatformConfigProvider(initial=initial)
        seen = []
        provider.subscribe(seen.append)
        assert seen == [initial]

    def test_unsubscribe(self):
        provider = PlatformConfigProvider()
        seen = []
        unsubscribe = provider.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        provider.update(DEFAULT_CONFIG)
        assert seen == []

    def test_failing_listener_does_not_block_others(self, caplog):
        provider = PlatformConfigProvider()
        seen = []

        def broken(config):
            raise RuntimeError("listener bug")

        provider.subscribe(broken)
        provider.subscribe(seen.append)
        with caplog.at_level(logging.ERROR, logger="donation_allocation.config"):
            provider.update(DEFAULT_CONFIG)
        assert seen == [DEFAULT_CONFIG]
        assert "Error in config listener" in caplog.text

    def test_invalidate(self):
        provider = PlatformConfigProvider(initial=PlatformConfig.from_dict(CONFIG_DATA))
        provider.invalidate()
        assert provider.config == DEFAULT_CONFIG

    @pytest.mark.asyncio
    async def test_refresh_from_source(self):
        source = StaticSource(PlatformConfig.from_dict(CONFIG_DATA))
        provider = PlatformConfigProvider(source)
        seen = []
        provider.subscribe(seen.append)
        config = await provider.refresh()
        assert config.currency.code == "INR"
        assert seen == [config]
        assert provider.loaded

    @pytest.mark.asyncio
    async def test_refresh_failure_keeps_cached(self, caplog):
        cached = PlatformConfig.from_dict(CONFIG_DATA)
        provider = PlatformConfigProvider(StaticSource(error="down"), initial=cached)
        with caplog.at_level(logging.WARNING, logger="donation_allocation.config"):
            config = await provider.refresh()
        assert config == cached
        assert "keeping cached" in caplog.text

    @pytest.mark.asyncio
    async def test_refresh_failure_falls_back_to_defaults(self):
        provider = PlatformConfigProvider(StaticSource(error="down"))
        assert await provider.refresh() == DEFAULT_CONFIG
        assert provider.loaded

    @pytest.mark.asyncio
    async def test_refresh_without_source(self):
        provider = PlatformConfigProvider()
        assert await provider.refresh() == DEFAULT_CONFIG
