"""Platform configuration consumed by the allocation engine.

The engine never reads configuration from process-wide state. Callers
hold a :class:`PlatformConfigProvider`, subscribe to it explicitly, and
pass the resulting :class:`MinimumDonationPolicy` to the validator.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from donation_allocation.currency import CurrencyFormat
from donation_allocation.errors import ConfigError
from donation_allocation.models import MinimumDonationPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlatformConfig:
    """Currency and minimum-donation settings of the platform."""

    currency: CurrencyFormat = field(default_factory=CurrencyFormat)
    minimum_donation: MinimumDonationPolicy = field(default_factory=MinimumDonationPolicy)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlatformConfig":
        """Parse the ``data`` object of a ``/config`` response."""
        return cls(
            currency=CurrencyFormat.from_dict(data.get("currency") or {}),
            minimum_donation=MinimumDonationPolicy.from_dict(data.get("minimumDonation") or {}),
        )


DEFAULT_CONFIG = PlatformConfig()

ConfigListener = Callable[[PlatformConfig], None]


class ConfigSource(Protocol):
    """Anything that can fetch the current platform configuration."""

    async def fetch_config(self) -> PlatformConfig: ...


class PlatformConfigProvider:
    """Cache of the platform configuration with change subscriptions.

    Parameters
    ----------
    source : ConfigSource, optional
        Fetches fresh configuration on :meth:`refresh`. Without a source the
        provider only serves what is pushed through :meth:`update`.
    initial : PlatformConfig, optional
        Configuration to start from. :data:`DEFAULT_CONFIG` is served until
        one is loaded.
    """

    def __init__(self, source: ConfigSource | None = None, initial: PlatformConfig | None = None) -> None:
        self._source = source
        self._config = initial
        self._listeners: list[ConfigListener] = []

    @property
    def config(self) -> PlatformConfig:
        return self._config or DEFAULT_CONFIG

    @property
    def loaded(self) -> bool:
        return self._config is not None

    def minimum_donation(self) -> MinimumDonationPolicy:
        return self.config.minimum_donation

    def subscribe(self, callback: ConfigListener) -> Callable[[], None]:
        """Register ``callback`` for configuration changes.

        The callback is invoked immediately when a configuration is already
        loaded.

        Returns
        -------
        Callable[[], None]
            Removes the subscription. Safe to call more than once.
        """
        self._listeners.append(callback)
        if self._config is not None:
            self._call(callback, self._config)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def update(self, config: PlatformConfig) -> None:
        """Replace the cached configuration and notify subscribers."""
        self._config = config
        for callback in list(self._listeners):
            self._call(callback, config)

    def invalidate(self) -> None:
        """Forget the cached configuration; the next read serves defaults."""
        self._config = None

    async def refresh(self) -> PlatformConfig:
        """Fetch fresh configuration from the source and notify subscribers.

        On failure the previously cached configuration, or the defaults, is
        kept and subscribers are still notified so they re-read it.
        """
        if self._source is None:
            return self.config
        try:
            config = await self._source.fetch_config()
        except ConfigError as exc:
            logger.warning(
                "Failed to fetch platform config, keeping %s: %s",
                "cached" if self.loaded else "defaults",
                exc,
            )
            config = self.config
        self.update(config)
        return config

    @staticmethod
    def _call(callback: ConfigListener, config: PlatformConfig) -> None:
        try:
            callback(config)
        except Exception:
            logger.exception("Error in config listener %r", callback)
