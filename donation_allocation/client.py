"""HTTP clients for the catalog, configuration and donation services."""

import logging
import os
from typing import Any

import httpx

from donation_allocation.config import PlatformConfig
from donation_allocation.errors import (
    GENERIC_SUBMISSION_FAILURE,
    CatalogError,
    ConfigError,
    ServiceError,
    SubmissionError,
)
from donation_allocation.models import Cause

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000/api"
API_URL_ENV = "DONATION_API_URL"
DEFAULT_TIMEOUT = 10.0
DEFAULT_SUCCESS_MESSAGE = "Donation successful! Thank you for your contribution."


def create_client(
    base_url: str | None = None,
    token: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build an ``httpx.AsyncClient`` for the donation platform API.

    Parameters
    ----------
    base_url : str, optional
        API root. Defaults to ``$DONATION_API_URL`` or
        ``http://localhost:3000/api``.
    token : str, optional
        Bearer token sent with every request.
    timeout : float
        Per-request timeout in seconds.
    transport : httpx.AsyncBaseTransport, optional
        Custom transport, e.g. ``httpx.MockTransport`` in tests.

    Returns
    -------
    httpx.AsyncClient
    """
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        base_url=base_url or os.environ.get(API_URL_ENV, DEFAULT_API_URL),
        headers=headers,
        timeout=timeout,
        transport=transport,
    )


def _message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message")
    return None


async def _request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    error_cls: type[ServiceError],
    fallback: str,
    **kwargs: Any,
) -> dict[str, Any]:
    """Send a request and return its JSON body if it reports success.

    Transport failures, non-2xx statuses, unparseable bodies and bodies with
    ``success`` false are raised as ``error_cls``, carrying the service's
    ``message`` when present and ``fallback`` otherwise.
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        logger.exception("%s %s failed", method, url)
        raise error_cls(fallback) from exc

    if response.is_error:
        raise error_cls(_message(response) or fallback, response.status_code)
    try:
        body = response.json()
    except ValueError as exc:
        raise error_cls(fallback, response.status_code) from exc
    if not isinstance(body, dict) or not body.get("success"):
        message = body.get("message") if isinstance(body, dict) else None
        raise error_cls(message or fallback, response.status_code)
    return body


class HttpCauseCatalog:
    """Cause catalog backed by ``GET /causes``."""

    def __init__(self, client: httpx.AsyncClient, path: str = "/causes") -> None:
        self._client = client
        self._path = path

    async def list_causes(self) -> list[Cause]:
        """Return the active causes in service order.

        Raises
        ------
        CatalogError
            The request failed or the service reported an error.
        """
        body = await _request(self._client, "GET", self._path, CatalogError, "Failed to load causes")
        records = body.get("causes", body.get("data")) or []
        causes = [Cause.from_dict(record) for record in records]
        logger.info("Loaded %d causes", len(causes))
        return causes


class HttpConfigSource:
    """Platform configuration backed by ``GET /config``."""

    def __init__(self, client: httpx.AsyncClient, path: str = "/config") -> None:
        self._client = client
        self._path = path

    async def fetch_config(self) -> PlatformConfig:
        """Fetch and parse the platform configuration.

        Raises
        ------
        ConfigError
            The request failed or the body carries no ``data``.
        """
        body = await _request(
            self._client, "GET", self._path, ConfigError, "Failed to fetch platform config"
        )
        data = body.get("data")
        if not isinstance(data, dict):
            raise ConfigError("Invalid config response")
        try:
            return PlatformConfig.from_dict(data)
        except (TypeError, ValueError) as exc:
            raise ConfigError("Invalid config response") from exc


class HttpDonationService:
    """Donation submission backed by ``POST /donate/multi``.

    Parameters
    ----------
    client : httpx.AsyncClient
        Authenticated platform client.
    payment_method : str
        Recorded payment method for the donation.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        path: str = "/donate/multi",
        payment_method: str = "manual",
    ) -> None:
        self._client = client
        self._path = path
        self.payment_method = payment_method

    async def submit(self, payload: dict[str, Any]) -> str:
        """Send ``payload`` and return the service's success message.

        Raises
        ------
        SubmissionError
            The service rejected the donation or could not be reached.
        """
        body = await _request(
            self._client,
            "POST",
            self._path,
            SubmissionError,
            GENERIC_SUBMISSION_FAILURE,
            json={**payload, "paymentMethod": self.payment_method},
        )
        return body.get("message") or DEFAULT_SUCCESS_MESSAGE
