"""HTTP client for the external base price API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

import httpx

from src.estimator.exceptions import PriceUnavailable

logger = logging.getLogger(__name__)

PRICE_UNAVAILABLE_SENTINEL = -1


class BasePriceResolver(Protocol):
    """Anything that can quote one base price for a route and date."""

    def get_base_price(self, origin: str, destination: str, when: datetime) -> float:
        ...


class TrainPriceApiClient:
    """Synchronous HTTP client for the train price estimate endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self._base_url, timeout=timeout, transport=transport
        )

    def get_base_price(self, origin: str, destination: str, when: datetime) -> float:
        """Return the base price, or raise PriceUnavailable.

        A missing price field is read as the ``-1`` sentinel.
        """
        try:
            resp = self._client.get(
                "/api/train/estimate/price",
                params={"from": origin, "to": destination, "date": when.isoformat()},
            )
            resp.raise_for_status()
            data = resp.json()
            price = data.get("price", PRICE_UNAVAILABLE_SENTINEL) if isinstance(data, dict) else None
            if price is None or isinstance(price, bool) or not isinstance(price, (int, float)):
                raise ValueError(f"malformed price {price!r}")
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(
                "Price lookup failed for %s -> %s on %s: %s",
                origin, destination, when.isoformat(), exc,
            )
            raise PriceUnavailable() from exc

        if price == PRICE_UNAVAILABLE_SENTINEL:
            logger.warning("No price available for %s -> %s on %s", origin, destination, when.isoformat())
            raise PriceUnavailable()
        return price

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> TrainPriceApiClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
