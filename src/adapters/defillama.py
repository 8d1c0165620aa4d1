"""DefiLlama protocol adapter.

DefiLlama aggregates TVL, volume and fee data for DeFi protocols and exposes
it through a public REST API. This adapter only reads data for a single
protocol slug (PumpSwap by default) and hands the JSON back untouched.

API Documentation: https://defillama.com/docs/api
"""

import logging
import time
from typing import Dict, Optional, Tuple

import requests

from src.adapters.base import ProtocolAdapter, UpstreamError

logger = logging.getLogger(__name__)


# metric -> (summary family, dataType)
METRIC_ENDPOINTS = {
    "volume": ("dexs", "dailyVolume"),
    "fees": ("fees", "dailyFees"),
    "revenue": ("fees", "dailyRevenue"),
}


class DefiLlamaAdapter(ProtocolAdapter):
    """Adapter for the DefiLlama public API.

    Each call performs exactly one GET request. There is no retry: a failed
    request surfaces as UpstreamError and the caller decides what to show.
    Responses can optionally be cached in memory for ``cache_ttl`` seconds;
    a TTL of 0 disables caching so every call reaches upstream.
    """

    def __init__(self, protocol_name: str, config: Dict):
        super().__init__(protocol_name, config)
        self.base_url = config.get("base_url", "https://api.llama.fi").rstrip("/")
        self.timeout = config.get("timeout", 15)
        self._cache_ttl = config.get("cache_ttl", 0)
        self._cache: Dict[Tuple[str, Tuple], Tuple[float, Dict]] = {}

        self.session = requests.Session()
        self.session.headers.update({
            "accept": "*/*",
            "Cache-Control": "no-store",
        })

    # ------------------------------------------------------------------ #
    # ProtocolAdapter interface
    # ------------------------------------------------------------------ #

    def fetch_protocol(self) -> Dict:
        """Fetch ``/protocol/<slug>`` (TVL, chain breakdown, changes)."""
        return self._get(f"/protocol/{self.protocol_name}")

    def fetch_metric(self, metric: str) -> Dict:
        """Fetch the daily summary for volume, fees or revenue.

        The summary carries a ``totalDataChart`` list of ``[timestamp, value]``
        pairs which the chart builder consumes.
        """
        if metric not in METRIC_ENDPOINTS:
            raise ValueError(f"Unsupported metric '{metric}'")

        family, data_type = METRIC_ENDPOINTS[metric]
        return self._get(
            f"/summary/{family}/{self.protocol_name}",
            params={
                "dataType": data_type,
                "excludeTotalDataChart": "false",
                "excludeTotalDataChartBreakdown": "true",
            },
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _get(self, path: str, params: Optional[Dict] = None) -> Dict:
        """Execute one GET request and decode the JSON body."""
        cache_key = (path, tuple(sorted((params or {}).items())))
        cached = self._cached(cache_key)
        if cached is not None:
            logger.debug("Serving %s from cache", path)
            return cached

        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Error calling DefiLlama API %s: %s", url, exc)
            raise UpstreamError(f"Request to {url} failed: {exc}") from exc

        if not resp.ok:
            logger.error(
                "DefiLlama API error %s for %s: %s",
                resp.status_code,
                url,
                resp.text[:500],
            )
            raise UpstreamError(f"Failed to fetch data: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            logger.error("Invalid JSON from DefiLlama API %s: %s", url, exc)
            raise UpstreamError(f"Invalid JSON from {url}") from exc

        if self._cache_ttl > 0:
            self._cache[cache_key] = (time.time(), data)
        return data

    def _cached(self, cache_key: Tuple[str, Tuple]) -> Optional[Dict]:
        entry = self._cache.get(cache_key) if self._cache_ttl > 0 else None
        if entry is None:
            return None
        stored_at, data = entry
        if time.time() - stored_at >= self._cache_ttl:
            self._cache.pop(cache_key, None)
            return None
        return data
