"""Provider directory client and list helpers."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any, Sequence

import aiohttp
import certifi

from ..config import ProvidersConfig
from ..errors import FetchError, HttpError, ParseError, RequestTimeoutError
from ..models import Provider, ProviderStatus

logger = logging.getLogger(__name__)

ALL_NETWORKS = "All"
DEFAULT_CHAIN_ID = "akashnet-2"


def _provider_status(raw: dict[str, Any]) -> ProviderStatus:
    if raw.get("isOnline") is False:
        return ProviderStatus.INACTIVE
    if raw.get("isAudited") is False:
        return ProviderStatus.SYNCING
    return ProviderStatus.ACTIVE


def _format_uptime(seconds: Any) -> str:
    if not seconds:
        return "N/A"
    try:
        return f"{int(float(seconds) // 3600)}hrs"
    except (TypeError, ValueError):
        return "N/A"


def parse_provider(raw: dict[str, Any], index: int, network: str = "Akash") -> Provider:
    """Map one provider API object to a :class:`Provider`."""
    owner = raw.get("owner") or ""
    return Provider(
        id=owner or f"provider-{index}",
        name=raw.get("hostUri") or owner[:10] or "Provider",
        network=network,
        chain_id=raw.get("chainId") or DEFAULT_CHAIN_ID,
        uptime=_format_uptime(raw.get("uptime")),
        status=_provider_status(raw),
    )


def available_networks(providers: Sequence[Provider]) -> list[str]:
    """Filter choices: ``All`` followed by each network in first-seen order."""
    networks = [ALL_NETWORKS]
    for provider in providers:
        if provider.network not in networks:
            networks.append(provider.network)
    return networks


def filter_by_network(providers: Sequence[Provider], network: str) -> list[Provider]:
    if network == ALL_NETWORKS:
        return list(providers)
    return [p for p in providers if p.network == network]


def visible_providers(
    providers: Sequence[Provider], visible_count: int = 7, show_all: bool = False
) -> list[Provider]:
    if show_all:
        return list(providers)
    return list(providers[:visible_count])


class ProviderDirectoryClient:
    """Fetch the provider list from the console API."""

    def __init__(self, config: ProvidersConfig, timeout: float = 8.0) -> None:
        self.url = config.url
        self.network = config.network
        self.timeout = timeout

    async def _request(self) -> Any:
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.get(self.url) as response:
                if response.status != 200:
                    raise HttpError(self.url, response.status)
                try:
                    return await response.json()
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise ParseError(f"Invalid JSON from {self.url}: {e}", self.url) from e

    async def fetch_providers(self) -> list[Provider]:
        """Fetch and parse all providers.

        Raises:
            FetchError: on timeout, HTTP failure or a malformed body.
        """
        try:
            data = await asyncio.wait_for(self._request(), self.timeout)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(self.url, self.timeout) from e
        except aiohttp.ClientError as e:
            raise FetchError(f"Request to {self.url} failed: {e}", self.url) from e

        if not isinstance(data, list):
            raise ParseError("Provider response is not a list", self.url)

        providers = [
            parse_provider(raw, index, self.network)
            for index, raw in enumerate(data)
            if isinstance(raw, dict)
        ]
        logger.info("Fetched %d providers", len(providers))
        return providers
