"""Cosmos bank REST client — total supply and paginated denom owners."""
from __future__ import annotations

import asyncio
import logging
import math
import ssl
from typing import Any, AsyncIterator

import aiohttp
import certifi

from ...config import LedgerConfig, PaginationConfig
from ...errors import FetchError, HttpError, NoDataError, ParseError, RequestTimeoutError
from ...models import HolderPage, RawBalanceRecord, SupplyRecord

logger = logging.getLogger(__name__)


class LedgerClient:
    """Read-only client for the Cosmos bank module endpoints."""

    def __init__(
        self,
        config: LedgerConfig,
        pagination: PaginationConfig | None = None,
    ) -> None:
        self.supply_url = config.supply_url
        self.owners_url = config.owners_url
        self.scale_factor = config.scale_factor
        self.timeout = config.request_timeout
        self.pagination = pagination or PaginationConfig()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(self, url: str, params: dict[str, Any] | None = None) -> Any:
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    raise HttpError(url, response.status)
                try:
                    return await response.json()
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise ParseError(f"Invalid JSON from {url}: {e}", url) from e

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``url`` and decode JSON, aborting after ``self.timeout`` seconds."""
        try:
            return await asyncio.wait_for(self._request(url, params), self.timeout)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(url, self.timeout) from e
        except aiohttp.ClientError as e:
            raise FetchError(f"Request to {url} failed: {e}", url) from e

    # ------------------------------------------------------------------
    # Supply
    # ------------------------------------------------------------------

    async def fetch_supply(self) -> SupplyRecord:
        """Fetch total supply and convert it to major units."""
        data = await self.get_json(self.supply_url)
        if not isinstance(data, dict):
            raise ParseError("Supply response is not an object", self.supply_url)

        coin = data.get("amount") or {}
        if not isinstance(coin, dict):
            raise ParseError("Supply amount is not an object", self.supply_url)

        amount = coin.get("amount")
        try:
            total = float(amount) / self.scale_factor if amount else None
        except (TypeError, ValueError):
            total = None
        if total is not None and not math.isfinite(total):
            total = None
        if total is None and amount:
            logger.warning("Unparseable supply amount: %r", amount)

        if total is not None:
            logger.info("Total supply: %.2f", total)
        return SupplyRecord(total_major_units=total)

    # ------------------------------------------------------------------
    # Holders
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_page(data: Any, offset: int, url: str) -> HolderPage:
        if not isinstance(data, dict):
            raise ParseError("Owners response is not an object", url)

        owners = data.get("denom_owners") or []
        pagination = data.get("pagination") or {}
        if not isinstance(owners, list):
            raise ParseError("denom_owners is not a list", url)
        if not isinstance(pagination, dict):
            raise ParseError("pagination is not an object", url)

        records: list[RawBalanceRecord] = []
        for entry in owners:
            if not isinstance(entry, dict):
                continue
            address = entry.get("address")
            if not address or not isinstance(address, str):
                continue
            balance = entry.get("balance")
            amount = balance.get("amount") if isinstance(balance, dict) else None
            records.append(
                RawBalanceRecord(
                    address=address,
                    minor_units_amount="" if amount is None else str(amount),
                )
            )

        next_key = pagination.get("next_key")
        if next_key is not None and not isinstance(next_key, str):
            raise ParseError("pagination.next_key is not a string", url)
        return HolderPage(records=tuple(records), next_key=next_key or None, offset=offset)

    async def iter_pages(self, page_size: int | None = None) -> AsyncIterator[HolderPage]:
        """Yield owner pages lazily until an empty or final page.

        Request failures propagate to the consumer; the generator is not
        restartable.
        """
        limit = self.pagination.page_size if page_size is None else page_size
        if limit <= 0:
            raise ValueError(f"page_size must be positive, got {limit}")
        offset = 0

        while True:
            logger.debug("Fetching holders: offset=%d, limit=%d", offset, limit)
            data = await self.get_json(
                self.owners_url,
                params={"pagination.offset": offset, "pagination.limit": limit},
            )
            page = self._parse_page(data, offset, self.owners_url)
            yield page

            if not page.records or not page.has_more:
                return
            offset += limit

    async def fetch_all_holders(
        self,
        page_size: int | None = None,
        max_records: int | None = None,
    ) -> list[RawBalanceRecord]:
        """Accumulate owner pages, keeping partial results on page failure.

        Raises:
            NoDataError: when no records were accumulated at all.
        """
        cap = self.pagination.max_records if max_records is None else max_records
        if cap <= 0:
            raise ValueError(f"max_records must be positive, got {cap}")
        limit = self.pagination.page_size if page_size is None else page_size
        if limit <= 0:
            raise ValueError(f"page_size must be positive, got {limit}")
        delay = self.pagination.page_delay_ms / 1000

        records: list[RawBalanceRecord] = []
        failure: FetchError | None = None
        pages = self.iter_pages(limit)

        try:
            async for page in pages:
                if not page.records:
                    break

                records.extend(page.records)
                logger.debug("Total holders fetched: %d", len(records))

                if not page.has_more or len(records) >= cap:
                    break
                await asyncio.sleep(delay)
        except FetchError as e:
            failure = e
            logger.warning(
                "Holder pagination stopped after %d records: %s", len(records), e
            )
        finally:
            await pages.aclose()

        if not records:
            raise NoDataError("No holder data received", self.owners_url) from failure

        return records[:cap]
