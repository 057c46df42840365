"""Holder map orchestration — fetch, normalize, lay out, publish."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from ..chains.cosmos import LedgerClient
from ..config import AppConfig
from ..errors import FetchError, HttpError, NoDataError, ParseError, RequestTimeoutError
from ..holders import normalize
from ..interfaces.ledger import LedgerSource
from ..layout import layout_from_config
from ..models import HolderMapSnapshot
from .session import SessionStore

logger = logging.getLogger(__name__)


def describe_error(error: Exception) -> str:
    """Human-readable message for the view's error state."""
    if isinstance(error, RequestTimeoutError):
        return "Request timed out, please retry"
    if isinstance(error, HttpError):
        return f"Ledger API returned HTTP {error.status}"
    if isinstance(error, NoDataError):
        return "No holder data received"
    if isinstance(error, ParseError):
        return "Malformed response from ledger API"
    return str(error) or "Failed to fetch holder data"


class HolderMapService:
    """Runs refresh cycles for the top-holder bubble map.

    A newer :meth:`refresh` cancels one still in flight; the session store
    additionally rejects late writes from any superseded generation.
    """

    def __init__(
        self,
        config: AppConfig,
        ledger: LedgerSource | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._ledger: LedgerSource = ledger or LedgerClient(
            config.ledger, config.pagination
        )
        self._clock = clock
        self._store = SessionStore()
        self._inflight: asyncio.Task[None] | None = None

    @property
    def snapshot(self) -> HolderMapSnapshot:
        return self._store.snapshot()

    # ------------------------------------------------------------------
    # Refresh cycle
    # ------------------------------------------------------------------

    async def _run_cycle(self, generation: int) -> None:
        try:
            supply = await self._ledger.fetch_supply()
            raw_records = await self._ledger.fetch_all_holders(
                self._config.pagination.page_size,
                self._config.pagination.max_records,
            )
            holders = normalize(
                raw_records,
                supply.total_major_units,
                self._config.ledger.scale_factor,
                self._config.holders.top_n,
            )
            if not holders:
                raise NoDataError("No holder with a positive balance")
        except FetchError as e:
            logger.error("Failed to fetch holder data: %s", e)
            self._store.fail(generation, describe_error(e))
            return

        positions = layout_from_config(holders, self._config.layout)
        if self._store.complete(
            generation, supply.total_major_units, holders, positions, self._clock()
        ):
            logger.info(
                "Holder map updated: %d holders from %d records (generation %d)",
                len(holders), len(raw_records), generation,
            )

    async def refresh(self) -> HolderMapSnapshot:
        """Run a full refresh cycle and return the resulting snapshot."""
        previous = self._inflight
        if previous is not None and not previous.done():
            logger.info("Superseding in-flight refresh")
            previous.cancel()

        generation = self._store.begin_refresh()
        task = asyncio.ensure_future(self._run_cycle(generation))
        self._inflight = task

        try:
            await task
        except asyncio.CancelledError:
            if task is self._inflight:
                raise
            # superseded by a newer refresh
        finally:
            if task is self._inflight:
                self._inflight = None

        return self.snapshot

    async def run_continuous(
        self,
        interval_minutes: int | None = None,
        on_update: Callable[[HolderMapSnapshot], None] | None = None,
    ) -> None:
        """Refresh now and then every ``interval_minutes`` forever."""
        interval = interval_minutes or self._config.refresh.interval_minutes
        logger.info("Starting holder map refresh loop (every %d minutes)", interval)

        while True:
            try:
                snapshot = await self.refresh()
                if on_update is not None:
                    on_update(snapshot)
                await asyncio.sleep(interval * 60)
            except Exception as e:
                logger.error("Error in refresh loop: %s", e)
                await asyncio.sleep(60)
