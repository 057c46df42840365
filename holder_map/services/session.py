"""Single-writer state machine for the holder map view.

Every refresh cycle takes a generation number from :meth:`SessionStore.begin_refresh`.
Only the latest generation may commit; results from superseded cycles are
dropped so they never overwrite newer data.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ..models import (
    BubblePosition,
    DataSource,
    FetchSession,
    HolderMapSnapshot,
    HolderRecord,
)

logger = logging.getLogger(__name__)


class SessionStore:
    """Owns the :class:`FetchSession` and the displayed holder set."""

    def __init__(self) -> None:
        self._snapshot = HolderMapSnapshot()

    @property
    def generation(self) -> int:
        return self._snapshot.session.generation

    def snapshot(self) -> HolderMapSnapshot:
        return self._snapshot

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def begin_refresh(self) -> int:
        """Reset to loading and return the new generation number."""
        generation = self.generation + 1
        session = replace(
            self._snapshot.session,
            is_loading=True,
            last_error=None,
            data_source=DataSource.LOADING,
            generation=generation,
        )
        self._snapshot = replace(self._snapshot, session=session)
        logger.debug("Refresh generation %d started", generation)
        return generation

    def complete(
        self,
        generation: int,
        total_supply: float | None,
        holders: Sequence[HolderRecord],
        positions: Sequence[BubblePosition],
        timestamp: float,
    ) -> bool:
        """Atomically publish a finished refresh. Returns False if stale."""
        if not self.is_current(generation):
            logger.info(
                "Discarding result of superseded refresh %d (current %d)",
                generation, self.generation,
            )
            return False
        if len(holders) != len(positions):
            raise ValueError("holders and positions must be index-aligned")

        session = replace(
            self._snapshot.session,
            is_loading=False,
            last_error=None,
            last_updated=timestamp,
            data_source=DataSource.LIVE,
        )
        self._snapshot = HolderMapSnapshot(
            session=session,
            total_supply=total_supply,
            holders=tuple(holders),
            positions=tuple(positions),
        )
        return True

    def fail(self, generation: int, message: str) -> bool:
        """Record a failed refresh. Returns False if stale."""
        if not self.is_current(generation):
            logger.info("Ignoring error from superseded refresh %d", generation)
            return False

        session = replace(
            self._snapshot.session,
            is_loading=False,
            last_error=message,
            data_source=DataSource.ERROR,
        )
        self._snapshot = replace(self._snapshot, session=session)
        return True
