"""Ledger source protocol — supply and owner balance abstraction."""
from typing import Protocol

from ..models import RawBalanceRecord, SupplyRecord


class LedgerSource(Protocol):
    """Abstract interface for reading token supply and holder balances."""

    async def fetch_supply(self) -> SupplyRecord: ...

    async def fetch_all_holders(
        self, page_size: int | None = None, max_records: int | None = None
    ) -> list[RawBalanceRecord]: ...
