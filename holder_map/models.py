"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

ADDRESS_DISPLAY_LIMIT = 20


def truncate_address(address: str) -> str:
    """Shorten long account identifiers for display.

    Examples:
        "akash1qqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqxyz9" → "akash1qqqqq...xyz9"
        "akash1short" → "akash1short"
    """
    if len(address) <= ADDRESS_DISPLAY_LIMIT:
        return address
    return f"{address[:11]}...{address[-4:]}"


@dataclass(frozen=True)
class SupplyRecord:
    """Total circulating supply in major units, ``None`` when unknown."""

    total_major_units: float | None


@dataclass(frozen=True)
class RawBalanceRecord:
    """One owner entry as returned by the ledger API (amount unparsed)."""

    address: str
    minor_units_amount: str


@dataclass(frozen=True)
class HolderPage:
    """A single page of the owner listing."""

    records: tuple[RawBalanceRecord, ...]
    next_key: str | None = None
    offset: int = 0

    @property
    def has_more(self) -> bool:
        return bool(self.next_key)


@dataclass(frozen=True)
class HolderRecord:
    """Ranked holder with its share of total supply."""

    address: str
    balance_major_units: float
    percentage_of_supply: float
    rank: int

    @property
    def display_address(self) -> str:
        return truncate_address(self.address)


@dataclass(frozen=True)
class BubblePosition:
    """Canvas placement of one holder bubble (center coordinates)."""

    left: float
    top: float
    diameter: float


class DataSource(str, Enum):
    LOADING = "loading"
    LIVE = "live"
    ERROR = "error"


@dataclass(frozen=True)
class FetchSession:
    """Status of the current page view's refresh cycle."""

    is_loading: bool = True
    last_error: str | None = None
    last_updated: float | None = None
    data_source: DataSource = DataSource.LOADING
    generation: int = 0


@dataclass(frozen=True)
class HolderMapSnapshot:
    """Everything a renderer needs to draw the bubble map."""

    session: FetchSession = field(default_factory=FetchSession)
    total_supply: float | None = None
    holders: tuple[HolderRecord, ...] = ()
    positions: tuple[BubblePosition, ...] = ()

    def entries(self) -> Iterator[tuple[HolderRecord, BubblePosition]]:
        return zip(self.holders, self.positions)


class ProviderStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SYNCING = "Syncing"


@dataclass(frozen=True)
class Provider:
    """Compute provider entry for the provider directory table."""

    id: str
    name: str
    network: str
    chain_id: str
    uptime: str
    status: ProviderStatus
