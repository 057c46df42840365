"""Pure normalization of raw owner balances into ranked holders — no I/O."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from ..models import HolderRecord, RawBalanceRecord

logger = logging.getLogger(__name__)

DEFAULT_SCALE_FACTOR = 1_000_000
DEFAULT_TOP_N = 15


@dataclass(frozen=True)
class NormalizationResult:
    holders: tuple[HolderRecord, ...]
    skipped_malformed: int = 0
    skipped_non_positive: int = 0


def to_major_units(minor_units_amount: str, scale_factor: int) -> float | None:
    """Convert a minor-unit decimal string to major units.

    Returns ``None`` for anything that is not a finite number.
    """
    try:
        value = float(minor_units_amount)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value / scale_factor


def percentage_of_supply(balance: float, total_supply: float | None) -> float:
    """Share of total supply in percent, 0 when the supply is unknown."""
    if total_supply is None or not math.isfinite(total_supply) or total_supply <= 0:
        return 0.0
    return balance / total_supply * 100


def normalize_with_stats(
    raw_records: Iterable[RawBalanceRecord],
    total_supply: float | None,
    scale_factor: int = DEFAULT_SCALE_FACTOR,
    top_n: int = DEFAULT_TOP_N,
) -> NormalizationResult:
    """Rank the top ``top_n`` holders and report how many rows were dropped."""
    if scale_factor <= 0:
        raise ValueError(f"scale_factor must be positive, got {scale_factor}")

    balances: list[tuple[str, float]] = []
    malformed = 0
    non_positive = 0

    for record in raw_records:
        balance = to_major_units(record.minor_units_amount, scale_factor)
        if balance is None:
            malformed += 1
            continue
        if balance <= 0:
            non_positive += 1
            continue
        balances.append((record.address, balance))

    # sorted() is stable, ties keep fetch order
    ranked = sorted(balances, key=lambda item: item[1], reverse=True)[:top_n]

    holders = tuple(
        HolderRecord(
            address=address,
            balance_major_units=balance,
            percentage_of_supply=percentage_of_supply(balance, total_supply),
            rank=index + 1,
        )
        for index, (address, balance) in enumerate(ranked)
    )
    return NormalizationResult(
        holders=holders,
        skipped_malformed=malformed,
        skipped_non_positive=non_positive,
    )


def normalize(
    raw_records: Iterable[RawBalanceRecord],
    total_supply: float | None,
    scale_factor: int = DEFAULT_SCALE_FACTOR,
    top_n: int = DEFAULT_TOP_N,
) -> list[HolderRecord]:
    """Convert, filter, sort, truncate and rank raw owner balances."""
    result = normalize_with_stats(raw_records, total_supply, scale_factor, top_n)
    if result.skipped_malformed:
        logger.warning(
            "Dropped %d balance records with unparseable amounts",
            result.skipped_malformed,
        )
    return list(result.holders)
