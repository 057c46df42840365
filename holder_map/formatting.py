"""Plain-text formatting of holder map and provider results."""
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Sequence

from .models import DataSource, HolderMapSnapshot, Provider


def format_balance(value: float) -> str:
    """Compact balance: ``1.50M``, ``12.30K`` or thousands-separated."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.2f}M"
    if value >= 1_000:
        return f"{value / 1_000:.2f}K"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_relative_time(timestamp: float, now: float | None = None) -> str:
    """Age of ``timestamp`` (epoch seconds) as ``N minutes ago`` style text."""
    if now is None:
        now = time.time()
    minutes = int((now - timestamp) // 60)

    if minutes < 1:
        return "just now"
    if minutes == 1:
        return "1 minute ago"
    if minutes < 60:
        return f"{minutes} minutes ago"

    hours = minutes // 60
    if hours == 1:
        return "1 hour ago"
    return f"{hours} hours ago"


def format_holder_report(
    snapshot: HolderMapSnapshot, symbol: str = "", now: float | None = None
) -> str:
    session = snapshot.session
    unit = f" {symbol}" if symbol else ""

    if session.data_source is DataSource.ERROR:
        return f"❌ {session.last_error}\nRun the command again to retry."
    if session.data_source is DataSource.LOADING:
        return "Loading holder data..."
    if not snapshot.holders:
        return "No holders to display."

    lines = [f"🫧 Top {len(snapshot.holders)} Holders"]
    if snapshot.total_supply is not None:
        lines.append(f"Total supply: {format_balance(snapshot.total_supply)}{unit}")
    lines.append("")
    lines.append(f"{'#':>3}  {'Address':<18}  {'Balance':>14}  {'Share':>7}  Bubble (x, y, ⌀)")

    for holder, bubble in snapshot.entries():
        lines.append(
            f"{holder.rank:>3}  {holder.display_address:<18}  "
            f"{format_balance(holder.balance_major_units) + unit:>14}  "
            f"{holder.percentage_of_supply:>6.2f}%  "
            f"({bubble.left:.0f}, {bubble.top:.0f}, {bubble.diameter:.0f})"
        )

    if session.last_updated is not None:
        updated = datetime.fromtimestamp(session.last_updated, tz=timezone.utc)
        lines.append("")
        lines.append(
            f"Updated {format_relative_time(session.last_updated, now)} "
            f"({updated.strftime('%Y-%m-%d %H:%M:%S')} UTC)"
        )
    return "\n".join(lines)


def format_provider_table(providers: Sequence[Provider], hidden: int = 0) -> str:
    if not providers:
        return "No providers found."

    lines = [f"{'Name':<40}  {'Network':<8}  {'Chain ID':<12}  {'Uptime':>9}  Status"]
    for p in providers:
        lines.append(
            f"{p.name[:40]:<40}  {p.network:<8}  {p.chain_id:<12}  {p.uptime:>9}  {p.status.value}"
        )
    if hidden:
        lines.append(f"... {hidden} more (use --all to show every provider)")
    return "\n".join(lines)
