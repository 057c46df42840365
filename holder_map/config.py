"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LedgerConfig:
    api_base: str = "https://akash.c29r3.xyz/api"
    denom: str = "uakt"
    symbol: str = "AKT"
    scale_factor: int = 1_000_000
    request_timeout_ms: int = 8000
    supply_path: str = "/cosmos/bank/v1beta1/supply/{denom}"
    owners_path: str = "/cosmos/bank/v1beta1/denom_owners/{denom}"

    @property
    def request_timeout(self) -> float:
        """Request timeout in seconds."""
        return self.request_timeout_ms / 1000

    @property
    def supply_url(self) -> str:
        return self.api_base.rstrip("/") + self.supply_path.format(denom=self.denom)

    @property
    def owners_url(self) -> str:
        return self.api_base.rstrip("/") + self.owners_path.format(denom=self.denom)


@dataclass(frozen=True)
class PaginationConfig:
    page_size: int = 100
    max_records: int = 500
    page_delay_ms: int = 100


@dataclass(frozen=True)
class HoldersConfig:
    top_n: int = 15


@dataclass(frozen=True)
class LayoutConfig:
    canvas_width: float = 800.0
    canvas_height: float = 600.0
    padding: float = 100.0
    min_diameter: float = 40.0
    max_diameter: float = 180.0
    default_diameter: float = 100.0


@dataclass(frozen=True)
class RefreshConfig:
    interval_minutes: int = 5


@dataclass(frozen=True)
class ProvidersConfig:
    url: str = "https://console-api.akash.network/v1/providers"
    network: str = "Akash"
    initial_visible: int = 7


@dataclass(frozen=True)
class AppConfig:
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)
    holders: HoldersConfig = field(default_factory=HoldersConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_ledger(raw: dict[str, Any]) -> LedgerConfig:
    return LedgerConfig(
        api_base=raw.get("api_base", LedgerConfig.api_base),
        denom=raw.get("denom", LedgerConfig.denom),
        symbol=raw.get("symbol", LedgerConfig.symbol),
        scale_factor=int(raw.get("scale_factor", LedgerConfig.scale_factor)),
        request_timeout_ms=int(
            raw.get("request_timeout_ms", LedgerConfig.request_timeout_ms)
        ),
        supply_path=raw.get("supply_path", LedgerConfig.supply_path),
        owners_path=raw.get("owners_path", LedgerConfig.owners_path),
    )


def _build_pagination(raw: dict[str, Any]) -> PaginationConfig:
    return PaginationConfig(
        page_size=int(raw.get("page_size", 100)),
        max_records=int(raw.get("max_records", 500)),
        page_delay_ms=int(raw.get("page_delay_ms", 100)),
    )


def _build_holders(raw: dict[str, Any]) -> HoldersConfig:
    return HoldersConfig(top_n=int(raw.get("top_n", 15)))


def _build_layout(raw: dict[str, Any]) -> LayoutConfig:
    return LayoutConfig(
        canvas_width=float(raw.get("canvas_width", 800.0)),
        canvas_height=float(raw.get("canvas_height", 600.0)),
        padding=float(raw.get("padding", 100.0)),
        min_diameter=float(raw.get("min_diameter", 40.0)),
        max_diameter=float(raw.get("max_diameter", 180.0)),
        default_diameter=float(raw.get("default_diameter", 100.0)),
    )


def _build_refresh(raw: dict[str, Any]) -> RefreshConfig:
    return RefreshConfig(interval_minutes=int(raw.get("interval_minutes", 5)))


def _build_providers(raw: dict[str, Any]) -> ProvidersConfig:
    return ProvidersConfig(
        url=raw.get("url", ProvidersConfig.url),
        network=raw.get("network", ProvidersConfig.network),
        initial_visible=int(raw.get("initial_visible", 7)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        ledger=_build_ledger(raw.get("ledger", {})),
        pagination=_build_pagination(raw.get("pagination", {})),
        holders=_build_holders(raw.get("holders", {})),
        layout=_build_layout(raw.get("layout", {})),
        refresh=_build_refresh(raw.get("refresh", {})),
        providers=_build_providers(raw.get("providers", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.ledger.api_base:
        raise ValueError("ledger.api_base must be set")
    if not cfg.ledger.denom:
        raise ValueError("ledger.denom must be set")

    positive = {
        "ledger.scale_factor": cfg.ledger.scale_factor,
        "ledger.request_timeout_ms": cfg.ledger.request_timeout_ms,
        "pagination.page_size": cfg.pagination.page_size,
        "pagination.max_records": cfg.pagination.max_records,
        "holders.top_n": cfg.holders.top_n,
        "refresh.interval_minutes": cfg.refresh.interval_minutes,
    }
    for name, value in positive.items():
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")

    if cfg.pagination.page_delay_ms < 0:
        raise ValueError("pagination.page_delay_ms must not be negative")

    layout = cfg.layout
    if layout.min_diameter > layout.max_diameter:
        raise ValueError("layout.min_diameter must not exceed layout.max_diameter")
    if layout.canvas_width <= 0 or layout.canvas_height <= 0:
        raise ValueError("layout canvas dimensions must be positive")
    if 2 * layout.padding > min(layout.canvas_width, layout.canvas_height):
        raise ValueError("layout.padding does not fit inside the canvas")
