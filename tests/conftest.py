"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from holder_map.config import (
    AppConfig,
    HoldersConfig,
    LayoutConfig,
    LedgerConfig,
    PaginationConfig,
    ProvidersConfig,
    RefreshConfig,
)
from holder_map.models import HolderRecord, RawBalanceRecord

LONG_ADDRESS = "akash1qqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqxyz9"


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_ledger_config() -> LedgerConfig:
    return LedgerConfig(
        api_base="https://ledger.example.com/api",
        denom="uakt",
        symbol="AKT",
        scale_factor=1_000_000,
        request_timeout_ms=8000,
    )


@pytest.fixture()
def sample_pagination() -> PaginationConfig:
    return PaginationConfig(page_size=2, max_records=500, page_delay_ms=0)


@pytest.fixture()
def sample_app_config(
    sample_ledger_config: LedgerConfig, sample_pagination: PaginationConfig
) -> AppConfig:
    return AppConfig(
        ledger=sample_ledger_config,
        pagination=sample_pagination,
        holders=HoldersConfig(top_n=15),
        layout=LayoutConfig(),
        refresh=RefreshConfig(interval_minutes=5),
        providers=ProvidersConfig(url="https://console.example.com/v1/providers"),
    )


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_raw_records() -> list[RawBalanceRecord]:
    return [
        RawBalanceRecord(address="a1", minor_units_amount="5000000"),
        RawBalanceRecord(address="a2", minor_units_amount="15000000"),
    ]


@pytest.fixture()
def sample_holders() -> list[HolderRecord]:
    return [
        HolderRecord(address=LONG_ADDRESS, balance_major_units=1_500_000.0,
                     percentage_of_supply=0.3, rank=1),
        HolderRecord(address="akash1short", balance_major_units=250_000.0,
                     percentage_of_supply=0.05, rank=2),
        HolderRecord(address="akash1tiny", balance_major_units=12.5,
                     percentage_of_supply=0.0, rank=3),
    ]


# ---------------------------------------------------------------------------
# Sample API payloads
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_supply_response() -> dict:
    return {"amount": {"denom": "uakt", "amount": "20000000"}}


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    ledger:
      api_base: "https://ledger.example.com/api"
      denom: uakt
      symbol: AKT
      scale_factor: 1000000
      request_timeout_ms: 5000
    pagination:
      page_size: 50
      max_records: 200
      page_delay_ms: 10
    holders:
      top_n: 10
    layout:
      canvas_width: 1000
      canvas_height: 500
      padding: 50
    refresh:
      interval_minutes: 2
    providers:
      url: "https://console.example.com/v1/providers"
      network: Akash
      initial_visible: 5
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
