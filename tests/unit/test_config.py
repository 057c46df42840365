"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

from pathlib import Path

import pytest

from holder_map.config import (
    AppConfig,
    LayoutConfig,
    LedgerConfig,
    PaginationConfig,
    _interpolate_env,
    load_config,
)


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOST", "ledger.test")
        result = _interpolate_env({"api_base": "https://${HOST}/api", "denom": "uakt"})
        assert result == {"api_base": "https://ledger.test/api", "denom": "uakt"}

    def test_nested_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("A", "x")
        assert _interpolate_env(["${A}", "y"]) == ["x", "y"]

    def test_non_string_passthrough(self) -> None:
        assert _interpolate_env(42) == 42
        assert _interpolate_env(True) is True


class TestLoadConfig:
    def test_loads_valid_yaml(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        assert isinstance(cfg, AppConfig)
        assert cfg.ledger.api_base == "https://ledger.example.com/api"
        assert cfg.ledger.request_timeout == 5.0
        assert cfg.pagination.page_size == 50
        assert cfg.pagination.max_records == 200
        assert cfg.holders.top_n == 10
        assert cfg.layout.canvas_width == 1000.0
        assert cfg.refresh.interval_minutes == 2
        assert cfg.providers.initial_visible == 5

    def test_missing_sections_use_defaults(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("ledger:\n  denom: uakt\n")
        cfg = load_config(cfg_file)
        assert cfg.pagination == PaginationConfig()
        assert cfg.layout == LayoutConfig()
        assert cfg.holders.top_n == 15
        assert cfg.ledger.scale_factor == 1_000_000

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("")
        assert load_config(cfg_file) == AppConfig()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_env_interpolation_in_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TEST_LEDGER", "https://lcd.test.com")
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text('ledger:\n  api_base: "${TEST_LEDGER}"\n')
        cfg = load_config(cfg_file)
        assert cfg.ledger.api_base == "https://lcd.test.com"

    def test_bundled_config_loads(self) -> None:
        cfg = load_config()
        assert cfg.ledger.denom == "uakt"
        assert cfg.holders.top_n == 15


class TestLedgerUrls:
    def test_supply_and_owner_urls(self) -> None:
        cfg = LedgerConfig(api_base="https://lcd.example.com/api/", denom="uatom")
        assert cfg.supply_url == "https://lcd.example.com/api/cosmos/bank/v1beta1/supply/uatom"
        assert cfg.owners_url == (
            "https://lcd.example.com/api/cosmos/bank/v1beta1/denom_owners/uatom"
        )

    def test_timeout_in_seconds(self) -> None:
        assert LedgerConfig(request_timeout_ms=8000).request_timeout == 8.0


class TestValidation:
    @pytest.mark.parametrize(
        "yaml_content, match",
        [
            ('ledger:\n  api_base: ""\n', "api_base"),
            ('ledger:\n  denom: ""\n', "denom"),
            ("ledger:\n  scale_factor: 0\n", "scale_factor"),
            ("pagination:\n  page_size: 0\n", "page_size"),
            ("pagination:\n  max_records: -1\n", "max_records"),
            ("pagination:\n  page_delay_ms: -5\n", "page_delay_ms"),
            ("holders:\n  top_n: 0\n", "top_n"),
            ("refresh:\n  interval_minutes: 0\n", "interval_minutes"),
            ("layout:\n  min_diameter: 200\n  max_diameter: 100\n", "min_diameter"),
            ("layout:\n  padding: 400\n", "padding"),
        ],
    )
    def test_invalid_values_raise(
        self, tmp_path: Path, yaml_content: str, match: str
    ) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(yaml_content)
        with pytest.raises(ValueError, match=match):
            load_config(cfg_file)


class TestFrozenConfigs:
    def test_ledger_config_immutable(self) -> None:
        c = LedgerConfig()
        with pytest.raises(AttributeError):
            c.denom = "uatom"  # type: ignore[misc]

    def test_pagination_config_immutable(self) -> None:
        p = PaginationConfig()
        with pytest.raises(AttributeError):
            p.page_size = 999  # type: ignore[misc]
