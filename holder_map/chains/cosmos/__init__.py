"""Cosmos SDK chain client."""
from .client import LedgerClient

__all__ = ["LedgerClient"]
