"""Protocol interfaces for the holder map pipeline."""
from .ledger import LedgerSource
from .provider_directory import ProviderDirectory

__all__ = ["LedgerSource", "ProviderDirectory"]
