"""Provider directory."""
from .client import (
    ProviderDirectoryClient,
    available_networks,
    filter_by_network,
    parse_provider,
    visible_providers,
)

__all__ = [
    "ProviderDirectoryClient",
    "available_networks",
    "filter_by_network",
    "parse_provider",
    "visible_providers",
]
