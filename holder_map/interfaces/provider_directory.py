"""Provider directory protocol."""
from typing import Protocol

from ..models import Provider


class ProviderDirectory(Protocol):
    """Abstract interface for listing compute providers."""

    async def fetch_providers(self) -> list[Provider]: ...
