from __future__ import annotations

import abc

from ..types import FeedSnapshot


class MarketStatusSource(abc.ABC):
    """Abstract market status provider."""

    @abc.abstractmethod
    async def fetch_status(self, market_id: int) -> FeedSnapshot:
        """Return the current status of ``market_id``.

        Implementations should raise `ValueError` if the payload cannot be
        parsed, and let transport errors propagate.
        """

    async def close(self) -> None:
        """Optional hook for connectors that require cleanup."""
        return None
