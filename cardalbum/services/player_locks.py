"""
Per-player serialization of state mutations.

Pack purchases, redemptions and placements each read a player's state,
apply a rule and write it back. Concurrent requests for the same player
would otherwise lose id-counter increments or redeemed-code appends, so
every mutating request holds that player's lock for the whole cycle.

A player's lock only lives while some request holds or waits for it.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field


@dataclass
class PlayerLocks:
    """Registry of one asyncio.Lock per player id."""

    _locks: dict[str, asyncio.Lock] = field(default_factory=dict)
    # Requests holding or waiting on each lock
    _users: dict[str, int] = field(default_factory=dict)

    def get(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        """Hold a player's lock for the duration of the block."""
        lock = self.get(user_id)
        self._users[user_id] = self._users.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[user_id] -= 1
            if self._users[user_id] == 0:
                del self._users[user_id]
                del self._locks[user_id]

    def active(self) -> set[str]:
        """Player ids with a live lock."""
        return set(self._locks)

    def clear(self) -> None:
        self._locks.clear()
        self._users.clear()


player_locks = PlayerLocks()
