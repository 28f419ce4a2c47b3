"""Tests for per-player locks."""

import asyncio

from cardalbum.services.player_locks import PlayerLocks


class TestPlayerLocks:
    async def test_lock_released_after_use(self) -> None:
        """A player's lock is dropped once nobody holds or waits for it."""
        locks = PlayerLocks()

        async with locks.hold("user-1"):
            assert locks.active() == {"user-1"}

        assert locks.active() == set()

    async def test_lock_released_after_error(self) -> None:
        locks = PlayerLocks()

        try:
            async with locks.hold("user-1"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert locks.active() == set()

    async def test_same_player_is_serialized(self) -> None:
        locks = PlayerLocks()
        events: list[str] = []

        async def work(name: str) -> None:
            async with locks.hold("user-1"):
                events.append(f"{name} start")
                await asyncio.sleep(0.01)
                events.append(f"{name} end")

        await asyncio.gather(work("a"), work("b"), work("c"))

        assert events == ["a start", "a end", "b start", "b end", "c start", "c end"]
        assert locks.active() == set()

    async def test_lock_kept_while_waiters_remain(self) -> None:
        locks = PlayerLocks()
        release = asyncio.Event()

        async def first() -> None:
            async with locks.hold("user-1"):
                await release.wait()

        async def second() -> None:
            async with locks.hold("user-1"):
                pass

        tasks = [asyncio.create_task(first()), asyncio.create_task(second())]
        await asyncio.sleep(0.01)
        assert locks.active() == {"user-1"}

        release.set()
        await asyncio.gather(*tasks)
        assert locks.active() == set()

    async def test_players_do_not_block_each_other(self) -> None:
        locks = PlayerLocks()

        async with locks.hold("user-1"):
            async with locks.hold("user-2"):
                assert locks.active() == {"user-1", "user-2"}

        assert locks.active() == set()
