import logging
from asyncio import Lock
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict
from uuid import UUID


class SessionLockManager:
    def __init__(self):
        self.locks: Dict[UUID, Lock] = {}  # one Lock per game_session_id
        self.users: Dict[UUID, int] = {}  # holders plus waiters per game_session_id
        self.lock = Lock()  # protects self.locks and self.users

    @asynccontextmanager
    async def hold(self, game_session_id: UUID) -> AsyncIterator[None]:
        """Serialize everything that runs inside this block for one game session

        The session counts as in use from before the acquire until after the
        release, so a waiter keeps its Lock alive across cleanups.

        Args:
            game_session_id (UUID): ID to identify this game session
        """
        async with self.lock:
            session_lock = self.locks.setdefault(game_session_id, Lock())
            self.users[game_session_id] = self.users.get(game_session_id, 0) + 1
        try:
            async with session_lock:
                yield
        finally:
            async with self.lock:
                self.users[game_session_id] -= 1
                if self.users[game_session_id] == 0:
                    del self.users[game_session_id]

    def in_use(self, game_session_id: UUID) -> bool:
        return self.users.get(game_session_id, 0) > 0

    async def cleanup(self, game_session_id: UUID):
        """Delete the Lock of the specified game_session_id if nobody holds or waits for it

        Args:
            game_session_id (UUID): ID to identify this game session
        """
        async with self.lock:
            if game_session_id in self.locks and not self.in_use(game_session_id):
                del self.locks[game_session_id]

    async def cleanup_idle(self):
        """Delete every Lock that nobody holds or waits for"""
        async with self.lock:
            idle = [game_session_id for game_session_id in self.locks if not self.in_use(game_session_id)]
            for game_session_id in idle:
                del self.locks[game_session_id]
        if idle:
            logging.info(f"Released {len(idle)} idle session locks")
