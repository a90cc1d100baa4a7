"""
Per-Session Lock Registry

Answer submission rewrites a session's histories with a full read, recompute
and write. Two submissions for the same session that overlap would each write
back their own snapshot and one answer would be lost. The registry hands out
one asyncio.Lock per session id so those submissions run one after another,
while submissions for different sessions stay concurrent.

Locks are held weakly: once no coroutine holds or waits on a session's lock
it is dropped from the registry.
"""

import asyncio
import weakref


class SessionLockRegistry:
    """Hands out one asyncio.Lock per session id."""

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def lock_for(self, session_id: str) -> asyncio.Lock:
        """
        Get the lock guarding a session.

        Args:
            session_id (str): Session identifier

        Returns:
            asyncio.Lock: The same lock object for as long as anyone holds it
        """
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)
