"""Per-user mutual exclusion for read-modify-write sequences.

Cart merges and checkout read the user's rows, decide, then write. The lock
serialises those sequences per user, so two requests for the same user never
interleave between the read and the write. Route handlers run on the event
loop, so the lock is an ``asyncio.Lock`` and is awaited, never blocked on.

A user's lock is dropped from the registry once nobody holds or waits for it,
which keeps it from being bound to an event loop that has since closed.
"""

import asyncio
from collections import Counter
from contextlib import asynccontextmanager

_user_locks: dict[int, asyncio.Lock] = {}
_claims: Counter = Counter()


def active_locks() -> int:
    """Number of users whose lock is currently held or awaited."""
    return len(_user_locks)


@asynccontextmanager
async def user_lock(user_id: int):
    """Hold the lock of ``user_id`` for the duration of the block."""
    lock = _user_locks.setdefault(user_id, asyncio.Lock())
    _claims[user_id] += 1
    try:
        async with lock:
            yield
    finally:
        _claims[user_id] -= 1
        if not _claims[user_id]:
            del _claims[user_id]
            _user_locks.pop(user_id, None)
