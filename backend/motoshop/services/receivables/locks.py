"""Per-customer mutual exclusion for settlements inside one process."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class CustomerLocks:
    """
    One asyncio.Lock per customer id, created on demand.

    An entry is dropped once nobody holds or waits on it, so the registry only
    grows with the number of customers paying at the same moment.
    """

    def __init__(self):
        self._locks: Dict[int, asyncio.Lock] = {}
        self._users: Dict[int, int] = {}

    @asynccontextmanager
    async def hold(self, customer_id: int) -> AsyncIterator[None]:
        lock = self._locks.setdefault(customer_id, asyncio.Lock())
        self._users[customer_id] = self._users.get(customer_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[customer_id] -= 1
            if self._users[customer_id] == 0:
                del self._users[customer_id]
                del self._locks[customer_id]

    def __len__(self) -> int:
        return len(self._locks)


# Shared by every request handled in this process
customer_locks = CustomerLocks()
