"""Global memory bookkeeping on top of a stack allocator."""

from __future__ import annotations

import logging

from vuengine.allocators import AllocatorError, StackAllocator

logger = logging.getLogger(__name__)

MEMORY_CAPACITY = 134217728  # 128 MB
DEFAULT_BASE_ADDRESS = 0x10000


def _name(user: str | None) -> str:
    return user if user is not None else "Unknown"


class MemoryManager:
    """Tracks allocations from a stack allocator and releases them in order.

    Blocks freed out of order are remembered and released once everything
    allocated after them has been freed.
    """

    def __init__(
        self,
        capacity: int = MEMORY_CAPACITY,
        base_address: int = DEFAULT_BASE_ADDRESS,
    ) -> None:
        self.capacity = capacity
        self._allocator = StackAllocator(capacity, base_address)
        self._pending: list[tuple[str | None, int]] = []
        self._freed: set[int] = set()
        logger.info("%d bytes of memory allocated.", capacity)

    @property
    def used_memory(self) -> int:
        return self._allocator.used_memory

    @property
    def pending(self) -> list[tuple[str | None, int]]:
        """Allocations not yet released, oldest first, as (user, address)."""
        return list(self._pending)

    def allocate(self, size: int, user: str | None = None) -> int:
        logger.info("%s allocated %d bytes of global memory.", _name(user), size)
        address = self._allocator.allocate(size, 1)
        self._pending.append((user, address))
        return address

    def free(self, address: int) -> None:
        if address in self._freed or all(a != address for _, a in self._pending):
            raise AllocatorError(f"address {address:#x} is not an outstanding allocation")
        if address != self._pending[-1][1]:
            self._freed.add(address)
            return
        self._release_top()
        while self._pending and self._pending[-1][1] in self._freed:
            self._freed.discard(self._pending[-1][1])
            self._release_top()

    def _release_top(self) -> None:
        user, address = self._pending.pop()
        logger.info("%s freed global memory.", _name(user))
        self._allocator.free(address)

    def check_memory_leaks(self) -> list[tuple[str | None, int]]:
        """Report and return the allocations that were never freed."""
        if self._freed and not self._pending:
            raise AllocatorError("freed blocks remain with no pending allocations")
        leaks = [(user, a) for user, a in self._pending if a not in self._freed]
        if leaks:
            logger.warning("!!!  M E M O R Y   L E A K   D E T E C T E D  !!!")
            for user, address in leaks:
                logger.warning(
                    "'%s' memory user didn't release allocated memory %#x!",
                    _name(user),
                    address,
                )
        else:
            logger.info("No memory leaks detected.")
        return leaks

    def close(self) -> None:
        logger.info("Releasing MemoryManager!")
        self._allocator.clear()
        self._pending.clear()
        self._freed.clear()

    def __enter__(self) -> MemoryManager:
        return self

    def __exit__(self, *args) -> None:
        self.close()