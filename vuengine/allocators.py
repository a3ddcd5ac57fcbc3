"""Allocators that hand out addresses from a fixed address range."""

from __future__ import annotations

import abc
from collections import deque

POINTER_SIZE = 8
_HEADER_SIZE = 1


class AllocatorError(MemoryError):
    """Raised when an allocator cannot satisfy or accept a request."""


def _check_alignment(alignment: int) -> None:
    if alignment <= 0 or alignment & (alignment - 1):
        raise ValueError(f"alignment must be a positive power of two, got {alignment}")


def _check_size(size: int) -> None:
    if size <= 0:
        raise ValueError("allocate called with size 0")


def align_forward(address: int, alignment: int) -> int:
    """Round ``address`` up to the next multiple of ``alignment``."""
    _check_alignment(alignment)
    return (address + alignment - 1) & ~(alignment - 1)


def get_adjustment(address: int, alignment: int, extra: int = 0) -> int:
    """Bytes to add to ``address`` to align it while leaving ``extra`` bytes before it."""
    _check_alignment(alignment)
    adjustment = -address % alignment
    if adjustment < extra:
        needed = extra - adjustment
        adjustment += alignment * (needed // alignment)
        if needed % alignment:
            adjustment += alignment
    return adjustment


class Allocator(abc.ABC):
    """Bookkeeping shared by all allocators over an address range."""

    def __init__(self, memory_size: int, base_address: int) -> None:
        if memory_size < 0:
            raise ValueError("memory size must not be negative")
        self.memory_size = memory_size
        self.base_address = base_address
        self.used_memory = 0
        self.allocation_count = 0

    @property
    def end_address(self) -> int:
        return self.base_address + self.memory_size

    @abc.abstractmethod
    def allocate(self, size: int, alignment: int) -> int:
        """Reserve ``size`` bytes aligned to ``alignment`` and return the address."""

    @abc.abstractmethod
    def free(self, address: int) -> None:
        """Give back the block starting at ``address``."""

    @abc.abstractmethod
    def clear(self) -> None:
        """Release every allocation at once."""


class LinearAllocator(Allocator):
    """Hands out memory front to back; memory is only released by ``clear``."""

    def allocate(self, size: int, alignment: int) -> int:
        _check_size(size)
        current = self.base_address + self.used_memory
        adjustment = get_adjustment(current, alignment)
        if self.used_memory + size + adjustment > self.memory_size:
            raise AllocatorError(f"not enough memory for {size} bytes")
        self.used_memory += size + adjustment
        self.allocation_count += 1
        return current + adjustment

    def free(self, address: int) -> None:
        raise AllocatorError("linear allocators do not support free; use clear instead")

    def clear(self) -> None:
        self.used_memory = 0
        self.allocation_count = 0


class StackAllocator(Allocator):
    """Hands out memory as a stack; blocks must be freed in reverse order.

    Each block is preceded by a one-byte header that records the adjustment
    used to align it.
    """

    def __init__(self, memory_size: int, base_address: int) -> None:
        super().__init__(memory_size, base_address)
        self._blocks: list[tuple[int, int]] = []

    def allocate(self, size: int, alignment: int) -> int:
        _check_size(size)
        current = self.base_address + self.used_memory
        adjustment = get_adjustment(current, alignment, _HEADER_SIZE)
        if self.used_memory + size + adjustment > self.memory_size:
            raise AllocatorError(f"not enough memory for {size} bytes")
        address = current + adjustment
        self._blocks.append((address, adjustment))
        self.used_memory += size + adjustment
        self.allocation_count += 1
        return address

    def free(self, address: int) -> None:
        if not self._blocks or self._blocks[-1][0] != address:
            raise AllocatorError(
                f"address {address:#x} is not the last allocation; "
                "memory must be freed in reverse order"
            )
        _, adjustment = self._blocks.pop()
        self.used_memory = address - adjustment - self.base_address
        self.allocation_count -= 1

    def clear(self) -> None:
        self._blocks.clear()
        self.used_memory = 0
        self.allocation_count = 0


class PoolAllocator(Allocator):
    """Hands out fixed-size, fixed-alignment slots from a free list."""

    def __init__(
        self,
        memory_size: int,
        base_address: int,
        object_size: int,
        object_alignment: int,
    ) -> None:
        if object_size < POINTER_SIZE:
            raise ValueError(f"object size must be at least {POINTER_SIZE} bytes")
        _check_alignment(object_alignment)
        super().__init__(memory_size, base_address)
        self.object_size = object_size
        self.object_alignment = object_alignment
        self._free_slots: deque[int] = deque()
        self._allocated: set[int] = set()
        self.clear()

    @property
    def capacity(self) -> int:
        """Total number of slots in the pool."""
        return len(self._free_slots) + len(self._allocated)

    def allocate(self, size: int, alignment: int) -> int:
        _check_size(size)
        if size != self.object_size or alignment != self.object_alignment:
            raise ValueError(
                f"pool serves objects of size {self.object_size} "
                f"and alignment {self.object_alignment} only"
            )
        if not self._free_slots:
            raise AllocatorError("pool is exhausted")
        address = self._free_slots.popleft()
        self._allocated.add(address)
        self.used_memory += self.object_size
        self.allocation_count += 1
        return address

    def free(self, address: int) -> None:
        if address not in self._allocated:
            raise AllocatorError(f"address {address:#x} was not allocated from this pool")
        self._allocated.remove(address)
        self._free_slots.appendleft(address)
        self.used_memory -= self.object_size
        self.allocation_count -= 1

    def clear(self) -> None:
        adjustment = get_adjustment(self.base_address, self.object_alignment)
        count = max(0, (self.memory_size - adjustment) // self.object_size)
        first = self.base_address + adjustment
        self._free_slots = deque(
            range(first, first + count * self.object_size, self.object_size)
        )
        self._allocated.clear()
        self.used_memory = 0
        self.allocation_count = 0