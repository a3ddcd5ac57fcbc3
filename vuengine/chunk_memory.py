"""Object storage split into small pools of equal-sized slots."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from vuengine.allocators import AllocatorError, PoolAllocator
from vuengine.memory_manager import MemoryManager


@dataclass
class _MemoryChunk:
    allocator: PoolAllocator
    objects: list[int] = field(default_factory=list)

    @property
    def start(self) -> int:
        return self.allocator.base_address

    @property
    def end(self) -> int:
        return self.allocator.end_address


class ChunkMemoryManager:
    """Allocates object slots from a list of pools, adding pools as they fill."""

    def __init__(
        self,
        object_size: int,
        object_alignment: int,
        max_chunk_objects: int,
        memory_manager: MemoryManager | None = None,
        tag: str | None = None,
    ) -> None:
        if max_chunk_objects <= 0:
            raise ValueError("max_chunk_objects must be positive")
        self.object_size = object_size
        self.object_alignment = object_alignment
        self.max_chunk_objects = max_chunk_objects
        self.tag = tag
        self.chunk_size = (object_size + object_alignment) * max_chunk_objects
        self._owns_memory = memory_manager is None
        self._memory = memory_manager if memory_manager is not None else MemoryManager()
        self._chunks: list[_MemoryChunk] = [self._new_chunk()]

    @property
    def chunk_count(self) -> int:
        return len(self._chunks)

    def _new_chunk(self) -> _MemoryChunk:
        base = self._memory.allocate(self.chunk_size, self.tag)
        try:
            pool = PoolAllocator(
                self.chunk_size, base, self.object_size, self.object_alignment
            )
        except ValueError:
            self._memory.free(base)
            raise
        return _MemoryChunk(pool)

    def _allocate_in(self, chunk: _MemoryChunk) -> int:
        address = chunk.allocator.allocate(self.object_size, self.object_alignment)
        chunk.objects.append(address)
        return address

    def create_object(self) -> int:
        """Reserve a slot for one object and return its address."""
        for chunk in self._chunks:
            if len(chunk.objects) > self.max_chunk_objects:
                continue
            try:
                return self._allocate_in(chunk)
            except AllocatorError:
                continue
        chunk = self._new_chunk()
        self._chunks.insert(0, chunk)
        return self._allocate_in(chunk)

    def destroy_object(self, address: int) -> None:
        """Release the slot at ``address``."""
        for chunk in self._chunks:
            if chunk.start <= address < chunk.end:
                if address not in chunk.objects:
                    break
                chunk.objects.remove(address)
                chunk.allocator.free(address)
                return
        raise AllocatorError(f"failed to delete object at {address:#x}")

    def __iter__(self) -> Iterator[int]:
        for chunk in list(self._chunks):
            yield from list(chunk.objects)

    def __len__(self) -> int:
        return sum(len(chunk.objects) for chunk in self._chunks)

    def close(self) -> None:
        """Release every chunk back to the memory manager."""
        for chunk in self._chunks:
            chunk.objects.clear()
            self._memory.free(chunk.start)
        self._chunks.clear()
        if self._owns_memory:
            self._memory.close()