import pytest

from vuengine.allocators import AllocatorError
from vuengine.chunk_memory import ChunkMemoryManager
from vuengine.memory_manager import MemoryManager


def make(max_objects=4, manager=None):
    return ChunkMemoryManager(16, 8, max_objects, memory_manager=manager, tag="objects")


def test_single_chunk_initially():
    chunks = make()
    assert chunks.chunk_count == 1
    assert len(chunks) == 0
    assert list(chunks) == []


def test_objects_are_distinct_and_aligned():
    chunks = make()
    created = [chunks.create_object() for _ in range(4)]
    assert len(set(created)) == 4
    assert all(address % 8 == 0 for address in created)
    assert len(chunks) == 4


def test_new_chunk_added_when_full():
    chunks = make()
    created = [chunks.create_object() for _ in range(30)]
    assert chunks.chunk_count > 1
    assert len(set(created)) == len(created)
    assert len(chunks) == len(created)
    assert set(chunks) == set(created)


def test_destroy_and_reuse():
    chunks = make()
    first = chunks.create_object()
    chunks.create_object()
    chunks.destroy_object(first)
    assert first not in set(chunks)
    assert len(chunks) == 1
    assert chunks.create_object() == first


def test_destroy_unknown_address():
    chunks = make()
    address = chunks.create_object()
    chunks.destroy_object(address)
    with pytest.raises(AllocatorError):
        chunks.destroy_object(address)
    with pytest.raises(AllocatorError):
        chunks.destroy_object(1)


def test_close_releases_all_memory():
    manager = MemoryManager(capacity=4096)
    chunks = make(manager=manager)
    for _ in range(25):
        chunks.create_object()
    assert manager.used_memory > 0
    chunks.close()
    assert manager.used_memory == 0
    assert manager.check_memory_leaks() == []
    assert len(chunks) == 0


def test_chunk_memory_tagged():
    manager = MemoryManager(capacity=4096)
    make(manager=manager)
    assert [user for user, _ in manager.pending] == ["objects"]


def test_invalid_object_size_rejected_without_leak():
    manager = MemoryManager(capacity=4096)
    with pytest.raises(ValueError):
        ChunkMemoryManager(4, 4, 4, memory_manager=manager)
    assert manager.pending == []


def test_invalid_chunk_capacity():
    with pytest.raises(ValueError):
        ChunkMemoryManager(16, 8, 0, memory_manager=MemoryManager(capacity=1024))