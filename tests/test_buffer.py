import pytest

from vuengine.buffer import BufferLayout, aligned_instance_size


def test_zero_alignment_keeps_size():
    assert aligned_instance_size(37, 0) == 37


def test_alignment_of_one_keeps_size():
    assert aligned_instance_size(37, 1) == 37


def test_rounds_up_to_alignment():
    assert aligned_instance_size(100, 64) == 128


def test_already_aligned_size_is_unchanged():
    assert aligned_instance_size(256, 256) == 256


@pytest.mark.parametrize("size", [1, 15, 16, 17, 63, 200, 1000])
@pytest.mark.parametrize("alignment", [1, 2, 4, 16, 64, 256])
def test_aligned_size_invariants(size, alignment):
    aligned = aligned_instance_size(size, alignment)
    assert aligned % alignment == 0
    assert size <= aligned < size + alignment


@pytest.mark.parametrize("alignment", [3, 12, 100, -4])
def test_rejects_bad_alignment(alignment):
    with pytest.raises(ValueError):
        aligned_instance_size(32, alignment)


def test_rejects_negative_size():
    with pytest.raises(ValueError):
        aligned_instance_size(-1, 16)


def test_layout_sizes():
    layout = BufferLayout(100, 5, 64)
    assert layout.alignment_size == aligned_instance_size(100, 64)
    assert layout.buffer_size == layout.alignment_size * 5
    assert layout.instance_size == 100
    assert layout.instance_count == 5


def test_layout_default_alignment_packs_tightly():
    layout = BufferLayout(44, 3)
    assert layout.alignment_size == 44
    assert layout.buffer_size == 132


def test_offsets_are_consecutive_and_aligned():
    layout = BufferLayout(72, 4, 32)
    offsets = [layout.offset_for_index(i) for i in range(4)]
    assert offsets[0] == 0
    assert all(b - a == layout.alignment_size for a, b in zip(offsets, offsets[1:]))
    assert all(offset % 32 == 0 for offset in offsets)
    assert offsets[-1] + layout.alignment_size == layout.buffer_size


def test_range_for_index():
    layout = BufferLayout(20, 3, 16)
    offset, size = layout.range_for_index(2)
    assert offset == layout.offset_for_index(2)
    assert size == layout.alignment_size


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_index_out_of_range(index):
    layout = BufferLayout(20, 3, 16)
    with pytest.raises(IndexError):
        layout.offset_for_index(index)
    with pytest.raises(IndexError):
        layout.range_for_index(index)


def test_layout_rejects_negative_count():
    with pytest.raises(ValueError):
        BufferLayout(16, -1)


def test_layout_rejects_bad_alignment():
    with pytest.raises(ValueError):
        BufferLayout(16, 2, 24)