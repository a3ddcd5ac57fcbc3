"""Layout of buffers holding equally sized, aligned instances."""

from __future__ import annotations


def aligned_instance_size(instance_size: int, min_offset_alignment: int = 1) -> int:
    """Round ``instance_size`` up to a multiple of ``min_offset_alignment``.

    An alignment of 0 leaves the size unchanged.
    """
    if instance_size < 0:
        raise ValueError("instance size must not be negative")
    if min_offset_alignment < 0 or (
        min_offset_alignment and min_offset_alignment & (min_offset_alignment - 1)
    ):
        raise ValueError(
            f"alignment must be 0 or a power of two, got {min_offset_alignment}"
        )
    if min_offset_alignment > 0:
        return (instance_size + min_offset_alignment - 1) & ~(min_offset_alignment - 1)
    return instance_size


class BufferLayout:
    """Sizes and offsets of ``instance_count`` instances stored back to back.

    Each instance occupies ``alignment_size`` bytes so that every instance
    starts at an offset that satisfies the device's minimum alignment.
    """

    __slots__ = (
        "instance_size",
        "instance_count",
        "min_offset_alignment",
        "alignment_size",
        "buffer_size",
    )

    def __init__(
        self, instance_size: int, instance_count: int, min_offset_alignment: int = 1
    ) -> None:
        if instance_count < 0:
            raise ValueError("instance count must not be negative")
        self.instance_size = instance_size
        self.instance_count = instance_count
        self.min_offset_alignment = min_offset_alignment
        self.alignment_size = aligned_instance_size(instance_size, min_offset_alignment)
        self.buffer_size = self.alignment_size * instance_count

    def __repr__(self) -> str:
        return (
            f"BufferLayout(instance_size={self.instance_size}, "
            f"instance_count={self.instance_count}, "
            f"min_offset_alignment={self.min_offset_alignment})"
        )

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.instance_count:
            raise IndexError(
                f"instance index {index} out of range for {self.instance_count} instances"
            )

    def offset_for_index(self, index: int) -> int:
        """Byte offset of the instance at ``index``."""
        self._check_index(index)
        return index * self.alignment_size

    def range_for_index(self, index: int) -> tuple[int, int]:
        """``(offset, size)`` of the aligned region holding the instance at ``index``."""
        return self.offset_for_index(index), self.alignment_size