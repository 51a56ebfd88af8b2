"""Allocators: a heap-delegating allocator and a fixed-size arena."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from scanlab.errors import AllocationError

logger = logging.getLogger(__name__)

_MIB = 1024 * 1024
_GIB = 1024 * 1024 * 1024


@dataclass(slots=True)
class MemoryBlock:
    """A non-owning view over `size` bytes of `buffer`, starting at `start`.

    The empty block (no buffer, size 0) stands for "no storage".
    """

    buffer: bytearray | None = None
    start: int = 0
    size: int = 0

    @property
    def is_empty(self) -> bool:
        return self.buffer is None

    @property
    def end(self) -> int:
        return self.start + self.size

    def view(self) -> memoryview:
        """Return a writable memoryview over exactly this block's bytes."""
        if self.buffer is None:
            return memoryview(b"")
        return memoryview(self.buffer)[self.start : self.end]

    def release(self) -> None:
        """Turn this block into the empty block."""
        self.buffer = None
        self.start = 0
        self.size = 0


def is_block_inside(big: MemoryBlock, small: MemoryBlock) -> bool:
    """Return True if `small` lies entirely within `big`."""
    if big.buffer is None or small.buffer is not big.buffer:
        return False
    return big.start <= small.start and small.end <= big.end


def zero_block(block: MemoryBlock) -> None:
    if block.buffer is not None and block.size:
        block.buffer[block.start : block.end] = bytes(block.size)


def bytes_to_megabytes(size: int) -> float:
    return size / _MIB


def bytes_to_gigabytes(size: int) -> float:
    return size / _GIB


def megabytes_to_bytes(megabytes: int) -> int:
    return megabytes * _MIB


def gigabytes_to_bytes(gigabytes: int) -> int:
    return gigabytes * _GIB


class Allocator(ABC):
    """Allocation strategy. Blocks come back zero-filled and never overlap."""

    @abstractmethod
    def allocate(self, size: int) -> MemoryBlock:
        """Return a zero-filled block of exactly `size` bytes."""

    @abstractmethod
    def free(self, block: MemoryBlock) -> bool:
        """Give `block` back. The block is invalidated."""

    @abstractmethod
    def reset(self) -> None:
        """Reclaim everything this allocator can reclaim at once."""

    def close(self) -> None:
        """Drop any storage the allocator holds itself."""

    def __enter__(self) -> Allocator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class HeapAllocator(Allocator):
    """Delegates every request to the interpreter heap."""

    def allocate(self, size: int) -> MemoryBlock:
        if size < 0:
            raise AllocationError(f"cannot allocate a negative size ({size} bytes)")
        try:
            storage = bytearray(size)
        except MemoryError as exc:
            raise AllocationError(f"heap exhausted allocating {size} bytes") from exc
        return MemoryBlock(storage, 0, size)

    def free(self, block: MemoryBlock) -> bool:
        # Freeing the empty block is allowed and does nothing
        block.release()
        return True

    def reset(self) -> None:
        pass


class ArenaAllocator(Allocator):
    """Bump allocator over one pre-sized region.

    Blocks stay valid until the next `reset()` or until the arena is closed.
    `free()` only checks that a block came from this arena; nothing is
    reclaimed individually.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise AllocationError(f"arena capacity must be non-negative, got {capacity}")
        self._region: MemoryBlock = MemoryBlock(bytearray(capacity), 0, capacity)
        self._offset = 0
        logger.debug("arena created with %d bytes", capacity)

    @property
    def capacity(self) -> int:
        return self._region.size

    @property
    def used(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return self._region.size - self._offset

    def allocate(self, size: int) -> MemoryBlock:
        if self._region.is_empty:
            raise AllocationError("allocation from a closed arena")
        if size < 0:
            raise AllocationError(f"cannot allocate a negative size ({size} bytes)")
        if self._offset + size > self._region.size:
            logger.debug(
                "arena exhausted: requested %d bytes, %d of %d in use",
                size,
                self._offset,
                self._region.size,
            )
            raise AllocationError(
                f"arena exhausted: requested {size} bytes, "
                f"{self.remaining} of {self.capacity} remaining"
            )
        block = MemoryBlock(self._region.buffer, self._offset, size)
        self._offset += size
        # Space handed out before a reset may still hold old bytes
        zero_block(block)
        return block

    def free(self, block: MemoryBlock) -> bool:
        if is_block_inside(self._region, block):
            block.release()
            return True
        return False

    def reset(self) -> None:
        logger.debug("arena reset, reclaiming %d bytes", self._offset)
        self._offset = 0

    def close(self) -> None:
        """Drop the region. Every block issued by this arena becomes invalid."""
        self._offset = 0
        self._region.release()
