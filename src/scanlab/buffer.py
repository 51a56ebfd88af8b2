"""Growable, allocator-backed sequence of fixed-size elements."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Iterator
from typing import Any

from scanlab.errors import BoundsError
from scanlab.memory import Allocator, MemoryBlock

_MIN_GROWTH = 8


class GrowableBuffer:
    """A dynamic array stored in one block obtained from `allocator`.

    Elements are described by a `struct` format of a single item ("B", "d",
    "q", ...), so the buffer only knows each element's size. The buffer owns
    its block exclusively: `copy()` clones it through the same allocator,
    `take()` moves it out and leaves this buffer empty.

    With `inline_capacity`, the first `inline_capacity` elements live in a
    private inline array that is never requested from the allocator; growing
    past it moves the contents into an allocator-owned block.
    """

    def __init__(self, allocator: Allocator, fmt: str = "B", *, inline_capacity: int = 0) -> None:
        self._allocator = allocator
        self._fmt = fmt
        self._item = struct.Struct(fmt)
        self._inline_capacity = inline_capacity
        self._count = 0
        self._inline = inline_capacity > 0
        if self._inline:
            nbytes = inline_capacity * self._item.size
            self._block = MemoryBlock(bytearray(nbytes), 0, nbytes)
        else:
            self._block = MemoryBlock()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def allocator(self) -> Allocator:
        return self._allocator

    @property
    def format(self) -> str:
        return self._fmt

    @property
    def itemsize(self) -> int:
        return self._item.size

    @property
    def capacity(self) -> int:
        return self._block.size // self._item.size

    @property
    def is_inline(self) -> bool:
        """True while storage is the inline array rather than an allocated block."""
        return self._inline

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def _check_index(self, index: int) -> int:
        if not 0 <= index < self._count:
            raise BoundsError(f"index {index} out of range for buffer of length {self._count}")
        return self._block.start + index * self._item.size

    def __getitem__(self, index: int) -> Any:
        pos = self._check_index(index)
        return self._item.unpack_from(self._block.buffer, pos)[0]

    def __setitem__(self, index: int, value: Any) -> None:
        pos = self._check_index(index)
        self._item.pack_into(self._block.buffer, pos, value)

    def __iter__(self) -> Iterator[Any]:
        if not self._count:
            return
        used = self._block.view()[: self._count * self._item.size]
        for (value,) in self._item.iter_unpack(used):
            yield value

    def tolist(self) -> list[Any]:
        return list(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GrowableBuffer):
            return NotImplemented
        return self._fmt == other._fmt and self.tolist() == other.tolist()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fmt!r}, {self.tolist()!r})"

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def push(self, value: Any) -> None:
        """Append one element, doubling capacity (at least 8) when full."""
        if self._count == self.capacity:
            self.reserve(max(_MIN_GROWTH, 2 * self.capacity))
        self._item.pack_into(
            self._block.buffer, self._block.start + self._count * self._item.size, value
        )
        self._count += 1

    def extend(self, values: Iterable[Any]) -> None:
        for value in values:
            self.push(value)

    def pop(self) -> Any:
        if not self._count:
            raise BoundsError("pop from an empty buffer")
        value = self[self._count - 1]
        self._count -= 1
        return value

    def clear(self) -> None:
        self._count = 0

    def reserve(self, capacity: int) -> None:
        """Grow to hold at least `capacity` elements. Never shrinks."""
        if capacity <= self.capacity:
            return
        new_block = self._allocator.allocate(capacity * self._item.size)
        old = self._block
        if old.size:
            new_block.buffer[new_block.start : new_block.start + old.size] = old.view()
        self._drop_block()
        self._block = new_block

    def resize(self, count: int) -> None:
        """Set the element count, reserving first if needed."""
        if count < 0:
            raise BoundsError(f"cannot resize buffer to negative length {count}")
        if count > self.capacity:
            self.reserve(count)
        self._count = count

    # ------------------------------------------------------------------
    # Ownership
    # ------------------------------------------------------------------

    def _spawn(self) -> GrowableBuffer:
        return GrowableBuffer(self._allocator, self._fmt, inline_capacity=self._inline_capacity)

    def copy(self) -> GrowableBuffer:
        """Deep copy through the same allocator."""
        clone = self._spawn()
        clone.reserve(self.capacity)
        used = self._count * self._item.size
        if used:
            start = clone._block.start
            clone._block.buffer[start : start + used] = self._block.view()[:used]
        clone._count = self._count
        return clone

    def __copy__(self) -> GrowableBuffer:
        return self.copy()

    def take(self) -> GrowableBuffer:
        """Move the storage into a new buffer; this one becomes empty."""
        moved = self._spawn()
        moved._block = self._block
        moved._count = self._count
        moved._inline = self._inline
        self._block = MemoryBlock()
        self._count = 0
        self._inline = False
        return moved

    def _drop_block(self) -> None:
        if not self._inline and not self._block.is_empty:
            self._allocator.free(self._block)
        self._block = MemoryBlock()
        self._inline = False

    def release(self) -> None:
        """Give the storage back to the allocator and become empty."""
        self._drop_block()
        self._count = 0

    def __enter__(self) -> GrowableBuffer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()
