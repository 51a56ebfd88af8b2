"""Test GrowableBuffer growth, access, and ownership."""

import copy

import pytest

from scanlab.buffer import GrowableBuffer
from scanlab.errors import BoundsError
from scanlab.memory import ArenaAllocator


class TestPush:
    @pytest.mark.parametrize("n", [0, 1, 8, 9, 100])
    def test_values_survive_growth(self, heap, n):
        buf = GrowableBuffer(heap, "q")
        for i in range(n):
            buf.push(i * 3)
        assert len(buf) == n
        assert buf.capacity >= n
        assert buf.tolist() == [i * 3 for i in range(n)]

    def test_first_growth_is_eight(self, heap):
        buf = GrowableBuffer(heap, "B")
        buf.push(1)
        assert buf.capacity == 8

    def test_capacity_doubles(self, heap):
        buf = GrowableBuffer(heap, "B")
        for i in range(9):
            buf.push(i)
        assert buf.capacity == 16

    def test_doubles(self, heap):
        buf = GrowableBuffer(heap, "d")
        buf.extend([0.5, 1.5, 2.5])
        assert list(buf) == [0.5, 1.5, 2.5]

    def test_block_size_matches_itemsize(self, arena):
        buf = GrowableBuffer(arena, "d")
        buf.push(1.0)
        assert arena.used == 8 * buf.itemsize


class TestAccess:
    def test_get_and_set(self, heap):
        buf = GrowableBuffer(heap, "i")
        buf.extend([1, 2, 3])
        buf[1] = 20
        assert buf[1] == 20

    @pytest.mark.parametrize("index", [3, 100, -1])
    def test_out_of_range_is_fatal(self, heap, index):
        buf = GrowableBuffer(heap, "i")
        buf.extend([1, 2, 3])
        with pytest.raises(BoundsError):
            buf[index]

    def test_index_beyond_count_within_capacity(self, heap):
        buf = GrowableBuffer(heap, "B")
        buf.reserve(10)
        with pytest.raises(BoundsError):
            buf[0]

    def test_set_out_of_range(self, heap):
        buf = GrowableBuffer(heap, "B")
        with pytest.raises(BoundsError):
            buf[0] = 1

    def test_bounds_error_is_index_error(self, heap):
        with pytest.raises(IndexError):
            GrowableBuffer(heap)[0]

    def test_pop(self, heap):
        buf = GrowableBuffer(heap, "B")
        buf.extend([4, 5])
        assert buf.pop() == 5
        assert len(buf) == 1

    def test_pop_empty_is_fatal(self, heap):
        with pytest.raises(BoundsError):
            GrowableBuffer(heap).pop()


class TestReserveResize:
    def test_reserve_keeps_count(self, heap):
        buf = GrowableBuffer(heap, "B")
        buf.extend([1, 2])
        buf.reserve(50)
        assert buf.capacity == 50
        assert buf.tolist() == [1, 2]

    def test_reserve_never_shrinks(self, heap):
        buf = GrowableBuffer(heap, "B")
        buf.reserve(20)
        buf.reserve(5)
        assert buf.capacity == 20

    def test_resize_grows_with_zeros(self, heap):
        buf = GrowableBuffer(heap, "h")
        buf.resize(4)
        assert buf.tolist() == [0, 0, 0, 0]

    def test_resize_shrinks_count_only(self, heap):
        buf = GrowableBuffer(heap, "B")
        buf.extend(range(10))
        cap = buf.capacity
        buf.resize(3)
        assert len(buf) == 3
        assert buf.capacity == cap

    def test_negative_resize(self, heap):
        with pytest.raises(BoundsError):
            GrowableBuffer(heap).resize(-1)

    def test_clear(self, heap):
        buf = GrowableBuffer(heap, "B")
        buf.extend([1, 2, 3])
        buf.clear()
        assert len(buf) == 0
        assert buf.capacity == 8


class TestOwnership:
    def test_copy_is_deep(self, heap):
        buf = GrowableBuffer(heap, "i")
        buf.extend([1, 2, 3])
        clone = buf.copy()
        clone[0] = 99
        assert buf[0] == 1
        assert clone.tolist() == [99, 2, 3]
        assert clone.allocator is heap

    def test_copy_module(self, heap):
        buf = GrowableBuffer(heap, "i")
        buf.push(7)
        assert copy.copy(buf) == buf

    def test_copy_uses_same_allocator(self):
        with ArenaAllocator(256) as arena:
            buf = GrowableBuffer(arena, "B")
            buf.extend(range(8))
            used = arena.used
            buf.copy()
            assert arena.used == 2 * used

    def test_take_moves_storage(self, heap):
        buf = GrowableBuffer(heap, "i")
        buf.extend([1, 2, 3])
        moved = buf.take()
        assert moved.tolist() == [1, 2, 3]
        assert len(buf) == 0
        assert buf.capacity == 0
        with pytest.raises(BoundsError):
            buf[0]

    def test_source_usable_after_take(self, heap):
        buf = GrowableBuffer(heap, "i")
        buf.push(1)
        buf.take()
        buf.push(2)
        assert buf.tolist() == [2]

    def test_release(self, heap):
        buf = GrowableBuffer(heap, "B")
        buf.extend([1, 2, 3])
        buf.release()
        assert len(buf) == 0
        assert buf.capacity == 0

    def test_context_manager_releases(self, heap):
        with GrowableBuffer(heap, "B") as buf:
            buf.push(1)
        assert buf.capacity == 0

    def test_growth_frees_old_block(self, monkeypatch, heap):
        freed = []
        original_free = heap.free

        def tracking_free(block):
            freed.append(block.size)
            return original_free(block)

        monkeypatch.setattr(heap, "free", tracking_free)
        buf = GrowableBuffer(heap, "B")
        buf.extend(range(9))
        assert freed == [8]


class TestInlineStorage:
    def test_starts_inline(self, arena):
        buf = GrowableBuffer(arena, "B", inline_capacity=4)
        assert buf.is_inline
        assert buf.capacity == 4
        buf.extend([1, 2, 3, 4])
        assert arena.used == 0

    def test_switches_to_allocator_past_threshold(self, arena):
        buf = GrowableBuffer(arena, "B", inline_capacity=4)
        buf.extend([1, 2, 3, 4, 5])
        assert not buf.is_inline
        assert buf.capacity == 8
        assert arena.used == 8
        assert buf.tolist() == [1, 2, 3, 4, 5]

    def test_inline_copy(self, arena):
        buf = GrowableBuffer(arena, "B", inline_capacity=4)
        buf.extend([9, 8])
        clone = buf.copy()
        assert clone.is_inline
        assert clone.tolist() == [9, 8]
        assert arena.used == 0

    def test_release_inline_does_not_free(self, monkeypatch, heap):
        monkeypatch.setattr(heap, "free", lambda block: pytest.fail("freed inline storage"))
        buf = GrowableBuffer(heap, "B", inline_capacity=4)
        buf.push(1)
        buf.release()
        assert buf.capacity == 0
