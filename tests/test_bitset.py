"""
Tests for the growable word-backed bit array.
"""

import numpy as np
import pytest

from nthprime.bitset import GrowableBitSet, WORD_BITS, words_for


class TestSingleBits:
    """set / clear / test by index."""

    def test_new_bitset_is_clear(self):
        bits = GrowableBitSet(100)
        assert len(bits) == 100
        assert bits.count() == 0
        assert not any(bits.test(i) for i in range(100))

    def test_set_and_clear(self):
        bits = GrowableBitSet(130)
        for i in (0, 1, 63, 64, 127, 129):
            bits.set(i)
            assert bits.test(i), f"bit {i} should be set"
        assert bits.count() == 6

        bits.clear(64)
        assert not bits[64]
        assert bits[63] and bits[127], "clearing 64 must not touch its neighbours"
        assert bits.count() == 5

    def test_top_bit_of_word(self):
        """Bit 63 uses the sign position of the word."""
        bits = GrowableBitSet(64)
        bits.set(63)
        assert bits.words[0] == np.uint64(1 << 63)
        bits.clear(63)
        assert bits.words[0] == 0

    def test_out_of_range_raises(self):
        bits = GrowableBitSet(10)
        with pytest.raises(IndexError):
            bits.set(10)
        with pytest.raises(IndexError):
            bits.test(-1)

    def test_negative_size_raises(self):
        with pytest.raises(ValueError):
            GrowableBitSet(-1)


class TestRanges:
    """set_range / clear_range with strides."""

    def test_set_odd_positions(self):
        bits = GrowableBitSet(200)
        visited = bits.set_range(3, 200, 2)
        assert visited == len(range(3, 200, 2))
        assert bits.indices().tolist() == list(range(3, 200, 2))

    def test_clear_multiples(self):
        bits = GrowableBitSet(100)
        bits.set_range(0, 100)
        visited = bits.clear_range(9, 100, 3)
        assert visited == len(range(9, 100, 3))
        for i in range(100):
            expected = not (i >= 9 and i % 3 == 0)
            assert bits[i] == expected, f"bit {i} should be {expected}"

    def test_clear_counts_only_set_bits(self):
        """Re-clearing a cleared bit is not counted."""
        bits = GrowableBitSet(100)
        bits.set_range(1, 100, 2)
        assert bits.clear_range(0, 100, 3) == len(range(3, 100, 6))
        assert bits.clear_range(0, 100, 3) == 0
        assert bits.clear_range(0, 100, 9) == 0

    def test_empty_range_is_noop(self):
        bits = GrowableBitSet(10)
        assert bits.set_range(5, 5) == 0
        assert bits.clear_range(8, 3) == 0
        assert bits.count() == 0

    def test_range_outside_bounds_raises(self):
        bits = GrowableBitSet(10)
        with pytest.raises(IndexError):
            bits.set_range(0, 11)

    def test_bad_step_raises(self):
        bits = GrowableBitSet(10)
        with pytest.raises(ValueError):
            bits.set_range(0, 10, 0)


class TestResize:
    """Growing keeps the prefix; new bits start clear."""

    def test_grow_keeps_prefix(self):
        bits = GrowableBitSet(70)
        bits.set_range(1, 70, 2)
        before = bits.to_bool_array()

        bits.resize(1000)
        assert len(bits) == 1000
        assert len(bits.words) == words_for(1000)
        after = bits.to_bool_array()
        assert np.array_equal(after[:70], before)
        assert not after[70:].any(), "grown bits should be clear"

    def test_shrink_then_grow_clears_tail(self):
        bits = GrowableBitSet(WORD_BITS)
        bits.set_range(0, WORD_BITS)
        bits.resize(10)
        bits.resize(WORD_BITS)
        assert bits.count() == 10

    def test_resize_to_zero(self):
        bits = GrowableBitSet(50)
        bits.set(3)
        bits.resize(0)
        assert len(bits) == 0
        assert bits.to_bool_array().size == 0


class TestViews:
    """indices / count / copy / equality."""

    def test_indices_subrange(self):
        bits = GrowableBitSet(300)
        for i in (2, 3, 5, 7, 64, 65, 128, 299):
            bits.set(i)
        assert bits.indices(5, 129).tolist() == [5, 7, 64, 65, 128]
        assert bits.indices(300, 300).size == 0
        assert bits.indices().dtype == np.int64

    def test_count_subrange(self):
        bits = GrowableBitSet(256)
        bits.set_range(0, 256, 4)
        assert bits.count() == 64
        assert bits.count(64, 128) == 16

    def test_copy_is_independent(self):
        bits = GrowableBitSet(100)
        bits.set(42)
        other = bits.copy()
        assert other == bits
        other.set(43)
        assert not bits[43]
        assert other != bits

    def test_bool_array_matches_numpy_reference(self):
        rng = np.random.default_rng(123)
        mask = rng.random(1000) < 0.3
        bits = GrowableBitSet(1000)
        for i in np.flatnonzero(mask):
            bits.set(int(i))
        assert np.array_equal(bits.to_bool_array(), mask)


class TestWordScans:
    """count / indices / collect scan the words in place."""

    @pytest.mark.parametrize("start, stop", [
        (0, 1000), (1, 64), (63, 65), (64, 128), (5, 6), (130, 999), (0, 1),
    ])
    def test_matches_numpy_on_subranges(self, start, stop):
        rng = np.random.default_rng(7)
        mask = rng.random(1000) < 0.4
        bits = GrowableBitSet(1000)
        for i in np.flatnonzero(mask):
            bits.set(int(i))

        expected = np.flatnonzero(mask[start:stop]) + start
        assert bits.count(start, stop) == len(expected)
        assert bits.indices(start, stop).tolist() == expected.tolist()

    def test_full_words(self):
        bits = GrowableBitSet(256)
        bits.set_range(0, 256)
        assert bits.count() == 256
        assert bits.count(3, 253) == 250
        assert bits.indices(60, 70).tolist() == list(range(60, 70))

    def test_collect_into_tail(self):
        bits = GrowableBitSet(200)
        for i in (2, 3, 5, 7, 127, 128, 199):
            bits.set(i)
        out = np.full(5, -1, dtype=np.int64)
        written = bits.collect(100, 200, out[2:])
        assert written == 3
        assert out.tolist() == [-1, -1, 127, 128, 199]

    def test_collect_rejects_short_output(self):
        bits = GrowableBitSet(10)
        bits.set_range(0, 10)
        with pytest.raises(ValueError):
            bits.collect(0, 10, np.empty(3, dtype=np.int64))

    def test_indices_allocates_only_output(self):
        import tracemalloc
        bits = GrowableBitSet(1 << 22)
        bits.set_range(1, 1 << 22, 1024)
        bits.indices(0, 64)  # compile outside the measurement

        tracemalloc.start()
        found = bits.indices()
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        assert len(found) == 4096
        assert peak < found.nbytes + bits.nbytes // 4, \
            f"peak {peak:,} bytes for a {bits.nbytes:,} byte bitset"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
