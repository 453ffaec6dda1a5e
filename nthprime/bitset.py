"""
Growable bit array backed by 64-bit words.

Responsibility: bit storage only. No sieve logic, no prime knowledge.

Bit i lives in word i >> 6 at position i & 63 (least significant bit first),
so the little-endian byte view of the word array unpacks in index order.

Memory:
- 10^6 bits:  125 KB
- 10^9 bits:  125 MB
"""

import numpy as np
from numba import njit

WORD_BITS = 64
WORD_DTYPE = np.dtype('<u8')


def words_for(nbits: int) -> int:
    """Number of 64-bit words needed to hold nbits."""
    return (nbits + WORD_BITS - 1) // WORD_BITS


@njit
def set_bits(words: np.ndarray, start: int, stop: int, step: int) -> int:
    """Set bits start, start+step, ... below stop. Returns bits visited."""
    visited = 0
    for j in range(start, stop, step):
        words[j >> 6] |= np.uint64(1) << np.uint64(j & 63)
        visited += 1
    return visited


@njit
def clear_bits(words: np.ndarray, start: int, stop: int, step: int) -> int:
    """Clear bits start, start+step, ... below stop. Returns bits that were set."""
    cleared = 0
    for j in range(start, stop, step):
        mask = np.uint64(1) << np.uint64(j & 63)
        if words[j >> 6] & mask:
            words[j >> 6] &= ~mask
            cleared += 1
    return cleared


@njit
def bit_is_set(words: np.ndarray, i: int) -> bool:
    """True if bit i is set."""
    return ((words[i >> 6] >> np.uint64(i & 63)) & np.uint64(1)) != 0


@njit
def popcount(w):
    """Set bits in one uint64 word (SWAR)."""
    w = w - ((w >> np.uint64(1)) & np.uint64(0x5555555555555555))
    w = (w & np.uint64(0x3333333333333333)) + ((w >> np.uint64(2)) & np.uint64(0x3333333333333333))
    w = (w + (w >> np.uint64(4))) & np.uint64(0x0F0F0F0F0F0F0F0F)
    return np.int64((w * np.uint64(0x0101010101010101)) >> np.uint64(56))


@njit
def masked_word(words: np.ndarray, k: int, start: int, stop: int):
    """Word k with bits outside [start, stop) masked off."""
    w = words[k]
    base = k << 6
    if start > base:
        w &= ~((np.uint64(1) << np.uint64(start - base)) - np.uint64(1))
    if stop - base < 64:
        w &= (np.uint64(1) << np.uint64(stop - base)) - np.uint64(1)
    return w


@njit
def count_bits(words: np.ndarray, start: int, stop: int) -> int:
    """Set bits in [start, stop), one popcount per word."""
    total = 0
    for k in range(start >> 6, ((stop - 1) >> 6) + 1):
        total += popcount(masked_word(words, k, start, stop))
    return total


@njit
def collect_bits(words: np.ndarray, start: int, stop: int, out: np.ndarray) -> int:
    """Write set bit indices in [start, stop) into out, ascending. Returns count written."""
    n = 0
    for k in range(start >> 6, ((stop - 1) >> 6) + 1):
        w = masked_word(words, k, start, stop)
        if w == 0:
            continue
        for b in range(64):
            if (w >> np.uint64(b)) & np.uint64(1):
                out[n] = (k << 6) + b
                n += 1
    return n


class GrowableBitSet:
    """
    Resizable bit array.

    New bits introduced by resize() start cleared. Indexing outside
    [0, len) raises IndexError.
    """

    def __init__(self, nbits: int = 0):
        if nbits < 0:
            raise ValueError(f"bit count must be non-negative, got {nbits}")
        self._nbits = nbits
        self._words = np.zeros(words_for(nbits), dtype=WORD_DTYPE)

    def __len__(self) -> int:
        return self._nbits

    def __repr__(self) -> str:
        return f"GrowableBitSet(len={self._nbits}, set={self.count()})"

    @property
    def words(self) -> np.ndarray:
        """Backing word array. Mutating it mutates the bitset."""
        return self._words

    @property
    def nbytes(self) -> int:
        return self._words.nbytes

    def _check_index(self, i: int):
        if not 0 <= i < self._nbits:
            raise IndexError(f"bit index {i} out of range [0, {self._nbits})")

    def _check_span(self, start: int, stop: int):
        if start < 0 or stop > self._nbits:
            raise IndexError(
                f"bit range [{start}, {stop}) out of range [0, {self._nbits})")

    def resize(self, nbits: int):
        """
        Grow or shrink to nbits.

        Growing keeps every existing bit and appends cleared bits. Shrinking
        drops the tail, so a later grow sees those positions cleared again.
        The old word array is only replaced once the new one is allocated.
        """
        if nbits < 0:
            raise ValueError(f"bit count must be non-negative, got {nbits}")

        nwords = words_for(nbits)
        if nwords != len(self._words):
            words = np.zeros(nwords, dtype=WORD_DTYPE)
            keep = min(nwords, len(self._words))
            words[:keep] = self._words[:keep]
            self._words = words

        if nbits < self._nbits and nbits % WORD_BITS:
            # Drop stale bits in the last partial word
            mask = (1 << (nbits % WORD_BITS)) - 1
            self._words[-1] &= np.uint64(mask)

        self._nbits = nbits

    def set(self, i: int):
        self._check_index(i)
        self._words[i >> 6] |= np.uint64(1 << (i & 63))

    def clear(self, i: int):
        self._check_index(i)
        self._words[i >> 6] &= np.uint64(~(1 << (i & 63)) & 0xFFFFFFFFFFFFFFFF)

    def test(self, i: int) -> bool:
        self._check_index(i)
        return bool((int(self._words[i >> 6]) >> (i & 63)) & 1)

    def __getitem__(self, i: int) -> bool:
        return self.test(i)

    def set_range(self, start: int, stop: int, step: int = 1) -> int:
        """Set every step-th bit in [start, stop). Returns bits visited."""
        if step < 1:
            raise ValueError(f"step must be positive, got {step}")
        if start >= stop:
            return 0
        self._check_span(start, stop)
        return set_bits(self._words, start, stop, step)

    def clear_range(self, start: int, stop: int, step: int = 1) -> int:
        """Clear every step-th bit in [start, stop). Returns bits that were set."""
        if step < 1:
            raise ValueError(f"step must be positive, got {step}")
        if start >= stop:
            return 0
        self._check_span(start, stop)
        return clear_bits(self._words, start, stop, step)

    def _unpack(self, start: int, stop: int) -> np.ndarray:
        """Boolean array for bits [start, stop); one byte per bit, for inspection only."""
        first = start // WORD_BITS
        last = words_for(stop)
        raw = np.unpackbits(self._words[first:last].view(np.uint8), bitorder='little')
        offset = first * WORD_BITS
        return raw[start - offset:stop - offset].astype(bool)

    def indices(self, start: int = 0, stop: int = None) -> np.ndarray:
        """Ascending int64 array of the set bit indices in [start, stop)."""
        if stop is None:
            stop = self._nbits
        if start >= stop:
            return np.empty(0, dtype=np.int64)
        self._check_span(start, stop)
        # Scans the words in place: the only allocation is the output
        out = np.empty(count_bits(self._words, start, stop), dtype=np.int64)
        collect_bits(self._words, start, stop, out)
        return out

    def collect(self, start: int, stop: int, out: np.ndarray) -> int:
        """
        Write the set bit indices in [start, stop) into out (int64, at least
        count(start, stop) long). Returns the number written.
        """
        if start >= stop:
            return 0
        self._check_span(start, stop)
        if out.dtype != np.int64 or len(out) < count_bits(self._words, start, stop):
            raise ValueError("out must be an int64 array with room for every set bit")
        return collect_bits(self._words, start, stop, out)

    def count(self, start: int = 0, stop: int = None) -> int:
        """Number of set bits in [start, stop)."""
        if stop is None:
            stop = self._nbits
        if start >= stop:
            return 0
        self._check_span(start, stop)
        return int(count_bits(self._words, start, stop))

    def to_bool_array(self) -> np.ndarray:
        """Boolean array of length len(self)."""
        if self._nbits == 0:
            return np.zeros(0, dtype=bool)
        return self._unpack(0, self._nbits)

    def copy(self) -> 'GrowableBitSet':
        other = GrowableBitSet.__new__(GrowableBitSet)
        other._nbits = self._nbits
        other._words = self._words.copy()
        return other

    def __eq__(self, other) -> bool:
        if not isinstance(other, GrowableBitSet):
            return NotImplemented
        return self._nbits == other._nbits and np.array_equal(self._words, other._words)
