"""Seed heights of the proof-of-work hash and the two seed slots."""

from __future__ import annotations

import threading

# Must equal the number of blocks synchronised at once.
SEEDHASH_EPOCH_BLOCKS = 2048
SEEDHASH_EPOCH_LAG = 64

# A height no seed can have; marks a slot as needing a new seed.
INVALID_SEED_HEIGHT = 1

SLOT_COUNT = 2


def rx_seedheight(height: int) -> int:
    """Return the height of the block whose hash seeds the given height."""
    if height <= SEEDHASH_EPOCH_BLOCKS + SEEDHASH_EPOCH_LAG:
        return 0
    return (height - SEEDHASH_EPOCH_LAG - 1) & ~(SEEDHASH_EPOCH_BLOCKS - 1)


def rx_seedheights(height: int) -> tuple[int, int]:
    """Return the current seed height and the seed height coming next."""
    return rx_seedheight(height), rx_seedheight(height + SEEDHASH_EPOCH_LAG)


class SeedSlots:
    """The two seed slots, each remembering the seed height it holds."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._heights = [0] * SLOT_COUNT

    def _check(self, slot: int) -> None:
        if not 0 <= slot < SLOT_COUNT:
            raise IndexError(f"seed slot {slot} out of range")

    def set_height(self, slot: int, height: int) -> None:
        """Record the seed height held by a slot."""
        self._check(slot)
        with self._lock:
            self._heights[slot] = height

    def reorg(self, split_height: int) -> None:
        """Invalidate every slot whose seed lies above a reorganisation point."""
        with self._lock:
            self._heights = [
                INVALID_SEED_HEIGHT if split_height < height else height
                for height in self._heights
            ]

    def __getitem__(self, slot: int) -> int:
        self._check(slot)
        with self._lock:
            return self._heights[slot]

    def __len__(self) -> int:
        return SLOT_COUNT