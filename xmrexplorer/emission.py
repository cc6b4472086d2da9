"""Tracking the total coin emission of the blockchain."""

from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from pathlib import Path

log = logging.getLogger(__name__)

OUTPUT_FILE = "emission_amount.txt"

# Blocks read before the monitor takes a short break.
DEFAULT_CHUNK_SIZE = 10000

# The top blocks are never stored: a reorganisation could still change them,
# so they are added in flight by get_emission.
DEFAULT_CHUNK_GAP = 3

SCAN_PAUSE_SECONDS = 1
TOP_PAUSE_SECONDS = 60


class EmissionFileError(ValueError):
    """Raised when a saved emission cannot be read or is corrupted."""


@dataclass(frozen=True)
class Emission:
    """Emission up to, but not including, block ``blk_no``."""

    coinbase: int = 0
    fee: int = 0
    blk_no: int = 0

    def checksum(self) -> int:
        """Return the checksum stored next to the values."""
        return self.coinbase + self.fee + self.blk_no

    def __str__(self) -> str:
        return f"{self.blk_no},{self.coinbase},{self.fee},{self.checksum()}"

    @classmethod
    def parse(cls, text: str) -> Emission:
        """Parse ``blk_no,coinbase,fee,checksum`` and verify the checksum."""
        fields = text.rstrip(" \n\r\t").split(",")
        if len(fields) < 4:
            raise EmissionFileError(f"Cant parse to number date from string: {text!r}")
        numbers: list[int] = []
        for field in fields[:4]:
            if not field.isdigit():
                raise EmissionFileError(f"Cant parse to number date from string: {text!r}")
            numbers.append(int(field))
        blk_no, coinbase, fee, read_checksum = numbers
        emission = cls(coinbase=coinbase, fee=fee, blk_no=blk_no)
        if read_checksum != emission.checksum():
            raise EmissionFileError(
                f"read_check_sum != check_sum: {read_checksum} != {emission.checksum()}"
            )
        return emission


class BlockSource(ABC):
    """Where the monitor reads blocks from."""

    @abstractmethod
    def height(self) -> int:
        """Return the current blockchain height."""

    @abstractmethod
    def block_amounts(self, height: int) -> tuple[int, int]:
        """Return (miner transaction output total, fees of its transactions)."""


class EmissionMonitor:
    """Sums the emission of the chain, optionally in a background thread."""

    def __init__(
        self,
        source: BlockSource,
        output_path: str | os.PathLike[str],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_gap: int = DEFAULT_CHUNK_GAP,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if chunk_gap < 0:
            raise ValueError("chunk_gap must not be negative")
        self.source = source
        self.output_path = Path(output_path)
        self.chunk_size = chunk_size
        self.chunk_gap = chunk_gap
        self.current_height = 0
        self._emission = Emission()
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def emission(self) -> Emission:
        """The stored emission, without the top blocks."""
        with self._lock:
            return self._emission

    def calculate_emission_in_blocks(self, start: int, end: int) -> Emission:
        """Sum the emission of blocks ``start`` up to ``end``, exclusive."""
        coinbase = 0
        fee = 0
        blk_no = start
        for blk_no in range(start, end):
            outputs, fees = self.source.block_amounts(blk_no)
            coinbase += outputs - fees
            fee += fees
        if end > start:
            blk_no = end
        return Emission(coinbase=coinbase, fee=fee, blk_no=blk_no)

    def update_current_emission_amount(self) -> Emission:
        """Scan the next chunk of blocks and return the updated emission."""
        self.current_height = self.source.height()
        current = self.emission
        end = current.blk_no + self.chunk_size
        if end > self.current_height:
            end = max(self.current_height - self.chunk_gap, 0)
        calculated = self.calculate_emission_in_blocks(current.blk_no, end)
        updated = Emission(
            coinbase=current.coinbase + calculated.coinbase,
            fee=current.fee + calculated.fee,
            blk_no=calculated.blk_no,
        )
        with self._lock:
            self._emission = updated
        return updated

    def save_current_emission_amount(self) -> None:
        """Write the stored emission to the output file."""
        self.output_path.write_text(str(self.emission), encoding="utf-8")

    def load_current_emission_amount(self) -> Emission:
        """Read the stored emission from the output file.

        Raises FileNotFoundError when it is missing and EmissionFileError
        when it is empty or corrupted.
        """
        text = self.output_path.read_text(encoding="utf-8")
        if not text:
            raise EmissionFileError(f"Emission file is empty: {self.output_path}")
        loaded = Emission.parse(text)
        with self._lock:
            self._emission = loaded
        return loaded

    def get_emission(self) -> Emission:
        """Return the stored emission plus that of the top blocks."""
        current = self.emission
        height = self.current_height
        start = current.blk_no
        end = start + self.chunk_gap
        if end >= height and start < height:
            end = min(end, height)
            gap = self.calculate_emission_in_blocks(start, end)
            current = replace(
                current,
                coinbase=current.coinbase + gap.coinbase,
                fee=current.fee + gap.fee,
                blk_no=gap.blk_no if gap.blk_no > 0 else current.blk_no,
            )
        return current

    def _run(self) -> None:
        while not self._stop.is_set():
            before = self.emission
            self.update_current_emission_amount()
            log.info("current emission: %s", before)
            try:
                self.save_current_emission_amount()
            except OSError as exc:
                log.error("Couldn't open file: %s", exc)
            if before.blk_no < self.current_height - self.chunk_size:
                pause = SCAN_PAUSE_SECONDS
            else:
                pause = TOP_PAUSE_SECONDS
            self._stop.wait(pause)
        log.info("Emission monitoring thread interrupted.")

    def start(self) -> None:
        """Load any saved emission and start the monitoring thread.

        Raises EmissionFileError when a saved emission exists but is corrupted;
        the thread is then not started.
        """
        if self.output_path.exists():
            self.load_current_emission_amount()
        if self.is_running():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="emission-monitor", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the monitoring thread and wait for it to end."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def is_running(self) -> bool:
        """Tell whether the monitoring thread is alive."""
        return self._thread is not None and self._thread.is_alive()