# Rolling pace window
# FORBIDDEN: logging, any I/O

from typing import List, Optional

import numpy as np

from ..core.errors import InvalidInputError
from ..core.physics import average_pace
from ..core.types import FormulaConstants


class RollingPaceWindow:
    """Fixed-capacity FIFO of per-lap top speeds.

    Backed by a preallocated ring buffer. Pushing onto a full window
    overwrites (evicts) the oldest lap.
    """

    def __init__(self, capacity: int = FormulaConstants.pace_window_size):
        """Initialize window.

        Args:
            capacity: Maximum number of laps held
        """
        if capacity <= 0:
            raise InvalidInputError(f"capacity must be positive, got {capacity}")

        self.capacity = capacity
        self._speeds = np.zeros(capacity, dtype=np.float64)
        self.ptr = 0  # Next write position
        self.size = 0  # Current size

    def push(self, speed: float) -> Optional[float]:
        """Add a lap top speed.

        Args:
            speed: Fastest speed observed during the lap

        Returns:
            The evicted oldest speed, or None if the window was not full
        """
        evicted = None
        if self.size == self.capacity:
            evicted = float(self._speeds[self.ptr])

        self._speeds[self.ptr] = speed
        self.ptr = (self.ptr + 1) % self.capacity
        self.size = min(self.size + 1, self.capacity)

        return evicted

    def values(self) -> List[float]:
        """Speeds in the window, oldest first."""
        start = (self.ptr - self.size) % self.capacity
        order = (start + np.arange(self.size)) % self.capacity
        return [float(v) for v in self._speeds[order]]

    def mean(self) -> float:
        """Rolling average pace over the window.

        Raises:
            InvalidInputError: If the window is empty
        """
        return average_pace(self.values())

    def clear(self) -> None:
        self.ptr = 0
        self.size = 0

    @property
    def is_full(self) -> bool:
        return self.size == self.capacity

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"RollingPaceWindow(capacity={self.capacity}, values={self.values()})"
