"""
Random Source Module

Seedable source of uniform doubles in [0, 1) shared by all generators.
Backed by NumPy's Generator API so a whole session can be replayed from a
single seed.
"""

from typing import Any, Optional, Sequence
import logging

import numpy as np

logger = logging.getLogger(__name__)


class Randomizer:
    """
    Uniform random source

    ``double()`` is the only primitive draw; every other helper is built on
    it so that a single draw is consumed per pick.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize random source

        Args:
            seed: Random seed (None for OS entropy)
        """
        self.seed = seed
        self._rng = self._make_rng(seed)

    @staticmethod
    def _make_rng(seed: Optional[int]) -> np.random.Generator:
        if seed is None:
            return np.random.default_rng()
        return np.random.default_rng(int(seed))

    def reseed(self, seed: Optional[int] = None):
        """
        Restart the stream

        Args:
            seed: New seed (uses stored seed if None)
        """
        if seed is None:
            seed = self.seed
        self.seed = seed
        self._rng = self._make_rng(seed)

        if seed is not None:
            logger.debug(f"Random seed set to: {seed}")
        else:
            logger.debug("No seed set - using random initialization")

    def double(self) -> float:
        """Uniformly distributed float in [0, 1)"""
        return float(self._rng.random())

    def array_element(self, items: Sequence[Any]) -> Any:
        """
        Pick one element uniformly

        Args:
            items: Non-empty sequence

        Returns:
            Selected element
        """
        if len(items) == 0:
            raise ValueError("Cannot pick from an empty sequence")

        index = int(self.double() * len(items))
        # guards against a double rounding up to exactly 1.0
        return items[min(index, len(items) - 1)]

    def __repr__(self) -> str:
        return f"Randomizer(seed={self.seed!r})"
