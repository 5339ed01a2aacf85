from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class BaseProcessor(ABC):
    """A stage that turns a buffered signal into a processed one of the same shape."""

    @abstractmethod
    def process(self, audio: np.ndarray, sample_rate: int) -> np.ndarray:
        """Process mono ``(n,)`` or channel-first ``(channels, n)`` audio."""
        raise NotImplementedError
