from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from audo_dyn.dynamics import DynamicsEngine
from audo_dyn.metering import MetricsRecorder
from audo_dyn.utils.config import CompressorConfig

from .base import BaseProcessor

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 4096

ProgressCallback = Callable[[int, int], None]


class CompressorProcessor(BaseProcessor):
    """Run a whole buffered signal through the dynamics engine block by block.

    Block size only bounds per-block working memory; engine state carries over
    from one block to the next.
    """

    def __init__(
        self,
        config: CompressorConfig,
        block_size: int = DEFAULT_BLOCK_SIZE,
        recorder: MetricsRecorder | None = None,
        on_block: ProgressCallback | None = None,
    ) -> None:
        if block_size < 1:
            raise ValueError("block_size must be >= 1")
        self.config = config
        self.block_size = int(block_size)
        self.recorder = recorder or MetricsRecorder()
        self.on_block = on_block
        self.engine: DynamicsEngine | None = None

    def process(self, audio: np.ndarray, sample_rate: int) -> np.ndarray:
        audio = np.asarray(audio, dtype=np.float64)
        mono = audio.ndim == 1
        samples = audio[np.newaxis, :] if mono else audio
        if samples.ndim != 2:
            raise ValueError("Audio must be a 1D mono or 2D channel-first array.")

        channel_count, total = samples.shape
        self.engine = DynamicsEngine(int(sample_rate), channel_count, self.config)
        output = samples.copy()

        processed = 0
        while processed < total:
            to_process = min(self.block_size, total - processed)
            block = samples[:, processed : processed + to_process]
            rendered, metrics = self.engine.process_block(block)
            self.recorder.record_metrics(metrics)
            self.recorder.record_gain_reductions(self.engine.block_gain_reduction)
            output[:, processed : processed + to_process] = rendered

            processed += to_process
            logger.debug("Processed %d/%d samples", processed, total)
            if self.on_block is not None:
                self.on_block(processed, total)

        return output[0] if mono else output
