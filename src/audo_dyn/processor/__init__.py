from .base import BaseProcessor
from .compressor import DEFAULT_BLOCK_SIZE, CompressorProcessor

__all__ = [
    "BaseProcessor",
    "CompressorProcessor",
    "DEFAULT_BLOCK_SIZE",
]
