from .config import LIMITER_RATIO, CompressorConfig, load_compressor_config

__all__ = [
    "CompressorConfig",
    "LIMITER_RATIO",
    "load_compressor_config",
]
