"""Application layer use-cases."""

from .compression_service import CompressFile, CompressionResult

__all__ = ["CompressFile", "CompressionResult"]
