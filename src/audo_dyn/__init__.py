"""Public package exports for Audo_Dyn with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "BlockMetrics",
    "CompressFile",
    "CompressionResult",
    "CompressorConfig",
    "CompressorProcessor",
    "DynamicsEngine",
    "EnvelopeDetector",
    "EnvelopeMode",
    "IngestValidationError",
    "MeteringSummary",
    "MetricsRecorder",
    "ReleaseCurve",
    "StereoLinkMode",
    "load_compressor_config",
]

_EXPORT_MODULES: dict[str, str] = {
    "BlockMetrics": "audo_dyn.dynamics",
    "CompressFile": "audo_dyn.application.compression_service",
    "CompressionResult": "audo_dyn.application.compression_service",
    "CompressorConfig": "audo_dyn.utils.config",
    "CompressorProcessor": "audo_dyn.processor.compressor",
    "DynamicsEngine": "audo_dyn.dynamics",
    "EnvelopeDetector": "audo_dyn.envelope",
    "EnvelopeMode": "audo_dyn.compressor_options",
    "IngestValidationError": "audo_dyn.ingest_validation",
    "MeteringSummary": "audo_dyn.metering",
    "MetricsRecorder": "audo_dyn.metering",
    "ReleaseCurve": "audo_dyn.compressor_options",
    "StereoLinkMode": "audo_dyn.compressor_options",
    "load_compressor_config": "audo_dyn.utils.config",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'audo_dyn' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
