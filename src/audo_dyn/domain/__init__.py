from .events import (
    BlockProcessed,
    CompressionFailed,
    CompressionRendered,
    DomainEvent,
    IngestValidated,
    TraceExported,
)

__all__ = [
    "BlockProcessed",
    "CompressionFailed",
    "CompressionRendered",
    "DomainEvent",
    "IngestValidated",
    "TraceExported",
]
