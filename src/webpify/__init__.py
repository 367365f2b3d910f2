"""webpify - PNG/JPEG to WebP batch converter CLI tool."""

from webpify.config import WebpifyConfig, load_config
from webpify.converter import (
    ConversionManager,
    ConversionOrchestrator,
    ConversionResult,
    ConversionSummary,
)
from webpify.errors import (
    ClassificationError,
    ConversionError,
    DecodeError,
    EncodeError,
    UnsupportedTypeError,
)
from webpify.logger import ConversionLogger, LogConfig, VerboseLevel
from webpify.mime import MimeClassifier, MimeType

__version__ = "0.1.0"

__all__ = [
    "ClassificationError",
    "ConversionError",
    "ConversionLogger",
    "ConversionManager",
    "ConversionOrchestrator",
    "ConversionResult",
    "ConversionSummary",
    "DecodeError",
    "EncodeError",
    "LogConfig",
    "MimeClassifier",
    "MimeType",
    "UnsupportedTypeError",
    "VerboseLevel",
    "WebpifyConfig",
    "load_config",
]
