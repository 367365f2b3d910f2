"""Converter module for webpify.

PNG/JPEGからWebPへの変換機能を提供するモジュール。
MIMEタイプ判定、Converter選択、ディレクトリ単位の逐次変換を扱う。
"""

from webpify.converter.base import (
    BaseConverter,
    ConversionRequest,
    ConversionResult,
    ConversionStatus,
)
from webpify.converter.image import JpegConverter, PillowConverter, PngConverter
from webpify.converter.manager import (
    ConversionManager,
    ConversionSummary,
    ProgressCallback,
)
from webpify.converter.orchestrator import ConversionOrchestrator, default_converters

__all__ = [
    "BaseConverter",
    "ConversionManager",
    "ConversionOrchestrator",
    "ConversionRequest",
    "ConversionResult",
    "ConversionStatus",
    "ConversionSummary",
    "JpegConverter",
    "PillowConverter",
    "PngConverter",
    "ProgressCallback",
    "default_converters",
]
