"""ConversionOrchestrator モジュール

単一ファイルについて、MIMEタイプ判定→Converter選択→WebP変換を順に実行する。
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from webpify.config import WebpifyConfig, clamp_quality, get_default_config
from webpify.converter.base import BaseConverter, ConversionRequest, ConversionResult
from webpify.converter.image import JpegConverter, PngConverter
from webpify.errors import UnsupportedTypeError
from webpify.logger import ConversionLogger
from webpify.mime import MimeClassifier, MimeType


def default_converters() -> dict[MimeType, BaseConverter]:
    """MIMEタイプとConverterの標準の対応表を返す"""
    jpeg = JpegConverter()
    return {
        MimeType.JPEG: jpeg,
        MimeType.JPG: jpeg,
        MimeType.PNG: PngConverter(),
    }


class ConversionOrchestrator:
    """変換オーケストレーター

    ファイルパスからMIMEタイプを判定し、対応するConverterで変換する。
    呼び出し間で状態を持たないため、ファイルごとの処理は互いに独立している。

    Attributes:
        config: 出力先と品質のデフォルト値
        classifier: MIMEタイプ判定器
        converters: MIMEタイプとConverterの対応表
    """

    def __init__(
        self,
        config: WebpifyConfig | None = None,
        classifier: MimeClassifier | None = None,
        converters: Mapping[MimeType, BaseConverter] | None = None,
        logger: ConversionLogger | None = None,
    ) -> None:
        self.config = config or get_default_config()
        self.classifier = classifier or MimeClassifier()
        self.converters = dict(converters) if converters is not None else default_converters()
        self._logger = logger

    def process(self, file_path: Path, quality: int | None = None) -> str:
        """ファイルを変換し、拡張子を除いたファイル名を返す

        Args:
            file_path: 変換元ファイルのパス
            quality: WebP品質値（Noneの場合は設定値、範囲外は0-100に丸める）

        Returns:
            拡張子を除いたファイル名

        Raises:
            ConversionError: 判定・変換のいずれかに失敗した場合
        """
        return self.convert_file(file_path, quality).base_name

    def convert_file(self, file_path: Path, quality: int | None = None) -> ConversionResult:
        """ファイルを変換し、成功時の変換結果を返す

        Args:
            file_path: 変換元ファイルのパス
            quality: WebP品質値（Noneの場合は設定値、範囲外は0-100に丸める）

        Returns:
            変換結果

        Raises:
            ClassificationError: ファイルを読み込めない場合
            UnsupportedTypeError: MIMEタイプが変換対象外の場合
            DecodeError: 画像としてデコードできない場合
            EncodeError: WebPの書き込みに失敗した場合
        """
        request = ConversionRequest(
            source=file_path,
            base_name=file_path.stem,
            quality=clamp_quality(self.config.quality if quality is None else quality),
        )

        mime = self.classifier.classify(request.source)
        mime_type = MimeType.from_mime(mime)
        if mime_type is None:
            raise UnsupportedTypeError(
                f"File {request.base_name} is not convertible by mime type {mime}",
                request.source,
            )

        converter = self.select_converter(mime_type)
        if converter is None:
            # 許可リストと対応表の不整合
            if self._logger:
                self._logger.error(f"No converter registered for allowed mime type {mime}")
            raise UnsupportedTypeError(
                f"File {request.base_name} with mime type {mime} is not supported by converters",
                request.source,
            )

        destination_dir = self.config.destination_for(mime_type)
        if self._logger:
            self._logger.verbose(
                f"{request.source.name}: {mime} -> {type(converter).__name__} (quality={request.quality})"
            )

        return converter.convert(
            request.source,
            request.base_name,
            destination_dir,
            request.quality,
        )

    def select_converter(self, mime_type: MimeType) -> BaseConverter | None:
        """MIMEタイプに対応するConverterを返す

        Returns:
            対応するConverter、登録されていない場合はNone
        """
        return self.converters.get(mime_type)
