"""Converter基底クラスモジュール

WebP変換を行うすべてのConverterの基底クラスと共通データ型を定義する。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from webpify.types import DEFAULT_QUALITY, MAX_QUALITY, MIN_QUALITY

WEBP_EXTENSION = ".webp"


class ConversionStatus(Enum):
    """変換ステータス

    ファイル変換処理の結果ステータスを表す列挙型。
    """

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversionRequest:
    """変換リクエスト

    1ファイル分の変換パラメータ。ファイルごとに生成され、一度だけ消費される。

    Attributes:
        source: 変換元ファイルのパス
        base_name: 拡張子を除いたファイル名
        quality: WebP品質値（0-100）
    """

    source: Path
    base_name: str
    quality: int = DEFAULT_QUALITY


@dataclass(frozen=True)
class ConversionResult:
    """変換結果を表すデータクラス

    単一ファイルの変換処理結果を保持する不変データクラス。

    Attributes:
        source_path: 変換元ファイルのパス
        dest_path: 変換先ファイルのパス（変換失敗時はNone）
        status: 変換ステータス
        base_name: 拡張子を除いたファイル名
        message: 追加メッセージ（エラー詳細等）
        bytes_before: 変換前のファイルサイズ（バイト）
        bytes_after: 変換後のファイルサイズ（バイト）
    """

    source_path: Path
    dest_path: Path | None
    status: ConversionStatus
    base_name: str = ""
    message: str = ""
    bytes_before: int = 0
    bytes_after: int = 0

    @property
    def compression_ratio(self) -> float:
        """圧縮率を計算する（bytes_after / bytes_before）

        Returns:
            圧縮率（0.0〜1.0+）。bytes_beforeが0の場合は1.0を返す
        """
        if self.bytes_before == 0:
            return 1.0
        return self.bytes_after / self.bytes_before

    @property
    def bytes_saved(self) -> int:
        """節約されたバイト数を返す"""
        return self.bytes_before - self.bytes_after

    @property
    def is_success(self) -> bool:
        """変換が成功したかどうかを返す"""
        return self.status == ConversionStatus.SUCCESS

    @property
    def console_line(self) -> str:
        """コンソールに表示する1行を返す

        成功時は処理済みメッセージ、失敗時はエラー内容をそのまま返す。
        """
        if self.is_success:
            return f"File {self.base_name} processed"
        return self.message


class BaseConverter(ABC):
    """Converterの基底クラス

    入力形式ごとのデコード→変換→WebPエンコード処理を担う抽象基底クラス。
    出力パスの組み立てとファイルサイズ取得は共通実装として提供する。
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Pillowのデコーダ名を返す（例: "PNG", "JPEG"）"""
        ...

    @abstractmethod
    def convert(
        self,
        source: Path,
        base_name: str,
        destination_dir: Path,
        quality: int = DEFAULT_QUALITY,
    ) -> ConversionResult:
        """ファイルをWebPに変換する

        Args:
            source: 変換元ファイルのパス
            base_name: 出力ファイル名（拡張子なし）
            destination_dir: 出力先ディレクトリ
            quality: WebP品質値（0-100）

        Returns:
            変換結果を表すConversionResultオブジェクト

        Raises:
            DecodeError: 変換元が指定形式の画像として読めない場合
            EncodeError: WebPエンコードまたは書き込みに失敗した場合
        """
        ...

    def get_output_path(self, base_name: str, destination_dir: Path) -> Path:
        """出力ファイルのパスを返す

        Args:
            base_name: 出力ファイル名（拡張子なし）
            destination_dir: 出力先ディレクトリ

        Returns:
            ``<destination_dir>/<base_name>.webp``
        """
        return destination_dir / f"{base_name}{WEBP_EXTENSION}"

    def _validate_quality(self, quality: int) -> None:
        """品質値の範囲を検証する

        Raises:
            ValueError: 0-100の範囲外の場合
        """
        if not MIN_QUALITY <= quality <= MAX_QUALITY:
            raise ValueError(
                f"quality must be between {MIN_QUALITY} and {MAX_QUALITY}: {quality}"
            )

    def _get_file_size(self, path: Path) -> int:
        """ファイルサイズを取得する

        Returns:
            ファイルサイズ（バイト）。ファイルが存在しない場合は0
        """
        if path.exists():
            return path.stat().st_size
        return 0
