"""MIMEタイプ判定モジュール

ファイルの拡張子ではなく内容（マジックバイト）からMIMEタイプを判定する。
判定にはlibmagic（python-magic）を使用する。
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import magic

from webpify.errors import ClassificationError

FALLBACK_MIME = "application/octet-stream"


class MimeType(Enum):
    """変換対象のMIMEタイプ

    変換可能なMIMEタイプの許可リスト。ここに含まれないMIMEタイプは
    すべて変換対象外として扱う。
    ``image/jpg`` は正式な登録値ではないが、互換性のため ``image/jpeg`` の別名として受け付ける。
    """

    JPEG = "image/jpeg"
    JPG = "image/jpg"
    PNG = "image/png"

    @classmethod
    def from_mime(cls, mime: str) -> MimeType | None:
        """MIME文字列から列挙値を取得する

        Args:
            mime: MIMEタイプ文字列（大文字小文字は区別しない）

        Returns:
            対応する列挙値、許可リスト外の場合はNone
        """
        normalized = mime.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return None

    @classmethod
    def is_supported(cls, mime: str) -> bool:
        """MIMEタイプが許可リストに含まれるかを返す"""
        return cls.from_mime(mime) is not None


class MimeClassifier:
    """ファイル内容からMIMEタイプを判定するクラス"""

    def __init__(self) -> None:
        self._magic = magic.Magic(mime=True)

    def classify(self, file_path: Path) -> str:
        """ファイルのMIMEタイプを判定する

        Args:
            file_path: 判定対象のファイルパス

        Returns:
            MIMEタイプ文字列（例: "image/png", "text/plain"）

        Raises:
            ClassificationError: ファイルが存在しない、または読み込めない場合
        """
        if not file_path.exists():
            raise ClassificationError(f"File {file_path.name} could not be read: not found", file_path)

        try:
            mime = self._magic.from_file(str(file_path))
        except (OSError, magic.MagicException) as e:
            raise ClassificationError(f"File {file_path.name} could not be read: {e}", file_path) from e

        return mime or FALLBACK_MIME
