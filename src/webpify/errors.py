"""変換エラー定義

単一ファイルの変換失敗を表す例外階層。バッチ処理はこれらを
ファイル単位で捕捉し、処理を継続する。
"""

from pathlib import Path


class ConversionError(Exception):
    """変換エラーの基底クラス

    Attributes:
        source: 失敗したファイルのパス
    """

    def __init__(self, message: str, source: Path | None = None) -> None:
        super().__init__(message)
        self.source = source


class ClassificationError(ConversionError):
    """MIMEタイプ判定エラー（ファイル読み込み不可等）"""

    pass


class UnsupportedTypeError(ConversionError):
    """変換対象外のMIMEタイプ"""

    pass


class DecodeError(ConversionError):
    """画像デコードエラー"""

    pass


class EncodeError(ConversionError):
    """WebPエンコードまたは書き込みエラー"""

    pass
