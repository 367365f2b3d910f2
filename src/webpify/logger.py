"""変換ログ出力

VerboseLevel (詳細ログレベル)に応じてコンソール出力を制御し、
必要に応じてタイムスタンプ付きのログファイルにも書き出す。
ファイル単位の変換結果とバッチ全体のサマリ出力もここで行う。
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from webpify.converter.base import ConversionResult
    from webpify.converter.manager import ConversionSummary


class VerboseLevel(IntEnum):
    """詳細ログレベル

    QUIET: エラーのみ出力
    NORMAL: ファイルごとの結果とサマリを出力
    VERBOSE: 判定したMIMEタイプや出力先も出力（-vオプション）
    DEBUG: サイズ等の詳細も出力（-vvオプション）
    """

    QUIET = -1
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass
class LogConfig:
    """ログ設定

    Attributes:
        verbose_level: ログの詳細度レベル
        log_file: ログ出力先ファイルパス（Noneの場合はファイル出力なし）
        use_emoji: サマリでemojiを使用するか
    """

    verbose_level: VerboseLevel = VerboseLevel.NORMAL
    log_file: Path | None = None
    use_emoji: bool = True


class ConversionLogger:
    """変換ログ出力クラス

    使用例:
        >>> logger = ConversionLogger(LogConfig(verbose_level=VerboseLevel.VERBOSE))
        >>> logger.info("File photo processed")
        >>> logger.verbose("photo.jpg: image/jpeg")
    """

    _ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

    def __init__(self, config: LogConfig | None = None) -> None:
        self._config = config or LogConfig()
        self._log_file: TextIO | None = None
        if self._config.log_file:
            # クラス自体がコンテキストマネージャとして動作し、__exit__でファイルを閉じる
            self._log_file = open(self._config.log_file, "w", encoding="utf-8")  # noqa: SIM115

    def __enter__(self) -> ConversionLogger:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """ログファイルを閉じる"""
        if self._log_file:
            self._log_file.close()
            self._log_file = None

    @property
    def config(self) -> LogConfig:
        """ログ設定を取得する"""
        return self._config

    def _print(self, message: str, file: TextIO | None = None) -> None:
        if file is None:
            file = sys.stdout
        print(message, file=file)

    def _log_to_file(self, level: str, message: str) -> None:
        """ファイルにログ出力する

        Args:
            level: ログレベル文字列
            message: 出力するメッセージ
        """
        if self._log_file:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            clean_message = self._strip_ansi(message)
            self._log_file.write(f"[{timestamp}] {level}: {clean_message}\n")
            self._log_file.flush()

    def _strip_ansi(self, text: str) -> str:
        return self._ANSI_ESCAPE_PATTERN.sub("", text)

    def info(self, message: str) -> None:
        """情報メッセージを出力する（NORMAL以上）"""
        if self._config.verbose_level >= VerboseLevel.NORMAL:
            self._print(message)
        self._log_to_file("INFO", message)

    def verbose(self, message: str) -> None:
        """詳細メッセージを出力する（VERBOSE以上）"""
        if self._config.verbose_level >= VerboseLevel.VERBOSE:
            self._print(message)
        self._log_to_file("VERBOSE", message)

    def debug(self, message: str) -> None:
        """デバッグメッセージを出力する（DEBUG以上）"""
        if self._config.verbose_level >= VerboseLevel.DEBUG:
            self._print(message)
        self._log_to_file("DEBUG", message)

    def error(self, message: str) -> None:
        """エラーメッセージを出力する（常に出力）"""
        self._print(f"エラー: {message}", file=sys.stderr)
        self._log_to_file("ERROR", message)

    def warning(self, message: str) -> None:
        """警告メッセージを出力する（QUIET以上）"""
        if self._config.verbose_level > VerboseLevel.QUIET:
            self._print(f"警告: {message}")
        self._log_to_file("WARNING", message)

    def log_result(self, result: ConversionResult) -> None:
        """ファイル単位の変換結果を1行で出力する（NORMAL以上）

        失敗理由はそのまま出力し、ログファイルにはFAILEDとして記録する。

        Args:
            result: 変換結果
        """
        line = result.console_line
        if self._config.verbose_level >= VerboseLevel.NORMAL:
            self._print(line)
        self._log_to_file("INFO" if result.is_success else "FAILED", line)

        if result.is_success and result.dest_path is not None:
            self.verbose(f"  -> {result.dest_path}")
            self.debug(
                f"  {result.bytes_before} B -> {result.bytes_after} B "
                f"({result.compression_ratio:.2f})"
            )

    def log_summary(self, summary: ConversionSummary) -> None:
        """バッチ全体のサマリを出力する（NORMAL以上）

        Args:
            summary: 変換サマリ
        """
        if summary.failed == 0:
            mark = "✅" if self._config.use_emoji else "[OK]"
        else:
            mark = "⚠️" if self._config.use_emoji else "[WARN]"
        self.info(
            f"{mark} {summary.success}/{summary.total} processed, {summary.failed} failed"
        )
