"""ConversionManager モジュール

ディレクトリ内のファイルを1件ずつ順に変換し、結果を集計する。
1ファイルの失敗がバッチ全体を止めることはない。
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from webpify.converter.base import ConversionResult, ConversionStatus
from webpify.converter.orchestrator import ConversionOrchestrator
from webpify.errors import ConversionError
from webpify.logger import ConversionLogger


@dataclass
class ConversionSummary:
    """変換サマリー

    複数ファイルの変換結果のサマリーを保持するデータクラス。
    mutableとして定義し、結果を蓄積できるようにする。

    Attributes:
        total: 変換対象の総ファイル数
        success: 変換成功数
        failed: 変換失敗数
        results: 個々の変換結果のリスト
    """

    total: int = 0
    success: int = 0
    failed: int = 0
    results: list[ConversionResult] = field(default_factory=list)

    def add(self, result: ConversionResult) -> None:
        """変換結果を追加して集計する"""
        self.results.append(result)
        if result.is_success:
            self.success += 1
        else:
            self.failed += 1


# 進捗コールバックの型エイリアス
ProgressCallback = Callable[[int, int], None]


class ConversionManager:
    """変換マネージャー

    ディレクトリ内のファイルを列挙し、ConversionOrchestratorに1件ずつ渡す。
    処理は逐次実行で、1ファイルの判定・変換・リソース解放が終わってから次に進む。

    Attributes:
        orchestrator: 単一ファイルの変換を行うオーケストレーター
        quality: WebP品質値（Noneの場合はオーケストレーターの設定値）
        progress_callback: 進捗報告用コールバック
    """

    def __init__(
        self,
        orchestrator: ConversionOrchestrator,
        quality: int | None = None,
        logger: ConversionLogger | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.quality = quality
        self.progress_callback = progress_callback
        self._logger = logger

    def collect_files(self, source_dir: Path) -> list[Path]:
        """変換元ディレクトリ直下のファイルを名前順に列挙する

        Args:
            source_dir: 変換元ディレクトリのパス

        Returns:
            ファイルパスのリスト（サブディレクトリは含まない）

        Raises:
            FileNotFoundError: ディレクトリが存在しない場合
            NotADirectoryError: ディレクトリではない場合
        """
        if not source_dir.exists():
            raise FileNotFoundError(f"変換元ディレクトリが見つかりません: {source_dir}")
        if not source_dir.is_dir():
            raise NotADirectoryError(f"ディレクトリではありません: {source_dir}")

        return sorted(path for path in source_dir.iterdir() if path.is_file())

    def process_file(self, file_path: Path) -> ConversionResult:
        """単一ファイルを変換する

        変換エラーは例外として送出せず、失敗結果として返す。

        Args:
            file_path: 変換元ファイルのパス

        Returns:
            変換結果
        """
        try:
            return self.orchestrator.convert_file(file_path, self.quality)
        except ConversionError as e:
            return ConversionResult(
                source_path=file_path,
                dest_path=None,
                status=ConversionStatus.FAILED,
                base_name=file_path.stem,
                message=str(e),
            )

    def convert_files(self, files: list[Path]) -> ConversionSummary:
        """複数ファイルを順に変換する

        Args:
            files: 変換元ファイルパスのリスト

        Returns:
            変換結果のサマリー
        """
        summary = ConversionSummary(total=len(files))

        for index, file_path in enumerate(files, start=1):
            result = self.process_file(file_path)
            summary.add(result)

            if self._logger:
                self._logger.log_result(result)
            if self.progress_callback:
                self.progress_callback(index, summary.total)

        return summary

    def run(self, source_dir: Path) -> ConversionSummary:
        """ディレクトリ内のファイルを変換する

        Args:
            source_dir: 変換元ディレクトリのパス

        Returns:
            変換結果のサマリー

        Raises:
            FileNotFoundError: ディレクトリが存在しない場合
            NotADirectoryError: ディレクトリではない場合
        """
        files = self.collect_files(source_dir)
        if self._logger:
            self._logger.debug(f"{len(files)} files found in {source_dir}")
        return self.convert_files(files)
