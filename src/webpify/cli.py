"""CLI entry point for webpify."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from webpify import __version__
from webpify.config import (
    ConfigError,
    WebpifyConfig,
    clamp_quality,
    get_default_config,
    load_config,
)
from webpify.converter import ConversionManager, ConversionOrchestrator
from webpify.doctor import check_all_capabilities
from webpify.logger import ConversionLogger, LogConfig, VerboseLevel
from webpify.types import DEFAULT_QUALITY, ExitCode

app = typer.Typer(help="PNG/JPEG画像をWebPに一括変換するCLIツール")
console = Console()

BANNER = "/************* FILE CONVERTER *************/"


def _resolve_quality(raw: str | None, config: WebpifyConfig, logger: ConversionLogger) -> int:
    """--qltの値を解釈する

    未指定なら設定値、数値でなければ警告を出してデフォルト値を使う。
    """
    if raw is None:
        return config.quality
    try:
        number = int(raw.strip())
    except ValueError:
        logger.warning(f"--qlt の値が不正です: {raw!r} (デフォルト {DEFAULT_QUALITY} を使用)")
        return DEFAULT_QUALITY
    quality = clamp_quality(number)
    if quality != number:
        logger.warning(f"--qlt の値を0-100に丸めました: {raw} -> {quality}")
    return quality


@app.command()
def convert(
    qlt: Annotated[
        str | None, typer.Option("--qlt", help="WebP品質（0-100、デフォルト85）")
    ] = None,
    source: Annotated[Path | None, typer.Option("--source", help="変換元ディレクトリ")] = None,
    png_dest: Annotated[Path | None, typer.Option("--png-dest", help="PNG変換結果の出力先")] = None,
    jpeg_dest: Annotated[
        Path | None, typer.Option("--jpeg-dest", help="JPEG変換結果の出力先")
    ] = None,
    config_file: Annotated[Path | None, typer.Option("--config", help="設定ファイル（YAML）")] = None,
    verbose: Annotated[int, typer.Option("-v", "--verbose", count=True, help="詳細ログ出力")] = 0,
    quiet: Annotated[bool, typer.Option("-q", "--quiet", help="エラー以外を出力しない")] = False,
    log_file: Annotated[Path | None, typer.Option(help="ログファイル出力先")] = None,
) -> None:
    """ディレクトリ内の画像をWebPに変換する"""
    if quiet:
        level = VerboseLevel.QUIET
    else:
        level = VerboseLevel(min(verbose, VerboseLevel.DEBUG))

    try:
        config = load_config(config_file) if config_file else get_default_config()
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(ExitCode.INVALID_INPUT) from e

    config = config.with_overrides(
        source_dir=source,
        png_dest_dir=png_dest,
        jpeg_dest_dir=jpeg_dest,
    )

    with ConversionLogger(LogConfig(verbose_level=level, log_file=log_file)) as logger:
        quality = _resolve_quality(qlt, config, logger)
        orchestrator = ConversionOrchestrator(config=config, logger=logger)
        manager = ConversionManager(orchestrator, quality=quality, logger=logger)

        logger.info(BANNER)
        try:
            summary = manager.run(config.source_dir)
        except (FileNotFoundError, NotADirectoryError) as e:
            logger.error(str(e))
            raise typer.Exit(ExitCode.ERROR) from e

        logger.log_summary(summary)

    raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def doctor() -> None:
    """変換に必要なライブラリをチェックする"""
    results = check_all_capabilities()

    table = Table(title="依存ライブラリチェック結果")
    table.add_column("ステータス", justify="center")
    table.add_column("機能", justify="left")
    table.add_column("バージョン", justify="left")
    table.add_column("必須", justify="center")
    table.add_column("メッセージ", justify="left")

    has_missing_required = False

    for result in results:
        if result.found:
            status = "[green]✓[/green]"
        else:
            status = "[red]✗[/red]"
            if result.required:
                has_missing_required = True

        required_str = "[yellow]必須[/yellow]" if result.required else "オプション"
        table.add_row(status, result.name, result.version or "-", required_str, result.message or "")

    console.print(table)

    if has_missing_required:
        console.print("\n[red]エラー: 必須ライブラリが不足しています[/red]")
        raise typer.Exit(ExitCode.ERROR)
    console.print("\n[green]すべての必須ライブラリが利用可能です[/green]")
    raise typer.Exit(ExitCode.SUCCESS)


def version_callback(value: bool) -> None:
    """バージョン表示コールバック"""
    if value:
        typer.echo(f"webpify {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="バージョンを表示する",
        ),
    ] = False,
) -> None:
    """webpify CLI - PNG/JPEG画像をWebPに変換"""
    pass
