"""Configuration module for webpify."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from webpify.mime import MimeType
from webpify.types import DEFAULT_QUALITY, MAX_QUALITY, MIN_QUALITY

DEFAULT_SOURCE_DIR = Path("images")
DEFAULT_PNG_DEST_DIR = Path("processed-png")
DEFAULT_JPEG_DEST_DIR = Path("processed-jpeg")


class ConfigError(Exception):
    """設定ファイル読み込みエラー"""

    pass


@dataclass(frozen=True)
class WebpifyConfig:
    """ルート設定

    Attributes:
        source_dir: 変換元画像のディレクトリ
        quality: WebP品質値（0-100、デフォルト85）
        png_dest_dir: PNGから変換したWebPの出力先
        jpeg_dest_dir: JPEGから変換したWebPの出力先
    """

    source_dir: Path = DEFAULT_SOURCE_DIR
    quality: int = DEFAULT_QUALITY
    png_dest_dir: Path = DEFAULT_PNG_DEST_DIR
    jpeg_dest_dir: Path = DEFAULT_JPEG_DEST_DIR

    def destination_for(self, mime_type: MimeType) -> Path:
        """MIMEタイプに対応する出力先ディレクトリを返す"""
        if mime_type == MimeType.PNG:
            return self.png_dest_dir
        return self.jpeg_dest_dir

    def with_overrides(self, **overrides: Any) -> WebpifyConfig:
        """Noneでない値のみを上書きした設定を返す"""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


def parse_quality(value: str | int) -> int:
    """品質値を解釈する

    数値として解釈できない場合はエラーとし、範囲外の数値は0-100に丸める。

    Args:
        value: 品質値（文字列または整数）

    Returns:
        0-100の整数

    Raises:
        ValueError: 数値として解釈できない場合
    """
    if isinstance(value, bool):
        raise ValueError(f"品質値が数値ではありません: {value!r}")
    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip()
        try:
            number = int(text)
        except ValueError:
            raise ValueError(f"品質値が数値ではありません: {value!r}") from None
    return clamp_quality(number)


def clamp_quality(quality: int) -> int:
    """品質値を0-100の範囲に丸める"""
    return max(MIN_QUALITY, min(MAX_QUALITY, quality))


def get_default_config() -> WebpifyConfig:
    """デフォルト設定を取得する"""
    return WebpifyConfig()


def load_config(path: Path) -> WebpifyConfig:
    """設定ファイルを読み込む

    Args:
        path: 設定ファイルパス

    Returns:
        WebpifyConfig: 読み込んだ設定（デフォルトとマージ済み）

    Raises:
        ConfigError: ファイル読み込み、パース、または値の検証エラー
    """
    if not path.exists():
        raise ConfigError(f"設定ファイルが見つかりません: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML解析エラー: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("設定ファイルはYAMLのマッピング形式である必要があります")

    default = get_default_config()

    return WebpifyConfig(
        source_dir=_parse_path(data, "source_dir", default.source_dir),
        quality=_parse_config_quality(data.get("quality", default.quality)),
        png_dest_dir=_parse_path(data, "png_dest_dir", default.png_dest_dir),
        jpeg_dest_dir=_parse_path(data, "jpeg_dest_dir", default.jpeg_dest_dir),
    )


def _parse_config_quality(value: Any) -> int:
    """設定ファイルの品質値を検証する"""
    try:
        return parse_quality(value)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def _parse_path(data: dict[str, Any], key: str, default: Path) -> Path:
    """パス設定を取得する"""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"{key} は文字列である必要があります: {value!r}")
    return Path(value)
