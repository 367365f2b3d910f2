"""依存ライブラリチェッカー"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import magic
import PIL
from PIL import features


@dataclass(frozen=True)
class CheckResult:
    """チェック結果"""

    name: str
    required: bool
    found: bool
    version: str | None
    message: str | None


@dataclass(frozen=True)
class CapabilityInfo:
    """実行時機能の情報

    Attributes:
        name: 表示名
        feature: PIL.featuresの機能名（libmagicの場合はNone）
        required: 変換に必須か
    """

    name: str
    feature: str | None
    required: bool


CAPABILITIES: list[CapabilityInfo] = [
    CapabilityInfo(name="libmagic", feature=None, required=True),
    CapabilityInfo(name="WebP encoder", feature="webp", required=True),
    CapabilityInfo(name="JPEG decoder", feature="jpg", required=True),
    CapabilityInfo(name="PNG decoder (zlib)", feature="zlib", required=True),
]


def _check_libmagic(info: CapabilityInfo) -> CheckResult:
    """libmagicが利用できるかをチェックする"""
    try:
        detector = magic.Magic(mime=True)
        mime = detector.from_buffer(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR")
    except (OSError, ImportError, magic.MagicException) as e:
        return CheckResult(
            name=info.name,
            required=info.required,
            found=False,
            version=None,
            message=f"libmagicを読み込めません: {e}",
        )

    version_getter: Callable[[], int] | None = getattr(magic, "version", None)
    version = None
    if version_getter is not None:
        try:
            version = str(version_getter())
        except (NotImplementedError, AttributeError, OSError):
            version = None

    return CheckResult(
        name=info.name,
        required=info.required,
        found=True,
        version=version,
        message=None if mime == "image/png" else f"PNGの判定結果が想定外です: {mime}",
    )


def _check_pillow_feature(info: CapabilityInfo) -> CheckResult:
    """Pillowの機能が利用できるかをチェックする"""
    assert info.feature is not None
    try:
        found = bool(features.check(info.feature))
        version = features.version(info.feature)
    except ValueError as e:
        return CheckResult(
            name=info.name,
            required=info.required,
            found=False,
            version=None,
            message=f"不明な機能です: {e}",
        )

    return CheckResult(
        name=info.name,
        required=info.required,
        found=found,
        version=version,
        message=None if found else f"Pillow {PIL.__version__} に '{info.feature}' サポートがありません",
    )


def check_capability(info: CapabilityInfo) -> CheckResult:
    """単一の実行時機能をチェックする"""
    if info.feature is None:
        return _check_libmagic(info)
    return _check_pillow_feature(info)


def check_all_capabilities() -> list[CheckResult]:
    """全ての実行時機能をチェックする"""
    return [check_capability(info) for info in CAPABILITIES]
