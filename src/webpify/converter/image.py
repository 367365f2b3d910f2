"""画像変換モジュール

PNG/JPEG形式の画像をWebP形式に変換するConverterを提供する。
PNGはアルファチャンネルを保持したまま、JPEGはRGBのまま再エンコードする。
"""

import io
from abc import abstractmethod
from pathlib import Path

from PIL import Image

from webpify.converter.base import BaseConverter, ConversionResult, ConversionStatus
from webpify.errors import DecodeError, EncodeError
from webpify.types import DEFAULT_QUALITY

# 透明背景色（RGBA）
TRANSPARENT = (0, 0, 0, 0)


class PillowConverter(BaseConverter):
    """Pillowを使ったWebP変換の共通実装

    デコード、エンコード、書き込みとリソース解放の流れを共通化し、
    サブクラスは ``_prepare`` でピクセル変換のみを実装する。
    """

    @abstractmethod
    def _prepare(self, image: Image.Image) -> Image.Image:
        """デコード済み画像をWebPエンコード用に変換する

        入力画像をそのまま返してもよい。新しい画像を返した場合は
        呼び出し側で解放される。
        """
        ...

    def convert(
        self,
        source: Path,
        base_name: str,
        destination_dir: Path,
        quality: int = DEFAULT_QUALITY,
    ) -> ConversionResult:
        """画像ファイルをWebPに変換する

        エンコード結果は一度メモリ上に保持し、成功した場合のみ
        出力ファイルに書き込む。既存の出力ファイルは上書きする。

        Args:
            source: 変換元ファイルのパス
            base_name: 出力ファイル名（拡張子なし）
            destination_dir: 出力先ディレクトリ（事前に存在している必要がある）
            quality: WebP品質値（0-100）

        Returns:
            変換結果を表すConversionResultオブジェクト

        Raises:
            DecodeError: 変換元が指定形式の画像として読めない場合
            EncodeError: WebPエンコードまたは書き込みに失敗した場合
        """
        self._validate_quality(quality)
        dest = self.get_output_path(base_name, destination_dir)
        bytes_before = self._get_file_size(source)

        image = self._decode(source)
        try:
            try:
                prepared = self._prepare(image)
            except (OSError, ValueError) as e:
                # 16bitグレースケール等、RGB/RGBAへ変換できないピクセル形式
                raise DecodeError(
                    f"File {source.name} has an unsupported pixel mode {image.mode}: {e}",
                    source,
                ) from e
            try:
                data = self._encode(prepared, quality, source)
            finally:
                if prepared is not image:
                    prepared.close()
        finally:
            image.close()

        self._write(data, dest, source)

        return ConversionResult(
            source_path=source,
            dest_path=dest,
            status=ConversionStatus.SUCCESS,
            base_name=base_name,
            bytes_before=bytes_before,
            bytes_after=len(data),
        )

    def _decode(self, source: Path) -> Image.Image:
        """変換元を自身の形式のデコーダのみで読み込み、ピクセルまで展開する"""
        try:
            image = Image.open(source, formats=[self.format_name])
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError(
                f"File {source.name} could not be decoded as {self.format_name}: {e}",
                source,
            ) from e

        try:
            # Image.openは遅延読み込みのため、ここで本体を展開して破損を検出する
            image.load()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            image.close()
            raise DecodeError(
                f"File {source.name} could not be decoded as {self.format_name}: {e}",
                source,
            ) from e

        return image

    def _encode(self, image: Image.Image, quality: int, source: Path) -> bytes:
        """画像をWebPとしてメモリ上にエンコードする"""
        buffer = io.BytesIO()
        try:
            image.save(buffer, "WEBP", quality=quality)
        except (OSError, ValueError, KeyError) as e:
            raise EncodeError(f"File {source.name} could not be encoded as WebP: {e}", source) from e
        return buffer.getvalue()

    def _write(self, data: bytes, dest: Path, source: Path) -> None:
        """エンコード済みデータを出力先に書き込む

        出力先ディレクトリは作成しない。
        """
        if not dest.parent.is_dir():
            raise EncodeError(
                f"File {source.name} could not be written: "
                f"destination directory does not exist: {dest.parent}",
                source,
            )
        try:
            dest.write_bytes(data)
        except OSError as e:
            raise EncodeError(f"File {source.name} could not be written to {dest}: {e}", source) from e


class PngConverter(PillowConverter):
    """PNG→WebP変換クラス

    透明度を保持するため、デコード画像をそのまま渡さずに
    完全透明で塗りつぶした新しいRGBAキャンバスへ等倍で転写してからエンコードする。
    """

    @property
    def format_name(self) -> str:
        return "PNG"

    def _prepare(self, image: Image.Image) -> Image.Image:
        """透明キャンバスに元画像のピクセルを転写する

        ``paste`` はマスク無しの場合に合成を行わずピクセルを置き換えるため、
        アルファ値は黒背景と合成されずにそのまま保存される。

        Args:
            image: デコード済みのPNG画像

        Returns:
            元画像と同じサイズのRGBA画像
        """
        canvas = Image.new("RGBA", image.size, TRANSPARENT)
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        try:
            canvas.paste(rgba, (0, 0))
        finally:
            if rgba is not image:
                rgba.close()
        return canvas


class JpegConverter(PillowConverter):
    """JPEG→WebP変換クラス

    JPEGは透明度を持たないため、デコード画像をRGBのまま再エンコードする。
    """

    @property
    def format_name(self) -> str:
        return "JPEG"

    def _prepare(self, image: Image.Image) -> Image.Image:
        # グレースケールやCMYKのJPEGはRGBに変換
        if image.mode != "RGB":
            return image.convert("RGB")
        return image
