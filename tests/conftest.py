"""テスト用画像フィクスチャ"""

import io
from pathlib import Path

import pytest
from PIL import Image


def make_png_with_transparent_corner(path: Path, size: tuple[int, int] = (16, 16)) -> Path:
    """(0, 0)のみ完全透明な半透明赤のPNGを作成する"""
    img = Image.new("RGBA", size, color=(255, 0, 0, 200))
    img.putpixel((0, 0), (0, 0, 0, 0))
    img.save(path, "PNG")
    return path


def make_noise_png(path: Path, size: tuple[int, int] = (64, 64)) -> Path:
    """圧縮率が品質に依存するノイズ画像のPNGを作成する"""
    noise = Image.effect_noise(size, 80)
    img = Image.merge("RGBA", (noise, noise.rotate(90), noise.rotate(180), Image.new("L", size, 255)))
    img.save(path, "PNG")
    return path


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """変換元ディレクトリ"""
    path = tmp_path / "images"
    path.mkdir()
    return path


@pytest.fixture
def png_dest(tmp_path: Path) -> Path:
    """PNG用出力先ディレクトリ"""
    path = tmp_path / "processed-png"
    path.mkdir()
    return path


@pytest.fixture
def jpeg_dest(tmp_path: Path) -> Path:
    """JPEG用出力先ディレクトリ"""
    path = tmp_path / "processed-jpeg"
    path.mkdir()
    return path


@pytest.fixture
def logo_png(source_dir: Path) -> Path:
    """アルファチャンネル付きPNG"""
    return make_png_with_transparent_corner(source_dir / "logo.png")


@pytest.fixture
def noise_png(source_dir: Path) -> Path:
    """ノイズ画像のPNG"""
    return make_noise_png(source_dir / "noise.png")


@pytest.fixture
def photo_jpg(source_dir: Path) -> Path:
    """JPEG画像"""
    img = Image.new("RGB", (32, 24), color=(0, 128, 255))
    path = source_dir / "photo.jpg"
    img.save(path, "JPEG")
    return path


@pytest.fixture
def notes_txt(source_dir: Path) -> Path:
    """テキストファイル"""
    path = source_dir / "notes.txt"
    path.write_text("shopping list\n- milk\n- eggs\n", encoding="utf-8")
    return path


@pytest.fixture
def corrupt_png(source_dir: Path) -> Path:
    """PNGシグネチャとIHDRのみで本体が欠けたファイル"""
    buffer = io.BytesIO()
    Image.new("RGB", (16, 16), color=(10, 20, 30)).save(buffer, "PNG")
    path = source_dir / "corrupt.png"
    path.write_bytes(buffer.getvalue()[:40])
    return path
