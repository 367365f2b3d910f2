"""MIMEタイプ判定のテスト"""

from pathlib import Path
from unittest.mock import patch

import magic
import pytest

from webpify.errors import ClassificationError
from webpify.mime import MimeClassifier, MimeType


class TestMimeType:
    """MimeType列挙型のテスト"""

    @pytest.mark.parametrize(
        "mime,expected",
        [
            pytest.param("image/jpeg", MimeType.JPEG, id="正常系: image/jpeg"),
            pytest.param("image/jpg", MimeType.JPG, id="正常系: image/jpg（互換用の別名）"),
            pytest.param("image/png", MimeType.PNG, id="正常系: image/png"),
            pytest.param("IMAGE/PNG", MimeType.PNG, id="正常系: 大文字小文字を区別しない"),
            pytest.param(" image/png ", MimeType.PNG, id="正常系: 前後の空白を無視"),
            pytest.param("image/webp", None, id="異常系: WebPは対象外"),
            pytest.param("image/gif", None, id="異常系: GIFは対象外"),
            pytest.param("text/plain", None, id="異常系: テキストは対象外"),
            pytest.param("", None, id="異常系: 空文字"),
        ],
    )
    def test_from_mime(self, mime: str, expected: MimeType | None) -> None:
        """MIME文字列から許可リストの値を引ける"""
        assert MimeType.from_mime(mime) == expected

    def test_allow_list_is_closed(self) -> None:
        """許可リストは3種類のみ"""
        assert {m.value for m in MimeType} == {"image/jpeg", "image/jpg", "image/png"}

    @pytest.mark.parametrize(
        "mime,expected",
        [
            pytest.param("image/png", True, id="正常系: 対象"),
            pytest.param("application/pdf", False, id="異常系: 対象外"),
        ],
    )
    def test_is_supported(self, mime: str, expected: bool) -> None:
        assert MimeType.is_supported(mime) is expected


class TestMimeClassifier:
    """MimeClassifierクラスのテスト"""

    def test_classify_png(self, logo_png: Path) -> None:
        assert MimeClassifier().classify(logo_png) == "image/png"

    def test_classify_jpeg(self, photo_jpg: Path) -> None:
        assert MimeClassifier().classify(photo_jpg) == "image/jpeg"

    def test_classify_text(self, notes_txt: Path) -> None:
        assert MimeClassifier().classify(notes_txt) == "text/plain"

    def test_classify_uses_content_not_extension(self, source_dir: Path, logo_png: Path) -> None:
        """拡張子ではなく内容で判定する"""
        disguised = source_dir / "not_really.jpg"
        disguised.write_bytes(logo_png.read_bytes())

        assert MimeClassifier().classify(disguised) == "image/png"

    def test_classify_truncated_png_by_signature(self, corrupt_png: Path) -> None:
        """本体が欠けていてもシグネチャからPNGと判定する"""
        assert MimeClassifier().classify(corrupt_png) == "image/png"

    def test_classify_missing_file(self, tmp_path: Path) -> None:
        """存在しないファイルはClassificationError"""
        missing = tmp_path / "missing.png"

        with pytest.raises(ClassificationError) as exc_info:
            MimeClassifier().classify(missing)

        assert exc_info.value.source == missing

    def test_classify_unreadable_file(self, logo_png: Path) -> None:
        """読み込みエラーはClassificationErrorに変換される"""
        classifier = MimeClassifier()
        with patch.object(classifier._magic, "from_file", side_effect=PermissionError("denied")):
            with pytest.raises(ClassificationError, match="denied"):
                classifier.classify(logo_png)

    def test_classify_magic_failure(self, logo_png: Path) -> None:
        """libmagicのエラーもClassificationErrorに変換される"""
        classifier = MimeClassifier()
        with patch.object(
            classifier._magic, "from_file", side_effect=magic.MagicException("broken database")
        ):
            with pytest.raises(ClassificationError):
                classifier.classify(logo_png)

    def test_classify_empty_answer_falls_back(self, logo_png: Path) -> None:
        """判定結果が空の場合はapplication/octet-stream"""
        classifier = MimeClassifier()
        with patch.object(classifier._magic, "from_file", return_value=""):
            assert classifier.classify(logo_png) == "application/octet-stream"
