"""設定ファイル読み込みのテスト"""

from pathlib import Path

import pytest

from webpify.config import (
    ConfigError,
    WebpifyConfig,
    clamp_quality,
    get_default_config,
    load_config,
    parse_quality,
)
from webpify.mime import MimeType


class TestDefaultConfig:
    """デフォルト設定のテスト"""

    def test_get_default_config_returns_webpify_config(self) -> None:
        assert isinstance(get_default_config(), WebpifyConfig)

    def test_default_values(self) -> None:
        """デフォルト値が正しい"""
        config = get_default_config()
        assert config.source_dir == Path("images")
        assert config.quality == 85
        assert config.png_dest_dir == Path("processed-png")
        assert config.jpeg_dest_dir == Path("processed-jpeg")

    @pytest.mark.parametrize(
        "mime_type,expected",
        [
            pytest.param(MimeType.PNG, Path("processed-png"), id="正常系: PNG"),
            pytest.param(MimeType.JPEG, Path("processed-jpeg"), id="正常系: JPEG"),
            pytest.param(MimeType.JPG, Path("processed-jpeg"), id="正常系: JPG"),
        ],
    )
    def test_destination_for(self, mime_type: MimeType, expected: Path) -> None:
        assert get_default_config().destination_for(mime_type) == expected

    def test_with_overrides_ignores_none(self, tmp_path: Path) -> None:
        """Noneの値は上書きしない"""
        config = get_default_config().with_overrides(source_dir=tmp_path, png_dest_dir=None)
        assert config.source_dir == tmp_path
        assert config.png_dest_dir == Path("processed-png")

    def test_config_is_immutable(self) -> None:
        with pytest.raises(AttributeError):
            get_default_config().quality = 10  # type: ignore[misc]


class TestParseQuality:
    """品質値の解釈のテスト"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            pytest.param("85", 85, id="正常系: 文字列"),
            pytest.param(" 50 ", 50, id="正常系: 前後の空白"),
            pytest.param(0, 0, id="境界値: 下限"),
            pytest.param(100, 100, id="境界値: 上限"),
            pytest.param("150", 100, id="境界値: 上限超過は丸める"),
            pytest.param(-5, 0, id="境界値: 下限未満は丸める"),
        ],
    )
    def test_valid(self, value: str | int, expected: int) -> None:
        assert parse_quality(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("high", id="異常系: 文字列"),
            pytest.param("", id="異常系: 空文字"),
            pytest.param("8.5", id="異常系: 小数"),
            pytest.param(True, id="異常系: 真偽値"),
        ],
    )
    def test_invalid(self, value: str | int) -> None:
        with pytest.raises(ValueError):
            parse_quality(value)

    def test_clamp_quality(self) -> None:
        assert clamp_quality(101) == 100
        assert clamp_quality(-1) == 0
        assert clamp_quality(42) == 42


class TestLoadConfig:
    """設定読み込みのテスト"""

    def test_load_config_valid_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "webpify.yml"
        config_file.write_text(
            "source_dir: in\nquality: 60\npng_dest_dir: out/png\njpeg_dest_dir: out/jpeg\n"
        )

        config = load_config(config_file)

        assert config.source_dir == Path("in")
        assert config.quality == 60
        assert config.png_dest_dir == Path("out/png")
        assert config.jpeg_dest_dir == Path("out/jpeg")

    def test_load_config_partial_file_merges_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "webpify.yml"
        config_file.write_text("quality: 70\n")

        config = load_config(config_file)

        assert config.quality == 70
        assert config.source_dir == Path("images")

    def test_load_config_empty_file(self, tmp_path: Path) -> None:
        """空のファイルはデフォルト設定を返す"""
        config_file = tmp_path / "empty.yml"
        config_file.write_text("")

        assert load_config(config_file) == get_default_config()

    def test_load_config_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nonexistent.yml")

    def test_load_config_invalid_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "invalid.yml"
        config_file.write_text("this is not valid yaml: [")

        with pytest.raises(ConfigError):
            load_config(config_file)

    def test_load_config_non_mapping(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            load_config(config_file)

    def test_load_config_invalid_quality_is_error(self, tmp_path: Path) -> None:
        """設定ファイルの不正な品質値はエラー"""
        config_file = tmp_path / "webpify.yml"
        config_file.write_text("quality: high\n")

        with pytest.raises(ConfigError, match="high"):
            load_config(config_file)

    def test_load_config_invalid_path_type(self, tmp_path: Path) -> None:
        config_file = tmp_path / "webpify.yml"
        config_file.write_text("png_dest_dir: 42\n")

        with pytest.raises(ConfigError, match="png_dest_dir"):
            load_config(config_file)
