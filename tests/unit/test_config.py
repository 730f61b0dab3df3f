"""Unit tests for settings loading."""

from pathlib import Path

import pytest

from wp_logic.config import LogicSettings, load_settings


class TestLoadSettings:
    def test_load_logic_section(self, tmp_path: Path) -> None:
        """logic セクションから設定を読み込めること."""
        settings_file = tmp_path / "logic.yml"
        settings_file.write_text(
            "logic:\n  universal_classes: [no-js]\n  site_token: mysite\n  entry_id_prefix: post-\n",
            encoding="utf-8",
        )

        settings = load_settings(settings_file)

        assert settings.universal_tokens() == ["no-js", "mysite"]
        assert settings.entry_id_prefix == "post-"
        assert settings.entry_class == "hentry"

    def test_load_root_mapping(self, tmp_path: Path) -> None:
        """ルート直下のキーでも読み込めること."""
        settings_file = tmp_path / "logic.yml"
        settings_file.write_text("universal_classes: no-js custom\nsite_token:\n", encoding="utf-8")

        settings = load_settings(settings_file)

        assert settings.universal_tokens() == ["no-js", "custom"]

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        settings_file = tmp_path / "logic.yml"
        settings_file.write_text("", encoding="utf-8")

        assert load_settings(settings_file) == LogicSettings()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Settings file not found"):
            load_settings(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        settings_file = tmp_path / "broken.yml"
        settings_file.write_text("logic: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_settings(settings_file)

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        settings_file = tmp_path / "list.yml"
        settings_file.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_settings(settings_file)

    def test_unknown_key(self, tmp_path: Path) -> None:
        settings_file = tmp_path / "logic.yml"
        settings_file.write_text("logic:\n  colour: blue\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Unknown settings keys"):
            load_settings(settings_file)

    def test_wrong_type(self) -> None:
        with pytest.raises(ValueError, match="universal_classes"):
            LogicSettings.from_mapping({"universal_classes": [1, 2]})
        with pytest.raises(ValueError, match="site_token"):
            LogicSettings.from_mapping({"site_token": 5})
