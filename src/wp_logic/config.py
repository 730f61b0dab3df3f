"""出力設定の読み込み.

ユニバーサルクラスやエントリ属性の接頭辞など、出力の既定値を YAML で上書きできます。

使用例:
    >>> settings = load_settings(Path("logic.yml"))
    >>> settings.universal_tokens()
    ['no-js', 'custom', 'wp']

YAML形式（``logic:`` の下、またはルート直下）:
    logic:
      universal_classes: [no-js, custom]
      site_token: wp
      entry_class: hentry
      entry_id_prefix: entry-
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path

import yaml
from loguru import logger

# ユニバーサルクラス（no-js, custom, wp）を差し替えるフィルター名
UNIVERSAL_CLASSES_FILTER = "@universal_classes"


@dataclass(frozen=True)
class LogicSettings:
    """出力の既定値."""

    universal_classes: tuple[str, ...] = ("no-js", "custom")
    site_token: str = "wp"
    entry_class: str = "hentry"
    entry_id_prefix: str = "entry-"
    universal_filter: str = UNIVERSAL_CLASSES_FILTER

    def universal_tokens(self) -> list[str]:
        """フィルター適用前のユニバーサルクラス."""
        tokens = list(self.universal_classes)
        if self.site_token:
            tokens.append(self.site_token)
        return tokens

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> LogicSettings:
        """辞書から設定を作る.

        Raises:
            ValueError: 未知のキー、または型の合わない値が含まれている場合
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown settings keys: {unknown}. Valid keys: {sorted(known)}"
            raise ValueError(msg)

        values: dict[str, object] = {}
        for key, value in data.items():
            if key == "universal_classes":
                if isinstance(value, str):
                    value = value.split()
                if not isinstance(value, list | tuple) or not all(isinstance(v, str) for v in value):
                    msg = f"Invalid value for 'universal_classes': expected a list of strings, got {value!r}"
                    raise ValueError(msg)
                values[key] = tuple(value)
            else:
                if value is None:
                    value = ""
                if not isinstance(value, str):
                    msg = f"Invalid value for '{key}': expected a string, got {type(value).__name__}"
                    raise ValueError(msg)
                values[key] = value
        return cls(**values)


def load_settings(settings_path: Path | str) -> LogicSettings:
    """YAMLファイルから設定を読み込む.

    Args:
        settings_path: 設定YAMLファイルのパス

    Returns:
        設定オブジェクト

    Raises:
        FileNotFoundError: ファイルが存在しない場合
        ValueError: YAML形式が不正、または設定値が不正な場合
    """
    settings_path = Path(settings_path)

    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    try:
        with open(settings_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in settings file: {settings_path}"
        raise ValueError(msg) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"Settings file must contain a mapping, got {type(data).__name__}"
        raise ValueError(msg)

    section = data.get("logic", data)
    if not isinstance(section, dict):
        msg = f"'logic' section must be a mapping, got {type(section).__name__}"
        raise ValueError(msg)

    settings = LogicSettings.from_mapping(section)
    logger.info(f"Loaded settings from {settings_path}: universal={settings.universal_tokens()}")
    return settings
