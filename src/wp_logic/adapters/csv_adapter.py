"""CSV読み込みアダプタ（1行 = 1リクエスト）.

アクセスログなどから書き出した平坦な表をスナップショットとして読み込みます。
サイト情報（投稿やタクソノミー）は CSV では表現しにくいため、JSON/YAML の
スナップショットファイルの ``site`` セクションを別途指定できます。

列:
    name, flags（空白区切り）, logged_in, admin_bar_showing,
    queried_post, queried_author, queried_term（"taxonomy:slug"）, queried_post_type,
    queried_object_id, current_post_id, var_<クエリ変数名>
"""

from __future__ import annotations

import json
from pathlib import Path

import polars as pl
import yaml
from loguru import logger

from wp_logic.core.state import SiteRegistry
from wp_logic.core.tokens import token_explode

from .base_adapter import BaseAdapter
from .snapshot import Snapshot, dedupe_names, parse_request, parse_site

_TRUE_VALUES = {"1", "true", "yes", "on"}
_VAR_PREFIX = "var_"


def _cell(row: dict[str, object], column: str) -> str | None:
    value = row.get(column)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _int_cell(row: dict[str, object], column: str) -> int | None:
    text = _cell(row, column)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        logger.warning(f"Ignoring non-integer value in column {column!r}: {text!r}")
        return None


class CSV_Adapter(BaseAdapter):
    """リクエスト一覧 CSV のアダプタ.

    Args:
        file_path: CSVファイルのパス
        site_path: サイト情報を含む JSON/YAML スナップショットファイル（任意）
    """

    def __init__(self, file_path: Path | str, site_path: Path | str | None = None) -> None:
        """アダプタ初期化.

        Raises:
            FileNotFoundError: CSVファイル、またはサイト情報ファイルが存在しない場合
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"CSV file not found: {self.file_path}")

        self.site_path = Path(site_path) if site_path else None
        if self.site_path is not None and not self.site_path.exists():
            raise FileNotFoundError(f"Site file not found: {self.site_path}")

    def _load_site(self) -> SiteRegistry:
        if self.site_path is None:
            return SiteRegistry()
        with open(self.site_path, encoding="utf-8") as f:
            if self.site_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Site file must contain a mapping: {self.site_path}")
        return parse_site(data.get("site", data), str(self.site_path))

    @staticmethod
    def _row_to_entry(row: dict[str, object]) -> dict[str, object]:
        entry: dict[str, object] = {}

        name = _cell(row, "name")
        if name:
            entry["name"] = name

        flags = _cell(row, "flags")
        if flags:
            entry["flags"] = token_explode(flags)

        for column in ("logged_in", "admin_bar_showing"):
            value = _cell(row, column)
            if value is not None:
                entry[column] = value.lower() in _TRUE_VALUES

        post_id = _int_cell(row, "queried_post")
        author_id = _int_cell(row, "queried_author")
        term = _cell(row, "queried_term")
        post_type = _cell(row, "queried_post_type")
        if post_id is not None:
            entry["queried_object"] = {"post": post_id}
        elif author_id is not None:
            entry["queried_object"] = {"author": author_id}
        elif term is not None:
            taxonomy, _, slug = term.partition(":")
            entry["queried_object"] = {"term": {"taxonomy": taxonomy, "slug": slug}}
        elif post_type is not None:
            entry["queried_object"] = {"post_type": post_type}

        for column in ("queried_object_id", "current_post_id"):
            value = _int_cell(row, column)
            if value is not None:
                entry[column] = value

        query_vars = {
            column[len(_VAR_PREFIX) :]: value
            for column in row
            if column.startswith(_VAR_PREFIX) and (value := _cell(row, column)) is not None
        }
        if query_vars:
            entry["query_vars"] = query_vars
        return entry

    def read(self) -> list[Snapshot]:
        """CSVファイルを読み込む.

        Raises:
            ValueError: CSV読み込みに失敗した場合
        """
        try:
            # 全列を文字列として読む（"05" のようなゼロ埋めを保つ）
            df = pl.read_csv(self.file_path, infer_schema_length=0)
        except Exception as e:
            raise ValueError(f"Failed to read CSV: {self.file_path}") from e

        site = self._load_site()
        snapshots = [
            parse_request(self._row_to_entry(row), site, str(self.file_path), i)
            for i, row in enumerate(df.to_dicts())
        ]
        snapshots = self.repair(snapshots)
        logger.info(f"Loaded {len(snapshots)} snapshots from {self.file_path}")
        return snapshots

    def validate(self, snapshots: list[Snapshot]) -> bool:
        return bool(snapshots)

    def repair(self, snapshots: list[Snapshot]) -> list[Snapshot]:
        return dedupe_names(snapshots)
