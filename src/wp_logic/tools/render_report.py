"""記録済みリクエストのスナップショットを一括で描画し、レポートを出力する。

テーマ改修の前後で body の class 文字列やエントリ属性がどう変わるかを
比較するためのツールです。スナップショット1件ごとに新しいリクエストスコープを作ります。
"""

from __future__ import annotations

import argparse
from collections.abc import Iterable
from pathlib import Path

import polars as pl
from loguru import logger

from wp_logic.adapters import CSV_Adapter, JSON_Adapter, Snapshot, YAML_Adapter
from wp_logic.config import LogicSettings, load_settings
from wp_logic.core.classification import classify_request
from wp_logic.core.hooks import LOADED_ACTION, HookRegistry
from wp_logic.core.registry import sidebars
from wp_logic.core.renderer import context_to_class_string, item_attributes
from wp_logic.core.request_scope import request_scope

REPORT_SCHEMA = {
    "snapshot": pl.String,
    "kind": pl.String,
    "unit": pl.String,
    "context_classes": pl.String,
    "entry_attributes": pl.String,
    "active_sidebars": pl.String,
}


def load_snapshots(path: Path | str, site_path: Path | str | None = None) -> list[Snapshot]:
    """拡張子に応じたアダプタでスナップショットを読み込む.

    Raises:
        ValueError: 対応していない拡張子の場合
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return JSON_Adapter(path).read()
    if suffix in {".yml", ".yaml"}:
        return YAML_Adapter(path).read()
    if suffix == ".csv":
        return CSV_Adapter(path, site_path=site_path).read()
    raise ValueError(f"Unsupported snapshot file type: {path}")


def _unit_label(unit: str | bool | None) -> str:
    if unit is True:
        return "true"
    return unit or ""


def build_report(
    snapshots: Iterable[Snapshot],
    hooks: HookRegistry | None = None,
    settings: LogicSettings | None = None,
) -> pl.DataFrame:
    """スナップショットごとの描画結果を DataFrame にまとめる."""
    rows: list[dict[str, str]] = []
    for snapshot in snapshots:
        with request_scope(snapshot.state, hooks, settings) as scope:
            scope.do_action(LOADED_ACTION)
            rows.append(
                {
                    "snapshot": snapshot.name,
                    "kind": classify_request(snapshot.state).value,
                    "unit": _unit_label(scope.timeframe()),
                    "context_classes": context_to_class_string(scope) or "",
                    "entry_attributes": str(item_attributes(scope)),
                    "active_sidebars": " ".join(sidebars(snapshot.state.site, True)),
                }
            )
    return pl.DataFrame(rows, schema=REPORT_SCHEMA)


def write_report(df: pl.DataFrame, out_path: Path | str) -> Path:
    """レポートを書き出す（.parquet / .csv / それ以外は TSV）."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    suffix = out_path.suffix.lower()
    if suffix == ".parquet":
        df.write_parquet(out_path)
    elif suffix == ".csv":
        df.write_csv(out_path)
    else:
        df.write_csv(out_path, separator="\t")

    logger.info(f"Report written to {out_path} ({df.height} rows)")
    return out_path


def main() -> None:
    parser = argparse.ArgumentParser(description="Render request snapshots into class/attribute reports.")
    parser.add_argument("--snapshots", type=Path, required=True, help="Snapshot file (.json, .yml, .yaml, .csv)")
    parser.add_argument("--out", type=Path, required=True, help="Output report path (.tsv, .csv, .parquet)")
    parser.add_argument("--settings", type=Path, default=None, help="Optional settings YAML")
    parser.add_argument(
        "--site",
        type=Path,
        default=None,
        help="Site document (JSON/YAML) used with CSV snapshots",
    )
    args = parser.parse_args()

    settings = load_settings(args.settings) if args.settings else None
    snapshots = load_snapshots(args.snapshots, site_path=args.site)
    df = build_report(snapshots, settings=settings)
    write_report(df, args.out)


if __name__ == "__main__":
    main()
