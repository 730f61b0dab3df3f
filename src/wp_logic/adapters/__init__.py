"""リクエストスナップショットの読み込みアダプタ群."""

from .base_adapter import BaseAdapter
from .csv_adapter import CSV_Adapter
from .json_adapter import JSON_Adapter
from .snapshot import Snapshot, parse_document, parse_request, parse_site
from .yaml_adapter import YAML_Adapter

__all__ = [
    "BaseAdapter",
    "CSV_Adapter",
    "JSON_Adapter",
    "YAML_Adapter",
    "Snapshot",
    "parse_document",
    "parse_request",
    "parse_site",
]
