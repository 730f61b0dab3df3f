"""JSON_Adapter for reading request snapshot files.

This adapter handles JSON documents in the snapshot format described in
``wp_logic.adapters.snapshot``.
"""

import json
from pathlib import Path

from loguru import logger

from .base_adapter import BaseAdapter
from .snapshot import Snapshot, dedupe_names, parse_document


class JSON_Adapter(BaseAdapter):
    """Adapter for JSON snapshot files.

    Args:
        file_path: Path to JSON file
    """

    def __init__(self, file_path: Path | str) -> None:
        """Initialize adapter.

        Args:
            file_path: Path to JSON file

        Raises:
            FileNotFoundError: JSON file does not exist
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"JSON file not found: {self.file_path}")

    def read(self) -> list[Snapshot]:
        """Read a JSON file into snapshots.

        Returns:
            Parsed snapshots, with duplicate names made unique

        Raises:
            ValueError: Failed to read JSON
        """
        try:
            with open(self.file_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to read JSON: {self.file_path}") from e

        snapshots = self.repair(parse_document(data, str(self.file_path)))
        logger.info(f"Loaded {len(snapshots)} snapshots from {self.file_path}")
        return snapshots

    def validate(self, snapshots: list[Snapshot]) -> bool:
        """Validate snapshots."""
        return bool(snapshots)

    def repair(self, snapshots: list[Snapshot]) -> list[Snapshot]:
        """Make duplicate snapshot names unique."""
        return dedupe_names(snapshots)
