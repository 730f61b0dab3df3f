"""YAML_Adapter for reading request snapshot files."""

from pathlib import Path

import yaml
from loguru import logger

from .base_adapter import BaseAdapter
from .snapshot import Snapshot, dedupe_names, parse_document


class YAML_Adapter(BaseAdapter):
    """Adapter for YAML snapshot files.

    Args:
        file_path: Path to YAML file
    """

    def __init__(self, file_path: Path | str) -> None:
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"YAML file not found: {self.file_path}")

    def read(self) -> list[Snapshot]:
        """Read a YAML file into snapshots.

        Raises:
            ValueError: Failed to read YAML
        """
        try:
            with open(self.file_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to read YAML: {self.file_path}") from e

        snapshots = self.repair(parse_document(data if data is not None else [], str(self.file_path)))
        logger.info(f"Loaded {len(snapshots)} snapshots from {self.file_path}")
        return snapshots

    def validate(self, snapshots: list[Snapshot]) -> bool:
        return bool(snapshots)

    def repair(self, snapshots: list[Snapshot]) -> list[Snapshot]:
        return dedupe_names(snapshots)
