"""
Storage utility.

File I/O helpers for the rendered report and its metadata sidecar.
"""

import json
import os
import logging
from datetime import datetime, timezone
from typing import Dict

import config.settings as settings
from src.models.report import Report

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages file output for a report run.

    Handles:
    - Rendered report (<target>)
    - Report metadata (<target stem>_metadata.json)

    Relative target paths are resolved against output_root.
    """

    def __init__(self, output_root: str = str(settings.OUTPUT_ROOT)):
        """
        Initialize storage manager.

        Args:
            output_root: Directory for reports given by relative path
        """
        self.output_root = output_root

    def resolve_target(self, target_path: str) -> str:
        """Absolute paths are kept; relative ones are placed under output_root."""
        if os.path.isabs(target_path):
            return target_path
        return os.path.join(self.output_root, target_path)

    def write_report(self, text: str, target_path: str) -> str:
        """
        Write the rendered report.

        Args:
            text: Rendered report text
            target_path: Destination file path

        Returns:
            Path the report was written to
        """
        self._ensure_parent(target_path)

        try:
            with open(target_path, 'w', encoding='utf-8') as f:
                f.write(text)
            logger.info(f"Saved report to {target_path}")
        except OSError as e:
            logger.error(f"Failed to save report to {target_path}: {e}")
            raise

        return target_path

    def save_report_metadata(self, report: Report, target_path: str) -> str:
        """
        Save the report data as JSON next to the rendered report.

        Args:
            report: Assembled report
            target_path: Path of the rendered report

        Returns:
            Path of the metadata file
        """
        metadata_path = self.metadata_path(target_path)
        self._ensure_parent(metadata_path)

        metadata: Dict = report.to_dict()
        metadata["generated_at"] = datetime.now(timezone.utc).isoformat()

        try:
            with open(metadata_path, 'w', encoding='utf-8') as f:
                json.dump(metadata, f, indent=2)
            logger.info(f"Metadata saved to {metadata_path}")
        except OSError as e:
            logger.error(f"Failed to save report metadata to {metadata_path}: {e}")
            raise

        return metadata_path

    @staticmethod
    def metadata_path(target_path: str) -> str:
        stem, _ = os.path.splitext(target_path)
        return f"{stem}_metadata.json"

    @staticmethod
    def _ensure_parent(path: str) -> None:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
