"""
Pipeline Orchestrator.

Coordinates loading, windowing, assembly, rendering and persistence of a
trend report.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from src.agents.assembly import ReportAssembler
from src.agents.flagging import ConfirmFlags
from src.agents.ingestion import ExportLoader
from src.agents.rendering import ReportRenderer
from src.models.report import Report
from src.models.review import ReviewRecord
from src.utils.storage import StorageManager

logger = logging.getLogger(__name__)


class ReportOrchestrator:
    """
    Orchestrates one report run.

    Coordinates:
    1. Load archive → 2. Select window → 3. Assemble report
    → 4. Render → 5. Save report and metadata
    """

    def __init__(
        self,
        loader: Optional[ExportLoader] = None,
        assembler: Optional[ReportAssembler] = None,
        renderer: Optional[ReportRenderer] = None,
        storage: Optional[StorageManager] = None
    ):
        self.loader = loader or ExportLoader()
        self.assembler = assembler or ReportAssembler()
        self.renderer = renderer or ReportRenderer()
        self.storage = storage or StorageManager()

    def build_report(
        self,
        archive: List[ReviewRecord],
        start: datetime,
        end: datetime,
        cancellations: Callable[[], int],
        confirm: ConfirmFlags
    ) -> Report:
        """Window the archive and assemble the report."""
        window = self.loader.select_window(archive, start, end)
        return self.assembler.assemble(
            window=window,
            archive=archive,
            start=start,
            end=end,
            cancellations=cancellations,
            confirm=confirm
        )

    def run(
        self,
        archive: List[ReviewRecord],
        start: datetime,
        end: datetime,
        cancellations: Callable[[], int],
        confirm: ConfirmFlags,
        target: Callable[[], str]
    ) -> str:
        """
        Run the complete report pipeline over a loaded archive.

        Args:
            archive: Every record in the export, oldest first
            start: Period start (inclusive)
            end: Period end (exclusive)
            cancellations: Source of the period's cancellation count
            confirm: Confirmation filter for flag candidates
            target: Source of the report destination path, asked after confirmation;
                relative paths land under the storage output root

        Returns:
            Path to the rendered report
        """
        report = self.build_report(archive, start, end, cancellations, confirm)

        text = self.renderer.render(report)
        target_path = self.storage.resolve_target(target())
        self.storage.write_report(text, target_path)
        self.storage.save_report_metadata(report, target_path)

        logger.info(f"Report complete: {target_path}")
        return target_path
