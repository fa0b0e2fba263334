"""
Console utility.

Interactive prompts for the report inputs and human confirmation of flags.
Every prompt repeats until it gets a valid answer.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence

import config.settings as settings
from src.agents.ingestion import ExportLoader
from src.models.review import ReviewRecord

logger = logging.getLogger(__name__)


START_DATE_PROMPT = "Start date: "
END_DATE_PROMPT = "End date: "
CSV_PATH_PROMPT = "Reviews CSV path: "
CANCELLATIONS_PROMPT = "Number of cancellations in the period: "
ACCEPT_FLAGS_MESSAGE = "Y/n to accept or reject these flags:"
REPORT_PATH_PROMPT = "Target report path: "

YES_ANSWERS = ("y", "yes")
NO_ANSWERS = ("n", "no")


def parse_date(value: str, date_format: str = settings.INPUT_DATE_FORMAT) -> Optional[datetime]:
    """Parse a user-entered date, returning None if it does not match the format."""
    try:
        return datetime.strptime(value.strip(), date_format)
    except ValueError:
        return None


def auto_approve(candidates: List[str]) -> List[str]:
    """Confirmation strategy that accepts every candidate."""
    return list(candidates)


class ConsolePrompter:
    """
    Asks the operator for report inputs on the console.

    Args:
        input_fn: Reads one line after showing a prompt (default: input)
        output_fn: Prints one line (default: print)
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print
    ):
        self.input_fn = input_fn
        self.output_fn = output_fn

    def ask_date(self, message: str) -> datetime:
        while True:
            answer = self.input_fn(message)
            date = parse_date(answer)
            if date is not None:
                return date
            logger.debug(f"Rejected date input {answer!r}")

    def ask_start_date(self) -> datetime:
        return self.ask_date(START_DATE_PROMPT)

    def ask_end_date(self, start: Optional[datetime] = None) -> datetime:
        """Ask for the period end, repeating until it falls after start."""
        while True:
            end = self.ask_date(END_DATE_PROMPT)
            if start is None or end > start:
                return end
            logger.warning(f"End date {end:%d/%m/%Y} must be after start date {start:%d/%m/%Y}")

    def ask_archive(self, loader: ExportLoader) -> List[ReviewRecord]:
        """
        Ask for the export path until one can be found, then load it.

        Malformed exports are not re-asked; their ValueError propagates.
        """
        while True:
            path = self.input_fn(CSV_PATH_PROMPT)
            try:
                return loader.load_archive(path)
            except FileNotFoundError:
                logger.warning(f"Export not found: {path}")

    def ask_cancellations(self) -> int:
        while True:
            answer = self.input_fn(CANCELLATIONS_PROMPT)
            try:
                count = int(answer.strip())
            except ValueError:
                logger.debug(f"Rejected cancellation count {answer!r}")
                continue
            if count >= 0:
                return count
            logger.debug(f"Rejected negative cancellation count {count}")

    def ask_target(self) -> str:
        return self.input_fn(REPORT_PATH_PROMPT)

    def confirm_flags(self, candidates: Sequence[str]) -> List[str]:
        """
        Ask the operator to accept or reject each flag candidate.

        Returns:
            Accepted candidates, in their original order
        """
        self.output_fn(ACCEPT_FLAGS_MESSAGE)
        return [name for name in candidates if self._accepts(name)]

    def _accepts(self, name: str) -> bool:
        while True:
            answer = self.input_fn(f"{name}: ").strip().lower()
            if answer in YES_ANSWERS:
                return True
            if answer in NO_ANSWERS:
                return False
