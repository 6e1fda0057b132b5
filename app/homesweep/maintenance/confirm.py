"""Interactive confirmation of candidate deletions.

The operator is asked once whether every candidate should go. Any
answer other than yes leads to a second question for a comma-separated
list of table indices, each of which is deleted on its own. Bad indices
are reported and skipped; the rest of the batch still runs.

All terminal I/O goes through a Prompter so the exchange can be driven
by scripted answers.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

import typer

from homesweep.core.debug import DebugCollector
from homesweep.maintenance.models import DirectoryRecord
from homesweep.maintenance.operator import DeletionResult, DirectoryOperator
from homesweep.utils.formatting import console

logger = logging.getLogger(__name__)

YES_ANSWERS: frozenset[str] = frozenset({"y", "yes"})


class Prompter(ABC):
    """Question/answer channel to the operator."""

    @abstractmethod
    def ask(self, message: str) -> str:
        """Show a question and return the raw answer."""

    @abstractmethod
    def say(self, message: str, style: str | None = None) -> None:
        """Show a line of output."""


class TerminalPrompter(Prompter):
    """Prompter reading from stdin and writing to the shared console."""

    def ask(self, message: str) -> str:
        answer: str = typer.prompt(message, default="", show_default=False)
        return answer

    def say(self, message: str, style: str | None = None) -> None:
        console.print(message, style=style, markup=False, highlight=False)


class DeletionConfirmer:
    """Asks before deleting candidates, all at once or by index.

    Args:
        operator: Performs the actual deletions.
        prompter: Terminal abstraction for questions and reports.
        debug: Optional collector receiving one record per deletion.
    """

    def __init__(
        self,
        operator: DirectoryOperator,
        prompter: Prompter,
        *,
        debug: DebugCollector | None = None,
    ) -> None:
        self._operator = operator
        self._prompter = prompter
        self._debug = debug

    def run(self, candidates: Sequence[DirectoryRecord]) -> list[DeletionResult]:
        """Run the confirmation exchange for a non-empty candidate list.

        Args:
            candidates: Candidates in table order; indices refer to this order.

        Returns:
            One DeletionResult per attempted deletion.
        """
        if not candidates:
            return []

        answer = self._prompter.ask(
            f"Delete all {len(candidates)} candidate directories? [yes/no]"
        )
        if answer.strip().lower() in YES_ANSWERS:
            results = self._operator.delete([record.path for record in candidates])
            for result in results:
                self._report(result)
            return results

        return self._delete_selected(candidates)

    def _delete_selected(self, candidates: Sequence[DirectoryRecord]) -> list[DeletionResult]:
        answer = self._prompter.ask("Indices of directories to delete (comma-separated)")
        if not answer.strip():
            self._prompter.say("Nothing selected.", style="info")
            return []

        results: list[DeletionResult] = []
        for token in answer.split(","):
            index = parse_index(token, len(candidates))
            if index is None:
                self._prompter.say(f"Invalid index: {token.strip()}", style="warning")
                continue
            result = self._operator.delete_one(candidates[index].path)
            self._report(result)
            results.append(result)
        return results

    def _report(self, result: DeletionResult) -> None:
        if result.success:
            self._prompter.say(f"Deleted {result.path}", style="success")
        else:
            self._prompter.say(f"Failed to delete {result.path}: {result.error}", style="error")

        if self._debug is not None:
            detail = "deleted" if result.success else str(result.error)
            self._debug.record("delete", result.path, detail)


def parse_index(token: str, count: int) -> int | None:
    """Parse one user-typed index.

    Args:
        token: Raw text between commas.
        count: Number of candidates.

    Returns:
        The index if it is an integer in [0, count), otherwise None.
    """
    try:
        index = int(token.strip())
    except ValueError:
        return None
    if 0 <= index < count:
        return index
    return None
