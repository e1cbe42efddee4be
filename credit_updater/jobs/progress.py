"""
Progress Tracking

Rate and ETA arithmetic for a pipeline run, and the four-line progress
display that is rewritten in place after every row:

    Extract Character StoryId: 1234
    Complete: 50/100 50.00%
    Avg: 20ms
    Elapsed: 0s ETR: 0s

State lives in an immutable ProgressState that the caller passes into each
report() call and replaces with the returned value.
"""
import sys
from dataclasses import dataclass, replace
from typing import Any, List, Optional, TextIO

from credit_updater.utils.terminal import CLEAR_LINE, millis_to_pretty, up_n_lines

LINES_PER_REPORT = 4
UNKNOWN = "???"


@dataclass(frozen=True)
class ProgressState:
    starting_complete: int = 0
    current_complete: int = 0
    total_expected: Optional[int] = None
    cumulative_elapsed_ms: int = 0
    lines_rendered: int = 0

    @classmethod
    def start(cls, starting_complete: int = 0, total_expected: Optional[int] = None) -> "ProgressState":
        return cls(
            starting_complete=starting_complete,
            current_complete=starting_complete,
            total_expected=total_expected,
        )

    @property
    def items_done_this_run(self) -> int:
        return self.current_complete - self.starting_complete

    def advance(self, elapsed_ms: int) -> "ProgressState":
        """One more row finished, taking elapsed_ms."""
        return replace(
            self,
            current_complete=self.current_complete + 1,
            cumulative_elapsed_ms=self.cumulative_elapsed_ms + elapsed_ms,
        )

    def detach(self) -> "ProgressState":
        """Next report starts on a new block instead of overwriting the last one."""
        return replace(self, lines_rendered=0)


@dataclass(frozen=True)
class ProgressReport:
    item_label: str
    from_value: str
    item_id: Any
    current_complete: int
    total_expected: Optional[int]
    percent: Optional[float]  # fraction, 0.5 == 50%
    average_ms: int
    elapsed_ms: int
    remaining_ms: Optional[int]

    @property
    def percent_text(self) -> str:
        if self.percent is None:
            return UNKNOWN
        return f"{self.percent * 100:.2f}%"

    def lines(self) -> List[str]:
        total = f"/{self.total_expected}" if self.total_expected is not None else ""
        return [
            f"Extract {self.item_label} {self.from_value}: {self.item_id}",
            f"Complete: {self.current_complete}{total} {self.percent_text}",
            f"Avg: {self.average_ms}ms",
            f"Elapsed: {millis_to_pretty(self.elapsed_ms)} ETR: {millis_to_pretty(self.remaining_ms)}",
        ]


def build_report(
    state: ProgressState,
    item_label: str,
    from_value: str,
    item_id: Any,
) -> Optional[ProgressReport]:
    """
    Derive the report for the current state.

    Returns None when no rows have finished in this run yet, since there
    is no rate to divide by.
    """
    items_done = state.items_done_this_run
    if items_done <= 0:
        return None

    average_ms = state.cumulative_elapsed_ms // items_done

    percent = None
    remaining_ms = None
    if state.total_expected:
        percent = state.current_complete / state.total_expected
        remaining_ms = average_ms * (state.total_expected - items_done)

    return ProgressReport(
        item_label=item_label,
        from_value=from_value,
        item_id=item_id,
        current_complete=state.current_complete,
        total_expected=state.total_expected,
        percent=percent,
        average_ms=average_ms,
        elapsed_ms=state.cumulative_elapsed_ms,
        remaining_ms=remaining_ms,
    )


class ProgressTracker:
    """Writes progress reports to a stream, overwriting the previous one."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved late so pytest's capsys replacement is picked up
        return self._stream if self._stream is not None else sys.stdout

    def report(
        self,
        state: ProgressState,
        item_label: str,
        from_value: str,
        item_id: Any,
    ) -> ProgressState:
        """
        Render the report for state and return it with lines_rendered set.

        Nothing is written while the report is suppressed.
        """
        progress = build_report(state, item_label, from_value, item_id)
        if progress is None:
            return state

        lines = progress.lines()
        out = [up_n_lines(state.lines_rendered)]
        out.extend(f"{CLEAR_LINE}{line}\n" for line in lines)
        self.stream.write("".join(out))
        self.stream.flush()

        return replace(state, lines_rendered=LINES_PER_REPORT)
