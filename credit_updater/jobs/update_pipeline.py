"""
Update Pipeline

Streams a story query over one connection and hands each row to an
extractor, in result order, one row at a time:

1. Open a connection and stream the query (server-side cursor, fetched
   PIPELINE_FETCH_SIZE rows at a time)
2. For each row: extract, time the call, advance ProgressState, report
3. A row that fails is logged and counted; the run continues
4. Losing the connection, while streaming or inside an extractor, ends the
   run with PipelineConnectionError

starting_complete and total_expected only feed the progress display. To
resume, the caller builds a query that skips rows already done
(see update_tasks).
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import Executable

from credit_updater.core.config import settings
from credit_updater.core.database import CONNECTION_ERRORS, engine as default_engine
from credit_updater.core.exceptions import ExtractionError, PipelineConnectionError
from credit_updater.extractors.base import ExtractionResult, Extractor
from credit_updater.jobs.progress import ProgressState, ProgressTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineSummary:
    processed: int
    failed: int
    extracted: int
    state: ProgressState


class UpdatePipeline:
    """Drives one extractor over one streamed query."""

    def __init__(
        self,
        engine: Optional[AsyncEngine] = None,
        tracker: Optional[ProgressTracker] = None,
        fetch_size: Optional[int] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.engine = engine or default_engine
        self.tracker = tracker or ProgressTracker()
        self.fetch_size = fetch_size or settings.PIPELINE_FETCH_SIZE
        self.clock = clock

    async def run(
        self,
        query: Union[str, Executable],
        starting_complete: int,
        total_expected: Optional[int],
        extractor: Extractor,
    ) -> PipelineSummary:
        """
        Extract every row of query.

        Args:
            query: SQL text or a selectable; must return an `id` column
            starting_complete: Rows already done before this run
            total_expected: Total rows for the whole job, if known
            extractor: Extractor applied to each row

        Returns:
            PipelineSummary for the run

        Raises:
            PipelineConnectionError: connect or fetch failed
        """
        if isinstance(query, str):
            query = text(query)

        label = extractor.extracted_item
        state = ProgressState.start(starting_complete, total_expected)
        processed = failed = extracted = 0
        last_item_id = None

        logger.info(
            f"[pipeline] Extracting {label} starting at {starting_complete:,}"
            f"{f' of {total_expected:,}' if total_expected is not None else ''}"
        )

        try:
            async with self.engine.connect() as conn:
                result = await conn.stream(query, execution_options={"yield_per": self.fetch_size})
                async for row in result:
                    record = row._mapping
                    item_id = record["id"]

                    started = self.clock()
                    try:
                        outcome = await extractor.extract_and_persist(record)
                    except CONNECTION_ERRORS:
                        raise
                    except Exception as e:
                        error = ExtractionError(f"{label} extraction failed: {type(e).__name__}: {e}", item_id=item_id)
                        logger.error(f"[pipeline] {label} {extractor.from_value} {item_id}: {error.to_dict()}")
                        outcome = ExtractionResult.failed(error)
                    elapsed_ms = int((self.clock() - started) * 1000)

                    processed += 1
                    if outcome.ok:
                        extracted += outcome.extracted
                    else:
                        failed += 1
                    last_item_id = item_id

                    state = state.advance(elapsed_ms)
                    if not outcome.ok:
                        # Error output sits below the last report; start a fresh block under it
                        state = state.detach()
                    state = self.tracker.report(state, label, extractor.from_value, item_id)
        except CONNECTION_ERRORS as e:
            logger.error(
                f"[pipeline] Connection lost extracting {label} after {processed:,} rows "
                f"(last {extractor.from_value}: {last_item_id}): {e}"
            )
            logger.error(f"[pipeline] Query: {query}")
            raise PipelineConnectionError(
                f"Connection lost while extracting {label}: {e}",
                query=str(query),
                rows_completed=state.current_complete,
                last_item_id=last_item_id,
            ) from e

        logger.info(
            f"[pipeline] {label} complete: {processed:,} rows, "
            f"{extracted:,} extracted, {failed:,} failed"
        )
        return PipelineSummary(processed=processed, failed=failed, extracted=extracted, state=state)
