from credit_updater.jobs.progress import ProgressReport, ProgressState, ProgressTracker, build_report
from credit_updater.jobs.update_pipeline import PipelineSummary, UpdatePipeline
from credit_updater.jobs.update_tasks import (
    build_character_query,
    build_credit_query,
    count_items,
    extract_characters,
    extract_credits,
)

__all__ = [
    "ProgressReport",
    "ProgressState",
    "ProgressTracker",
    "build_report",
    "PipelineSummary",
    "UpdatePipeline",
    "build_character_query",
    "build_credit_query",
    "count_items",
    "extract_characters",
    "extract_credits",
]
