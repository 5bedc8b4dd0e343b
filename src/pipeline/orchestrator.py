import asyncio
import logging

from dataclasses import dataclass
from typing import Any, Optional

from src.llm import GenerationClient
from src.logger import log_function
from src.transcription import FormattedTranscript, TranslatedContent
from .config import PipelineConfig
from .stages import (
    run_format_stage,
    run_summary_stage,
    run_translation_stage,
)


@dataclass(frozen=True)
class EpisodeJob:
    """A raw transcript waiting to be processed."""

    episode_id: str
    title: str
    raw_transcript: str
    source_language: str


@dataclass(frozen=True)
class EpisodeResult:
    """Everything produced for one episode."""

    job: EpisodeJob
    formatted: FormattedTranscript
    summary_400: str
    summary_2000: str
    translated: Optional[TranslatedContent] = None


@log_function(logger_name="pipeline", log_execution_time=True)
async def process_episode(
    job: EpisodeJob,
    client: GenerationClient,
    config: PipelineConfig,
) -> EpisodeResult:
    """
    Run format, summary and translation stages for a single episode.

    Args:
        job: Episode to process
        client: Generation client shared by all stages
        config: Pipeline configuration

    Returns:
        EpisodeResult for the episode
    """
    logger = logging.getLogger("pipeline")
    logger.info(
        f"Processing episode {job.episode_id}: {job.title} "
        f"(source language: {job.source_language})"
    )

    formatted = await run_format_stage(
        job.raw_transcript, job.source_language, client, config
    )
    summary_400, summary_2000 = await run_summary_stage(
        formatted, job.source_language, client
    )
    translated = await run_translation_stage(
        formatted, summary_400, summary_2000, job.source_language, client, config
    )

    return EpisodeResult(
        job=job,
        formatted=formatted,
        summary_400=summary_400,
        summary_2000=summary_2000,
        translated=translated,
    )


@log_function(logger_name="pipeline", log_execution_time=True)
async def process_episodes(
    jobs: list[EpisodeJob],
    client: GenerationClient,
    config: PipelineConfig,
) -> dict[str, list[Any]]:
    """
    Process several episodes with a bounded number running at once.

    A failing episode is logged and reported; it never stops the others.

    Args:
        jobs: Episodes to process
        client: Generation client shared by all episodes
        config: Pipeline configuration (episode_concurrency is the ceiling)

    Returns:
        Dict with 'success' (EpisodeResult list) and 'failed'
        ((EpisodeJob, error message) list), both in job order
    """
    logger = logging.getLogger("pipeline")
    semaphore = asyncio.Semaphore(config.episode_concurrency)

    logger.info("=== PIPELINE STARTED ===")
    logger.info(
        f"Processing {len(jobs)} episode(s) with concurrency limit of "
        f"{config.episode_concurrency}"
    )

    async def _run(job: EpisodeJob) -> EpisodeResult:
        async with semaphore:
            return await process_episode(job, client, config)

    outcomes = await asyncio.gather(*(_run(job) for job in jobs), return_exceptions=True)

    results: dict[str, list[Any]] = {"success": [], "failed": []}
    for job, outcome in zip(jobs, outcomes):
        if isinstance(outcome, Exception):
            logger.error(f"Error processing episode {job.episode_id} ({job.title}): {outcome}")
            results["failed"].append((job, str(outcome)))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            results["success"].append(outcome)

    logger.info(
        f"=== PIPELINE COMPLETED: {len(results['success'])} succeeded, "
        f"{len(results['failed'])} failed ==="
    )
    return results
