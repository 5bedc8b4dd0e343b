"""
Pipeline stage wrapper functions.

Each function wraps transcription module logic and provides:
- Configuration plumbing
- Standardized error handling
- Logging
"""

import logging
from typing import Optional

from src.llm import GenerationClient
from src.logger import log_function
from src.transcription import (
    FormattedTranscript,
    TranslatedContent,
    format_transcript,
    needs_translation,
    summarize_layers,
    translate_content,
)

from .config import PipelineConfig


@log_function(logger_name="pipeline", log_execution_time=True)
async def run_format_stage(
    raw_transcript: str,
    source_language: str,
    client: GenerationClient,
    config: PipelineConfig,
) -> FormattedTranscript:
    """
    Format a raw transcript into titled, speaker-labeled sections.

    Args:
        raw_transcript: Raw transcript text
        source_language: Transcript language code
        client: Generation client
        config: Pipeline configuration (threshold, parallel dispatch)

    Returns:
        FormattedTranscript
    """
    logger = logging.getLogger("pipeline")
    try:
        logger.info(f"Formatting transcript ({len(raw_transcript)} chars)...")
        formatted = await format_transcript(
            raw_transcript,
            source_language,
            client,
            threshold_chars=config.format_threshold_chars,
            parallel=config.parallel_chunks,
        )
        logger.info(f"Formatting complete: {len(formatted.sections)} sections")
        return formatted
    except Exception as e:
        logger.error(f"Format stage failed: {e}")
        raise


@log_function(logger_name="pipeline", log_execution_time=True)
async def run_summary_stage(
    formatted: FormattedTranscript,
    source_language: str,
    client: GenerationClient,
) -> tuple[str, str]:
    """
    Generate the 400 and 2000 character summaries in the source language.

    Returns:
        Tuple of (summary_400, summary_2000)
    """
    logger = logging.getLogger("pipeline")
    try:
        logger.info("Generating summaries...")
        summaries = await summarize_layers(formatted.full_text, source_language, client)
        logger.info("Summaries complete")
        return summaries
    except Exception as e:
        logger.error(f"Summary stage failed: {e}")
        raise


@log_function(logger_name="pipeline", log_execution_time=True)
async def run_translation_stage(
    formatted: FormattedTranscript,
    summary_400: str,
    summary_2000: str,
    source_language: str,
    client: GenerationClient,
    config: PipelineConfig,
) -> Optional[TranslatedContent]:
    """
    Translate summaries and full text into the output language.

    Returns:
        TranslatedContent, or None when the source language is the output language
    """
    logger = logging.getLogger("pipeline")
    if not needs_translation(source_language, config.output_language):
        logger.info("No translation needed")
        return None

    try:
        logger.info(f"Translating to {config.output_language}...")
        translated = await translate_content(
            summary_400,
            summary_2000,
            formatted.full_text,
            source_language,
            client,
            target_language=config.output_language,
            threshold_chars=config.translate_threshold_chars,
        )
        logger.info("Translation complete")
        return translated
    except Exception as e:
        logger.error(f"Translation stage failed: {e}")
        raise
