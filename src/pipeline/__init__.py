"""
Podcast transcript processing pipeline module.

This module orchestrates the processing of raw podcast transcripts:
    1. Formatting: speaker labels and titled sections (src.transcription.formatter)
    2. Summaries: 400 and 2000 character summaries (src.transcription.summarize)
    3. Translation into the output language (src.transcription.translator)
    4. Markdown rendering (src.pipeline.markdown)

Usage:
    # CLI interface
    uv run -m src.pipeline transcripts/episode_12.txt --language en
    uv run -m src.pipeline transcripts/*.txt --language ja --output-dir episodes/

    # Programmatic interface
    from src.pipeline import EpisodeJob, process_episodes
    results = await process_episodes(jobs, client, PipelineConfig())
"""

__version__ = "0.1.0"

from .config import PipelineConfig
from .orchestrator import (
    EpisodeJob,
    EpisodeResult,
    process_episode,
    process_episodes,
)
from .stages import (
    run_format_stage,
    run_summary_stage,
    run_translation_stage,
)
from .markdown import (
    render_episode_markdown,
    sanitize_filename,
    write_episode_markdown,
)

__all__ = [
    "PipelineConfig",
    # Main pipeline orchestration
    "EpisodeJob",
    "EpisodeResult",
    "process_episode",
    "process_episodes",
    # Stage functions
    "run_format_stage",
    "run_summary_stage",
    "run_translation_stage",
    # Output
    "render_episode_markdown",
    "sanitize_filename",
    "write_episode_markdown",
]
