#!/usr/bin/env python3
"""
CLI interface for the podcast transcript pipeline.

Formats raw transcripts into speaker-labeled sections, generates 400 and 2000
character summaries, translates everything into the output language when the
transcript is in another language, and writes one Markdown file per episode.

Usage:
    uv run -m src.pipeline <transcript.txt> [transcript2.txt ...] --language en
    uv run -m src.pipeline transcripts/*.txt --language ja --output-dir episodes/
    uv run -m src.pipeline transcripts/*.txt --dry-run

Examples:
    # English episode published in Japanese (default output language)
    uv run -m src.pipeline data/transcripts/episode_12.txt --language en

    # Keep English output, format chunks one by one
    uv run -m src.pipeline episode_12.txt --language en --output-language en --sequential

    # Show chunking plan without calling the API
    uv run -m src.pipeline data/transcripts/*.txt --dry-run --verbose
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

import httpx
from rich.console import Console
from rich.table import Table

from src.chunker import split_text
from src.llm import GenerationClient, GenerationConfig
from src.logger import setup_logging
from src.transcription import needs_translation
from .config import PipelineConfig
from .markdown import write_episode_markdown
from .orchestrator import EpisodeJob, process_episodes


console = Console()


def load_jobs(files: List[Path], language: str) -> List[EpisodeJob]:
    """
    Read raw transcript files into episode jobs.

    The file stem is used as both episode ID and title.

    Args:
        files: Transcript text files
        language: Source language code shared by all files

    Returns:
        List of EpisodeJob objects, in file order
    """
    jobs = []
    for file_path in files:
        if not file_path.exists():
            raise FileNotFoundError(f"Transcript file not found: {file_path}")
        jobs.append(
            EpisodeJob(
                episode_id=file_path.stem,
                title=file_path.stem.replace("_", " "),
                raw_transcript=file_path.read_text(encoding="utf-8"),
                source_language=language,
            )
        )
    return jobs


def print_dry_run_summary(jobs: List[EpisodeJob], config: PipelineConfig) -> None:
    """Show the chunking plan for each job without calling the generation API."""
    print("=" * 80)
    print("DRY RUN - No API calls will be made")
    print("=" * 80)
    print(f"\nOutput language: {config.output_language}")
    print(f"Format threshold: {config.format_threshold_chars} chars")
    print(f"Parallel chunks: {config.parallel_chunks}")
    print(f"\nEpisodes to process: {len(jobs)}")
    print("-" * 80)

    for idx, job in enumerate(jobs, 1):
        chunks = split_text(job.raw_transcript, config.format_threshold_chars)
        print(f"\n[{idx}/{len(jobs)}] {job.title}")
        print(f"  Characters: {len(job.raw_transcript)}")
        print(f"  Format chunks: {len(chunks)}")
        if needs_translation(job.source_language, config.output_language):
            print(f"  Translation: {job.source_language} -> {config.output_language}")
        else:
            print("  Translation: none")

    print("\n" + "=" * 80)
    print("End of dry run")
    print("=" * 80)


def parse_arguments() -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Podcast Transcript Pipeline - Formats, summarizes and translates raw transcripts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  ANTHROPIC_API_KEY        API key for the generation service (required)
  ANTHROPIC_MODEL          Override the generation model
  OUTPUT_LANGUAGE          Default output language (default: ja)
  EPISODE_CONCURRENCY      Default episode concurrency (default: 5)
        """,
    )

    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="Raw transcript text file(s) to process",
    )

    options_group = parser.add_argument_group("options")
    options_group.add_argument(
        "-l",
        "--language",
        type=str,
        default="ja",
        help="Source language of the transcripts (default: ja)",
    )
    options_group.add_argument(
        "--output-language",
        type=str,
        metavar="LANG",
        help="Language of the published documents (default: OUTPUT_LANGUAGE or ja)",
    )
    options_group.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=Path("episodes"),
        help="Directory for the Markdown files (default: episodes/)",
    )
    options_group.add_argument(
        "--sequential",
        action="store_true",
        help="Format transcript chunks one after another instead of in parallel",
    )
    options_group.add_argument(
        "--concurrency",
        type=int,
        metavar="N",
        help="Maximum number of episodes processed at once",
    )
    options_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be processed without executing",
    )
    options_group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging output",
    )

    return parser.parse_args()


async def run(
    jobs: List[EpisodeJob],
    config: PipelineConfig,
    output_dir: Path,
    http_client: Optional[httpx.AsyncClient] = None,
) -> int:
    """Process jobs, write Markdown files and print a report. Returns the exit code."""
    generation_config = GenerationConfig.from_env()
    errors = generation_config.validate()
    if errors:
        for error in errors:
            print(f"✗ Error: {error}", file=sys.stderr)
        return 1

    async with GenerationClient(generation_config, http_client=http_client) as client:
        results = await process_episodes(jobs, client, config)

    table = Table(title="Processed Episodes")
    table.add_column("Episode")
    table.add_column("Status")
    table.add_column("Details")

    for result in results["success"]:
        path = write_episode_markdown(result, output_dir, config.output_language)
        table.add_row(result.job.title, "[green]✓[/green]", str(path))
    for job, error in results["failed"]:
        table.add_row(job.title, "[red]✗[/red]", error)

    console.print(table)
    return 1 if results["failed"] else 0


def main():
    """Main entry point for the pipeline CLI."""
    args = parse_arguments()

    # Setup logging
    logger = setup_logging(
        logger_name="pipeline",
        log_file="logs/pipeline.log",
        verbose=args.verbose,
    )
    for name in ("llm", "chunker", "transcript_formatter", "translator", "summarizer"):
        setup_logging(logger_name=name, log_file="logs/pipeline.log", verbose=args.verbose)

    config = PipelineConfig.from_env()
    if args.output_language:
        config.output_language = args.output_language
    if args.concurrency is not None:
        config.episode_concurrency = args.concurrency
    config.parallel_chunks = not args.sequential

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"✗ Error: {error}", file=sys.stderr)
        sys.exit(1)

    try:
        jobs = load_jobs(args.files, args.language)
    except (OSError, UnicodeDecodeError) as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.dry_run:
        logger.info("Running in dry-run mode (no API calls will be made)")
        print_dry_run_summary(jobs, config)
        sys.exit(0)

    logger.info("=" * 80)
    logger.info("Pipeline execution started")
    logger.info(f"Episodes: {len(jobs)}, source language: {args.language}")
    logger.info(f"Output language: {config.output_language}")
    logger.info("=" * 80)

    try:
        exit_code = asyncio.run(run(jobs, config, args.output_dir))
    except KeyboardInterrupt:
        print("\n✗ Interrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        logger.error(f"Pipeline execution failed: {e}")
        print(f"\n✗ PIPELINE FAILED: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
