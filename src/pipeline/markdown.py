import json
import logging
import re

from pathlib import Path

from src.transcription import needs_translation
from .orchestrator import EpisodeResult


def sanitize_filename(name: str) -> str:
    """
    Turn an episode title into a safe, lowercase file name stem.

    Args:
        name: Raw title

    Returns:
        Name with path-hostile characters and whitespace replaced by '-', at most 100 chars
    """
    name = re.sub(r'[/\\?%*:|"<>#]', "-", name)
    name = re.sub(r"\s+", "-", name)
    return name.lower()[:100]


def _quoted(value: str) -> str:
    # JSON strings are valid YAML double-quoted scalars
    return json.dumps(value, ensure_ascii=False)


def _block(heading: str, body: str) -> str:
    return f"## {heading}\n\n{body}"


def render_episode_markdown(result: EpisodeResult, output_language: str) -> str:
    """
    Render an episode as a Markdown document.

    Translated content comes first when a translation exists, followed by the
    untranslated summaries and transcript.
    """
    job = result.job
    front_matter = (
        "---\n"
        f"episode_id: {_quoted(job.episode_id)}\n"
        f"title: {_quoted(job.title)}\n"
        f"language: {job.source_language}\n"
        "---"
    )

    blocks = [front_matter, f"# {job.title}"]
    translated = result.translated
    if translated is not None and needs_translation(job.source_language, output_language):
        blocks += [
            _block("Summary (400 chars)", translated.summary_400),
            _block("Summary (2000 chars)", translated.summary_2000),
            _block("Full transcript", translated.full_text),
            _block("Original summary (400 chars)", result.summary_400),
            _block("Original summary (2000 chars)", result.summary_2000),
            _block("Original transcript", result.formatted.full_text),
        ]
    else:
        blocks += [
            _block("Summary (400 chars)", result.summary_400),
            _block("Summary (2000 chars)", result.summary_2000),
            _block("Full transcript", result.formatted.full_text),
        ]

    return "\n\n---\n\n".join(blocks) + "\n"


def write_episode_markdown(
    result: EpisodeResult, output_dir: Path, output_language: str
) -> Path:
    """
    Write the rendered episode to `<output_dir>/<episode_id>-<title>.md`.

    Returns:
        Path to the written file
    """
    logger = logging.getLogger("pipeline")

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create output directory {output_dir}: {e}")
        raise

    job = result.job
    output_path = output_dir / f"{job.episode_id}-{sanitize_filename(job.title)}.md"
    try:
        output_path.write_text(
            render_episode_markdown(result, output_language), encoding="utf-8"
        )
        logger.info(f"Saved episode markdown to {output_path}")
    except OSError as e:
        logger.error(f"Failed to write episode markdown to {output_path}: {e}")
        raise

    return output_path
