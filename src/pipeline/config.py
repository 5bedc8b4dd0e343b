"""
Configuration settings for the episode processing pipeline.

This module defines the PipelineConfig dataclass with the chunking thresholds,
output language and concurrency ceiling used by the pipeline stages.
"""

import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv


@dataclass
class PipelineConfig:
    """Configuration for formatting, summarizing and translating episodes"""

    # Chunking thresholds (characters)
    format_threshold_chars: int = 12000
    translate_threshold_chars: int = 10000

    # Language every document is published in
    output_language: str = "ja"

    # Dispatch the chunks of one transcript concurrently
    parallel_chunks: bool = True

    # Episodes processed at the same time (upstream rate limits)
    episode_concurrency: int = 5

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Build a config from environment variables (and a .env file if present)."""
        load_dotenv()
        config = cls()
        if os.getenv("OUTPUT_LANGUAGE"):
            config.output_language = os.environ["OUTPUT_LANGUAGE"]
        if os.getenv("EPISODE_CONCURRENCY"):
            config.episode_concurrency = int(os.environ["EPISODE_CONCURRENCY"])
        return config

    def validate(self) -> List[str]:
        """
        Validate configuration and return any error messages.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if self.format_threshold_chars < 1:
            errors.append("format_threshold_chars must be at least 1")

        if self.translate_threshold_chars < 1:
            errors.append("translate_threshold_chars must be at least 1")

        if not self.output_language.strip():
            errors.append("output_language must not be empty")

        if self.episode_concurrency < 1:
            errors.append("episode_concurrency must be at least 1")

        return errors
