"""
Configuration settings for the text-generation client.

This module defines the GenerationConfig dataclass holding everything the
GenerationClient needs to reach the Anthropic Messages API. Values are passed
explicitly to the client; `from_env` is the only place the environment is read.
"""

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv


@dataclass
class GenerationConfig:
    """Configuration for the Anthropic Messages API client"""

    api_key: Optional[str] = None
    model: str = "claude-sonnet-4-5-20250929"
    base_url: str = "https://api.anthropic.com/v1"
    anthropic_version: str = "2023-06-01"

    # Retry policy: attempts in total, wait 2**attempt * backoff_base seconds in between
    max_attempts: int = 3
    backoff_base: float = 1.0

    # Wall-clock limit for a single attempt (seconds)
    timeout_seconds: float = 300.0

    @classmethod
    def from_env(cls) -> "GenerationConfig":
        """Build a config from environment variables (and a .env file if present)."""
        load_dotenv()
        config = cls(api_key=os.getenv("ANTHROPIC_API_KEY"))
        if os.getenv("ANTHROPIC_MODEL"):
            config.model = os.environ["ANTHROPIC_MODEL"]
        if os.getenv("ANTHROPIC_BASE_URL"):
            config.base_url = os.environ["ANTHROPIC_BASE_URL"]
        return config

    def validate(self) -> List[str]:
        """
        Validate configuration and return any error messages.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.api_key:
            errors.append("ANTHROPIC_API_KEY is required for the generation client")

        if self.max_attempts < 1:
            errors.append("max_attempts must be at least 1")

        if self.backoff_base < 0:
            errors.append("backoff_base must not be negative")

        if self.timeout_seconds <= 0:
            errors.append("timeout_seconds must be positive")

        return errors
