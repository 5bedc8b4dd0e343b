"""This package contain modules related to large language models (LLMs).
config.py : Contain the generation client configuration
client.py : Contain the Anthropic Messages API client with retries
prompts.py : Contain instruction prompts
"""

from .client import (
    GenerationClient,
    GenerationError,
    GenerationRequest,
    RetryableGenerationError,
    TerminalGenerationError,
    classify_status,
    gather_all_or_nothing,
)
from .config import GenerationConfig
from .prompts import (
    _format_transcript_prompt,
    _summary_prompt,
    _translation_prompt,
    language_name,
)


__all__ = [
    "GenerationClient",
    "GenerationConfig",
    "GenerationError",
    "GenerationRequest",
    "RetryableGenerationError",
    "TerminalGenerationError",
    "classify_status",
    "gather_all_or_nothing",
    "_format_transcript_prompt",
    "_summary_prompt",
    "_translation_prompt",
    "language_name",
]
