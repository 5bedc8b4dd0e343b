"""
Chunked translation of formatted transcripts and summaries.

Text is split on line boundaries, every chunk is translated concurrently, and
the translations are joined back in their original order.
"""

import logging

from src.chunker import split_lines
from src.llm import (
    GenerationClient,
    GenerationRequest,
    _translation_prompt,
    gather_all_or_nothing,
)
from src.logger import log_function

from .models import TranslatedContent


TRANSLATE_THRESHOLD_CHARS = 10000
TRANSLATE_MAX_TOKENS = 16384
DEFAULT_TARGET_LANGUAGE = "ja"


def _normalize_language(code: str) -> str:
    return code.strip().lower()


def needs_translation(source_language: str, target_language: str) -> bool:
    return _normalize_language(source_language) != _normalize_language(target_language)


@log_function(logger_name="translator", log_execution_time=True)
async def translate(
    text: str,
    source_language: str,
    client: GenerationClient,
    target_language: str = DEFAULT_TARGET_LANGUAGE,
    threshold_chars: int = TRANSLATE_THRESHOLD_CHARS,
) -> str:
    """
    Translate text into the target language.

    Args:
        text: Text to translate (Markdown structure is preserved)
        source_language: Language code of `text`
        client: Generation client used for the translation calls
        target_language: Output language code (default: "ja")
        threshold_chars: Target characters per translation chunk (default: 10000)

    Returns:
        Translated text, or `text` unchanged when no translation is needed

    Raises:
        GenerationError: If any chunk translation fails after retries
    """
    logger = logging.getLogger("translator")

    if not needs_translation(source_language, target_language):
        logger.info(
            f"Source language '{source_language}' matches target, skipping translation"
        )
        return text
    if not text.strip():
        return text

    chunks = split_lines(text, threshold_chars)
    system_prompt = _translation_prompt(source_language, target_language)
    logger.info(
        f"Translating {len(text)} chars in {len(chunks)} chunks "
        f"({source_language} -> {target_language})"
    )

    results = await client.call_batch(
        [
            GenerationRequest(
                system_prompt=system_prompt,
                user_message=chunk,
                max_tokens=TRANSLATE_MAX_TOKENS,
            )
            for chunk in chunks
        ]
    )
    return "\n\n".join(result.strip() for result in results)


async def translate_content(
    summary_400: str,
    summary_2000: str,
    full_text: str,
    source_language: str,
    client: GenerationClient,
    target_language: str = DEFAULT_TARGET_LANGUAGE,
    threshold_chars: int = TRANSLATE_THRESHOLD_CHARS,
) -> TranslatedContent:
    """Translate both summaries and the full text concurrently. A failure cancels the others."""
    translated_400, translated_2000, translated_full = await gather_all_or_nothing(
        translate(summary_400, source_language, client, target_language, threshold_chars),
        translate(summary_2000, source_language, client, target_language, threshold_chars),
        translate(full_text, source_language, client, target_language, threshold_chars),
    )
    return TranslatedContent(
        summary_400=translated_400,
        summary_2000=translated_2000,
        full_text=translated_full,
    )
