import math

from logging import getLogger

from src.llm import GenerationClient, _summary_prompt, gather_all_or_nothing


logger = getLogger("summarizer")


async def summarize(
    text: str, max_chars: int, language: str, client: GenerationClient
) -> str:
    """Generate a prose episode summary from formatted transcript text.

    Args:
        text: Formatted transcript text to summarize.
        max_chars: Approximate target length of the summary in characters.
        language: Output language code, normally the transcript language.
        client: Generation client used for the call.

    Returns:
        The summary text.

    Raises:
        ValueError: If text is empty.
        GenerationError: If the generation call fails after retries.
    """
    if not text or not text.strip():
        raise ValueError("Cannot summarize empty or whitespace-only text")

    try:
        logger.info(f"Requesting {max_chars}-char summary ({language})")
        summary = await client.call(
            _summary_prompt(max_chars, language),
            f"Summarize the following podcast content:\n\n{text}",
            max_tokens=math.ceil(max_chars * 1.5),
        )
        logger.info(f"Summary returned ({len(summary)} chars)")
        return summary.strip()
    except Exception as exc:
        logger.error(f"[summarize] Error during text summarization: {exc}", exc_info=True)
        raise


async def summarize_400(text: str, language: str, client: GenerationClient) -> str:
    return await summarize(text, 400, language, client)


async def summarize_2000(text: str, language: str, client: GenerationClient) -> str:
    return await summarize(text, 2000, language, client)


async def summarize_layers(
    text: str, language: str, client: GenerationClient
) -> tuple[str, str]:
    """Generate the short and long summaries concurrently. A failure cancels the other."""
    short, long = await gather_all_or_nothing(
        summarize_400(text, language, client),
        summarize_2000(text, language, client),
    )
    return short, long
