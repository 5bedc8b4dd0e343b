import logging

from src.chunker import make_chunks, split_text
from src.llm import GenerationClient, GenerationRequest, _format_transcript_prompt
from src.logger import log_function

from .models import FormattedTranscript, Section
from .sections import parse_sections


FORMAT_THRESHOLD_CHARS = 12000
FORMAT_MAX_TOKENS = 16384


@log_function(logger_name="transcript_formatter", log_execution_time=True)
async def format_transcript(
    raw_text: str,
    language: str,
    client: GenerationClient,
    threshold_chars: int = FORMAT_THRESHOLD_CHARS,
    parallel: bool = True,
) -> FormattedTranscript:
    """
    Format a raw transcript into speaker-labeled, titled sections.

    Long transcripts are split on sentence boundaries; each chunk is formatted
    with its "part i of n" marker and the parsed sections are concatenated in
    chunk order. Any chunk failure fails the whole transcript.

    Args:
        raw_text: Raw transcript text
        language: Transcript language code (e.g. "ja", "en")
        client: Generation client used for the formatting calls
        threshold_chars: Maximum characters per chunk (default: 12000)
        parallel: Dispatch chunk calls concurrently (default) or one by one

    Returns:
        FormattedTranscript with sections in original order

    Raises:
        ValueError: If the transcript is empty or whitespace-only
        GenerationError: If a formatting call fails after retries
    """
    logger = logging.getLogger("transcript_formatter")

    if not raw_text or not raw_text.strip():
        raise ValueError("Cannot format empty or whitespace-only transcript")

    chunks = make_chunks(split_text(raw_text, threshold_chars))

    if len(chunks) == 1:
        logger.info(f"Formatting transcript in a single call ({len(raw_text)} chars)")
        result = await client.call(
            _format_transcript_prompt(language), raw_text, FORMAT_MAX_TOKENS
        )
        return FormattedTranscript(sections=tuple(parse_sections(result)))

    requests = [
        GenerationRequest(
            system_prompt=_format_transcript_prompt(language, part=chunk.label),
            user_message=chunk.text,
            max_tokens=FORMAT_MAX_TOKENS,
        )
        for chunk in chunks
    ]

    if parallel:
        logger.info(f"Formatting {len(chunks)} chunks in parallel")
        results = await client.call_batch(requests)
    else:
        logger.info(f"Formatting {len(chunks)} chunks sequentially")
        results = []
        for chunk, request in zip(chunks, requests):
            logger.info(f"Formatting {chunk.label}")
            results.append(await client.generate(request))

    sections: list[Section] = []
    for chunk, result in zip(chunks, results):
        chunk_sections = parse_sections(result)
        logger.info(f"{chunk.label}: {len(chunk_sections)} sections")
        sections.extend(chunk_sections)

    return FormattedTranscript(sections=tuple(sections))
