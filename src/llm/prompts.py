LANGUAGE_NAMES = {
    "ja": "Japanese",
    "en": "English",
    "fr": "French",
    "de": "German",
    "es": "Spanish",
    "it": "Italian",
    "pt": "Portuguese",
    "zh": "Chinese",
    "ko": "Korean",
}


def language_name(code: str) -> str:
    """Return a readable language name for an ISO code, or the code itself."""
    return LANGUAGE_NAMES.get(code.strip().lower(), code)


def _format_transcript_prompt(language: str, part: str | None = None) -> str:
    """
    Returns the system prompt for transcript formatting.

    Args:
        language: Transcript language code (labels and titles are written in it)
        part: Positional marker such as "part 2 of 3" when the transcript is chunked

    Returns:
        Prompt string
    """
    name = language_name(language)
    sections = "3 to 6 sections" if part else "5 to 10 sections"
    prompt = (
        "You are an assistant that formats raw podcast transcripts.\n\n"
        "1. Speaker labels: put a speaker label before every utterance. "
        "Use a speaker's real name only when it is stated unambiguously in the conversation. "
        "Otherwise use role labels: the main presenter is 'Host', a single guest is 'Guest', "
        "several guests are 'Guest A', 'Guest B', and so on. "
        f"Write the labels in {name}. Never guess or invent names.\n"
        f"2. Sections: split the transcript into {sections} where the topic changes, "
        f"and give each section a short descriptive title in {name}.\n"
        f"3. Prose: rewrite into readable {name} Markdown text. Add correct punctuation, "
        "end every sentence with the proper sentence-ending mark, break long sentences, "
        "and start a new paragraph at natural breaks. Do not summarize or drop content.\n\n"
    )
    if part:
        prompt += (
            f"This text is {part} of a longer transcript. Format only this part; "
            "it may start or end mid-conversation.\n\n"
        )
    prompt += (
        "Return ONLY a valid JSON object, with no other text, in this format: "
        '{"sections": [{"title": "Section title", '
        '"content": "Host: ...\\n\\nGuest: ..."}]}'
    )
    return prompt


def _translation_prompt(source_language: str, target_language: str) -> str:
    """
    Returns the system prompt for translating formatted transcript text.
    """
    source = language_name(source_language)
    target = language_name(target_language)
    return (
        f"You are a professional translator. Translate the following {source} text into {target}.\n\n"
        "Rules:\n"
        "- Keep every Markdown marker exactly in place (headings '##', dividers '---', "
        "lists, bold and italic markers, blank lines).\n"
        f"- Translate speaker role labels into their usual {target} equivalents "
        "(Host, Guest, Guest A, ...); keep real names as they are.\n"
        "- Do not add, remove, or change meaning; only re-express the text.\n"
        "- Output only the translation, with no preface or commentary."
    )


def _summary_prompt(max_chars: int, language: str) -> str:
    """
    Returns the system prompt for summarizing a formatted transcript.
    """
    name = language_name(language)
    return (
        "You are an assistant that summarizes podcast episodes.\n\n"
        "Rules:\n"
        f"- Write the summary in {name}, about {max_chars} characters long.\n"
        "- Include the main topics and conclusions.\n"
        "- You may refer to speakers by name when their names are known.\n"
        "- Use natural prose, no bullet points.\n"
        "- Output only the summary, with no preface."
    )
