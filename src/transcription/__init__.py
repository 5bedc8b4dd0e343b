# Transcription module - Main API for formatting, summarizing and translating transcripts

from src.transcription.models import (
    FormattedTranscript,
    Section,
    TranslatedContent,
    render_full_text,
)
from src.transcription.sections import FALLBACK_SECTION_TITLE, parse_sections
from src.transcription.formatter import format_transcript
from src.transcription.translator import (
    needs_translation,
    translate,
    translate_content,
)
from src.transcription.summarize import (
    summarize,
    summarize_400,
    summarize_2000,
    summarize_layers,
)

# Main public API - these are the functions other modules should use
__all__ = [
    "FormattedTranscript",
    "Section",
    "TranslatedContent",
    "render_full_text",
    "FALLBACK_SECTION_TITLE",
    "parse_sections",
    "format_transcript",
    "needs_translation",
    "translate",
    "translate_content",
    "summarize",
    "summarize_400",
    "summarize_2000",
    "summarize_layers",
]
