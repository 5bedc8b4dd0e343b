from dataclasses import dataclass, field
from functools import cached_property


SECTION_DIVIDER = "\n\n---\n\n"


@dataclass(frozen=True)
class Section:
    """One topical segment of a formatted transcript."""

    title: str
    content: str

    def render(self) -> str:
        return f"## {self.title}\n\n{self.content}"


def render_full_text(sections) -> str:
    """Render sections as Markdown headings joined by a horizontal-rule divider."""
    return SECTION_DIVIDER.join(section.render() for section in sections)


@dataclass(frozen=True)
class FormattedTranscript:
    """
    Ordered sections of a formatted transcript.

    `full_text` is derived from `sections` and cached on first access.
    """

    sections: tuple[Section, ...] = field(default_factory=tuple)

    @cached_property
    def full_text(self) -> str:
        return render_full_text(self.sections)


@dataclass(frozen=True)
class TranslatedContent:
    """Translated counterparts of an episode's summaries and full text."""

    summary_400: str
    summary_2000: str
    full_text: str
