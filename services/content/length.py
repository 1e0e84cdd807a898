"""Content-length configuration: word counts and structure targets per tier.

Pure lookup. Test mode overrides whatever tier was requested.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ContentLength = Literal["short", "medium", "long"]


@dataclass(frozen=True, slots=True)
class ContentLengthConfig:
    min_words: int
    max_words: int
    h2_sections: str
    h3_per_h2: str
    examples: str
    tables: str
    faq_count: str
    intro_words: str
    conclusion_words: str
    section_words: str
    is_test: bool = False

    @property
    def word_range(self) -> str:
        """'3,800-4,200'"""
        return f"{self.min_words:,}-{self.max_words:,}"


_TIERS: dict[str, ContentLengthConfig] = {
    "short": ContentLengthConfig(
        min_words=1000,
        max_words=1500,
        h2_sections="4-5",
        h3_per_h2="2-3",
        examples="4-6",
        tables="1-2",
        faq_count="5-7",
        intro_words="100-150",
        conclusion_words="100-150",
        section_words="200-300",
    ),
    "medium": ContentLengthConfig(
        min_words=2000,
        max_words=3000,
        h2_sections="5-6",
        h3_per_h2="2-4",
        examples="6-10",
        tables="2-3",
        faq_count="6-8",
        intro_words="150-200",
        conclusion_words="150-200",
        section_words="300-450",
    ),
    "long": ContentLengthConfig(
        min_words=3800,
        max_words=4200,
        h2_sections="6-8",
        h3_per_h2="3-5",
        examples="10-15",
        tables="3-4",
        faq_count="8-10",
        intro_words="200-300",
        conclusion_words="200-300",
        section_words="450-550",
    ),
}

_TEST = ContentLengthConfig(
    min_words=200,
    max_words=300,
    h2_sections="2-3",
    h3_per_h2="1-2",
    examples="1-2",
    tables="0-1",
    faq_count="2-3",
    intro_words="30-50",
    conclusion_words="40-60",
    section_words="40-60",
    is_test=True,
)


def get_content_length_config(content_length: ContentLength = "medium", is_test: bool = False) -> ContentLengthConfig:
    """Targets for a tier. Raises ValueError for an unknown tier."""
    if content_length not in _TIERS:
        msg = f"Unknown content length: {content_length!r} (expected short, medium or long)"
        raise ValueError(msg)
    if is_test:
        return _TEST
    return _TIERS[content_length]
