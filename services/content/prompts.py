"""Article prompt generators — Jinja2 templates from YAML files.

Templates live in services/content/templates/*.yaml (keys: meta, system, user)
and use << >> for variables and <% %> for blocks. Word counts and section
targets come from get_content_length_config().
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog
import yaml
from jinja2 import Environment, StrictUndefined

from .length import ContentLength, ContentLengthConfig, get_content_length_config

log = structlog.get_logger()

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

# Keyword list caps in the user prompt
_MAX_PRIMARY = 3
_MAX_SECONDARY = 10
_MAX_LONG_TAIL = 15

_env = Environment(
    variable_start_string="<<",
    variable_end_string=">>",
    block_start_string="<%",
    block_end_string="%>",
    comment_start_string="<#",
    comment_end_string="#>",
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
    autoescape=False,  # noqa: S701  # nosec B701 — prompts are LLM text, not HTML
)


@dataclass(frozen=True, slots=True)
class YouTubeVideo:
    id: str
    title: str | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class ContentPromptOptions:
    keyword: str = ""
    primary_keywords: list[str] = field(default_factory=list)
    secondary_keywords: list[str] = field(default_factory=list)
    long_tail_keywords: list[str] = field(default_factory=list)
    content_type: str = "blog post"
    target_audience: str = "General audience"
    tone: str = "professional"
    image_urls: list[str] = field(default_factory=list)
    youtube_videos: list[YouTubeVideo] = field(default_factory=list)
    is_test: bool = False  # shorter content for previews
    content_length: ContentLength = "long"
    business_name: str = "our company"
    website_url: str = ""


def _sanitize(value: str) -> str:
    """Strip template delimiters from user input."""
    for token in ("<<", ">>", "<%", "%>", "<#", "#>"):
        value = value.replace(token, "")
    return value


def _sanitize_list(values: Sequence[str], limit: int | None = None) -> list[str]:
    return [_sanitize(v) for v in values[:limit]]


@lru_cache(maxsize=8)
def load_template(name: str) -> dict[str, Any]:
    """Parse templates/<name>.yaml (cached)."""
    with open(_TEMPLATES_DIR / f"{name}.yaml", encoding="utf-8") as f:
        parsed: dict[str, Any] = yaml.safe_load(f)
    return parsed


def _render(name: str, part: str, context: Mapping[str, Any]) -> str:
    template = load_template(name).get(part, "")
    return _env.from_string(template).render(**context).strip()


def _context(options: ContentPromptOptions) -> dict[str, Any]:
    length = get_content_length_config(options.content_length, options.is_test)
    return {
        "keyword": _sanitize(options.keyword),
        "primary_keywords": _sanitize_list(options.primary_keywords, _MAX_PRIMARY),
        "secondary_keywords": _sanitize_list(options.secondary_keywords, _MAX_SECONDARY),
        "long_tail_keywords": _sanitize_list(options.long_tail_keywords, _MAX_LONG_TAIL),
        "content_type": _sanitize(options.content_type),
        "target_audience": _sanitize(options.target_audience),
        "tone": _sanitize(options.tone),
        "image_urls": list(options.image_urls),
        "youtube_videos": list(options.youtube_videos),
        "business_name": _sanitize(options.business_name),
        "website_url": options.website_url,
        "length": length,
    }


def generate_content_system_prompt(options: ContentPromptOptions) -> str:
    """System prompt: structure, formatting and length rules for the writer."""
    return _render("article", "system", _context(options))


def generate_keyword_content_prompt(options: ContentPromptOptions) -> str:
    """User prompt for keyword-driven article generation."""
    return _render("article", "user", _context(options))


def generate_expansion_prompt(
    current_content: str,
    length: ContentLengthConfig | None = None,
    business_name: str = "our company",
) -> str:
    """Prompt asking the model to lengthen a draft that came back too short.

    Defaults to the test-mode targets, which is where short drafts show up.
    """
    if length is None:
        length = get_content_length_config("short", is_test=True)
    log.debug("expansion_prompt", current_chars=len(current_content), target=length.word_range)
    return _render(
        "expansion",
        "user",
        {"length": length, "business_name": _sanitize(business_name), "content": current_content},
    )
