"""Article generation settings: length tiers and LLM prompt builders."""

from .length import ContentLength, ContentLengthConfig, get_content_length_config
from .prompts import (
    ContentPromptOptions,
    YouTubeVideo,
    generate_content_system_prompt,
    generate_expansion_prompt,
    generate_keyword_content_prompt,
)

__all__ = [
    "ContentLength",
    "ContentLengthConfig",
    "ContentPromptOptions",
    "YouTubeVideo",
    "generate_content_system_prompt",
    "generate_expansion_prompt",
    "generate_keyword_content_prompt",
    "get_content_length_config",
]
