from generator.client import (
    AnthropicGenerator,
    ChatCompletionsGenerator,
    GenerationError,
    TextGenerator,
    build_generator,
)
from generator.prompts import SYSTEM_PROMPT, build_prompt

__all__ = [
    "AnthropicGenerator",
    "ChatCompletionsGenerator",
    "GenerationError",
    "TextGenerator",
    "build_generator",
    "SYSTEM_PROMPT",
    "build_prompt",
]
