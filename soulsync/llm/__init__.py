"""SoulSync LLM integration module.

Provides a thin wrapper around the Anthropic API and the companion-chat
prompt template.
"""

from soulsync.llm.client import FALLBACK_REPLY, LLMClient, LLMResponse
from soulsync.llm.prompts import build_counselor_prompt

__all__ = [
    "FALLBACK_REPLY",
    "LLMClient",
    "LLMResponse",
    "build_counselor_prompt",
]
