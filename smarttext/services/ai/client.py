"""
LLM client configuration using DSPy.

Supports Gemini (primary), OpenAI, and Anthropic.
"""

from __future__ import annotations

from functools import lru_cache

import dspy

_MODEL_PREFIXES = {
    "gemini": "gemini",
    "openai": "openai",
    "anthropic": "anthropic",
}


@lru_cache
def get_lm(provider: str, model: str, api_key: str) -> dspy.LM:
    """
    Get a configured language model.

    Args:
        provider: 'gemini', 'openai', or 'anthropic'
        model: Model name without the provider prefix
        api_key: Provider API key

    Returns:
        Configured DSPy LM instance.
    """
    if not api_key:
        raise ValueError(f"No API key configured for LLM provider {provider!r}")

    prefix = _MODEL_PREFIXES.get(provider)
    if prefix is None:
        raise ValueError(f"Unknown provider: {provider}")

    # litellm model naming: "<provider>/<model>"
    return dspy.LM(model=f"{prefix}/{model}", api_key=api_key)
