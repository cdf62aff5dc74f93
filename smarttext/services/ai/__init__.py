"""
AI services - LLM access for the optional translation provider.
"""

from smarttext.services.ai.client import get_lm

__all__ = ["get_lm"]
