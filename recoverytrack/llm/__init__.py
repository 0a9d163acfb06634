"""LLM module - provides a unified interface for generative text providers."""

from .base import LLMProvider, LLMResponse, LLMProviderError
from .gemini_provider import GeminiProvider
from .factory import create_llm_provider

__all__ = [
    'LLMProvider',
    'LLMResponse',
    'LLMProviderError',
    'GeminiProvider',
    'create_llm_provider',
]
