"""
LLM Provider Base - Abstract base for generative text providers.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from dataclasses import dataclass, field


class LLMProviderError(Exception):
    """The provider answered, but not with usable text."""


@dataclass
class LLMResponse:
    """Response from an LLM API call."""
    content: str
    model: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    finish_reason: Optional[str] = None
    raw: Optional[Dict[str, Any]] = None


class LLMProvider(ABC):
    """
    Abstract base class for generative text providers.
    All providers must implement generate_content.
    """

    def __init__(self, api_key: str, model: str, base_url: Optional[str] = None,
                 default_temperature: float = 0.7, default_top_k: int = 40,
                 default_top_p: float = 0.95, default_max_tokens: int = 2048,
                 timeout: float = 30.0):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.default_temperature = default_temperature
        self.default_top_k = default_top_k
        self.default_top_p = default_top_p
        self.default_max_tokens = default_max_tokens
        self.timeout = timeout

    @abstractmethod
    async def generate_content(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        top_k: Optional[int] = None,
        top_p: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Generate text for a single prompt.

        Args:
            prompt: Prompt text
            temperature: Sampling temperature override
            top_k: Top-k sampling override
            top_p: Nucleus sampling override
            max_tokens: Max output tokens override
            **kwargs: Additional provider-specific parameters

        Returns:
            LLMResponse with the generated text

        Raises:
            httpx.HTTPError: Transport failure or non-2xx response
            LLMProviderError: Response without candidate text
        """
        pass

    def _sampling_params(
        self,
        temperature: Optional[float] = None,
        top_k: Optional[int] = None,
        top_p: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Resolve per-call overrides against the provider defaults."""
        return {
            "temperature": temperature if temperature is not None else self.default_temperature,
            "top_k": top_k if top_k is not None else self.default_top_k,
            "top_p": top_p if top_p is not None else self.default_top_p,
            "max_tokens": max_tokens or self.default_max_tokens,
        }
