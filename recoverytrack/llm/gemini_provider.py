"""
Google Gemini LLM Provider.
Calls the generateContent endpoint of the Generative Language API.
"""

import httpx
import logging
import time
from typing import Optional, Dict, Any

from .base import LLMProvider, LLMResponse, LLMProviderError

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """
    Provider for Google's Gemini models.
    Default base_url points to the public v1beta API.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        default_temperature: float = 0.7,
        default_top_k: int = 40,
        default_top_p: float = 0.95,
        default_max_tokens: int = 2048,
        timeout: float = 30.0,
    ):
        super().__init__(api_key, model, base_url, default_temperature, default_top_k,
                         default_top_p, default_max_tokens, timeout)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    def _build_payload(self, prompt: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "contents": [{
                "parts": [{"text": prompt}]
            }],
            "generationConfig": {
                "temperature": params["temperature"],
                "topK": params["top_k"],
                "topP": params["top_p"],
                "maxOutputTokens": params["max_tokens"],
            },
        }

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        """Text of the first candidate, or LLMProviderError."""
        candidates = data.get("candidates") or []
        if not candidates:
            block_reason = (data.get("promptFeedback") or {}).get("blockReason")
            raise LLMProviderError(f"Gemini returned no candidates (blockReason={block_reason})")

        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        if not text.strip():
            raise LLMProviderError(
                f"Gemini candidate has no text (finishReason={candidates[0].get('finishReason')})"
            )
        return text

    async def generate_content(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        top_k: Optional[int] = None,
        top_p: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """Send a single prompt to generateContent."""
        start_time = time.time()
        model = kwargs.get("model", self.model)
        url = f"{self.base_url}/models/{model}:generateContent"
        params = self._sampling_params(temperature, top_k, top_p, max_tokens)
        payload = self._build_payload(prompt, params)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"LLM API call starting: provider=gemini, model={model}, "
                f"temperature={params['temperature']}, prompt: {prompt[:200]}"
            )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, json=payload, headers=self._get_headers())
                logger.debug(f"LLM API response status: {resp.status_code}")
                resp.raise_for_status()
                data = resp.json()

            content = self._extract_text(data)
            usage_metadata = data.get("usageMetadata", {})
            usage = {
                "prompt_tokens": usage_metadata.get("promptTokenCount", 0),
                "completion_tokens": usage_metadata.get("candidatesTokenCount", 0),
                "total_tokens": usage_metadata.get("totalTokenCount", 0),
            }
            duration_ms = (time.time() - start_time) * 1000

            logger.info(
                "LLM API call completed",
                extra={"extra_fields": {
                    "provider": "gemini",
                    "model": data.get("modelVersion", model),
                    **usage,
                    "duration_ms": round(duration_ms, 2),
                }}
            )

            return LLMResponse(
                content=content,
                model=data.get("modelVersion", model),
                usage=usage,
                finish_reason=data["candidates"][0].get("finishReason"),
                raw=data,
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"LLM API call failed: {str(e)}",
                exc_info=True,
                extra={"extra_fields": {
                    "provider": "gemini",
                    "model": model,
                    "duration_ms": round(duration_ms, 2),
                    "error": str(e),
                }}
            )
            raise
