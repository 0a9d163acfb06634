"""
Recovery Plan Orchestrator - Turns a daily reflection into a structured recovery plan.

The generative text service only writes the plan. The health score is always
computed locally, and the service's JSON is validated before it is trusted.
"""

import asyncio
import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import ValidationError

from ..llm.base import LLMProvider
from ..models import AIResponse, DailyReflectionInput, MobilityPlan, NutritionRestPlan
from .health_scoring import calculate_health_score

logger = logging.getLogger(__name__)

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)

PLAN_RESPONSE_TEMPLATE = """{
  "mobilityPlan": {
    "exercises": [
      {
        "name": "Exercise name",
        "duration": "Duration in minutes",
        "intensity": "Low/Medium/High",
        "equipment": "Required equipment or None"
      }
    ]
  },
  "nutritionRestPlan": {
    "hydration": "Specific hydration guidance with amounts",
    "nutrition": ["Specific nutritional recommendation 1", "Specific nutritional recommendation 2"],
    "rest": "Specific rest and sleep recommendations"
  }
}"""


class RecoveryPlanError(Exception):
    """Base class for recovery plan failures."""


class AIServiceError(RecoveryPlanError):
    """The generative text service was unavailable, failed or timed out."""


class InvalidAIResponseFormat(RecoveryPlanError):
    """The service answered, but not with a plan we can parse."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


@dataclass
class ParsedPlan:
    mobility_plan: MobilityPlan
    nutrition_rest_plan: NutritionRestPlan


@dataclass
class PlanFormatError:
    reason: str
    raw_text: str


def format_recovery_prompt(reflection: DailyReflectionInput) -> str:
    """Build the prompt sent to the generative text service."""
    locations = ", ".join(reflection.pain_location_tags) or "None reported"
    return (
        "You are a professional sports medicine assistant specializing in recovery planning "
        "for professional baseball players. Based on the following player data, generate a "
        "detailed, structured recovery plan.\n\n"
        "Player Input:\n"
        f"- Reflection: {reflection.reflection_text}\n"
        f"- Pain Locations: {locations}\n"
        f"- Pain Severity (1-10): {reflection.pain_severity_level}\n"
        f"- Energy Level (1-10): {reflection.energy_level}\n"
        f"- Soreness Level (1-10): {reflection.soreness_level}\n\n"
        "Respond ONLY with valid JSON in the following format, no additional text:\n"
        f"{PLAN_RESPONSE_TEMPLATE}"
    )


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences (``` or ```json) around the model output."""
    return CODE_FENCE_PATTERN.sub("", text).strip()


def _load_json_object(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        # Tolerate prose around the object
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            raise
        return json.loads(text[start:end + 1])


def parse_recovery_plan(raw_text: str) -> Union[ParsedPlan, PlanFormatError]:
    """
    Parse and validate the service output.

    Args:
        raw_text: Text of the first candidate, possibly fenced

    Returns:
        ParsedPlan on success, PlanFormatError describing the first problem otherwise
    """
    cleaned = strip_code_fences(raw_text)
    try:
        data = _load_json_object(cleaned)
    except json.JSONDecodeError as e:
        return PlanFormatError(reason=f"Response is not valid JSON: {e.msg}", raw_text=raw_text)

    if not isinstance(data, dict):
        return PlanFormatError(reason="Response JSON is not an object", raw_text=raw_text)

    mobility = data.get("mobilityPlan")
    nutrition_rest = data.get("nutritionRestPlan")
    if mobility is None:
        return PlanFormatError(reason="Missing 'mobilityPlan'", raw_text=raw_text)
    if nutrition_rest is None:
        return PlanFormatError(reason="Missing 'nutritionRestPlan'", raw_text=raw_text)

    if isinstance(mobility, list):
        mobility = {"exercises": mobility}

    try:
        return ParsedPlan(
            mobility_plan=MobilityPlan.model_validate(mobility),
            nutrition_rest_plan=NutritionRestPlan.model_validate(nutrition_rest),
        )
    except ValidationError as e:
        return PlanFormatError(reason=f"Plan does not match the expected shape: {e}", raw_text=raw_text)


class RecoveryPlanOrchestrator:
    """
    Generates recovery plans with a single call to the generative text service.
    There are no retries: one attempt per submission.
    """

    def __init__(
        self,
        llm_provider: Optional[LLMProvider],
        timeout: float = 30.0,
        temperature: float = 0.7,
        top_k: int = 40,
        top_p: float = 0.95,
        max_output_tokens: int = 2048,
    ):
        self.llm_provider = llm_provider
        self.timeout = timeout
        self.temperature = temperature
        self.top_k = top_k
        self.top_p = top_p
        self.max_output_tokens = max_output_tokens

    async def _request_plan_text(self, prompt: str) -> str:
        if self.llm_provider is None:
            raise AIServiceError("Generative text service is not configured")

        try:
            response = await asyncio.wait_for(
                self.llm_provider.generate_content(
                    prompt,
                    temperature=self.temperature,
                    top_k=self.top_k,
                    top_p=self.top_p,
                    max_tokens=self.max_output_tokens,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise AIServiceError(f"Generative text service timed out after {self.timeout}s") from e
        except Exception as e:
            raise AIServiceError(f"Generative text service request failed: {e}") from e

        return response.content

    async def generate_recovery_plan(self, reflection: DailyReflectionInput) -> AIResponse:
        """
        Generate a recovery plan for a reflection.

        Args:
            reflection: Validated daily reflection

        Returns:
            AIResponse with the plan and the locally computed health score

        Raises:
            AIServiceError: Service missing, failing or timing out
            InvalidAIResponseFormat: Output could not be parsed into a plan
        """
        start_time = time.time()
        raw_text = await self._request_plan_text(format_recovery_prompt(reflection))

        parsed = parse_recovery_plan(raw_text)
        if isinstance(parsed, PlanFormatError):
            logger.warning(
                f"Invalid recovery plan format: {parsed.reason}",
                extra={"extra_fields": {"raw_text": raw_text[:1000]}}
            )
            raise InvalidAIResponseFormat(parsed.reason, raw_text=raw_text)

        health_score = calculate_health_score(reflection)
        logger.info(
            "Recovery plan generated",
            extra={"extra_fields": {
                "exercises": len(parsed.mobility_plan.exercises),
                "health_score": health_score,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }}
        )

        return AIResponse(
            mobility_plan=parsed.mobility_plan,
            nutrition_rest_plan=parsed.nutrition_rest_plan,
            health_score=health_score,
        )
