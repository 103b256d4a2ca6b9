"""Spark generator backed by an OpenAI-compatible chat completion API (Groq)."""

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from openai import AsyncOpenAI

from config import Settings, settings as default_settings
from .prompts import PromptTemplates
from ..monitoring.prometheus import ai_requests_total, ai_request_duration

logger = logging.getLogger(__name__)

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"

DEFAULT_EFFORT_MINUTES = 3

_CODE_FENCE_JSON = re.compile(r"```json\n?")
_CODE_FENCE = re.compile(r"```\n?")
_FIRST_INTEGER = re.compile(r"\d+")


@dataclass(frozen=True)
class SparkSuggestion:
    """One candidate next action, tagged with where it came from."""

    title: str
    description: str
    effort: str
    resource_link: Optional[str] = None
    source: str = SOURCE_AI

    @property
    def is_fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK

    @property
    def effort_minutes(self) -> int:
        return parse_effort_minutes(self.effort)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "effort": self.effort,
            "resourceLink": self.resource_link,
        }


FALLBACK_SUGGESTION = SparkSuggestion(
    title="Search for beginner guides",
    description="Spend 2 minutes finding one helpful resource",
    effort="2-3 min",
    resource_link=None,
    source=SOURCE_FALLBACK,
)


def parse_effort_minutes(effort: Optional[str]) -> int:
    """
    Minutes from an effort string: the first integer found, else 3.

    "2-5 min" -> 2, "about ten minutes" -> 3.
    """
    match = _FIRST_INTEGER.search(effort or "")
    if not match:
        return DEFAULT_EFFORT_MINUTES
    return int(match.group(0))


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model sometimes wraps JSON in."""
    text = _CODE_FENCE_JSON.sub("", text)
    text = _CODE_FENCE.sub("", text)
    return text.strip()


def parse_suggestion(text: str) -> SparkSuggestion:
    """
    Parse model output into a suggestion.

    Raises:
        json.JSONDecodeError: output is not JSON.
        ValueError: JSON is not an object with the expected fields.
    """
    data = json.loads(strip_code_fences(text))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    for field in ("title", "description", "effort"):
        if not isinstance(data.get(field), str):
            raise ValueError(f"Field '{field}' missing or not a string")
    if not data["title"].strip():
        raise ValueError("Field 'title' is empty")

    resource_link = data.get("resourceLink")
    if resource_link is not None and not isinstance(resource_link, str):
        raise ValueError("Field 'resourceLink' must be a string or null")

    return SparkSuggestion(
        title=data["title"].strip(),
        description=data["description"].strip(),
        effort=data["effort"].strip(),
        resource_link=resource_link or None,
        source=SOURCE_AI,
    )


class SparkGenerator:
    """Produces the next spark for a goal. Never raises; falls back instead."""

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        config: Optional[Settings] = None,
    ):
        self.config = config or default_settings
        self.client = client or AsyncOpenAI(
            api_key=self.config.groq_api_key,
            base_url=self.config.groq_base_url,
        )
        self.model = self.config.spark_model
        self.prompts = PromptTemplates()

    async def _call_api(self, messages: List[Dict[str, str]]) -> str:
        """Make one chat completion call and return the message content."""
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.config.spark_temperature,
            max_tokens=self.config.spark_max_tokens,
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content
        if content is None:
            raise ValueError("Empty completion content")
        return content.strip()

    async def generate(
        self,
        goal_title: str,
        goal_description: Optional[str] = None,
        previous_sparks: Sequence[Any] = (),
    ) -> SparkSuggestion:
        """
        Generate the next spark for a goal.

        Args:
            goal_title: The goal's title.
            goal_description: Optional extra detail about the goal.
            previous_sparks: Earlier sparks for the goal, in sequence order.

        Returns:
            A suggestion tagged ``ai``, or FALLBACK_SUGGESTION on any failure.
        """
        if not goal_title or not goal_title.strip():
            logger.warning("Spark requested for a goal without a title, using fallback")
            ai_requests_total.labels(operation="generate_spark", status="fallback").inc()
            return FALLBACK_SUGGESTION

        prompt = self.prompts.generate_spark_prompt(
            goal_title=goal_title,
            goal_description=goal_description,
            previous_sparks=previous_sparks,
        )
        messages = [{"role": "user", "content": prompt}]

        start = time.time()
        try:
            response = await self._call_api(messages)
            suggestion = parse_suggestion(response)
        except Exception as e:
            logger.error(f"Error generating spark: {e}")
            ai_requests_total.labels(operation="generate_spark", status="fallback").inc()
            return FALLBACK_SUGGESTION
        finally:
            ai_request_duration.labels(operation="generate_spark").observe(time.time() - start)

        ai_requests_total.labels(operation="generate_spark", status="success").inc()
        logger.info(f"Generated spark '{suggestion.title}' for goal '{goal_title}'")
        return suggestion
