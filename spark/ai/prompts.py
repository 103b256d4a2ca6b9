"""Prompt templates for spark generation."""

from typing import Any, Optional, Sequence


def _title_of(spark: Any) -> str:
    if isinstance(spark, dict):
        return str(spark.get("title", ""))
    return str(getattr(spark, "title", ""))


class PromptTemplates:
    """Collection of prompt templates for the spark workflow."""

    @staticmethod
    def previous_sparks_section(previous_sparks: Sequence[Any]) -> str:
        """Numbered list of earlier spark titles, or empty when there are none."""
        if not previous_sparks:
            return ""

        lines = "\n".join(
            f"{i}. {_title_of(spark)}" for i, spark in enumerate(previous_sparks, start=1)
        )
        return f"SPARKS ALREADY COMPLETED:\n{lines}\n"

    @staticmethod
    def generate_spark_prompt(
        goal_title: str,
        goal_description: Optional[str] = None,
        previous_sparks: Sequence[Any] = (),
    ) -> str:
        """Generate prompt asking for the next tiny micro-action toward a goal."""
        details = f"GOAL DETAILS: {goal_description}\n" if goal_description else ""
        previous = PromptTemplates.previous_sparks_section(previous_sparks)

        return f"""You are Spark, an AI that helps people overcome procrastination by generating tiny, achievable first steps.

USER'S GOAL: "{goal_title}"
{details}
{previous}

Generate the next TINY micro-action (a "spark") that will help them make progress. This should be:
- VERY small (2-5 minutes max)
- Immediately actionable
- Low barrier to entry
- Either research/learning OR a tiny preparation step
- NOT the full task, just a baby step toward it

Respond ONLY with valid JSON in this exact format:
{{
  "title": "Short action title (under 8 words)",
  "description": "Brief clarifying sentence (under 15 words)",
  "effort": "2-5 min",
  "resourceLink": "optional URL to helpful resource, or null"
}}

DO NOT include any text outside the JSON. Make it encouraging and specific to their goal."""
